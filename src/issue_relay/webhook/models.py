"""GitHub webhook event models for the issue relay.

This module defines two groups of models:
- The inbound payload models, a typed subset of the GitHub ``issues``
  webhook event in which every field except ``issue`` is optional.
- IssueNotification, the immutable record the relay builds from a payload
  and hands to the Slack formatter.

The models use Pydantic for validation, consistent with the relay's
configuration approach in config.py.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

DEFAULT_ISSUE_TITLE = "GitHub Issue"
DEFAULT_REPOSITORY_FULL_NAME = "unknown repository"
DEFAULT_ACTION = "acted on"
DEFAULT_SENDER = "unknown user"


class RepositoryPayload(BaseModel):
    """The ``repository`` object of an issues event."""

    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = None


class IssuePayload(BaseModel):
    """The ``issue`` object of an issues event.

    ``number`` is strict: booleans, floats and numeric strings are rejected
    rather than coerced.
    """

    model_config = ConfigDict(extra="ignore")

    html_url: Optional[str] = None
    number: Optional[StrictInt] = None
    title: Optional[str] = None


class SenderPayload(BaseModel):
    """The ``sender`` object of an issues event."""

    model_config = ConfigDict(extra="ignore")

    login: Optional[str] = None


class IssuesWebhookPayload(BaseModel):
    """Subset of a GitHub ``issues`` webhook event.

    Only ``issue`` is required. Unknown fields are ignored so full GitHub
    payloads validate without modification.
    """

    model_config = ConfigDict(extra="ignore")

    action: Optional[str] = None
    repository: Optional[RepositoryPayload] = None
    issue: IssuePayload
    sender: Optional[SenderPayload] = None


class IssueNotification(BaseModel):
    """Issue details extracted from a webhook payload.

    Built fresh for each invocation and never mutated afterwards.

    Attributes:
        issue_url: The issue's HTML URL. Always non-blank.
        issue_title: The issue title.
        issue_number: The issue number, or None when the payload had none.
        repository_full_name: Repository path in ``owner/name`` form.
        action: The event action (opened, closed, ...).
        sender: Login of the user who triggered the event.
    """

    model_config = ConfigDict(frozen=True)

    issue_url: str = Field(
        ...,
        min_length=1,
        description="The issue's HTML URL (required, cannot be empty)",
    )

    issue_title: str = Field(
        default=DEFAULT_ISSUE_TITLE,
        description="The issue title text",
    )

    issue_number: Optional[int] = Field(
        default=None,
        description="The issue number; None is distinct from 0",
    )

    repository_full_name: str = Field(
        default=DEFAULT_REPOSITORY_FULL_NAME,
        description="The repository path in owner/name form",
    )

    action: str = Field(
        default=DEFAULT_ACTION,
        description="The issue event action",
    )

    sender: str = Field(
        default=DEFAULT_SENDER,
        description="The GitHub login that triggered the event",
    )

    @property
    def issue_label(self) -> str:
        """Label used in the Slack message.

        Returns:
            str: ``#<issue_number>`` when the number is known, else ``Issue``.
        """
        if self.issue_number is None:
            return "Issue"
        return f"#{self.issue_number}"

    @property
    def issue_identifier(self) -> str:
        """Issue number as text, or ``unknown`` when absent."""
        if self.issue_number is None:
            return "unknown"
        return str(self.issue_number)
