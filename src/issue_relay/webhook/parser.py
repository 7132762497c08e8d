"""GitHub issues webhook payload parser.

Turns a raw JSON payload into an IssueNotification. The payload is
deserialized up front into the typed models in models.py; optional fields
that are absent or null then resolve to fixed default literals.

GitHub Webhook Payload Structure (the subset read here):
{
  "action": "opened",
  "repository": {"full_name": "octo-org/octo-repo"},
  "issue": {
    "html_url": "https://github.com/octo-org/octo-repo/issues/42",
    "number": 42,
    "title": "Bug report"
  },
  "sender": {"login": "octocat"}
}
"""

import logging
from typing import Union

from pydantic import ValidationError

from issue_relay.errors import MalformedPayloadError
from issue_relay.webhook.models import (
    DEFAULT_ACTION,
    DEFAULT_ISSUE_TITLE,
    DEFAULT_REPOSITORY_FULL_NAME,
    DEFAULT_SENDER,
    IssueNotification,
    IssuesWebhookPayload,
)

logger = logging.getLogger(__name__)


def parse_issue_payload(raw: Union[str, bytes]) -> IssueNotification:
    """Parse a GitHub issues webhook payload into an IssueNotification.

    Args:
        raw: The UTF-8 JSON payload as text or bytes.

    Returns:
        IssueNotification with defaults applied to missing optional fields.

    Raises:
        MalformedPayloadError: If the payload is not valid JSON, is not an
            object, has no ``issue`` object, has a blank ``issue.html_url``,
            or carries a field of the wrong type (e.g. a non-integer
            ``issue.number``).
    """
    try:
        payload = IssuesWebhookPayload.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedPayloadError(_describe_validation_error(e)) from e

    issue = payload.issue
    if issue.html_url is None or not issue.html_url.strip():
        raise MalformedPayloadError("issue.html_url missing from payload.")

    repository = payload.repository
    sender = payload.sender

    notification = IssueNotification(
        issue_url=issue.html_url,
        issue_title=_or_default(issue.title, DEFAULT_ISSUE_TITLE),
        issue_number=issue.number,
        repository_full_name=_or_default(
            repository.full_name if repository is not None else None,
            DEFAULT_REPOSITORY_FULL_NAME,
        ),
        action=_or_default(payload.action, DEFAULT_ACTION),
        sender=_or_default(
            sender.login if sender is not None else None,
            DEFAULT_SENDER,
        ),
    )

    logger.debug(
        "Parsed issue payload: repository=%s, issue=%s",
        notification.repository_full_name,
        notification.issue_identifier,
    )

    return notification


def _or_default(value: Union[str, None], default: str) -> str:
    """Return the value, or the default literal when it is None."""
    if value is None:
        return default
    return value


def _describe_validation_error(error: ValidationError) -> str:
    """Build a short failure detail from a payload validation error.

    Only the first error is reported.

    Args:
        error: The pydantic validation error raised for the payload.

    Returns:
        A one-line description suitable for the caller-visible message.
    """
    first = error.errors()[0]
    error_type = first.get("type")
    location = tuple(first.get("loc", ()))

    if error_type == "json_invalid":
        return f"Payload is not valid JSON: {first.get('msg')}"

    if not location:
        return "Payload must be a JSON object."

    if location == ("issue",) and (
        error_type == "missing" or first.get("input") is None
    ):
        return "Payload missing issue object."

    path = ".".join(str(part) for part in location)
    return f"{path}: {first.get('msg')}"
