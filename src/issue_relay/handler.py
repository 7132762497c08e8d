"""Relay handler shared by every hosting adapter.

RelayHandler runs one invocation from raw payload to Slack dispatch:

1. Config check: read SLACK_URL; stop if it is missing.
2. Input check: stop if the payload is empty.
3. Parse the payload into an IssueNotification.
4. Format the Slack message.
5. Dispatch the message to Slack with one POST.
6. Map the outcome to a RelayResult.

Errors from the relay taxonomy never escape ``handle``; each one becomes a
RelayResult with a descriptive message. The hosting adapters in
lambda_function.py and main.py only translate RelayResult into their own
response shapes.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import httpx
from pydantic import ValidationError

from issue_relay.config import RelaySettings, get_settings
from issue_relay.errors import (
    ConfigurationError,
    DispatchError,
    InputError,
    MalformedPayloadError,
    PayloadError,
)
from issue_relay.slack.client import SlackWebhookClient
from issue_relay.slack.formatter import build_slack_message
from issue_relay.webhook.models import IssueNotification
from issue_relay.webhook.parser import parse_issue_payload

logger = logging.getLogger(__name__)

MISSING_SLACK_URL_MESSAGE = "Missing SLACK_URL environment variable."
NO_PAYLOAD_MESSAGE = "No payload supplied."
INVALID_PAYLOAD_PREFIX = "Invalid GitHub webhook payload: "


class RelayOutcome(str, Enum):
    """Outcome of a single relay invocation.

    Each outcome maps to the HTTP status code used in gateway mode.
    """

    SENT = "sent"
    CONFIGURATION_ERROR = "configuration_error"
    INPUT_ERROR = "input_error"
    PAYLOAD_ERROR = "payload_error"
    DISPATCH_ERROR = "dispatch_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    RelayOutcome.SENT: 200,
    RelayOutcome.CONFIGURATION_ERROR: 500,
    RelayOutcome.INPUT_ERROR: 400,
    RelayOutcome.PAYLOAD_ERROR: 400,
    RelayOutcome.DISPATCH_ERROR: 502,
}


@dataclass(frozen=True)
class RelayResult:
    """Result of a relay invocation.

    Attributes:
        outcome: Which branch the invocation ended in.
        message: Caller-visible description of the outcome.
        issue_number: The issue number when the payload was parsed and had one.
    """

    outcome: RelayOutcome
    message: str
    issue_number: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is RelayOutcome.SENT

    @property
    def status_code(self) -> int:
        return self.outcome.status_code


class RelayHandler:
    """Forwards GitHub issue events to a Slack incoming webhook.

    The handler keeps no state between invocations. Settings are loaded on
    every call so a change to SLACK_URL is picked up by the next invocation.

    Attributes:
        settings_factory: Callable returning current RelaySettings.
        http_client: Optional httpx client used for the Slack call. When
            omitted, a client is created and closed for each dispatch.
    """

    def __init__(
        self,
        settings_factory: Callable[[], RelaySettings] = get_settings,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings_factory = settings_factory
        self.http_client = http_client

    def handle(
        self,
        raw: Optional[Union[str, bytes]],
        is_base64_encoded: bool = False,
    ) -> RelayResult:
        """Relay one webhook payload to Slack.

        Args:
            raw: The raw webhook payload, or None if the caller had none.
            is_base64_encoded: Whether ``raw`` is base64 text that must be
                decoded before parsing (API Gateway binary bodies).

        Returns:
            RelayResult describing the outcome.
        """
        try:
            settings = self._load_settings()
        except ConfigurationError as e:
            logger.error(e.message)
            return RelayResult(RelayOutcome.CONFIGURATION_ERROR, e.message)

        try:
            notification = self._parse(raw, is_base64_encoded)
        except InputError as e:
            logger.warning(e.message)
            return RelayResult(RelayOutcome.INPUT_ERROR, e.message)
        except PayloadError as e:
            message = f"{INVALID_PAYLOAD_PREFIX}{e.message}"
            logger.warning(message)
            return RelayResult(RelayOutcome.PAYLOAD_ERROR, message)

        text = build_slack_message(notification)

        try:
            self._dispatch(settings, text)
        except DispatchError as e:
            logger.error(e.message)
            return RelayResult(
                RelayOutcome.DISPATCH_ERROR,
                e.message,
                issue_number=notification.issue_number,
            )

        message = (
            f"Slack notification sent for issue #{notification.issue_identifier}."
        )
        logger.info(
            message,
            extra={
                "repository": notification.repository_full_name,
                "action": notification.action,
            },
        )
        return RelayResult(
            RelayOutcome.SENT,
            message,
            issue_number=notification.issue_number,
        )

    def _load_settings(self) -> RelaySettings:
        """Load settings and require a Slack webhook URL.

        Raises:
            ConfigurationError: If SLACK_URL is unset or blank, or if any
                setting has an invalid value.
        """
        try:
            settings = self.settings_factory()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid relay configuration: {e.errors()[0].get('msg')}"
            ) from e

        if not settings.slack_url:
            raise ConfigurationError(MISSING_SLACK_URL_MESSAGE)
        return settings

    def _parse(
        self,
        raw: Optional[Union[str, bytes]],
        is_base64_encoded: bool,
    ) -> IssueNotification:
        """Check the payload is present, decode it if needed, and parse it.

        Raises:
            InputError: If the payload is None, empty or whitespace.
            PayloadError: If the payload cannot be decoded or parsed.
        """
        if raw is None or not raw.strip():
            raise InputError(NO_PAYLOAD_MESSAGE)

        if is_base64_encoded:
            try:
                raw = base64.b64decode(raw, validate=True)
            except (binascii.Error, ValueError) as e:
                raise MalformedPayloadError(
                    "Request body is not valid base64."
                ) from e
            if not raw.strip():
                raise InputError(NO_PAYLOAD_MESSAGE)

        return parse_issue_payload(raw)

    def _dispatch(self, settings: RelaySettings, text: str) -> None:
        """Send the formatted message to Slack.

        Raises:
            DispatchError: If Slack did not accept the message.
        """
        with SlackWebhookClient(
            webhook_url=settings.slack_url,
            timeout=settings.slack_timeout_seconds,
            http_client=self.http_client,
        ) as slack:
            slack.post_message(text)
