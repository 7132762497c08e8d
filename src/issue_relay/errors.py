"""Error taxonomy for the issue relay.

Every error raised here is recovered inside a single invocation by
RelayHandler and turned into a RelayResult. Anything else propagates.
"""

from typing import Optional


class RelayError(Exception):
    """Base exception for relay errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(RelayError):
    """Raised when the Slack webhook URL is missing or settings are invalid."""


class InputError(RelayError):
    """Raised when no payload was supplied."""


class PayloadError(RelayError):
    """Raised when the webhook payload cannot be used."""


class MalformedPayloadError(PayloadError):
    """Raised by the parser for invalid JSON or missing required fields."""


class DispatchError(RelayError):
    """Raised when the outbound notification could not be delivered."""


class SlackDispatchError(DispatchError):
    """Raised when the Slack webhook call fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from Slack, if a response was received.
        response_body: Response body from Slack, if a response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
