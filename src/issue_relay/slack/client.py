"""Slack incoming-webhook client.

This module provides a small synchronous wrapper around an httpx client for
posting a message to a Slack incoming webhook. Each call makes exactly one
request with a fixed timeout. Failed deliveries are reported once and never
retried.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from issue_relay.errors import SlackDispatchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class SlackMessage(BaseModel):
    """Request body for a Slack incoming webhook."""

    text: str


class SlackWebhookClient:
    """Synchronous Slack incoming-webhook client.

    Attributes:
        webhook_url: The Slack incoming-webhook URL.
        timeout: Request timeout in seconds.

    Example:
        >>> with SlackWebhookClient("https://hooks.slack.com/services/T/B/X") as slack:
        ...     slack.post_message("Hello!")

    Pass ``http_client`` to reuse a connection pool or to inject a stub
    transport. Clients passed in are not closed by this class.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.Client:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "SlackWebhookClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def post_message(self, text: str) -> httpx.Response:
        """Post a text message to the Slack webhook.

        Args:
            text: The message text.

        Returns:
            The successful HTTP response from Slack.

        Raises:
            SlackDispatchError: If Slack answers with a non-2xx status, the
                request times out, or the request cannot be sent.
        """
        message = SlackMessage(text=text)

        try:
            response = self.client.post(
                self.webhook_url,
                content=message.model_dump_json(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(
                "Slack webhook request timed out",
                extra={"timeout": self.timeout, "error": str(e)},
            )
            raise SlackDispatchError(
                f"Slack webhook timed out after {self.timeout:g} seconds."
            ) from e
        except httpx.InvalidURL as e:
            logger.error(
                "Slack webhook URL is invalid",
                extra={"error": str(e)},
            )
            raise SlackDispatchError(f"Slack webhook URL is invalid: {e}") from e
        except httpx.RequestError as e:
            logger.error(
                "Slack webhook request failed",
                extra={"error": str(e)},
            )
            raise SlackDispatchError(f"Slack webhook request failed: {e}") from e

        if not response.is_success:
            body = response.text
            logger.error(
                "Slack webhook error",
                extra={
                    "status_code": response.status_code,
                    "response_body": body[:500],
                },
            )
            raise SlackDispatchError(
                f"Slack webhook returned {response.status_code}: {body}",
                status_code=response.status_code,
                response_body=body,
            )

        return response
