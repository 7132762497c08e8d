"""Lambda handlers for the issue relay.

Two entry points share one RelayHandler:

- ``plain_text_handler``: direct invocation. Returns the outcome message as
  a plain string, including for errors.
- ``gateway_handler``: API Gateway proxy integration. Returns a response
  with a status code and a JSON ``{"message": ...}`` body. Base64-encoded
  request bodies are decoded before parsing.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from issue_relay.config import get_settings
from issue_relay.handler import RelayHandler, RelayResult

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

relay_handler = RelayHandler()


def _configure_log_level() -> None:
    """Apply LOG_LEVEL to the root logger, keeping INFO if it is invalid."""
    try:
        logger.setLevel(get_settings().log_level)
    except ValidationError as e:
        logger.warning("Ignoring invalid relay settings for logging: %s", e)


_configure_log_level()


def plain_text_handler(event: Any, context: Any) -> str:
    """
    Lambda handler for direct invocation.

    Args:
        event: The webhook payload. A string or UTF-8 bytes is used as-is;
            any other JSON value (as decoded by the Lambda runtime) is
            serialized back to JSON text.
        context: Lambda context (not used)

    Returns:
        The outcome message.
    """
    result = relay_handler.handle(_event_to_payload(event))
    return result.message


def gateway_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for API Gateway proxy events.

    Args:
        event: API Gateway proxy event with ``body`` and ``isBase64Encoded``
        context: Lambda context (not used)

    Returns:
        Proxy response with statusCode, headers and a JSON body.
    """
    body: Optional[Union[str, bytes]] = None
    is_base64_encoded = False
    if isinstance(event, dict):
        # Test consoles may pass the body already decoded from JSON
        body = _event_to_payload(event.get("body"))
        is_base64_encoded = bool(event.get("isBase64Encoded", False))

    result = relay_handler.handle(body, is_base64_encoded=is_base64_encoded)
    return to_gateway_response(result)


def to_gateway_response(result: RelayResult) -> Dict[str, Any]:
    """Convert a RelayResult into an API Gateway proxy response."""
    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"message": result.message}),
    }


def _event_to_payload(event: Any) -> Optional[Union[str, bytes]]:
    if event is None or isinstance(event, (str, bytes)):
        return event
    return json.dumps(event)
