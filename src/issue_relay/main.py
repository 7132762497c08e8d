"""FastAPI application entry point for the issue relay.

This module serves the relay over plain HTTP for local development and
container hosting. It runs the same RelayHandler as the Lambda adapters and
answers with the gateway status codes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from issue_relay import __version__
from issue_relay.config import RelaySettings, get_settings, redact_secret
from issue_relay.handler import RelayHandler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

relay_handler = RelayHandler()


def _log_configuration(settings: RelaySettings) -> None:
    """Log configuration values with secrets redacted.

    Args:
        settings: The relay settings to log.
    """
    logger.info("Relay configuration:")
    logger.info(f"  Slack URL: {redact_secret(settings.slack_url, visible_chars=24)}")
    logger.info(f"  Slack Timeout Seconds: {settings.slack_timeout_seconds:g}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")

    if settings.slack_url is None:
        logger.warning("SLACK_URL is not set; webhooks will be rejected with 500")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load and log configuration on startup.

    A missing SLACK_URL or an invalid setting is logged but does not stop
    the server; each request then answers 500 through the handler.
    """
    logger.info("Issue relay starting up...")

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.warning("Invalid relay configuration; requests will be rejected: %s", e)
    else:
        logging.getLogger().setLevel(settings.log_level)
        _log_configuration(settings)

    yield

    logger.info("Issue relay shutdown complete")


app = FastAPI(
    title="Issue Relay",
    description="Forwards GitHub issue events to a Slack incoming webhook",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
async def health():
    """Liveness probe endpoint.

    Returns:
        dict: Status indicating the application is healthy.
    """
    return {"status": "healthy"}


@app.post("/webhooks/github")
async def github_webhook(request: Request) -> JSONResponse:
    """GitHub webhook receiver endpoint.

    The raw request body is relayed as-is, so parsing rules and responses
    match the API Gateway handler.

    Returns:
        JSONResponse: ``{"message": ...}`` with the outcome's status code.
    """
    body = await request.body()
    result = await run_in_threadpool(relay_handler.handle, body)
    return JSONResponse(
        status_code=result.status_code,
        content={"message": result.message},
    )


if __name__ == "__main__":
    import uvicorn

    dev_settings = get_settings()
    uvicorn.run(
        "issue_relay.main:app",
        host=dev_settings.host,
        port=dev_settings.port,
        reload=True,
    )
