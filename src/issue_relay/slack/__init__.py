"""Slack incoming-webhook message formatting and delivery."""

from .client import SlackMessage, SlackWebhookClient
from .formatter import build_slack_message

__all__ = [
    "SlackMessage",
    "SlackWebhookClient",
    "build_slack_message",
]
