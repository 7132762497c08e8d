"""GitHub webhook payload handling for the issue relay.

This module parses GitHub ``issues`` webhook events into IssueNotification
records. Signature validation is out of scope: payloads are trusted.
"""

from .models import IssueNotification, IssuesWebhookPayload
from .parser import parse_issue_payload

__all__ = [
    "IssueNotification",
    "IssuesWebhookPayload",
    "parse_issue_payload",
]
