"""GitHub issue event relay to Slack incoming webhooks.

This package receives GitHub ``issues`` webhook payloads, extracts a small
set of fields and forwards a one-line summary to Slack:
- Webhook payload parsing into an immutable IssueNotification
- Slack message formatting and dispatch
- Lambda (plain-text and API Gateway) and FastAPI hosting adapters
"""

__version__ = "1.0.0"
