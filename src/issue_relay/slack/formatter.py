"""Slack message formatting for issue notifications.

Messages use Slack's ``<url|text>`` link syntax so the issue title renders
as a link to the issue.
"""

from issue_relay.webhook.models import IssueNotification


def build_slack_message(notification: IssueNotification) -> str:
    """Format an issue notification as a single Slack message line.

    Args:
        notification: The parsed issue notification.

    Returns:
        A line of the form
        ``[<repository>] <sender> <action> <label>: <<url>|<title>>``.

    Example:
        >>> notification = IssueNotification(
        ...     issue_url="https://github.com/octo-org/octo-repo/issues/42",
        ...     issue_title="Bug report",
        ...     issue_number=42,
        ...     repository_full_name="octo-org/octo-repo",
        ...     action="opened",
        ...     sender="octocat",
        ... )
        >>> build_slack_message(notification)
        '[octo-org/octo-repo] octocat opened #42: <https://github.com/octo-org/octo-repo/issues/42|Bug report>'
    """
    return (
        f"[{notification.repository_full_name}] "
        f"{notification.sender} {notification.action} "
        f"{notification.issue_label}: "
        f"<{notification.issue_url}|{notification.issue_title}>"
    )
