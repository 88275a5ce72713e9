import logging

import httpx

from app.domain.models import Bug

logger = logging.getLogger("notifier")


class WebhookNotifier:
    """Best-effort POST of a plain-text message to a chat webhook (Slack-compatible payload)."""

    def __init__(self, url: str | None, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url or None
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self.url is not None

    async def send(self, text: str) -> bool:
        if not self.enabled:
            return False
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.url, json={"text": text})
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Webhook notification failed: %s", e)
            return False
        logger.info("Webhook notification sent")
        return True


def format_bug_created(bug: Bug) -> str:
    lines = [
        f"New Bug: *{bug.title}*",
        f"Priority: {bug.priority}",
        f"Reported by: {bug.reported_by}",
        f"Source: {bug.source}",
    ]
    if bug.assigned_to:
        lines.append(f"Assigned to: {bug.assigned_to}")
    return "\n".join(lines)


def format_feedback_created(bug: Bug) -> str:
    customer = bug.customer or {}
    return (
        "Customer Feedback -> Bug\n"
        f"*{bug.title}*\n"
        f"Priority: {bug.priority}\n"
        f"Customer: {customer.get('name') or bug.reported_by} ({customer.get('email') or 'n/a'})"
    )
