"""Discord webhook notifier for upstream model failures."""

import logging

import httpx

logger = logging.getLogger(__name__)

ALERT_TEMPLATE = "🚨 AI 영양성분 API 오류 발생\n분류: {category}\n상태코드: {status}\n```\n{message}\n```"


class DiscordAlertNotifier:
    """Posts incident messages to a Discord webhook."""

    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        """
        Initialize the notifier.

        Args:
            webhook_url: Discord webhook URL (empty disables alerts)
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def render(category: str, status: int | None, message: str) -> str:
        """Render the incident message."""
        return ALERT_TEMPLATE.format(
            category=category,
            status=status if status is not None else "-",
            message=message,
        )

    async def send(self, content: str) -> bool:
        """
        Post a message to the webhook.

        Never raises; failures are logged.

        Returns:
            True if Discord accepted the message
        """
        if not self.webhook_url:
            logger.error("Discord webhook URL is missing")
            return False

        try:
            client = await self._get_client()
            logger.info("Sending Discord alert", extra={"content": content})
            response = await client.post(self.webhook_url, json={"content": content})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Discord alert failed: {e}")
            return False

        logger.info("Discord alert sent successfully")
        return True
