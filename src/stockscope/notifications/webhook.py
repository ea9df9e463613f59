"""Webhook notification sink."""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class WebhookNotificationSink:
    """Posts notifications as JSON to a webhook URL."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the webhook sink.

        Args:
            webhook_url: Endpoint receiving {"title": ..., "body": ...}
            timeout: Request timeout in seconds
            client: Optional pre-built client (tests inject a mock transport)
        """
        self.webhook_url = webhook_url
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def notify(self, title: str, body: str) -> None:
        """Send the notification; failures are logged, never raised."""
        try:
            response = await self._get_client().post(
                self.webhook_url,
                json={"title": title, "body": body},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Webhook notification failed for '%s': %s", title, e)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
