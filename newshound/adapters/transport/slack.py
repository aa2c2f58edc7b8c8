"""Slack transports.

Implements TransportPort for Slack in two flavours, an incoming webhook and
the Web API (chat.postMessage), plus SlackTransport which picks between them
from the settings: webhook first, then API token, otherwise a logged failure.
"""

import logging
from typing import Any

import httpx

from newshound.config import Settings
from newshound.core.models import DigestMessage
from newshound.core.ports import TransportPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def slack_payload(message: DigestMessage | dict[str, Any] | str) -> dict[str, Any]:
    """Convert a message into a Slack JSON payload."""
    if isinstance(message, DigestMessage):
        return message.to_payload()
    if isinstance(message, dict):
        return message
    return {"text": str(message)}


class SlackWebhookTransport(TransportPort):
    """Posts messages to a Slack incoming webhook."""

    def __init__(self, webhook_url: str, client: httpx.AsyncClient | None = None):
        """Initialize webhook transport.

        Args:
            webhook_url: Incoming webhook URL.
            client: Optional HTTP client; a short-lived one is used per
                delivery when omitted.
        """
        self.webhook_url = webhook_url
        self._client = client

    async def deliver(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Post the message to the webhook."""
        payload = slack_payload(message)
        try:
            if self._client is not None:
                response = await self._client.post(self.webhook_url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
                    response = await client.post(self.webhook_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send Slack webhook notification: {e}",
                extra={"transport": "slack_webhook"},
            )
            return False

        logger.info("Message sent to Slack webhook", extra={"transport": "slack_webhook"})
        return True


class SlackAPITransport(TransportPort):
    """Posts messages through the Slack Web API."""

    def __init__(
        self,
        token: str,
        channel: str,
        client: httpx.AsyncClient | None = None,
        api_base_url: str = "https://slack.com/api",
    ):
        """Initialize Web API transport.

        Args:
            token: Bot or user token with chat:write.
            channel: Channel name or ID to post to.
            client: Optional HTTP client; a short-lived one is used per
                delivery when omitted.
            api_base_url: Base URL for the Slack Web API.
        """
        self.token = token
        self.channel = channel
        self.api_base_url = api_base_url.rstrip("/")
        self._client = client

    async def deliver(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Call chat.postMessage with the message blocks."""
        payload = slack_payload(message)
        body = {
            "channel": self.channel,
            "text": payload.get("text") or "Daily Newshound Report",
        }
        if payload.get("blocks"):
            body["blocks"] = payload["blocks"]
        headers = {"Authorization": f"Bearer {self.token}"}
        url = f"{self.api_base_url}/chat.postMessage"

        try:
            if self._client is not None:
                response = await self._client.post(url, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
                    response = await client.post(url, json=body, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                f"Failed to send Slack API notification: {e}",
                extra={"transport": "slack_api", "channel": self.channel},
            )
            return False

        if not data.get("ok"):
            logger.error(
                f"Slack API rejected notification: {data.get('error', 'unknown_error')}",
                extra={"transport": "slack_api", "channel": self.channel},
            )
            return False

        logger.info(
            "Message sent to Slack channel",
            extra={"transport": "slack_api", "channel": self.channel},
        )
        return True


class SlackTransport(TransportPort):
    """Delivers via webhook when configured, else via the Web API."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        """Initialize Slack transport.

        Args:
            settings: Application settings with Slack credentials.
            client: Optional HTTP client shared by both delivery paths.
        """
        self.settings = settings
        self._client = client

    def webhook_configured(self) -> bool:
        return bool(self.settings.slack_webhook_url)

    def web_api_configured(self) -> bool:
        return bool(self.settings.slack_api_token)

    async def deliver(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Deliver through the first configured Slack path."""
        if not self.settings.is_valid():
            return False

        if self.webhook_configured():
            transport: TransportPort = SlackWebhookTransport(
                self.settings.slack_webhook_url, client=self._client
            )
        elif self.web_api_configured():
            transport = SlackAPITransport(
                self.settings.slack_api_token,
                self.settings.slack_channel,
                client=self._client,
            )
        else:
            logger.error(
                "No valid Slack configuration found",
                extra={"transport": "slack"},
            )
            return False

        return await transport.deliver(message)
