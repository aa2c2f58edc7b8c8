"""Digest notifier.

Guards delivery on the settings and hands the message to one transport.
"""

import logging
from typing import TYPE_CHECKING, Any

from .models import DigestMessage
from .ports import TransportPort

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)


class Notifier:
    """Posts composed messages through the configured transport."""

    def __init__(self, settings: "Settings", transport: TransportPort):
        self.settings = settings
        self.transport = transport

    async def post(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Deliver a message.

        Returns:
            True if delivered. False if Newshound is disabled or delivery failed.
        """
        if not self.settings.is_valid():
            logger.debug("Newshound disabled, skipping notification")
            return False

        try:
            return await self.transport.deliver(message)
        except Exception as e:
            logger.error(
                f"Failed to send notification: {e}",
                extra={"transport": type(self.transport).__name__},
                exc_info=True,
            )
            return False
