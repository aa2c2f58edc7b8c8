"""Transport adapters for delivering the daily digest."""

import logging

from newshound.config import Settings
from newshound.core.ports import TransportPort

from .slack import SlackAPITransport, SlackTransport, SlackWebhookTransport
from .sns import SNSTransport

logger = logging.getLogger(__name__)


def build_transport(settings: Settings) -> TransportPort:
    """Build the transport selected by settings.transport_adapter.

    Accepts "slack" (the default, also used for None), "sns", or a callable
    that takes the settings and returns a TransportPort.

    Raises:
        ValueError: If the adapter name is not recognised.
    """
    adapter = settings.transport_adapter
    if adapter is None or adapter == "slack":
        return SlackTransport(settings)
    if adapter == "sns":
        return SNSTransport(settings)
    if callable(adapter):
        transport = adapter(settings)
        logger.debug(f"Using custom transport {type(transport).__name__}")
        return transport
    raise ValueError(f"Invalid transport adapter: {adapter}")


__all__ = [
    "SNSTransport",
    "SlackAPITransport",
    "SlackTransport",
    "SlackWebhookTransport",
    "build_transport",
]
