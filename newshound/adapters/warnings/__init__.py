"""Warning source adapters.

Newshound ships no built-in warning source. Applications implement
WarningSource for whatever they treat as a warning (unprocessable events,
slow requests, ...) and register it by name:

    WARNING_SOURCES.register("unprocessable_events", UnprocessableEventsWarnings)

and then set ``warning_source="unprocessable_events"``, or pass an adapter
instance directly.
"""

from newshound.core.registry import SourceRegistry

WARNING_SOURCES = SourceRegistry("warning")

__all__ = ["WARNING_SOURCES"]
