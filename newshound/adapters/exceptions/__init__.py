"""Exception source adapters.

Implementations support multiple exception trackers:
- ExceptionTrack (``exception_tracks`` table)
- SolidErrors (``solid_errors`` / ``solid_errors_occurrences`` tables)

Custom trackers are registered by name:

    EXCEPTION_SOURCES.register("sentry_export", SentryExportSource)
"""

from newshound.core.registry import SourceRegistry

from .exception_track import ExceptionTrackSource
from .solid_errors import SolidErrorsSource

EXCEPTION_SOURCES = SourceRegistry(
    "exception",
    builtins={
        "ExceptionTrack": ExceptionTrackSource,
        "SolidErrors": SolidErrorsSource,
    },
)

__all__ = ["EXCEPTION_SOURCES", "ExceptionTrackSource", "SolidErrorsSource"]
