"""Warning reporter.

Same shape as the exception reporter, over an optional WarningSource.
"""

from typing import TYPE_CHECKING

from .exception_reporter import ExceptionReporter
from .ports import WarningSource

if TYPE_CHECKING:
    from newshound.config import Settings


class WarningReporter(ExceptionReporter):
    """Builds the warning section of the digest and banner."""

    def __init__(self, source: WarningSource | None, settings: "Settings"):
        super().__init__(source, settings)

    @property
    def configured(self) -> bool:
        return self.source is not None

    @property
    def limit(self) -> int:
        return self.settings.warning_limit

    def header_text(self) -> str:
        return f"*⚠️ Recent Warnings ({self.window_label})*"

    def empty_text(self) -> str:
        return f"*✅ No Warnings in the {self.window_label}*"
