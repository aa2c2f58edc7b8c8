"""Exception reporter.

Wraps one ExceptionSource and turns its recent records into digest blocks
and banner records.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .models import Block, ReportRecord
from .ports import ExceptionSource

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)


class ExceptionReporter:
    """Builds the exception section of the digest and banner."""

    def __init__(self, source: ExceptionSource | None, settings: "Settings"):
        """Initialize reporter.

        Args:
            source: Resolved exception source, or None if unconfigured.
            settings: Application settings (limit and time window).
        """
        self.source = source
        self.settings = settings
        self._recent: Sequence[Any] | None = None

    @property
    def limit(self) -> int:
        return self.settings.exception_limit

    @property
    def window_label(self) -> str:
        return f"Last {self.settings.time_window_hours} Hours"

    async def recent(self) -> Sequence[Any]:
        """Records from the source, fetched once per reporter.

        Raises:
            Exception: Source query errors propagate to the caller.
        """
        if self.source is None:
            return ()
        if self._recent is None:
            self._recent = await self.source.recent(
                time_window=self.settings.time_window, limit=self.limit
            )
            logger.debug(
                f"{type(self).__name__} fetched {len(self._recent)} records",
                extra={"source": type(self.source).__name__},
            )
        return self._recent

    async def generate_report(self) -> list[Block]:
        """Digest blocks: a header plus one block per record, or an all-clear block."""
        records = await self.recent()
        if not records:
            return [Block.section(self.empty_text())]

        assert self.source is not None
        return [
            Block.section(self.header_text()),
            *(
                Block.section(self.source.format_for_report(record, index))
                for index, record in enumerate(records, 1)
            ),
        ]

    async def banner_data(self) -> tuple[ReportRecord, ...]:
        """Banner records in the source's order; empty without a source."""
        if self.source is None:
            return ()
        records = await self.recent()
        return tuple(self.source.format_for_banner(record) for record in records)

    def header_text(self) -> str:
        return f"*🚨 Recent Exceptions ({self.window_label})*"

    def empty_text(self) -> str:
        return f"*✅ No Exceptions in the {self.window_label}*"
