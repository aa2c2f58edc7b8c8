"""Fake source port implementations for testing."""

from dataclasses import dataclass
from datetime import timedelta

from newshound.core.formatting import build_banner_record, format_report_text
from newshound.core.models import JobTypeCounts, QueueStatistics, ReportRecord
from newshound.core.ports import ExceptionSource, JobSource, WarningSource


@dataclass(frozen=True)
class FakeRecord:
    """Minimal record shape understood by the fake sources."""

    title: str
    message: str = ""
    location: str = ""
    time: str = "09:30 AM"


class FakeExceptionSource(ExceptionSource):
    """In-memory exception source.

    Honors the limit like a real query and records every call for
    assertions.
    """

    def __init__(self, records: list[FakeRecord] | None = None):
        self.records: list[FakeRecord] = list(records or [])
        self.recent_calls: list[tuple[timedelta, int]] = []
        self.should_fail = False
        self.closed = False

    async def recent(self, time_window: timedelta, limit: int) -> list[FakeRecord]:
        self.recent_calls.append((time_window, limit))
        if self.should_fail:
            raise RuntimeError("source unavailable")
        return self.records[:limit]

    async def close(self) -> None:
        self.closed = True

    def format_for_report(self, record: FakeRecord, ordinal: int) -> str:
        return format_report_text(
            ordinal,
            title=record.title,
            time=record.time,
            location=record.location,
            message=record.message,
        )

    def format_for_banner(self, record: FakeRecord) -> ReportRecord:
        return build_banner_record(
            title=record.title,
            time=record.time,
            location=record.location,
            message=record.message,
        )


class FakeWarningSource(FakeExceptionSource, WarningSource):
    """In-memory warning source."""


class FakeJobSource(JobSource):
    """In-memory job source with fixed statistics."""

    def __init__(
        self,
        stats: QueueStatistics | None = None,
        counts: dict[str, JobTypeCounts] | None = None,
    ):
        self.stats = stats or QueueStatistics()
        self.counts = dict(counts or {})

    async def queue_statistics(self) -> QueueStatistics:
        return self.stats

    async def job_counts_by_type(self) -> dict[str, JobTypeCounts]:
        return dict(self.counts)
