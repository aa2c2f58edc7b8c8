"""Port interfaces for Newshound.

These abstract base classes define the boundaries between core
reporting logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Source Ports** (reporters read from adapters)
   - ExceptionSource: Recent exceptions from an exception tracker
   - WarningSource: Recent warnings from an application-defined store
   - JobSource: Read-only statistics from a job queue

2. **Delivery Ports** (digest leaves the system)
   - TransportPort: Deliver a composed digest over one channel

3. **Infrastructure Ports**
   - DatabasePort: Read-only SQL access used by the built-in sources
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from .models import BannerQueueStats, DigestMessage, JobTypeCounts, QueueStatistics, ReportRecord


# ============================================================================
# SOURCE PORTS
# ============================================================================


class ExceptionSource(ABC):
    """Port for retrieving and formatting recent exceptions.

    Each adapter owns its query semantics against its backing store and its
    own field-extraction rules. Records returned by recent() are opaque to
    the core; they are only handed back to the same adapter for formatting.
    """

    @abstractmethod
    async def recent(self, time_window: timedelta, limit: int) -> Sequence[Any]:
        """Retrieve recent exception records.

        Args:
            time_window: How far back to look from now.
            limit: Maximum number of records to return.

        Returns:
            Records in descending creation order (newest first).
            Empty sequence if nothing was recorded.

        Raises:
            Exception: If the backing store is unreachable. Callers decide
                how to degrade.
        """

    @abstractmethod
    def format_for_report(self, record: Any, ordinal: int) -> str:
        """Format one record as mrkdwn text for the digest.

        Args:
            record: A record previously returned by recent().
            ordinal: 1-based position in the list.

        Returns:
            Multi-line text; lines for missing fields are omitted.
        """

    @abstractmethod
    def format_for_banner(self, record: Any) -> ReportRecord:
        """Format one record as structured banner data."""


class WarningSource(ExceptionSource):
    """Port for retrieving and formatting recent warnings.

    Shares the exception capability set; kept as a distinct type so a
    warning adapter cannot be configured as an exception source by accident.
    """


class JobSource(ABC):
    """Port for reading job queue health.

    Implementations must never raise from these methods: query failures are
    logged and replaced with zero-valued results.
    """

    @abstractmethod
    async def queue_statistics(self) -> QueueStatistics:
        """Return ready/scheduled/failed/finished-today counts."""

    @abstractmethod
    async def job_counts_by_type(self) -> dict[str, JobTypeCounts]:
        """Return unfinished job counts keyed by job class."""

    async def format_for_banner(self) -> BannerQueueStats:
        """Aggregate queue statistics for the banner's stat grid."""
        stats = await self.queue_statistics()
        return BannerQueueStats(
            ready=stats.ready,
            scheduled=stats.scheduled,
            failed=stats.failed,
            completed_today=stats.finished_today,
        )


# ============================================================================
# DELIVERY PORTS
# ============================================================================


class TransportPort(ABC):
    """Port for delivering a composed digest over one channel.

    Implementations catch their own I/O failures, log them with transport
    context, and report failure only through the return value.
    """

    @abstractmethod
    async def deliver(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Deliver a message.

        Args:
            message: A composed digest, a raw payload mapping, or plain text.

        Returns:
            True if the channel accepted the message, False otherwise.
        """


# ============================================================================
# INFRASTRUCTURE PORTS
# ============================================================================


class DatabasePort(ABC):
    """Port for read-only SQL queries against the host application's database.

    Adapters translate positional parameters into their driver's
    placeholder style via placeholder().
    """

    @abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the placeholder for the 1-based parameter index."""

    def naive_utc_placeholder(self, index: int) -> str:
        """Placeholder for comparing a timestamp against a naive UTC column.

        Rails `timestamp` columns carry no zone; drivers that bind aware
        values as timestamptz override this to convert the parameter.
        """
        return self.placeholder(index)

    @abstractmethod
    async def fetch_all(self, query: str, *params: Any) -> list[dict[str, Any]]:
        """Run a query and return all rows as dictionaries."""

    async def close_pool(self) -> None:
        """Release pooled connections. No-op for adapters without a pool."""

    async def fetch_value(self, query: str, *params: Any) -> Any:
        """Run a query and return the first column of the first row."""
        rows = await self.fetch_all(query, *params)
        if not rows:
            return None
        return next(iter(rows[0].values()))

    @staticmethod
    def to_utc_naive(value: datetime) -> datetime:
        """Normalize a datetime for comparison with naive UTC columns."""
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
