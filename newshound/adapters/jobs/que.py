"""Que job source.

Implements JobSource with read-only aggregate queries against the
``que_jobs`` table. Job health reporting is best-effort: any query failure
is logged and replaced with zero-valued results.
"""

import logging
from datetime import datetime, timezone

from newshound.adapters.database import create_database
from newshound.config import Settings
from newshound.core.models import JobTypeCounts, QueueStatistics
from newshound.core.ports import DatabasePort, JobSource

logger = logging.getLogger(__name__)


class QueJobSource(JobSource):
    """Reads queue statistics from Que's job table."""

    def __init__(self, settings: Settings, database: DatabasePort | None = None):
        """Initialize Que source.

        Args:
            settings: Application settings (time zone, database URL).
            database: Database adapter; built from settings.database_url if omitted.
        """
        self.settings = settings
        self.database = database or create_database(settings.database_url)

    async def close(self) -> None:
        """Close the database pool."""
        await self.database.close_pool()

    async def queue_statistics(self) -> QueueStatistics:
        """Count ready, scheduled, failed and finished-today jobs.

        "Today" starts at local midnight in the configured time zone.
        """
        now = datetime.now(timezone.utc)
        beginning_of_day = (
            now.astimezone(self.settings.zone)
            .replace(hour=0, minute=0, second=0, microsecond=0)
        )
        p = self.database.placeholder

        try:
            return QueueStatistics(
                ready=await self._count_jobs(
                    f"finished_at IS NULL AND expired_at IS NULL AND run_at <= {p(1)}",
                    now,
                ),
                scheduled=await self._count_jobs(
                    f"finished_at IS NULL AND expired_at IS NULL AND run_at > {p(1)}",
                    now,
                ),
                failed=await self._count_jobs(
                    "error_count > 0 AND finished_at IS NULL"
                ),
                finished_today=await self._count_jobs(
                    f"finished_at >= {p(1)}",
                    beginning_of_day,
                ),
            )
        except Exception as e:
            logger.error(f"Failed to fetch Que statistics: {e}", exc_info=True)
            return QueueStatistics()

    async def job_counts_by_type(self) -> dict[str, JobTypeCounts]:
        """Count unfinished jobs per class, split on whether they have errored."""
        try:
            rows = await self.database.fetch_all(
                """
                SELECT job_class,
                       CASE WHEN error_count = 0 THEN 1 ELSE 0 END AS succeeded,
                       COUNT(*) AS count
                FROM que_jobs
                WHERE finished_at IS NULL
                GROUP BY job_class, CASE WHEN error_count = 0 THEN 1 ELSE 0 END
                ORDER BY job_class
                """
            )
        except Exception as e:
            logger.error(f"Failed to fetch job counts: {e}", exc_info=True)
            return {}

        counts: dict[str, JobTypeCounts] = {}
        for row in rows:
            job_counts = counts.setdefault(row["job_class"], JobTypeCounts())
            count = int(row["count"])
            if int(row["succeeded"]):
                job_counts.success += count
            else:
                job_counts.failed += count
            job_counts.total += count
        return counts

    async def _count_jobs(self, where_clause: str, *params: object) -> int:
        value = await self.database.fetch_value(
            f"SELECT COUNT(*) AS count FROM que_jobs WHERE {where_clause}",
            *params,
        )
        return int(value or 0)
