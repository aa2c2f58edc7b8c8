"""Job reporter.

Wraps an optional JobSource and reports queue health: per-class job counts
and the ready/scheduled/failed/completed figures, with a health indicator
driven by the failed-job count.
"""

import logging
from typing import TYPE_CHECKING

from .models import BannerQueueStats, Block, JobTypeCounts, QueueHealth, QueueStatistics
from .ports import JobSource

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)


class JobReporter:
    """Builds the job queue section of the digest and banner."""

    header = "*📊 Job Queue Status*"

    def __init__(self, source: JobSource | None, settings: "Settings"):
        """Initialize reporter.

        Args:
            source: Resolved job source, or None if unconfigured.
            settings: Application settings.
        """
        self.source = source
        self.settings = settings

    async def generate_report(self) -> list[Block]:
        """Digest blocks: header, job counts and queue health."""
        if self.source is None:
            return [Block.section("*✅ No Job Source Configured*")]

        counts = await self.source.job_counts_by_type()
        stats = await self.source.queue_statistics()
        return [
            Block.section(self.header),
            Block.section(self.format_job_counts(counts)),
            Block.section(self.format_queue_health(stats)),
        ]

    async def banner_data(self) -> BannerQueueStats | None:
        """Queue figures for the banner; None without a source."""
        if self.source is None:
            return None
        return await self.source.format_for_banner()

    @staticmethod
    def format_job_counts(counts: dict[str, JobTypeCounts]) -> str:
        """One line per job class, flagged when any job has failed."""
        if not counts:
            return "*No jobs found in the queue*"

        lines = ["*Job Counts by Type:*"]
        for job_class, job_counts in counts.items():
            status_emoji = "⚠️" if job_counts.failed > 0 else "✅"
            lines.append(
                f"• {status_emoji} *{job_class}*: {job_counts.total} total "
                f"({job_counts.success} success, {job_counts.failed} failed)"
            )
        return "\n".join(lines)

    @staticmethod
    def format_queue_health(stats: QueueStatistics) -> str:
        """Queue health summary with a tiered emoji."""
        health = QueueHealth.from_failed_count(stats.failed)
        return "\n".join(
            [
                f"*Queue Health {health.emoji}*",
                f"• *Ready to Run:* {stats.ready}",
                f"• *Scheduled:* {stats.scheduled}",
                f"• *Failed (Retry Queue):* {stats.failed}",
                f"• *Completed Today:* {stats.finished_today}",
            ]
        )


class QueReporter(JobReporter):
    """Legacy Que-only reporter.

    Always reports queue status, showing zeroes when no source is available.
    """

    header = "*📊 Que Jobs Status*"

    async def generate_report(self) -> list[Block]:
        if self.source is not None:
            return await super().generate_report()

        logger.warning("Que source unavailable, reporting empty queue")
        return [
            Block.section(self.header),
            Block.section(self.format_job_counts({})),
            Block.section(self.format_queue_health(QueueStatistics())),
        ]

    async def banner_data(self) -> BannerQueueStats:
        return await super().banner_data() or BannerQueueStats()
