"""Daily report scheduling.

Translates the configured report time into a cron entry and wraps one
digest cycle as a job that the external scheduler can run and retry.
"""

import logging
from typing import Any

from newshound.config import Settings
from newshound.core.daily_report import DailyReport

logger = logging.getLogger(__name__)

JOB_NAME = "newshound_daily_report"
JOB_CLASS = "newshound.adapters.scheduler.daily.DailyReportJob"


def build_cron_expression(time_string: str) -> str:
    """Convert "HH:MM" into a daily cron expression "M H * * *"."""
    hour, minute = (int(part) for part in time_string.split(":"))
    return f"{minute} {hour} * * *"


def schedule_daily_report(settings: Settings) -> dict[str, dict[str, Any]] | None:
    """Build the schedule entry for the daily digest.

    Args:
        settings: Application settings.

    Returns:
        Mapping of job name to its schedule definition, or None when
        Newshound is disabled or has no delivery credential.
    """
    if not settings.is_valid(for_notification=True):
        logger.debug("Notification not configured, daily report not scheduled")
        return None

    cron = build_cron_expression(settings.report_time)
    logger.info(
        f"Newshound daily report scheduled for {settings.report_time} (cron: {cron})",
        extra={"time_zone": settings.time_zone},
    )
    return {
        JOB_NAME: {
            "class": JOB_CLASS,
            "cron": cron,
            "queue": "default",
            "args": [],
        }
    }


class DailyReportJob:
    """One scheduled digest run."""

    def __init__(self, settings: Settings, daily_report: DailyReport):
        self.settings = settings
        self.daily_report = daily_report

    async def run(self) -> bool:
        """Generate and deliver the digest.

        Returns:
            True if delivered, False if skipped or not delivered.

        Raises:
            Exception: Any failure is logged and re-raised so the external
                scheduler can retry the job.
        """
        if not self.settings.is_valid():
            logger.debug("Newshound disabled, skipping daily report")
            return False

        try:
            return await self.daily_report.deliver()
        except Exception as e:
            logger.error(f"DailyReportJob failed: {e}", exc_info=True)
            raise

    async def run_now(self) -> bool:
        """Run one cycle immediately, outside the schedule."""
        logger.info("Running Newshound daily report now")
        return await self.run()
