"""Scheduling surface for the daily digest.

Newshound does not run its own scheduler. This package produces the
schedule entry for an external cron-style scheduler and the job object
it should invoke.
"""

from .daily import (
    JOB_NAME,
    DailyReportJob,
    build_cron_expression,
    schedule_daily_report,
)

__all__ = [
    "JOB_NAME",
    "DailyReportJob",
    "build_cron_expression",
    "schedule_daily_report",
]
