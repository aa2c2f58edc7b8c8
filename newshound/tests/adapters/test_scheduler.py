"""Tests for the daily report schedule entry and job."""

import logging

import pytest

from newshound.adapters.scheduler import (
    JOB_NAME,
    DailyReportJob,
    build_cron_expression,
    schedule_daily_report,
)
from newshound.config import Settings
from newshound.core.daily_report import DailyReport
from newshound.core.exception_reporter import ExceptionReporter
from newshound.core.job_reporter import JobReporter
from newshound.core.notifier import Notifier
from newshound.core.warning_reporter import WarningReporter
from newshound.tests.fakes import FakeExceptionSource, FakeTransport


def daily_report(settings: Settings, source: FakeExceptionSource, transport: FakeTransport) -> DailyReport:
    def reporters():
        return (
            ExceptionReporter(source, settings),
            WarningReporter(None, settings),
            JobReporter(None, settings),
        )

    return DailyReport(settings, reporters, Notifier(settings, transport))


class TestCronExpression:
    @pytest.mark.parametrize(
        ("time_string", "cron"),
        [("09:00", "0 9 * * *"), ("23:45", "45 23 * * *"), ("07:05", "5 7 * * *")],
    )
    def test_daily_cron(self, time_string, cron) -> None:
        assert build_cron_expression(time_string) == cron


class TestScheduleDailyReport:
    def test_schedule_entry(self, caplog) -> None:
        settings = Settings(
            _env_file=None, slack_webhook_url="https://hooks.example/x", report_time="06:30"
        )

        with caplog.at_level(logging.INFO):
            schedule = schedule_daily_report(settings)

        assert schedule == {
            JOB_NAME: {
                "class": "newshound.adapters.scheduler.daily.DailyReportJob",
                "cron": "30 6 * * *",
                "queue": "default",
                "args": [],
            }
        }
        assert "30 6 * * *" in caplog.text

    def test_not_scheduled_without_credentials(self) -> None:
        settings = Settings(_env_file=None, slack_webhook_url="", slack_api_token="")
        assert schedule_daily_report(settings) is None

    def test_not_scheduled_when_disabled(self) -> None:
        settings = Settings(
            _env_file=None, enabled=False, slack_webhook_url="https://hooks.example/x"
        )
        assert schedule_daily_report(settings) is None


class TestDailyReportJob:
    @pytest.mark.asyncio
    async def test_run_delivers(self) -> None:
        settings = Settings(_env_file=None)
        transport = FakeTransport()
        job = DailyReportJob(settings, daily_report(settings, FakeExceptionSource(), transport))

        assert await job.run() is True
        assert len(transport.delivered) == 1

    @pytest.mark.asyncio
    async def test_disabled_skips(self) -> None:
        settings = Settings(_env_file=None, enabled=False)
        source = FakeExceptionSource()
        transport = FakeTransport()
        job = DailyReportJob(settings, daily_report(settings, source, transport))

        assert await job.run() is False
        assert source.recent_calls == []
        assert transport.delivered == []

    @pytest.mark.asyncio
    async def test_failure_logged_and_reraised(self, caplog) -> None:
        settings = Settings(_env_file=None)
        source = FakeExceptionSource()
        source.should_fail = True
        job = DailyReportJob(settings, daily_report(settings, source, FakeTransport()))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="source unavailable"):
                await job.run_now()

        assert "DailyReportJob failed" in caplog.text
