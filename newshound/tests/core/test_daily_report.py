"""Unit tests for the notifier and the daily digest cycle."""

import logging

import pytest

from newshound.config import Settings
from newshound.core.daily_report import DailyReport
from newshound.core.exception_reporter import ExceptionReporter
from newshound.core.job_reporter import JobReporter
from newshound.core.models import BlockType, DigestMessage, QueueStatistics
from newshound.core.notifier import Notifier
from newshound.core.warning_reporter import WarningReporter
from newshound.tests.fakes import (
    FakeExceptionSource,
    FakeJobSource,
    FakeRecord,
    FakeTransport,
    FakeWarningSource,
)


def reporter_factory(settings, exceptions=None, warnings=None, jobs=None):
    def reporters():
        return (
            ExceptionReporter(exceptions or FakeExceptionSource(), settings),
            WarningReporter(warnings, settings),
            JobReporter(jobs, settings),
        )

    return reporters


class TestNotifier:
    @pytest.mark.asyncio
    async def test_delivers_through_transport(self) -> None:
        transport = FakeTransport()
        notifier = Notifier(Settings(_env_file=None), transport)

        assert await notifier.post("hello") is True
        assert transport.delivered == ["hello"]

    @pytest.mark.asyncio
    async def test_disabled_is_a_no_op(self) -> None:
        transport = FakeTransport()
        notifier = Notifier(Settings(_env_file=None, enabled=False), transport)

        assert await notifier.post("hello") is False
        assert transport.delivered == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_reported(self) -> None:
        notifier = Notifier(Settings(_env_file=None), FakeTransport(result=False))
        assert await notifier.post("hello") is False

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_logged(self, caplog) -> None:
        transport = FakeTransport()
        transport.should_raise = True
        notifier = Notifier(Settings(_env_file=None), transport)

        with caplog.at_level(logging.ERROR):
            assert await notifier.post("hello") is False

        assert "transport exploded" in caplog.text


class TestDailyReport:
    @pytest.mark.asyncio
    async def test_generate_full_digest(self) -> None:
        settings = Settings(_env_file=None)
        report = DailyReport(
            settings,
            reporter_factory(
                settings,
                exceptions=FakeExceptionSource([FakeRecord("Boom")]),
                warnings=FakeWarningSource([FakeRecord("Slow")]),
                jobs=FakeJobSource(QueueStatistics(ready=1)),
            ),
            Notifier(settings, FakeTransport()),
        )

        message = await report.generate()

        texts = [b.text for b in message.blocks]
        assert texts[0] == "🐕 Daily Newshound Report"
        assert texts[1].startswith("*Date:* ")
        assert "*🚨 Recent Exceptions (Last 24 Hours)*" in texts
        assert "*⚠️ Recent Warnings (Last 24 Hours)*" in texts
        assert "*📊 Job Queue Status*" in texts

    @pytest.mark.asyncio
    async def test_warning_section_omitted_without_source(self) -> None:
        settings = Settings(_env_file=None)
        report = DailyReport(
            settings, reporter_factory(settings), Notifier(settings, FakeTransport())
        )

        message = await report.generate()

        texts = [b.text for b in message.blocks]
        assert not any("Warnings" in text for text in texts)
        assert texts[-1] == "*✅ No Job Source Configured*"
        assert sum(b.type is BlockType.DIVIDER for b in message.blocks) == 2

    @pytest.mark.asyncio
    async def test_deliver_posts_digest(self) -> None:
        settings = Settings(_env_file=None)
        transport = FakeTransport()
        report = DailyReport(
            settings, reporter_factory(settings), Notifier(settings, transport)
        )

        assert await report.deliver() is True
        assert isinstance(transport.get_last_message(), DigestMessage)

    @pytest.mark.asyncio
    async def test_deliver_reports_failed_delivery(self, caplog) -> None:
        settings = Settings(_env_file=None)
        report = DailyReport(
            settings,
            reporter_factory(settings),
            Notifier(settings, FakeTransport(result=False)),
        )

        with caplog.at_level(logging.WARNING):
            assert await report.deliver() is False

        assert "not delivered" in caplog.text

    @pytest.mark.asyncio
    async def test_exception_source_errors_propagate(self) -> None:
        settings = Settings(_env_file=None)
        failing = FakeExceptionSource()
        failing.should_fail = True
        report = DailyReport(
            settings,
            reporter_factory(settings, exceptions=failing),
            Notifier(settings, FakeTransport()),
        )

        with pytest.raises(RuntimeError):
            await report.deliver()
