"""Unit tests for digest and banner composition."""

from datetime import date

import pytest

from newshound.core.composer import (
    DIGEST_TITLE,
    compose_banner,
    compose_digest,
    severity_badge,
)
from newshound.core.models import BannerQueueStats, Block, BlockType, ReportRecord

REPORT_DATE = date(2024, 3, 5)


def record(title: str) -> ReportRecord:
    return ReportRecord(title=title, message="", location="", time="09:00 AM")


class TestComposeDigest:
    def test_section_order(self) -> None:
        message = compose_digest(
            [Block.section("exceptions")],
            [Block.section("warnings")],
            [Block.section("jobs")],
            REPORT_DATE,
        )

        assert [b.type for b in message.blocks] == [
            BlockType.HEADER,
            BlockType.SECTION,
            BlockType.DIVIDER,
            BlockType.SECTION,
            BlockType.DIVIDER,
            BlockType.SECTION,
            BlockType.DIVIDER,
            BlockType.SECTION,
        ]
        assert message.blocks[0].text == DIGEST_TITLE
        assert message.blocks[1].text == "*Date:* Tuesday, March 05, 2024"
        assert [b.text for b in message.blocks if b.text][2:] == [
            "exceptions",
            "warnings",
            "jobs",
        ]

    def test_warnings_omitted_when_unconfigured(self) -> None:
        message = compose_digest(
            [Block.section("exceptions")], None, [Block.section("jobs")], REPORT_DATE
        )

        assert len(message.blocks) == 6
        assert sum(b.type is BlockType.DIVIDER for b in message.blocks) == 2

    def test_payload_and_subject(self) -> None:
        message = compose_digest([], None, [], REPORT_DATE)
        payload = message.to_payload()

        assert payload["text"] == "Daily Newshound Report"
        assert payload["blocks"][0] == {
            "type": "header",
            "text": {"type": "plain_text", "text": DIGEST_TITLE, "emoji": True},
        }
        assert payload["blocks"][1]["text"]["type"] == "mrkdwn"
        assert message.subject == "Newshound Daily Report - 2024-03-05"


class TestSeverityBadge:
    def test_exceptions_give_error(self) -> None:
        badge = severity_badge(exception_count=2, warning_count=0, failed_jobs=1)
        assert badge.level == "error"
        assert badge.text == "2 exceptions, 1 failed jobs"

    def test_many_failed_jobs_give_error(self) -> None:
        assert severity_badge(0, 0, 11).level == "error"

    def test_some_failed_jobs_give_warning(self) -> None:
        badge = severity_badge(0, 0, 6)
        assert badge.level == "warning"
        assert badge.text == "6 failed jobs"

    def test_all_clear(self) -> None:
        badge = severity_badge(0, 0, 5)
        assert badge.level == "success"
        assert badge.text == "All clear"
        assert badge.css_class == "newshound-success"

    def test_warnings_escalate_when_counted(self) -> None:
        badge = severity_badge(0, 3, 0, counts_warnings=True)
        assert badge.level == "warning"
        assert badge.text == "3 warnings"

    def test_warnings_ignored_when_not_counted(self) -> None:
        assert severity_badge(0, 3, 0, counts_warnings=False).level == "success"
        assert severity_badge(0, 3, 6, counts_warnings=False).text == "6 failed jobs"


class TestComposeBanner:
    @pytest.mark.parametrize(
        ("counts_warnings", "level"), [(True, "warning"), (False, "success")]
    )
    def test_badge_with_warnings_only(self, counts_warnings, level) -> None:
        payload = compose_banner(
            exceptions=[],
            warnings=[record("Slow query")],
            queue_stats=BannerQueueStats(failed=0),
            counts_warnings=counts_warnings,
        )
        assert payload.badge.level == level

    def test_without_job_stats(self) -> None:
        payload = compose_banner([record("Boom")], [], None)

        assert payload.queue_stats is None
        assert payload.exceptions == (record("Boom"),)
        assert payload.badge.text == "1 exceptions, 0 failed jobs"
