"""Daily digest.

Runs the three reporters, composes their blocks into one digest message and
posts it through the notifier.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from .composer import compose_digest
from .exception_reporter import ExceptionReporter
from .job_reporter import JobReporter
from .models import DigestMessage
from .notifier import Notifier
from .warning_reporter import WarningReporter

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)

ReporterFactory = Callable[[], tuple[ExceptionReporter, WarningReporter, JobReporter]]


class DailyReport:
    """One digest cycle: gather, compose, deliver."""

    def __init__(
        self,
        settings: "Settings",
        reporter_factory: ReporterFactory,
        notifier: Notifier,
    ):
        """Initialize daily report.

        Args:
            settings: Application settings.
            reporter_factory: Returns fresh (exception, warning, job) reporters.
            notifier: Notifier that posts the composed digest.
        """
        self.settings = settings
        self.reporter_factory = reporter_factory
        self.notifier = notifier

    async def generate(self) -> DigestMessage:
        """Compose today's digest.

        Raises:
            Exception: Exception or warning source errors propagate so the
                calling job can be retried.
        """
        exception_reporter, warning_reporter, job_reporter = self.reporter_factory()

        exception_blocks = await exception_reporter.generate_report()
        warning_blocks = (
            await warning_reporter.generate_report()
            if warning_reporter.configured
            else None
        )
        job_blocks = await job_reporter.generate_report()

        return compose_digest(
            exception_blocks,
            warning_blocks,
            job_blocks,
            report_date=datetime.now(self.settings.zone).date(),
        )

    async def deliver(self) -> bool:
        """Generate the digest and post it."""
        message = await self.generate()
        delivered = await self.notifier.post(message)
        if delivered:
            logger.info(
                "Daily report delivered",
                extra={"blocks": len(message.blocks)},
            )
        else:
            logger.warning("Daily report was not delivered")
        return delivered
