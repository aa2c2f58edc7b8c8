"""Banner assembly.

Collects banner fragments from the three reporters for one HTTP response
and renders them. Reporters are built fresh per call so nothing is cached
across requests.
"""

import logging
from typing import TYPE_CHECKING

from .banner_renderer import render_banner
from .composer import compose_banner
from .daily_report import ReporterFactory
from .models import BannerPayload

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)


class BannerBuilder:
    """Produces the banner payload and markup for a single response."""

    def __init__(self, settings: "Settings", reporter_factory: ReporterFactory):
        """Initialize banner builder.

        Args:
            settings: Application settings.
            reporter_factory: Returns fresh (exception, warning, job) reporters.
        """
        self.settings = settings
        self.reporter_factory = reporter_factory

    async def build_payload(self) -> BannerPayload:
        """Gather banner data from every reporter."""
        exception_reporter, warning_reporter, job_reporter = self.reporter_factory()
        return compose_banner(
            exceptions=await exception_reporter.banner_data(),
            warnings=await warning_reporter.banner_data(),
            queue_stats=await job_reporter.banner_data(),
            counts_warnings=self.settings.badge_counts_warnings,
            window_hours=self.settings.time_window_hours,
        )

    async def render(self) -> str:
        """Render the banner fragment."""
        payload = await self.build_payload()
        logger.debug(
            f"Rendering banner: {payload.badge.level}",
            extra={
                "exceptions": len(payload.exceptions),
                "warnings": len(payload.warnings),
            },
        )
        return render_banner(payload)
