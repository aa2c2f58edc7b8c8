"""Composition root for Newshound.

This module is the ONLY location that imports both core reporting logic
and concrete adapter implementations. All wiring of dependencies
happens here.

Module Structure:
- Logging configuration
- Source resolution through the adapter registries
- Daily report wiring (reporters, notifier, transport)
- Banner middleware installation for aiohttp applications
- Console entry point that runs one digest immediately
"""

import asyncio
import logging
import sys
from typing import Any

from aiohttp import web

from newshound.adapters.exceptions import EXCEPTION_SOURCES
from newshound.adapters.jobs import JOB_SOURCES
from newshound.adapters.scheduler import DailyReportJob
from newshound.adapters.transport import build_transport
from newshound.adapters.warnings import WARNING_SOURCES
from newshound.adapters.web import banner_middleware
from newshound.config import Settings, load_settings
from newshound.core.authorization import Authorization
from newshound.core.banner import BannerBuilder
from newshound.core.daily_report import DailyReport, ReporterFactory
from newshound.core.exception_reporter import ExceptionReporter
from newshound.core.job_reporter import JobReporter, QueReporter
from newshound.core.notifier import Notifier
from newshound.core.ports import TransportPort
from newshound.core.warning_reporter import WarningReporter

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def resolve_sources(settings: Settings) -> tuple[Any, Any | None, Any | None]:
    """Resolve the configured exception, warning and job sources.

    Raises:
        UnknownSourceError: If a configured source name cannot be resolved.
    """
    exception_source = EXCEPTION_SOURCES.resolve(settings.exception_source, settings)
    warning_source = (
        WARNING_SOURCES.resolve(settings.warning_source, settings)
        if settings.warning_source is not None
        else None
    )
    job_source = (
        JOB_SOURCES.resolve(settings.job_source, settings)
        if settings.job_source is not None
        else None
    )
    logger.debug(
        "Resolved Newshound sources",
        extra={
            "exception_source": type(exception_source).__name__,
            "warning_source": type(warning_source).__name__ if warning_source else None,
            "job_source": type(job_source).__name__ if job_source else None,
        },
    )
    return exception_source, warning_source, job_source


async def close_sources(sources: tuple[Any, ...]) -> None:
    """Release database pools held by resolved sources."""
    for source in sources:
        # Close source if it has a close method
        if source is not None and hasattr(source, "close"):
            await source.close()


def build_reporter_factory(
    settings: Settings,
    sources: tuple[Any, Any | None, Any | None] | None = None,
) -> ReporterFactory:
    """Return a reporter factory over the configured sources.

    Sources are resolved once; every call of the returned factory builds
    fresh reporters so fetched records are never shared between reports
    or requests.

    Raises:
        UnknownSourceError: If a configured source name cannot be resolved.
    """
    exception_source, warning_source, job_source = sources or resolve_sources(settings)

    def reporters() -> tuple[ExceptionReporter, WarningReporter, JobReporter]:
        return (
            ExceptionReporter(exception_source, settings),
            WarningReporter(warning_source, settings),
            JobReporter(job_source, settings),
        )

    return reporters


def build_que_reporter(settings: Settings) -> QueReporter:
    """Legacy Que-only reporter, using the configured job source or Que."""
    source = JOB_SOURCES.resolve(settings.job_source or "que", settings)
    return QueReporter(source, settings)


def build_daily_report(
    settings: Settings,
    transport: TransportPort | None = None,
    reporter_factory: ReporterFactory | None = None,
) -> DailyReport:
    """Wire a DailyReport from settings.

    Args:
        settings: Application settings.
        transport: Transport override; selected from settings if omitted.
        reporter_factory: Reporter factory override; built from settings if omitted.
    """
    notifier = Notifier(settings, transport or build_transport(settings))
    return DailyReport(
        settings,
        reporter_factory or build_reporter_factory(settings),
        notifier,
    )


def install_banner(
    app: web.Application,
    settings: Settings,
    reporter_factory: ReporterFactory | None = None,
) -> None:
    """Add the banner middleware to an aiohttp application.

    Must be called before the application starts (middlewares are frozen
    on startup).
    """
    if reporter_factory is None:
        sources = resolve_sources(settings)
        reporter_factory = build_reporter_factory(settings, sources)

        async def close_banner_sources(app: web.Application) -> None:
            await close_sources(sources)

        app.on_cleanup.append(close_banner_sources)

    builder = BannerBuilder(settings, reporter_factory)
    app.middlewares.append(
        banner_middleware(settings, builder, Authorization(settings))
    )
    logger.info("Newshound banner middleware installed")


async def run_now(settings: Settings | None = None) -> bool:
    """Generate and deliver one digest immediately.

    Returns:
        True if the digest was delivered.
    """
    settings = settings or load_settings()
    sources = resolve_sources(settings)
    try:
        report = build_daily_report(
            settings, reporter_factory=build_reporter_factory(settings, sources)
        )
        return await DailyReportJob(settings, report).run_now()
    finally:
        await close_sources(sources)


def main() -> None:
    """Console entry point: deliver today's digest now.

    Exit codes:
        0: Digest delivered
        1: Digest not delivered, or fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    try:
        settings = load_settings()
    except Exception as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_format)

    try:
        delivered = asyncio.run(run_now(settings))
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(0 if delivered else 1)


if __name__ == "__main__":
    main()
