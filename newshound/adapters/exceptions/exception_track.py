"""ExceptionTrack exception source.

Implements ExceptionSource against the ``exception_tracks`` table written by
the exception-track logger. Each row keeps a short title and a JSON ``body``
carrying the message and the controller/action that raised.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from newshound.adapters.database import create_database
from newshound.config import Settings
from newshound.core.formatting import (
    build_banner_record,
    coerce_datetime,
    details_from_mapping,
    format_report_text,
    format_time,
    parse_json_object,
    resolve_message,
    resolve_title,
)
from newshound.core.models import ExceptionDetails, ReportRecord
from newshound.core.ports import DatabasePort, ExceptionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExceptionTrackLog:
    """One row of the exception_tracks table."""

    id: int
    title: str | None
    body: str | None
    created_at: datetime


class ExceptionTrackSource(ExceptionSource):
    """Reads recent exceptions logged by exception-track."""

    def __init__(self, settings: Settings, database: DatabasePort | None = None):
        """Initialize ExceptionTrack source.

        Args:
            settings: Application settings (time zone, truncation suffix,
                database URL).
            database: Database adapter; built from settings.database_url if omitted.
        """
        self.settings = settings
        self.database = database or create_database(settings.database_url)

    async def close(self) -> None:
        """Close the database pool."""
        await self.database.close_pool()

    async def recent(self, time_window: timedelta, limit: int) -> list[ExceptionTrackLog]:
        """Return exceptions logged within the window, newest first."""
        since = datetime.now(timezone.utc) - time_window
        p = self.database.placeholder
        rows = await self.database.fetch_all(
            f"""
            SELECT id, title, body, created_at
            FROM exception_tracks
            WHERE created_at >= {self.database.naive_utc_placeholder(1)}
            ORDER BY created_at DESC
            LIMIT {p(2)}
            """,
            since,
            limit,
        )
        logger.debug(f"Fetched {len(rows)} exception_tracks rows")
        return [self._row_to_log(row) for row in rows]

    def format_for_report(self, record: ExceptionTrackLog, ordinal: int) -> str:
        """Format one logged exception for the digest."""
        details = self._parse_details(record)
        return format_report_text(
            ordinal,
            title=resolve_title(details, record.title),
            time=format_time(record.created_at, self.settings.zone),
            location=details.location,
            message=resolve_message(details),
            suffix=self.settings.truncate_suffix,
        )

    def format_for_banner(self, record: ExceptionTrackLog) -> ReportRecord:
        """Format one logged exception for the banner."""
        details = self._parse_details(record)
        return build_banner_record(
            title=resolve_title(details, record.title),
            time=format_time(record.created_at, self.settings.zone),
            location=details.location,
            message=resolve_message(details),
            suffix=self.settings.truncate_suffix,
        )

    @staticmethod
    def _parse_details(record: ExceptionTrackLog) -> ExceptionDetails:
        """Pull title, message and controller/action out of the JSON body."""
        return details_from_mapping(parse_json_object(record.body))

    @staticmethod
    def _row_to_log(row: dict[str, Any]) -> ExceptionTrackLog:
        return ExceptionTrackLog(
            id=row["id"],
            title=row.get("title"),
            body=row.get("body"),
            created_at=coerce_datetime(row["created_at"]),
        )
