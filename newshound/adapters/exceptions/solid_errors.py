"""SolidErrors exception source.

Implements ExceptionSource against the solid_errors tables. Errors are
deduplicated into ``solid_errors`` rows (exception class and message); each
occurrence in ``solid_errors_occurrences`` carries a ``context`` that is
either a mapping or a JSON string with the controller, action and message.
"""

import logging
from collections.abc import Mapping
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
class SolidErrorOccurrence:
    """One occurrence joined with its parent error."""

    id: int
    error_class: str | None
    message: str | None
    context: Mapping[str, Any] | str | None
    created_at: datetime


class SolidErrorsSource(ExceptionSource):
    """Reads recent exception occurrences recorded by SolidErrors."""

    def __init__(self, settings: Settings, database: DatabasePort | None = None):
        """Initialize SolidErrors source.

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

    async def recent(self, time_window: timedelta, limit: int) -> list[SolidErrorOccurrence]:
        """Return occurrences within the window, newest first."""
        since = datetime.now(timezone.utc) - time_window
        p = self.database.placeholder
        rows = await self.database.fetch_all(
            f"""
            SELECT o.id, e.exception_class AS error_class, e.message,
                   o.context, o.created_at
            FROM solid_errors_occurrences o
            JOIN solid_errors e ON e.id = o.error_id
            WHERE o.created_at >= {self.database.naive_utc_placeholder(1)}
            ORDER BY o.created_at DESC
            LIMIT {p(2)}
            """,
            since,
            limit,
        )
        logger.debug(f"Fetched {len(rows)} solid_errors occurrences")
        return [self._row_to_occurrence(row) for row in rows]

    def format_for_report(self, record: SolidErrorOccurrence, ordinal: int) -> str:
        """Format one occurrence for the digest."""
        details = self._parse_context(record)
        return format_report_text(
            ordinal,
            title=resolve_title(details, record.error_class),
            time=format_time(record.created_at, self.settings.zone),
            location=details.location,
            message=resolve_message(details, record.message),
            suffix=self.settings.truncate_suffix,
        )

    def format_for_banner(self, record: SolidErrorOccurrence) -> ReportRecord:
        """Format one occurrence for the banner."""
        details = self._parse_context(record)
        return build_banner_record(
            title=resolve_title(details, record.error_class),
            time=format_time(record.created_at, self.settings.zone),
            location=details.location,
            message=resolve_message(details, record.message),
            suffix=self.settings.truncate_suffix,
        )

    @staticmethod
    def _parse_context(record: SolidErrorOccurrence) -> ExceptionDetails:
        """Context keys are 'controller', 'action' and 'message'."""
        return details_from_mapping(
            parse_json_object(record.context),
            controller_key="controller",
            action_key="action",
        )

    @staticmethod
    def _row_to_occurrence(row: dict[str, Any]) -> SolidErrorOccurrence:
        return SolidErrorOccurrence(
            id=row["id"],
            error_class=row.get("error_class"),
            message=row.get("message"),
            context=row.get("context"),
            created_at=coerce_datetime(row["created_at"]),
        )
