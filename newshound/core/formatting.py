"""Formatting rules shared by all exception and warning sources.

Sources differ in where they find a record's title, message and location;
once those are derived, every source renders them the same way.
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any

from .models import ExceptionDetails, ReportRecord

logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 100
UNKNOWN_TITLE = "Unknown Exception"


def truncate(text: str, limit: int = MESSAGE_LIMIT, suffix: str = "") -> str:
    """Cut text to at most `limit` characters, suffix included."""
    if len(text) <= limit:
        return text
    suffix = suffix[:limit]
    return text[: limit - len(suffix)] + suffix


def parse_json_object(raw: Any) -> dict[str, Any]:
    """Parse a detail blob into a dictionary.

    Mappings are copied as-is. Strings are decoded as JSON. Anything else,
    including malformed JSON or JSON that is not an object, yields {}.
    """
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, (str, bytes)) or not raw:
        return {}
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"Ignoring malformed detail blob: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _text(value: Any) -> str | None:
    """Stringify a present value; blanks become None."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def details_from_mapping(
    data: Mapping[str, Any],
    message_key: str = "message",
    controller_key: str = "controller_name",
    action_key: str = "action_name",
    title_key: str = "title",
) -> ExceptionDetails:
    """Build ExceptionDetails from a parsed blob using the given key names."""
    return ExceptionDetails(
        title=_text(data.get(title_key)),
        message=_text(data.get(message_key)),
        controller_name=_text(data.get(controller_key)),
        action_name=_text(data.get(action_key)),
    )


def resolve_title(details: ExceptionDetails, *fallbacks: Any) -> str:
    """Parsed title first, then the first non-blank fallback attribute."""
    for candidate in (details.title, *fallbacks):
        text = _text(candidate)
        if text:
            return text
    return UNKNOWN_TITLE


def resolve_message(details: ExceptionDetails, *fallbacks: Any) -> str:
    """Parsed message first, then the first non-blank fallback attribute."""
    for candidate in (details.message, *fallbacks):
        text = _text(candidate)
        if text:
            return text
    return ""


def coerce_datetime(value: Any) -> datetime:
    """Turn a database timestamp into an aware UTC datetime.

    Naive values, as stored by most web frameworks, are taken to be UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace(" ", "T", 1))
    if not isinstance(value, datetime):
        raise TypeError(f"Unsupported timestamp value: {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_time(value: Any, zone: tzinfo) -> str:
    """Render a timestamp as a 12-hour clock time in the given zone."""
    return coerce_datetime(value).astimezone(zone).strftime("%I:%M %p")


def format_report_text(
    ordinal: int,
    title: str,
    time: str,
    location: str = "",
    message: str = "",
    suffix: str = "",
) -> str:
    """Render one record as a numbered mrkdwn block.

    Location and message lines are left out entirely when empty.
    """
    lines = [
        f"*{ordinal}. {title}*",
        f"• *Time:* {time}",
    ]
    if location:
        lines.append(f"• *Controller:* {location}")
    if message:
        lines.append(f"• *Message:* `{truncate(message, suffix=suffix)}`")
    return "\n".join(lines)


def build_banner_record(
    title: str,
    time: str,
    location: str = "",
    message: str = "",
    suffix: str = "",
) -> ReportRecord:
    """Render one record as banner data with the message truncated."""
    return ReportRecord(
        title=title,
        message=truncate(message, suffix=suffix),
        location=location,
        time=time,
    )
