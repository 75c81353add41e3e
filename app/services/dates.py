from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app import config
from app.services import i18n


logger = logging.getLogger(__name__)


def _site_timezone():
    try:
        return ZoneInfo(config.SITE_TIMEZONE)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone '%s', falling back to UTC", config.SITE_TIMEZONE)
        return timezone.utc


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse CMS timestamps such as ``2021-03-25T19:25:28+0000``."""
    if not value:
        return None
    text = value.strip()
    for fmt in ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Unrecognized date format '%s'", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: Optional[str], lang: str | None = None) -> str:
    timestamp = parse_timestamp(value)
    if timestamp is None:
        return ""
    local = timestamp.astimezone(_site_timezone())
    month = i18n.MONTH_ABBREVIATIONS[i18n.normalize_lang(lang)][local.month - 1]
    return f"{local.day:02d} {month} {local.year}"


def format_date_hours(value: Optional[str], lang: str | None = None) -> str:
    timestamp = parse_timestamp(value)
    if timestamp is None:
        return ""
    local = timestamp.astimezone(_site_timezone())
    at = i18n.labels(lang)["at"]
    return f"{format_date(value, lang)}, {at} {local:%H:%M}"
