"""Shared helpers for bilingual text and image URLs."""

import datetime
import typing as t
from urllib.parse import quote

Language = t.Literal["zh", "en"]
ImageSize = t.Literal["thumb", "hero"]

UNSPLASH_SOURCE_URL = "https://source.unsplash.com"
IMAGE_DIMENSIONS: dict[str, str] = {"thumb": "800x600", "hero": "1200x675"}


def pick_localized(zh_value: str | None, en_value: str | None, language: Language) -> str:
    """Return the value in the requested language, falling back to the other one when it is missing.

    Only ``None`` counts as missing; an empty string is returned as is.
    """
    first, second = (zh_value, en_value) if language == "zh" else (en_value, zh_value)
    if first is not None:
        return first
    return second if second is not None else ""


def build_unsplash_url(keyword: str | None, size: ImageSize = "thumb") -> str:
    """Build a source.unsplash.com URL for a keyword."""
    dimension = IMAGE_DIMENSIONS["hero" if size == "hero" else "thumb"]
    encoded = quote(keyword or "community", safe="!*'()")
    return f"{UNSPLASH_SOURCE_URL}/{dimension}/?{encoded}"


def resolve_news_cover(cover_source: str | None, size: ImageSize = "thumb") -> str:
    """Resolve a news cover: absolute or rooted URLs pass through, anything else is a keyword."""
    if not cover_source:
        return build_unsplash_url("community,news", size)
    if cover_source.startswith("http") or cover_source.startswith("/"):
        return cover_source
    return build_unsplash_url(cover_source, size)


def resolve_event_image(
    image_type: str | None,
    image_keyword: str | None,
    image_url: str | None,
    size: ImageSize = "thumb",
) -> str:
    """Resolve an event image, preferring an uploaded image over a keyword."""
    if image_type == "upload" and image_url:
        return image_url
    if image_keyword:
        return build_unsplash_url(image_keyword, size)
    return build_unsplash_url("community event", size)


def _format_date(value: datetime.date, language: Language) -> str:
    if language == "zh":
        return f"{value.year}年{value.month}月{value.day}日"
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _format_time(value: datetime.time | str) -> str:
    if isinstance(value, datetime.time):
        return value.strftime("%H:%M")
    hour, _, rest = value.partition(":")
    minute = rest.split(":", 1)[0]
    return f"{hour or '00'}:{minute or '00'}"


def format_event_datetime(
    event_date: datetime.date | str,
    start_time: datetime.time | str | None,
    end_time: datetime.time | str | None,
    language: Language,
) -> str:
    """Format an event date with its optional time range.

    >>> format_event_datetime(datetime.date(2025, 4, 10), "14:00:00", "16:00:00", "en")
    'April 10, 2025 14:00 - 16:00'
    """
    if isinstance(event_date, str):
        event_date = datetime.date.fromisoformat(event_date)
    date_part = _format_date(event_date, language)
    if not start_time and not end_time:
        return date_part
    if start_time and end_time:
        return f"{date_part} {_format_time(start_time)} - {_format_time(end_time)}"
    return f"{date_part} {_format_time(t.cast(datetime.time | str, start_time or end_time))}"

