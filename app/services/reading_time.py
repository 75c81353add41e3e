from __future__ import annotations

import math
from typing import Iterable

from app.models.post import ContentSection
from app.services import rich_text

WORDS_PER_MINUTE = 200


def count_words(text: str) -> int:
    return len(text.split())


def estimate_reading_time(content: Iterable[ContentSection]) -> str:
    """Return the reading time label, e.g. ``"4 min"``."""
    total_words = 0
    for section in content:
        total_words += count_words(section.heading)
        total_words += count_words(rich_text.as_text(section.body))
    return f"{math.ceil(total_words / WORDS_PER_MINUTE)} min"
