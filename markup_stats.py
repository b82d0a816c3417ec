"""
MARKUP STATS v1.0
=================
Word count, reading time, heading and image counts for article HTML.

Stats are always rebuilt from the current markup; nothing is cached.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, Any

from article_config import WORDS_PER_MINUTE

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_HEADING_RE = re.compile(r"<h[1-6](?:\s[^>]*)?>", re.IGNORECASE)
_IMG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)


@dataclass
class ArticleStats:
    """Derived article statistics."""
    word_count: int
    reading_time_minutes: int
    heading_count: int
    image_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wordCount": self.word_count,
            "readingTimeMinutes": self.reading_time_minutes,
            "readingTime": f"{self.reading_time_minutes} min",
            "headingCount": self.heading_count,
            "imageCount": self.image_count,
        }


def strip_tags(html: str) -> str:
    """Replace every tag with a space, collapse whitespace and trim."""
    text = _TAG_RE.sub(" ", html or "")
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(html: str) -> int:
    """Whitespace-delimited tokens left after stripping tags. Empty markup counts 0."""
    text = strip_tags(html)
    if not text:
        return 0
    return len(text.split(" "))


def reading_time_minutes(word_count: int, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    return math.ceil(word_count / words_per_minute)


def count_headings(html: str) -> int:
    return len(_HEADING_RE.findall(html or ""))


def count_images(html: str) -> int:
    return len(_IMG_RE.findall(html or ""))


def calculate_article_stats(html: str) -> ArticleStats:
    word_count = count_words(html)
    return ArticleStats(
        word_count=word_count,
        reading_time_minutes=reading_time_minutes(word_count),
        heading_count=count_headings(html),
        image_count=count_images(html),
    )


__all__ = [
    "ArticleStats",
    "strip_tags",
    "count_words",
    "reading_time_minutes",
    "count_headings",
    "count_images",
    "calculate_article_stats",
]
