"""
IMAGE PLACEMENT v1.0
====================
Inserts generated images into article HTML at deterministic positions.

Policy:
    - image 0 (hero) goes right after the first </p>
    - images 1..n go before the next <h2 found after the previous insertion,
      searching the already-modified markup
    - images left over once headings run out are dropped

The insertion loop is a fold over the URL list that carries
(markup, cursor); the cursor only ever moves forward.

Exported functions:
    insert_images(html, image_urls, topic=None) -> str
    build_image_prompts(topic, count) -> list
    build_figure(url, index, topic=None) -> str
"""

import html as html_lib
import logging
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

PARAGRAPH_CLOSE = "</p>"
_H2_OPEN_RE = re.compile(r"<h2\b", re.IGNORECASE)


# ================================================================
# PROMPTS
# ================================================================

def build_image_prompts(topic: str, count: int) -> List[str]:
    """One hero prompt followed by count - 1 section prompts."""
    if count <= 0:
        return []
    prompts = [f"Professional hero image for blog article about {topic}"]
    for i in range(1, count):
        prompts.append(f"Illustration or infographic related to {topic}, image {i + 1}")
    return prompts


# ================================================================
# MARKUP
# ================================================================

def build_figure(url: str, index: int, topic: Optional[str] = None) -> str:
    """<figure> block for the image at position index (0-based)."""
    number = index + 1
    alt = f"{topic}: image {number}" if topic else f"Image {number}"
    return (
        "\n<figure class=\"article-image\">\n"
        f"  <img src=\"{html_lib.escape(url, quote=True)}\" "
        f"alt=\"{html_lib.escape(alt, quote=True)}\" loading=\"lazy\" />\n"
        f"  <figcaption>Figure {number}</figcaption>\n"
        "</figure>\n"
    )


def _insert_at(markup: str, position: int, fragment: str) -> str:
    return markup[:position] + fragment + markup[position:]


def place_hero_image(markup: str, figure: str) -> Tuple[str, int]:
    """
    Insert the hero figure after the first closing paragraph tag.

    Returns (markup, cursor). Without any </p> the markup is returned
    unchanged and the cursor stays at 0.
    """
    close_at = markup.find(PARAGRAPH_CLOSE)
    if close_at == -1:
        logger.info("[IMAGES] No </p> in article, hero image skipped")
        return markup, 0
    position = close_at + len(PARAGRAPH_CLOSE)
    return _insert_at(markup, position, figure), position + len(figure)


def place_section_image(markup: str, figure: str, cursor: int) -> Tuple[str, int, bool]:
    """
    Insert a section figure before the next <h2 at or after cursor.

    Returns (markup, cursor, placed). The new cursor points past the heading's
    opening token so the next search lands on the following <h2.
    """
    match = _H2_OPEN_RE.search(markup, cursor)
    if not match:
        return markup, cursor, False
    position = match.start()
    markup = _insert_at(markup, position, figure)
    return markup, position + len(figure) + len(match.group(0)), True


def insert_images(html: str, image_urls: List[str], topic: Optional[str] = None) -> str:
    """Fold the image URLs into the article markup."""
    markup, cursor = html or "", 0
    dropped = 0

    for index, url in enumerate(image_urls):
        figure = build_figure(url, index, topic)
        if index == 0:
            markup, cursor = place_hero_image(markup, figure)
            continue
        markup, cursor, placed = place_section_image(markup, figure, cursor)
        if not placed:
            dropped += 1

    if dropped:
        logger.debug(f"[IMAGES] {dropped} image(s) dropped, no <h2> left to place them")
    return markup
