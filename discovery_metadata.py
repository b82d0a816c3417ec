"""
DISCOVERY METADATA v1.0
=======================
Metadata that helps the article surface in discovery feeds and social
previews: Open Graph, Twitter card, robots hints and a schema.org Article
JSON-LD object.

Discover eligibility here means the article has a title and a lead image;
large image previews are requested through the robots directive.
"""

import html as html_lib
import re
from typing import Dict, Any, List, Optional

from markup_stats import strip_tags, count_words
from seo_optimizer import parse_keywords, trim_at_word, build_description

ROBOTS_DIRECTIVE = "max-image-preview:large"
OG_TITLE_MAX = 95

_H1_RE = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_H2_RE = re.compile(r"<h2(?:\s[^>]*)?>(.*?)</h2>", re.IGNORECASE | re.DOTALL)
_IMG_SRC_RE = re.compile(r"<img\b[^>]*?\bsrc=\"([^\"]*)\"", re.IGNORECASE)


def _first_image(html: str) -> Optional[str]:
    match = _IMG_SRC_RE.search(html or "")
    # src is HTML-escaped in the markup
    return html_lib.unescape(match.group(1)) if match else None


def _section_topics(html: str) -> List[str]:
    topics = []
    for match in _H2_RE.finditer(html or ""):
        text = strip_tags(match.group(1))
        if text and text not in topics:
            topics.append(text)
    return topics


def generate_discovery_metadata(html: str, topic: str, keywords) -> Dict[str, Any]:
    keyword_list = parse_keywords(keywords)
    h1 = _H1_RE.search(html or "")
    title = trim_at_word(strip_tags(h1.group(1)) if h1 else (topic or ""), OG_TITLE_MAX)
    description = build_description(html)
    image_url = _first_image(html)

    open_graph = {
        "og:title": title,
        "og:description": description,
        "og:type": "article",
    }
    if image_url:
        open_graph["og:image"] = image_url

    structured_data = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": title[:110],
        "description": description,
        "keywords": ", ".join(keyword_list),
        "wordCount": count_words(html),
        "about": topic,
    }
    if image_url:
        structured_data["image"] = [image_url]

    return {
        "title": title,
        "description": description,
        "keywords": keyword_list,
        "topics": _section_topics(html),
        "imageUrl": image_url,
        "openGraph": open_graph,
        "twitterCard": "summary_large_image" if image_url else "summary",
        "robots": ROBOTS_DIRECTIVE,
        "structuredData": structured_data,
        "discoverEligible": bool(title) and bool(image_url),
    }
