"""
SEO OPTIMIZER v1.0
==================
Scores generated article HTML and derives its meta tags.

The score is a weighted checklist (0-100). Each check is reported so the
caller can see what failed. Readability comes from textstat; when textstat
cannot score the text the readability check simply fails.

Exported functions:
    optimize_seo(html, keywords, language, country) -> SeoResult
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import textstat

from markup_stats import strip_tags, count_words

logger = logging.getLogger(__name__)

# ================================================================
# ⚙️ Configuration
# ================================================================
TITLE_MAX_CHARS = 60
TITLE_MIN_CHARS = 30
DESCRIPTION_MAX_CHARS = 160
DESCRIPTION_MIN_CHARS = 120
DENSITY_MIN = 0.5   # % of words
DENSITY_MAX = 2.5
MIN_WORDS = 300
MIN_H2 = 2
READABILITY_MIN = 50.0
AUTO_KEYWORDS = 8

CHECK_WEIGHTS = {
    "has_h1": 10,
    "title_length": 10,
    "description_length": 10,
    "keyword_in_title": 15,
    "keyword_in_intro": 10,
    "keyword_density": 15,
    "h2_structure": 10,
    "word_count": 10,
    "image_alt_text": 5,
    "readability": 5,
}

_H1_RE = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_H2_RE = re.compile(r"<h2(?:\s[^>]*)?>(.*?)</h2>", re.IGNORECASE | re.DOTALL)
_P_RE = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_IMG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_ALT_RE = re.compile(r"\balt=\"([^\"]*)\"", re.IGNORECASE)
_WORD_RE = re.compile(r"\b\w+\b", re.UNICODE)


@dataclass
class SeoResult:
    """Meta tags plus the weighted score."""
    title: str
    description: str
    keywords: List[str]
    score: int
    checks: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def meta_tags(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "keywords": ", ".join(self.keywords),
        }


# ================================================================
# 🧩 Helpers
# ================================================================

def parse_keywords(keywords) -> List[str]:
    """Accepts "a, b, c" or a list; returns trimmed, de-duplicated keywords."""
    if not keywords:
        return []
    if isinstance(keywords, str):
        keywords = keywords.split(",")
    seen = []
    for kw in keywords:
        kw = str(kw).strip()
        if kw and kw.lower() not in [s.lower() for s in seen]:
            seen.append(kw)
    return seen


def trim_at_word(text: str, max_chars: int, ellipsis: str = "") -> str:
    """Cut text to max_chars on a word boundary."""
    text = (text or "").strip()
    if len(text) <= max_chars:
        return text
    limit = max_chars - len(ellipsis)
    cut = text[:limit]
    if " " in cut:
        cut = cut[:cut.rfind(" ")]
    return cut.rstrip(" ,;:.-") + ellipsis


def first_match_text(pattern: re.Pattern, html: str) -> str:
    match = pattern.search(html or "")
    return strip_tags(match.group(1)) if match else ""


def count_keyword(text: str, keyword: str) -> int:
    """Case-insensitive whole-phrase occurrences."""
    if not text or not keyword:
        return 0
    pattern = r"\b" + re.escape(keyword.lower()) + r"\b"
    return len(re.findall(pattern, text.lower()))


def keyword_density(text: str, keyword: str) -> float:
    """Percentage of words covered by the keyword phrase."""
    words = len(text.split()) if text else 0
    if not words:
        return 0.0
    occurrences = count_keyword(text, keyword)
    return round(occurrences * len(keyword.split()) / words * 100, 2)


def extract_top_words(text: str, top_n: int = AUTO_KEYWORDS) -> List[str]:
    """Most frequent content words (longer than 3 characters)."""
    words = [w for w in _WORD_RE.findall(text.lower()) if len(w) > 3 and not w.isdigit()]
    return [w for w, _ in Counter(words).most_common(top_n)]


def assess_readability(text: str) -> Optional[float]:
    """Flesch reading ease, or None when textstat cannot score the text."""
    try:
        return float(textstat.flesch_reading_ease(text))
    except Exception as e:
        logger.warning(f"[SEO_OPT] Readability error: {e}")
        return None


# ================================================================
# 🧠 Meta tags
# ================================================================

def build_title(html: str, keywords: List[str]) -> str:
    title = first_match_text(_H1_RE, html) or first_match_text(_H2_RE, html)
    if not title and keywords:
        title = keywords[0]
    return trim_at_word(title, TITLE_MAX_CHARS)


def build_description(html: str) -> str:
    for match in _P_RE.finditer(html or ""):
        text = strip_tags(match.group(1))
        if text:
            return trim_at_word(text, DESCRIPTION_MAX_CHARS, ellipsis="...")
    return trim_at_word(strip_tags(html), DESCRIPTION_MAX_CHARS, ellipsis="...")


# ================================================================
# 📊 Score
# ================================================================

def _has_alt_text(img_tag: str) -> bool:
    match = _ALT_RE.search(img_tag)
    return bool(match and match.group(1).strip())


def _run_checks(html: str, text: str, title: str, description: str,
                keywords: List[str]) -> Dict[str, bool]:
    main_keyword = keywords[0] if keywords else ""
    intro = first_match_text(_P_RE, html)
    images = _IMG_RE.findall(html or "")
    readability = assess_readability(text) if text else None

    density_ok = False
    if main_keyword:
        density = keyword_density(text, main_keyword)
        density_ok = DENSITY_MIN <= density <= DENSITY_MAX

    return {
        "has_h1": bool(first_match_text(_H1_RE, html)),
        "title_length": TITLE_MIN_CHARS <= len(title) <= TITLE_MAX_CHARS,
        "description_length": DESCRIPTION_MIN_CHARS <= len(description) <= DESCRIPTION_MAX_CHARS,
        "keyword_in_title": bool(main_keyword) and count_keyword(title, main_keyword) > 0,
        "keyword_in_intro": bool(main_keyword) and count_keyword(intro, main_keyword) > 0,
        "keyword_density": density_ok,
        "h2_structure": len(_H2_RE.findall(html or "")) >= MIN_H2,
        "word_count": count_words(html) >= MIN_WORDS,
        "image_alt_text": all(_has_alt_text(img) for img in images),
        "readability": readability is not None and readability >= READABILITY_MIN,
    }


def optimize_seo(html: str, keywords, language: str = "", country: str = "") -> SeoResult:
    """Score the article and derive title, description and keyword meta tags."""
    keyword_list = parse_keywords(keywords)
    text = strip_tags(html)

    title = build_title(html, keyword_list)
    description = build_description(html)
    meta_keywords = keyword_list or extract_top_words(text)

    results = _run_checks(html, text, title, description, keyword_list)
    checks = [
        {"name": name, "passed": bool(passed), "weight": CHECK_WEIGHTS[name]}
        for name, passed in results.items()
    ]
    score = sum(c["weight"] for c in checks if c["passed"])

    logger.info(
        f"[SEO_OPT] score={score} ({sum(1 for c in checks if c['passed'])}/{len(checks)} checks) "
        f"lang={language or '-'} country={country or '-'}"
    )
    return SeoResult(
        title=title,
        description=description,
        keywords=meta_keywords,
        score=score,
        checks=checks,
    )
