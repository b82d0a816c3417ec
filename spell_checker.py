"""
spell_checker.py: spelling check for generated articles
=====================================================
Uses the LanguageTool REST API to flag misspelled words in the article text
and collect replacement suggestions. Only spelling matches are kept; grammar
and style rules are ignored.

Any transport or API problem yields an empty list: spell checking never
blocks article generation.

Exported functions:
    check_spelling(html: str, language: str) -> list
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any

import requests

from article_config import LANGUAGETOOL_URL, LANGUAGETOOL_TIMEOUT
from markup_stats import strip_tags

logger = logging.getLogger(__name__)

# LanguageTool public API rejects longer texts
_MAX_TEXT_CHARS = 20000
_MIN_TEXT_CHARS = 20
_MAX_SUGGESTIONS = 5

_SPELLING_CATEGORIES = {"TYPOS"}
_SPELLING_RULE_MARKERS = ("MORFOLOGIK", "SPELLER", "HUNSPELL")


@dataclass
class SpellingError:
    word: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "suggestions": self.suggestions}


def _lt_check(text: str, language: str) -> list:
    """Call LanguageTool REST API. Returns list of match dicts."""
    payload = {
        "text": text[:_MAX_TEXT_CHARS],
        "language": language or "auto",
        "disabledCategories": "TYPOGRAPHY",
    }
    try:
        resp = requests.post(LANGUAGETOOL_URL, data=payload, timeout=LANGUAGETOOL_TIMEOUT)
    except requests.RequestException as e:
        logger.warning(f"[SPELL_CHECKER] LT API error: {e}")
        return []

    if resp.status_code != 200:
        logger.warning(f"[SPELL_CHECKER] LT API {resp.status_code}")
        return []

    try:
        return resp.json().get("matches", [])
    except ValueError as e:
        logger.warning(f"[SPELL_CHECKER] LT API returned invalid JSON: {e}")
        return []


def _is_spelling_match(match: dict) -> bool:
    rule = match.get("rule", {})
    rule_id = rule.get("id", "").upper()
    category_id = rule.get("category", {}).get("id", "").upper()
    if category_id in _SPELLING_CATEGORIES:
        return True
    return any(marker in rule_id for marker in _SPELLING_RULE_MARKERS)


def _matched_word(text: str, match: dict) -> str:
    offset = match.get("offset", 0)
    length = match.get("length", 0)
    if offset < 0 or length <= 0:
        return ""
    # LanguageTool offsets count UTF-16 code units
    encoded = text.encode("utf-16-le")
    return encoded[offset * 2:(offset + length) * 2].decode("utf-16-le", errors="ignore").strip()


def extract_spelling_errors(text: str, matches: list) -> List[SpellingError]:
    """Spelling matches only, one entry per distinct word, in text order."""
    errors = []
    seen = set()

    for match in sorted(matches, key=lambda m: m.get("offset", 0)):
        if not _is_spelling_match(match):
            continue
        word = _matched_word(text, match)
        if not word or word.lower() in seen:
            continue
        seen.add(word.lower())

        suggestions = []
        for replacement in match.get("replacements", [])[:_MAX_SUGGESTIONS]:
            value = replacement.get("value", "") if isinstance(replacement, dict) else str(replacement)
            if value:
                suggestions.append(value)
        errors.append(SpellingError(word=word, suggestions=suggestions))

    return errors


def check_spelling(html: str, language: str) -> List[SpellingError]:
    """Flagged words with suggestions for the article HTML."""
    text = strip_tags(html)
    if len(text) < _MIN_TEXT_CHARS:
        return []

    matches = _lt_check(text, language)
    errors = extract_spelling_errors(text[:_MAX_TEXT_CHARS], matches)
    if errors:
        logger.info(f"[SPELL_CHECKER] {len(errors)} misspelled word(s) flagged ({language})")
    return errors
