"""
ARTICLE REQUEST MODEL
=====================
Parses the generate-article JSON body into an ArticleRequest.

Missing fields fall back to the generator form defaults; numbers are coerced
and clamped; empty affiliate URLs are dropped. Anything that cannot be turned
into a usable request raises ArticleRequestError.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List

from article_config import (
    DEFAULT_WORD_COUNT,
    MIN_WORD_COUNT,
    MAX_WORD_COUNT,
    DEFAULT_IMAGE_COUNT,
    MAX_IMAGE_COUNT,
)
from affiliate_injector import AffiliateLink, active_affiliate_links


class ArticleRequestError(ValueError):
    """Raised when the request body cannot be turned into an ArticleRequest."""


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _to_int(payload: Dict[str, Any], key: str, default: int) -> int:
    raw = payload.get(key)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        raise ArticleRequestError(f"'{key}' must be a number")
    try:
        return int(float(raw))
    except (TypeError, ValueError):
        raise ArticleRequestError(f"'{key}' must be a number, got {raw!r}")


def _to_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _to_str(payload: Dict[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


@dataclass
class ArticleRequest:
    topic: str
    keywords: str = ""
    article_type: str = "informational"
    product_url: str = ""
    target_country: str = "BR"
    target_language: str = "pt-BR"
    word_count: int = DEFAULT_WORD_COUNT
    tone_of_voice: str = "professional"
    include_images: bool = True
    image_count: int = DEFAULT_IMAGE_COUNT
    affiliate_links: Dict[str, str] = field(default_factory=dict)

    @property
    def active_links(self) -> List[AffiliateLink]:
        return active_affiliate_links(self.affiliate_links)

    @property
    def is_review(self) -> bool:
        return self.article_type == "review"

    @property
    def wants_images(self) -> bool:
        return self.include_images and self.image_count > 0

    @classmethod
    def from_json(cls, payload) -> "ArticleRequest":
        if not isinstance(payload, dict):
            raise ArticleRequestError("Request body must be a JSON object")

        topic = _to_str(payload, "topic")
        if not topic:
            raise ArticleRequestError("'topic' is required")

        links = payload.get("affiliateLinks") or {}
        if not isinstance(links, dict):
            raise ArticleRequestError("'affiliateLinks' must be an object of platform -> url")

        keywords = payload.get("keywords") or ""
        if isinstance(keywords, list):
            keywords = ", ".join(str(k) for k in keywords)

        return cls(
            topic=topic,
            keywords=str(keywords).strip(),
            article_type=_to_str(payload, "articleType", "informational"),
            product_url=_to_str(payload, "productUrl"),
            target_country=_to_str(payload, "targetCountry", "BR"),
            target_language=_to_str(payload, "targetLanguage", "pt-BR"),
            word_count=_clamp(_to_int(payload, "wordCount", DEFAULT_WORD_COUNT), MIN_WORD_COUNT, MAX_WORD_COUNT),
            tone_of_voice=_to_str(payload, "toneOfVoice", "professional"),
            include_images=_to_bool(payload.get("includeImages"), True),
            image_count=_clamp(_to_int(payload, "imageCount", DEFAULT_IMAGE_COUNT), 0, MAX_IMAGE_COUNT),
            affiliate_links={
                str(platform): str(url).strip()
                for platform, url in links.items()
                if url is not None and str(url).strip()
            },
        )
