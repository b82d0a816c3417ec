"""
===============================================================================
ARTICLE PIPELINE v1.0
===============================================================================
Sequences one generate-article request:

    scrape (review + productUrl)  -> soft
    LLM generation                -> fatal
    images (generate + place)     -> soft
    affiliate injection
    SEO scoring
    spell check                   -> soft
    discovery metadata
    stats
    markdown
    response

Soft stages log a warning and continue with None / []. Fatal stages raise and
the HTTP layer turns them into a 500.

Outbound collaborators live on ArticleServices, built once per process and
injected, so requests never create SDK clients themselves.
===============================================================================
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from article_config import SPELLING_ERRORS_LIMIT
from affiliate_injector import inject_affiliate_links, count_platform_links
from discovery_metadata import generate_discovery_metadata
from html_to_markdown import html_to_markdown
from image_generator import ImageGenerator
from image_placement import build_image_prompts, insert_images
from llm_client import LanguageModel, max_tokens_for
from markup_stats import calculate_article_stats
from product_scraper import ProductData, scrape_product
from prompt_builder import build_system_prompt, build_user_prompt
from seo_optimizer import optimize_seo
from spell_checker import SpellingError, check_spelling

logger = logging.getLogger(__name__)


@dataclass
class ArticleServices:
    """Outbound collaborators of the pipeline."""
    llm: Any
    image_generator: Any
    scraper: Callable[[str], ProductData]
    spell_checker: Callable[[str, str], List[SpellingError]]

    @classmethod
    def from_config(cls) -> "ArticleServices":
        llm = LanguageModel()
        logger.info(
            f"[PIPELINE] Services ready: engine={llm.engine} model={llm.model} "
            f"llm_key={'yes' if llm.available else 'NO'}"
        )
        return cls(
            llm=llm,
            image_generator=ImageGenerator(),
            scraper=scrape_product,
            spell_checker=check_spelling,
        )


# ================================================================
# STAGES
# ================================================================

def _scrape_stage(article_request, services: ArticleServices) -> Optional[ProductData]:
    if not (article_request.is_review and article_request.product_url):
        return None
    try:
        return services.scraper(article_request.product_url)
    except Exception as e:
        logger.warning(f"[PIPELINE] Product scrape failed, continuing without product data: {e}")
        return None


def _generation_stage(article_request, product_data, services: ArticleServices) -> str:
    system_prompt = build_system_prompt(article_request, product_data)
    user_prompt = build_user_prompt(article_request)
    return services.llm.complete(
        system_prompt,
        user_prompt,
        max_tokens=max_tokens_for(article_request.word_count),
    )


def _image_stage(html: str, article_request, services: ArticleServices) -> str:
    if not article_request.wants_images:
        return html
    prompts = build_image_prompts(article_request.topic, article_request.image_count)
    try:
        image_urls = services.image_generator.generate(prompts)
    except Exception as e:
        logger.warning(f"[PIPELINE] Image generation failed, publishing without images: {e}")
        return html
    return insert_images(html, image_urls, topic=article_request.topic)


def _spelling_stage(html: str, article_request, services: ArticleServices) -> List[SpellingError]:
    try:
        errors = services.spell_checker(html, article_request.target_language)
    except Exception as e:
        logger.warning(f"[PIPELINE] Spell check failed, skipping: {e}")
        return []
    return list(errors)[:SPELLING_ERRORS_LIMIT]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ================================================================
# PUBLIC API
# ================================================================

def generate_article(article_request, services: ArticleServices) -> Dict[str, Any]:
    """
    Run the whole pipeline for one request.

    Raises:
        LLMGenerationError: when the model call fails (fatal)
    """
    logger.info(
        f"[PIPELINE] Generating {article_request.article_type} article '{article_request.topic[:60]}' "
        f"({article_request.word_count} words, {article_request.target_language})"
    )

    product_data = _scrape_stage(article_request, services)
    html = _generation_stage(article_request, product_data, services)
    html = _image_stage(html, article_request, services)

    links = article_request.active_links
    html = inject_affiliate_links(html, links)

    seo = optimize_seo(
        html,
        article_request.keywords,
        language=article_request.target_language,
        country=article_request.target_country,
    )
    spelling_errors = _spelling_stage(html, article_request, services)
    discovery = generate_discovery_metadata(html, article_request.topic, article_request.keywords)
    stats = calculate_article_stats(html)
    markdown = html_to_markdown(html)

    logger.info(
        f"[PIPELINE] Done: {stats.word_count} words, {stats.image_count} images, "
        f"SEO score {seo.score}, {len(spelling_errors)} spelling flags"
    )

    return {
        "html": html,
        "markdown": markdown,
        "metaTags": seo.meta_tags,
        "seoScore": seo.score,
        "stats": stats.to_dict(),
        "spellingErrors": [error.to_dict() for error in spelling_errors],
        "affiliateLinks": count_platform_links(html, links),
        "discoveryMetadata": discovery,
        "productData": product_data.to_dict() if product_data else None,
        "generatedAt": _utc_timestamp(),
    }
