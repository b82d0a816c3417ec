"""
═══════════════════════════════════════════════════════════
ARTICLE PROMPT BUILDER v1.0
═══════════════════════════════════════════════════════════
Turns an ArticleRequest (plus optional scraped product facts) into the
system and user prompts for the language model.

Architecture:
  SYSTEM PROMPT = Writer persona + brief + product facts + rules
  USER PROMPT   = Short "write it now" instruction
═══════════════════════════════════════════════════════════
"""

import json
import logging

from article_config import ARTICLE_TYPES, COUNTRIES, LANGUAGES, TONES

_pb_logger = logging.getLogger(__name__)

MAX_PRODUCT_DESCRIPTION = 600
MAX_PRODUCT_FEATURES = 10


def _word_trim(text, max_chars):
    """Cut text to max_chars at a word boundary. Appends '...' when cut."""
    if not text or len(text) <= max_chars:
        return text
    trimmed = text[:max_chars]
    last_break = trimmed.rfind(" ")
    if last_break > max_chars // 2:
        trimmed = trimmed[:last_break]
    return trimmed.rstrip(" ,;:") + "..."


def _label(options, key):
    return options.get(key, key)


# ════════════════════════════════════════════════════════════
# SECTIONS
# ════════════════════════════════════════════════════════════

def _fmt_brief(request):
    language = _label(LANGUAGES, request.target_language)
    country = _label(COUNTRIES, request.target_country)
    article_type = _label(ARTICLE_TYPES, request.article_type).lower()
    tone = _label(TONES, request.tone_of_voice).lower()
    return (
        f"You are an expert SEO content writer specialized in creating high-quality "
        f"blog articles in {language} ({request.target_language}) for the {country} market.\n\n"
        f"Your task is to write a {request.word_count}-word {article_type} article "
        f"with a {tone} tone about: \"{request.topic}\"."
    )


def _fmt_keywords(request):
    if not request.keywords:
        return ""
    return f"Focus on these SEO keywords: {request.keywords}"


def _fmt_product(product_data):
    """Product facts block. Empty when nothing was scraped."""
    if product_data is None:
        return ""
    lines = ["Product Information:", f"- Name: {product_data.name}"]
    if product_data.description:
        lines.append(f"- Description: {_word_trim(product_data.description, MAX_PRODUCT_DESCRIPTION)}")
    if product_data.features:
        lines.append(f"- Features: {', '.join(product_data.features[:MAX_PRODUCT_FEATURES])}")
    specs = json.dumps(product_data.specs, ensure_ascii=False) if product_data.specs else "N/A"
    lines.append(f"- Technical Specs: {specs}")
    lines.append(f"- Price: {product_data.price or 'N/A'}")
    lines.append(f"- Rating: {product_data.rating or 'N/A'}")
    return "\n".join(lines)


def _fmt_cta(request):
    links = request.active_links
    if not links:
        return ""
    platforms = ", ".join(link.platform for link in links)
    return (
        "Affiliate calls to action:\n"
        "- Where a reader would naturally want to buy or check a price, write a "
        "call-to-action marker: [CTA]short action phrase[/CTA]\n"
        f"- To tie a marker to one store use [CTA:platform]phrase[/CTA] with one of: {platforms}\n"
        "- Use 2 to 4 markers spread through the article. Never write URLs yourself."
    )


def _fmt_requirements(request):
    country = _label(COUNTRIES, request.target_country)
    rules = [
        "Create an engaging, SEO-optimized article",
        "Use proper HTML structure with semantic tags (h1, h2, h3, p, ul, ol, strong, em)",
        "Start with exactly one <h1> title followed by an introductory <p>",
        "Include a compelling introduction and conclusion",
        "Add relevant subheadings (<h2>, <h3>) throughout the article",
        f"Write in a natural, engaging style that resonates with the {country} audience",
        "Include factual information and maintain credibility",
        "Optimize for featured snippets and discovery feeds",
    ]
    if request.is_review:
        rules.append("Include a pros and cons section (two lists) and a final verdict")
    return "Requirements:\n" + "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, 1))


# ════════════════════════════════════════════════════════════
# PUBLIC API
# ════════════════════════════════════════════════════════════

def build_system_prompt(request, product_data=None):
    """
    Build system prompt = brief + keywords + product facts + rules.

    Args:
        request: ArticleRequest
        product_data: ProductData or None

    Returns:
        str
    """
    parts = [
        _fmt_brief(request),
        _fmt_keywords(request),
        _fmt_product(product_data),
        _fmt_requirements(request),
        _fmt_cta(request),
        "Format your response as a complete HTML article (just the body content, "
        "no <html>, <head> or <body> tags, no Markdown code fences).",
    ]
    prompt = "\n\n".join(part for part in parts if part)
    _pb_logger.debug(f"[PROMPT] System prompt {len(prompt)} chars for '{request.topic[:50]}'")
    return prompt


def build_user_prompt(request):
    return (
        f"Write the {request.word_count}-word article about \"{request.topic}\" now. "
        f"Make it engaging, informative, and optimized for SEO."
    )
