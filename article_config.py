"""
===============================================================================
ARTICLE CONFIG v1.0
===============================================================================
Central configuration for the article generator API.

Everything comes from environment variables; defaults match the production
deployment. Option lists mirror what the generator form offers.

USAGE:
    from article_config import OPENAI_MODEL, ARTICLE_TYPES
===============================================================================
"""

import os


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ================================================================
# LLM
# ================================================================
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4-turbo-preview")
ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
ANTHROPIC_MODEL = os.environ.get("ANTHROPIC_MODEL", "claude-sonnet-4-6")

LLM_ENGINE = os.environ.get("LLM_ENGINE", "openai")  # "openai" or "claude"
LLM_TEMPERATURE = float(os.environ.get("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS_CAP = int(os.environ.get("LLM_MAX_TOKENS_CAP", "4000"))
LLM_REQUEST_TIMEOUT = 120

# Retryable HTTP status codes from the LLM providers (rate limit, unavailable, overloaded)
LLM_RETRYABLE_CODES = {429, 503, 529}
LLM_RETRY_MAX = int(os.environ.get("LLM_RETRY_MAX", "3"))
LLM_RETRY_DELAYS = [10, 30, 60]
LLM_529_DELAYS = [5, 15]

# ================================================================
# IMAGES
# ================================================================
IMAGE_MODEL = os.environ.get("IMAGE_MODEL", "dall-e-3")
IMAGE_SIZE = os.environ.get("IMAGE_SIZE", "1792x1024")
MAX_IMAGE_COUNT = 10

# ================================================================
# SPELL CHECK / SCRAPING
# ================================================================
LANGUAGETOOL_URL = os.environ.get("LANGUAGETOOL_URL", "https://api.languagetool.org/v2/check")
LANGUAGETOOL_TIMEOUT = 15
SPELLING_ERRORS_LIMIT = 20

SCRAPER_TIMEOUT = int(os.environ.get("SCRAPER_TIMEOUT", "20"))
SCRAPER_USER_AGENT = os.environ.get(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36",
)

# ================================================================
# ARTICLE DEFAULTS
# ================================================================
WORDS_PER_MINUTE = 200
DEFAULT_WORD_COUNT = 1500
MIN_WORD_COUNT = 100
MAX_WORD_COUNT = 10000
DEFAULT_IMAGE_COUNT = 3

ARTICLE_TYPES = {
    "informational": "Informational",
    "review": "Product Review",
    "comparison": "Comparison",
    "listicle": "Listicle",
    "how-to": "How-To Guide",
}

COUNTRIES = {
    "BR": "Brazil",
    "US": "United States",
    "PT": "Portugal",
    "ES": "Spain",
    "MX": "Mexico",
}

LANGUAGES = {
    "pt-BR": "Portuguese (BR)",
    "en-US": "English (US)",
    "pt-PT": "Portuguese (PT)",
    "es-ES": "Spanish",
}

TONES = {
    "professional": "Professional",
    "casual": "Casual",
    "enthusiastic": "Enthusiastic",
    "authoritative": "Authoritative",
}

AFFILIATE_PLATFORMS = {
    "amazon": "Amazon",
    "mercadoLivre": "Mercado Livre",
    "shopee": "Shopee",
    "magalu": "Magalu",
    "clickbank": "ClickBank",
    "hotmart": "Hotmart",
    "eduzz": "Eduzz",
    "kiwify": "Kiwify",
    "braip": "Braip",
}

# ================================================================
# HTTP
# ================================================================
VERSION = "1.0.0"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
PORT = int(os.environ.get("PORT", "5000"))
DEBUG = _env_bool("DEBUG")
MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # 2 MB request bodies
