"""
Article Routes v1.0
Generate-article endpoint + the option lists the generator form offers.
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from article_config import (
    AFFILIATE_PLATFORMS,
    ARTICLE_TYPES,
    COUNTRIES,
    DEFAULT_IMAGE_COUNT,
    DEFAULT_WORD_COUNT,
    LANGUAGES,
    MAX_IMAGE_COUNT,
    MAX_WORD_COUNT,
    MIN_WORD_COUNT,
    TONES,
)
from article_models import ArticleRequest
from article_pipeline import generate_article as run_pipeline

logger = logging.getLogger(__name__)

article_routes = Blueprint("article_routes", __name__)

SERVICES_KEY = "ARTICLE_SERVICES"


def _options(mapping):
    return [{"value": key, "label": label} for key, label in mapping.items()]


@article_routes.post("/api/generate-article")
def generate_article():
    """Full pipeline. Any failure is a 500 with {error}."""
    try:
        payload = request.get_json(force=True, silent=False)
        article_request = ArticleRequest.from_json(payload)
        result = run_pipeline(article_request, current_app.config[SERVICES_KEY])
    except HTTPException as e:
        # Oversized bodies go to the 413 handler; unreadable JSON is a 500 like any other failure
        if e.code != 400:
            raise
        logger.exception(f"[ARTICLE] Invalid request body: {e}")
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        logger.exception(f"[ARTICLE] Generation failed: {e}")
        return jsonify({"error": str(e) or "Failed to generate article"}), 500
    return jsonify(result), 200


@article_routes.get("/api/options")
def options():
    return jsonify({
        "articleTypes": _options(ARTICLE_TYPES),
        "countries": _options(COUNTRIES),
        "languages": _options(LANGUAGES),
        "tones": _options(TONES),
        "affiliatePlatforms": _options(AFFILIATE_PLATFORMS),
        "defaults": {
            "articleType": "informational",
            "targetCountry": "BR",
            "targetLanguage": "pt-BR",
            "wordCount": DEFAULT_WORD_COUNT,
            "toneOfVoice": "professional",
            "includeImages": True,
            "imageCount": DEFAULT_IMAGE_COUNT,
        },
        "limits": {
            "wordCount": {"min": MIN_WORD_COUNT, "max": MAX_WORD_COUNT},
            "imageCount": {"min": 0, "max": MAX_IMAGE_COUNT},
        },
    }), 200
