"""
===============================================================================
SEO ARTICLE API v1.0
===============================================================================
Flask entry point.

Endpoints:
- POST /api/generate-article   - full generation pipeline
- GET  /api/options            - option lists for the generator form
- POST /api/export/<fmt>       - html / md / txt / docx download
- GET  /api/health             - status + engine + key presence
===============================================================================
"""

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS

from article_config import (
    ANTHROPIC_API_KEY,
    DEBUG,
    LLM_ENGINE,
    LOG_LEVEL,
    MAX_CONTENT_LENGTH,
    OPENAI_API_KEY,
    PORT,
    VERSION,
)
from article_pipeline import ArticleServices
from article_routes import SERVICES_KEY, article_routes
from export_routes import export_routes

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(services=None):
    """
    Build the Flask app.

    Args:
        services: ArticleServices; built from the environment when omitted
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
    app.config[SERVICES_KEY] = services or ArticleServices.from_config()
    CORS(app)

    app.register_blueprint(article_routes)
    app.register_blueprint(export_routes)

    # ================================================================
    # 🚨 ERROR HANDLERS
    # ================================================================
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": f"Request too large (max {MAX_CONTENT_LENGTH // (1024 * 1024)}MB)"}), 413

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal Server Error", "message": str(error)}), 500

    # ================================================================
    # 🏥 HEALTHCHECK
    # ================================================================
    @app.get("/api/health")
    def health():
        return jsonify({
            "status": "ok",
            "version": VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "engine": LLM_ENGINE,
            "keys": {
                "openai": bool(OPENAI_API_KEY),
                "anthropic": bool(ANTHROPIC_API_KEY),
            },
        }), 200

    return app


app = create_app()


# ================================================================
# 🏃 Local Run
# ================================================================
if __name__ == "__main__":
    logger.info(f"[APP] Starting SEO Article API {VERSION} on port {PORT} (debug={DEBUG})")
    app.run(host="0.0.0.0", port=PORT, debug=DEBUG)
