"""
Flask HTTP adapter for the translation service.

Routes:
- POST /translate  {text, source_language, target_language[, part_of_speech]}
- GET  /health
"""
import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import TranslationEngineConfig
from .service import TranslationService, create_translation_service

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def create_app(
    service: Optional[TranslationService] = None,
    config: Optional[TranslationEngineConfig] = None,
    rate_limiting: bool = True,
) -> Flask:
    """
    Build the Flask application.
    
    :param service: Pre-wired TranslationService (built from config if None)
    :param config: Engine configuration used when service is None
    :param rate_limiting: Enable per-client rate limits
    :return: Flask app
    """
    app = Flask(__name__)
    service = service or create_translation_service(config)
    app.extensions["translation_service"] = service

    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=["600 per hour", "60 per minute"],
        storage_uri="memory://",
        enabled=rate_limiting,
    )
    # limit decorators hold only a weak proxy to the limiter
    app.extensions["translation_limiter"] = limiter

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    @app.route("/translate", methods=["POST"])
    @limiter.limit("30 per minute")
    def translate():
        """Translation endpoint."""
        payload = request.get_json(silent=True)
        body, status = service.translate_payload(payload)

        if status == 200:
            logger.info(
                f"Translate - method: {body['method']}, confidence: {body['confidence_score']}, "
                f"latency: {body.get('response_time_ms')}ms"
            )
        else:
            logger.info(f"Translate - {body['error_type']} ({status})")

        return jsonify(body), status

    @app.route("/health", methods=["GET"])
    @limiter.exempt
    def health():
        """Health check endpoint."""
        report = service.health()
        status = 200 if report["status"] == "healthy" else 503
        return jsonify(report), status

    return app
