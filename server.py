"""HTTP service exposing the URL and email classifiers."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from api.api import (
    ValidationError,
    classify_email,
    classify_url,
    normalize_url,
    validate_email_payload,
    validate_url_payload,
)
from config import Settings, configure_logging, get_settings
from history import HistoryStore

logger = logging.getLogger("server")


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or get_settings()
    app = Flask(__name__)
    CORS(app, origins=settings.cors_origins)

    history = None
    if settings.history_enabled:
        history = HistoryStore(settings.history_db)
        history.init_db()

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        logger.exception("Request to %s failed", request.path)
        return jsonify({"error": str(exc) or "Internal server error"}), 500

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "healthy", "history": history is not None})

    @app.route("/detect-phishing-url", methods=["POST"])
    def detect_phishing_url():
        raw = validate_url_payload(request.get_json(silent=True))
        url = normalize_url(raw)
        result = classify_url(url)
        logger.info("url=%s phishing=%s confidence=%.4f", url, result.is_phishing, result.confidence)
        if history is not None:
            history.record_url_detection(result)
        return jsonify(result.to_response())

    @app.route("/detect-spam-email", methods=["POST"])
    def detect_spam_email():
        fields = validate_email_payload(request.get_json(silent=True))
        result = classify_email(fields["subject"], fields["content"], fields["sender"])
        logger.info("sender=%s spam=%s confidence=%.4f", result.sender, result.is_spam, result.confidence)
        if history is not None:
            history.record_email_detection(result, fields["content"])
        return jsonify(result.to_response())

    @app.route("/detections/url", methods=["GET"])
    def existing_url_detection():
        url = normalize_url(request.args.get("url", ""))
        if not url:
            raise ValidationError("Valid URL required")
        found = history.get_existing_url_detection(url) if history is not None else None
        if found is None:
            return jsonify({"error": "No detection found"}), 404
        return jsonify(found)

    @app.route("/stats", methods=["GET"])
    def stats():
        if history is None:
            return jsonify({"error": "Detection history is disabled"}), 404
        limit = request.args.get("limit", default=settings.stats_limit, type=int)
        return jsonify(history.get_stats(limit))

    return app


if __name__ == "__main__":
    configure_logging()
    cfg = get_settings()
    create_app(cfg).run(host=cfg.api_host, port=cfg.api_port)
