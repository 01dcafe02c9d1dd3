"""
Application factory with response-timing middleware.
"""

from __future__ import annotations

import time
from typing import Any

from flask import Flask, Response, g, jsonify

from retirement.config import settings
from retirement.logging_setup import configure_logging, get_logger

logger = get_logger(__name__)


def create_app() -> Flask:
    """Create and configure the Flask application."""
    configure_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.json.sort_keys = False

    # ── Timing middleware ───────────────────────────────────────────────────

    @app.before_request
    def _start_timer() -> None:
        g.start_time = time.perf_counter()

    @app.after_request
    def _stop_timer(response: Response) -> Response:
        start = g.get("start_time")
        if start is not None:
            elapsed = (time.perf_counter() - start) * 1_000
            response.headers["X-Response-Time-Ms"] = f"{elapsed:.4f}"
        return response

    # ── Error handlers ──────────────────────────────────────────────────────

    @app.errorhandler(400)
    def bad_request(exc: Any) -> tuple[Response, int]:
        return jsonify({"error": "Bad Request", "message": str(exc)}), 400

    @app.errorhandler(404)
    def not_found(exc: Any) -> tuple[Response, int]:
        return jsonify({"error": "Not Found", "message": str(exc)}), 404

    @app.errorhandler(405)
    def method_not_allowed(exc: Any) -> tuple[Response, int]:
        return jsonify({"error": "Method Not Allowed", "message": str(exc)}), 405

    @app.errorhandler(422)
    def unprocessable(exc: Any) -> tuple[Response, int]:
        return jsonify({"error": "Unprocessable Entity", "message": str(exc)}), 422

    @app.errorhandler(500)
    def internal_error(exc: Any) -> tuple[Response, int]:
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": "Internal Server Error", "message": str(exc)}), 500

    # ── Register blueprints ─────────────────────────────────────────────────

    from retirement.routes.transactions import transactions_bp
    from retirement.routes.returns import returns_bp
    from retirement.routes.performance import performance_bp

    app.register_blueprint(transactions_bp, url_prefix=settings.API_PREFIX)
    app.register_blueprint(returns_bp, url_prefix=settings.API_PREFIX)
    app.register_blueprint(performance_bp, url_prefix=settings.API_PREFIX)

    return app
