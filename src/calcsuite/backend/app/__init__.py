"""Application factory for the CalcSuite HTTP API."""

import logging
import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from .http import problem_response
from .routes import register_routes
from .routes.config import get_configuration_metadata
from .services.calculation_service import UnknownCalculatorError

_LOGGER = logging.getLogger(__name__)


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app() -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv("CALCSUITE_ALLOWED_ORIGINS"))
    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type", "Accept-Language"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", message=message).to_response()

    @app.errorhandler(UnknownCalculatorError)
    def handle_unknown_calculator(error: UnknownCalculatorError):
        return problem_response(
            "not_found", message=str(error), calculator=error.calculator_id
        ).to_response()

    @app.errorhandler(FileNotFoundError)
    def handle_missing_configuration(error: FileNotFoundError):
        """Report tax years without a published configuration."""

        return problem_response("not_found", message=str(error)).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface domain validation errors to clients."""

        _LOGGER.debug("Rejected request: %s", error)
        return problem_response("validation_error", message=str(error)).to_response()

    return app
