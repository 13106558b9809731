# app.py
# Provides a minimal Flask-based REST API in front of the schedule engine.

import logging
import os
import time

from flask import Flask, jsonify, request

from engine_params import DEFAULT_TIME_FORMAT, params_from_json, resolve_format, schedules_to_json
from errors import ScheduleEngineError, status_for
from schedule_finder import find_unresolvable_pairs, run_params

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def load_config() -> dict:
    # Reads settings from the environment; see SCHEDULE_* variables.
    return {
        "SCHEDULE_DEBUG": _env_flag("SCHEDULE_DEBUG"),
        "TIME_FORMAT": os.environ.get("SCHEDULE_TIME_FORMAT", DEFAULT_TIME_FORMAT),
        "SEARCH_TIMEOUT": float(os.environ.get("SCHEDULE_SEARCH_TIMEOUT", "0") or 0),
    }


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def _deadline_check(timeout: float):
    # A timeout of 0 disables the check.
    if timeout <= 0:
        return None
    deadline = time.monotonic() + timeout
    return lambda: time.monotonic() >= deadline


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    @app.errorhandler(ScheduleEngineError)
    def handle_engine_error(exc):
        status = status_for(exc)
        logger.warning("Request rejected (%s): %s", type(exc).__name__, exc)
        return jsonify({"error": type(exc).__name__, "message": str(exc)}), status

    @app.get("/api/health")
    def api_health():
        return jsonify({"status": "ok"})

    @app.post("/api/schedules")
    def api_schedules():
        # Generates schedules from a JSON payload of seeds, pools and a bound.
        body = request.get_json(silent=True)
        if body is None:
            return jsonify({"error": "InvalidRequest", "message": "Request body must be JSON"}), 400

        params = params_from_json(body, app.config["TIME_FORMAT"])
        fmt = resolve_format(body, app.config["TIME_FORMAT"])
        logger.debug(
            "Running engine: %d seed(s), %d pool(s), bound %d",
            len(params.seeds), len(params.pool_list), params.bound,
        )

        schedules = run_params(params, _deadline_check(app.config["SEARCH_TIMEOUT"]))
        if schedules:
            return jsonify(schedules_to_json(schedules, fmt))

        # If no schedules are possible, identify pairs of pools that are inherently in conflict.
        return jsonify({
            "error": "No valid schedules found",
            "unresolvablePairs": find_unresolvable_pairs(params.pool_list),
        })

    return app


if __name__ == "__main__":
    settings = load_config()
    configure_logging(settings["SCHEDULE_DEBUG"])
    create_app().run(debug=settings["SCHEDULE_DEBUG"])
