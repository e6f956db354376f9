"""Flask application factory for the simulator web UI.

The ``create_app`` function returns a Flask app with three endpoints:

- ``GET /`` — render the simulation form.
- ``GET /api/policies`` — list policy names and the defaults.
- ``POST /api/simulate`` — run one simulation and return JSON.
"""

from __future__ import annotations

import os
import sys

from flask import Flask, Response, jsonify, render_template, request

from pagesim.config import SimulationConfig
from pagesim.logging import Logger, LogLevel
from pagesim.report import format_table
from pagesim.simulator import POLICIES, SimulationInputError, SimulationResult, simulate

_HTTP_BAD_REQUEST = 400


def result_to_dict(result: SimulationResult) -> dict[str, object]:
    """Convert a result into JSON-ready data (``None`` marks an empty frame)."""
    return {
        "policy": result.policy,
        "frames": result.frame_count,
        "reference": list(result.reference),
        "steps": [
            {
                "page": step.page,
                "frames": list(step.frames),
                "outcome": step.outcome.value,
                "evicted": step.evicted,
            }
            for step in result.steps
        ],
        "total_requests": result.total_requests,
        "faults": result.faults,
        "hits": result.hits,
        "hit_rate": round(result.hit_rate, 2),
    }


def create_app(config: SimulationConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Defaults for omitted request fields.

    Returns:
        A configured Flask application ready to serve.

    """
    settings = config if config is not None else SimulationConfig()
    logger = Logger()

    app = Flask(__name__)
    app.extensions["pagesim.logger"] = logger

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the simulation form."""
        return render_template("index.html", policies=sorted(POLICIES), settings=settings)

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the policy names and the default settings."""
        return jsonify({"policies": sorted(POLICIES), "defaults": dict(settings.items())})

    @app.route("/api/simulate", methods=["POST"])
    def run_simulation() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a simulation.

        Expects JSON body: ``{"policy": "lru", "frames": 3, "reference": [1, 2, 3]}``

        Returns:
            JSON with the step history, counters, and rendered table.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Expected a JSON object body"}), _HTTP_BAD_REQUEST

        try:
            policy, frames, reference = settings.resolve_request(data)
            result = simulate(reference, frames, policy=policy, logger=logger)
        except SimulationInputError as exc:
            logger.log(LogLevel.WARNING, str(exc), source="web")
            return jsonify({"error": str(exc)}), _HTTP_BAD_REQUEST

        payload = result_to_dict(result)
        payload["table"] = format_table(
            result, width=settings.width, placeholder=settings.placeholder
        )
        return jsonify(payload)

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``pagesim-web`` console entry point.  Invalid
    ``PAGESIM_*`` settings are reported and exit with status 1.
    """
    try:
        config = SimulationConfig.from_env(os.environ)
    except SimulationInputError as exc:
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    app = create_app(config)
    app.run(debug=True, port=8080)
