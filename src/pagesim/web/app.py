"""Flask application factory for the pagesim web UI.

The ``create_app`` function returns a Flask app with three endpoints:

- ``GET /`` — render the simulation form.
- ``GET /api/policies`` — list the replacement policies and page limit.
- ``POST /api/simulate`` — run a trace and return the totals as JSON.

Each request builds its own simulator, so concurrent requests never
share state.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from pagesim.config import SimulationConfig
from pagesim.errors import SimulationError
from pagesim.logging import Logger
from pagesim.memory.page_table import MAX_PAGES
from pagesim.memory.replacement import POLICIES
from pagesim.simulator import run_trace

_HTTP_BAD_REQUEST = 400


def _parse_request(data: Any) -> tuple[SimulationConfig, list[int]] | str:
    """Validate a simulate request body, returning the config and pages or an error."""
    if not isinstance(data, dict):
        return "Expected a JSON object"
    missing = [key for key in ("frames", "policy", "pages") if key not in data]
    if missing:
        return f"Missing field(s): {', '.join(missing)}"
    frames, pages = data["frames"], data["pages"]
    if not isinstance(frames, int) or isinstance(frames, bool):
        return "'frames' must be an integer"
    if not isinstance(pages, list) or not all(
        isinstance(p, int) and not isinstance(p, bool) for p in pages
    ):
        return "'pages' must be a list of integers"
    config = SimulationConfig(
        num_frames=frames,
        policy=str(data["policy"]),
        verbose=bool(data.get("verbose", False)),
    )
    return config, pages


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the simulation form."""
        return render_template("index.html", policies=POLICIES, max_pages=MAX_PAGES)

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the accepted policy names and the page limit."""
        return jsonify({"policies": list(POLICIES), "max_pages": MAX_PAGES})

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a trace and return JSON totals.

        Expects JSON body: ``{"frames": 3, "policy": "LRU", "pages": [...]}``
        with an optional ``"verbose": true`` to include the event log.

        """
        parsed = _parse_request(request.get_json(silent=True))
        if isinstance(parsed, str):
            return jsonify({"error": parsed}), _HTTP_BAD_REQUEST
        config, pages = parsed

        logger = Logger()
        try:
            result = run_trace(config, pages, logger=logger)
        except SimulationError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        body: dict[str, Any] = {
            "policy": result.policy,
            "frames": result.num_frames,
            "accesses": result.accesses,
            "faults": result.faults,
            "evictions": result.evictions,
            "hits": result.hits,
            "resident": {str(page): frame for page, frame in result.resident.items()},
            "summary": result.summary(),
        }
        if config.verbose:
            body["log"] = [str(entry) for entry in logger.entries]
        return jsonify(body)

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``pagesim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
