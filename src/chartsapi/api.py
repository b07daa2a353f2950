"""Flask API server for chart lookups."""

import logging
import time
from typing import Optional

from flask import Flask, g, jsonify, request
from flask_cors import CORS

from chartsapi.charts.errors import CacheNotReadyError, ClientInputError
from chartsapi.charts.query import ChartQueryEngine
from chartsapi.charts.refresh import RefreshScheduler
from chartsapi.charts.store import CacheStore
from chartsapi.config import Settings

logger = logging.getLogger(__name__)


def create_app(
    store: CacheStore,
    scheduler: Optional[RefreshScheduler] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    """Build the Flask app serving charts from the given cache store."""
    settings = settings or Settings()
    engine = ChartQueryEngine(store)

    app = Flask(__name__)
    # keep airports in request order
    app.json.sort_keys = False
    CORS(app, origins=[settings.allowed_origin])

    @app.before_request
    def _start_timer():
        g.started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.full_path.rstrip("?"),
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.errorhandler(ClientInputError)
    def _client_error(e: ClientInputError):
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(CacheNotReadyError)
    def _not_ready(e: CacheNotReadyError):
        return jsonify({"error": "Chart directory is not loaded yet"}), 503

    @app.route("/v1/charts", methods=["GET"])
    def charts():
        """
        Charts for one or more airports.

        Query params:
            apt:   comma-separated FAA or ICAO identifiers (required)
            group: grouping code 1-7 (optional)
        """
        result = engine.query(request.args.get("apt"), request.args.get("group"))
        return jsonify(result.to_json())

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        if not store.ready:
            return jsonify({"status": "loading"}), 503
        snapshot = store.current()
        return jsonify(
            {
                "status": "ok",
                "cycle": snapshot.cycle,
                "charts": snapshot.chart_count,
                "airports": snapshot.airport_count,
                "refreshing": bool(scheduler and scheduler.running),
            }
        )

    return app
