"""HTTP entrypoint for the map client (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from swedefinder.core.config import get_settings
from swedefinder.core.geo import InvalidAreaError, parse_search_area
from swedefinder.etl.demo import demo_result
from swedefinder.jobs.area_search import run_area_search

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
app.json.ensure_ascii = False

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, never calls upstream."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "places_api_configured": not settings.demo_mode,
                "demo_mode": settings.demo_mode,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/api/places")
def search_places() -> Any:
    """
    Search a drawn area for businesses.
    Required JSON: {"area": {"type", "coordinates", "center"?, "radius"?}}
    """
    payload: Any = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "invalid search area"}), 400
    raw_area = payload.get("area")

    if not isinstance(raw_area, dict) or not raw_area.get("coordinates"):
        return jsonify({"error": "invalid search area"}), 400

    try:
        area = parse_search_area(raw_area)
    except InvalidAreaError as exc:
        return jsonify({"error": str(exc)}), 400

    settings = get_settings()
    if settings.demo_mode:
        logger.info("No Places API key configured; returning demo data")
        return jsonify(demo_result(area).to_dict()), 200

    try:
        result = run_area_search(area, api_key=settings.google_api_key)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Area search failed: %s", exc)
        return jsonify({"error": "could not search for businesses"}), 500

    return jsonify(result.to_dict()), 200


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
