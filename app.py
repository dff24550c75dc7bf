from datetime import datetime

import requests
from flask import Flask, Response, jsonify, request

import config
from main import EarthquakeFetcher
from refresh import RefreshController
from scraper.koeri_report import NO_DATA
from scraper.log_setup import setup_logger

app = Flask(__name__)
# The relay endpoint is served by this app; calling it from a request would
# wait on itself under a single worker
fetcher = EarthquakeFetcher(relay_url=None)
controller = RefreshController(fetch=fetcher.fetch)
logger = setup_logger("relay_api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
NO_CACHE = "no-cache, no-store, must-revalidate"


@app.route("/health")
def health_check():
    """Health check endpoint for container monitoring"""
    return jsonify({"status": "healthy", "timestamp": datetime.now().isoformat()})


@app.route("/api/proxy", methods=["GET", "OPTIONS"])
def proxy():
    """Relay the KOERI report verbatim for clients that cannot reach it directly"""
    if request.method == "OPTIONS":
        return Response(status=200, headers=CORS_HEADERS)

    try:
        upstream = fetcher.fetch_upstream()
    except requests.exceptions.RequestException as e:
        logger.error(f"Error proxying KOERI data: {e}")
        response = jsonify({"error": "Failed to fetch earthquake data"})
        response.status_code = 500
        response.headers.update(CORS_HEADERS)
        return response

    body = upstream.content
    if NO_DATA.encode() not in body:
        logger.warning("Response doesn't appear to contain earthquake data")
        logger.debug(f"First 200 bytes: {body[:200]!r}")

    content_type = upstream.headers.get("Content-Type", "")
    if not content_type.startswith("text/"):
        content_type = "text/html; charset=utf-8"

    headers = dict(CORS_HEADERS)
    headers["Content-Type"] = content_type
    headers["Cache-Control"] = NO_CACHE
    logger.info(f"Relayed {len(body)} bytes from KOERI")
    return Response(body, status=200, headers=headers)


@app.route("/api/earthquakes")
def get_earthquakes():
    """Run a refresh cycle (unless one is running) and return the current view"""
    started = controller.refresh()
    payload = controller.snapshot()
    payload["refreshed"] = started
    return jsonify(payload)


@app.route("/api/status")
def get_status():
    """Current refresh state without triggering a fetch"""
    return jsonify(controller.snapshot())


if __name__ == "__main__":
    app.run(host=config.HOST, port=config.PORT, debug=False)
