"""
Read-only HTTP API over the catalog.

  GET /               liveness text
  GET /health         {"ok": true, "time": ...}
  GET /keywords.json  full catalog document
  GET /latest?n=5     most recent n items (1..50)
"""
from flask import Blueprint, Response, current_app, jsonify, request

from ..service import LIST_DEFAULT, CatalogService
from ..utils import now_iso

bp = Blueprint("api", __name__)

LIVENESS_TEXT = "OK • catalog-bot running"


def _service() -> CatalogService:
    return current_app.extensions["catalog_service"]


def _cache_control() -> str:
    max_age = current_app.config.get("CACHE_MAX_AGE", 0)
    return f"public, max-age={max_age}" if max_age > 0 else "no-store"


def _read_failed():
    return jsonify({"error": "Failed to read data"}), 500


@bp.get("/")
def index():
    return Response(LIVENESS_TEXT, mimetype="text/plain")


@bp.get("/health")
def health():
    return {"ok": True, "time": now_iso()}, 200


@bp.get("/keywords.json")
def keywords():
    try:
        data = _service().catalog().to_dict()
    except Exception as e:
        current_app.logger.exception("GET /keywords.json failed: %s", e)
        return _read_failed()

    resp = jsonify(data)
    resp.headers["Cache-Control"] = _cache_control()
    resp.headers["Access-Control-Allow-Origin"] = "*"
    return resp


@bp.get("/latest")
def latest():
    n = request.args.get("n", default=LIST_DEFAULT, type=int)
    try:
        items = [it.to_dict() for it in _service().list_latest(n)]
    except Exception as e:
        current_app.logger.exception("GET /latest failed: %s", e)
        return _read_failed()

    resp = jsonify(items)
    resp.headers["Cache-Control"] = _cache_control()
    resp.headers["Access-Control-Allow-Origin"] = "*"
    return resp
