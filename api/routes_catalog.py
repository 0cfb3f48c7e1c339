"""
api.routes_catalog - Root, category list and parts-by-category endpoints.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.category_service import CategoryService


@api_bp.route("/")
def api_root():
    """GET /v1/  - links to the category and part collections."""
    base = request.base_url.rstrip("/")
    return jsonify({
        "categories": f"{base}/categories.json",
        "parts": f"{base}/parts",
    })


@api_bp.route("/categories.json")
def list_categories():
    """GET /v1/categories.json"""
    session = get_session()
    try:
        return jsonify(CategoryService.list_categories(session))
    finally:
        session.close()


@api_bp.route("/parts/category/<category_id>.json")
def list_parts_by_category(category_id: str):
    """GET /v1/parts/category/{CCC}.json"""
    session = get_session()
    try:
        return jsonify(CategoryService.list_parts(session, category_id))
    finally:
        session.close()
