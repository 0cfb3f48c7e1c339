"""
api.auth - Optional shared-token check.

When the app is configured with API_TOKEN, every /v1 request must
carry ``Authorization: Token <token>``.
"""

from flask import current_app, jsonify, request

from api import api_bp


@api_bp.before_request
def require_token():
    token = current_app.config.get("API_TOKEN")
    if not token:
        return None
    if request.headers.get("Authorization", "") != f"Token {token}":
        return jsonify({"error": "unauthorized"}), 401
    return None
