"""
api.routes_parts - Part detail, create, update and revision endpoints.
"""

import logging

from flask import request, jsonify

from api import api_bp
from catalog.codec import decode_sources, sources_from_payload
from db import get_session
from services.parts_service import PartsService, PartExists

logger = logging.getLogger(__name__)


@api_bp.route("/parts/<part_id>.json")
def get_part(part_id: str):
    """GET /v1/parts/{IPN}.json"""
    session = get_session()
    try:
        part = PartsService.get(session, part_id)
        if not part:
            return jsonify({"error": "part not found"}), 404
        return jsonify(part.to_detail())
    finally:
        session.close()


@api_bp.route("/parts.json", methods=["POST"])
def create_part():
    """
    POST /v1/parts.json

    JSON body: {id, name, category}.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    session = get_session()
    try:
        part = PartsService.create(
            session,
            str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            category=str(data.get("category") or "") or None,
        )
        session.commit()
        return jsonify(part.to_summary()), 201
    except PartExists as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 409
    except ValueError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/parts/<part_id>.json", methods=["PUT"])
def update_part(part_id: str):
    """
    PUT /v1/parts/{IPN}.json

    JSON body: {description, sources: [{manufacturer, mpn}, …]}.
    Missing keys leave the stored value alone.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    session = get_session()
    try:
        part = PartsService.get(session, part_id)
        if not part:
            return jsonify({"error": "part not found"}), 404

        if "sources" in data:
            sources = sources_from_payload(data["sources"])
        else:
            sources = decode_sources(part.field_values())
        description = data.get("description")
        if description is not None:
            description = str(description)

        PartsService.update(session, part, description, sources)
        session.commit()
        session.refresh(part)
        return jsonify(part.to_detail())
    except ValueError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    except Exception as exc:
        session.rollback()
        logger.error(f"Update of {part_id} failed: {exc}")
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()


@api_bp.route("/parts/<part_id>/revision", methods=["POST"])
def start_revision(part_id: str):
    """POST /v1/parts/{IPN}/revision → detail of the new revision"""
    session = get_session()
    try:
        part = PartsService.get(session, part_id)
        if not part:
            return jsonify({"error": "part not found"}), 404
        clone = PartsService.start_revision(session, part)
        session.commit()
        return jsonify(clone.to_detail())
    except ValueError as exc:
        session.rollback()
        logger.warning(f"Cannot start revision of {part_id}: {exc}")
        return jsonify({"error": str(exc)}), 409
    finally:
        session.close()
