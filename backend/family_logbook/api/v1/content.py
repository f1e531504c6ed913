# family_logbook/api/v1/content.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from family_logbook.application.content.resolve_page import resolve_cached
from family_logbook.application.content.update_section import (
    update_section,
    set_section_visibility,
    set_section_field,
    reset_section,
)
from family_logbook.domain.lifecycle.edit_session import EditSession
from family_logbook.domain.sections.registry import get_default_sections, SCHEMA_VERSION
from family_logbook.normalizers.section import (
    normalize_page,
    normalize_section,
    normalize_section_definition,
)
from family_logbook.utils.decorators import user_required, logbook_member_required
from . import v1_bp

SECTION_URL = "/logbooks/<slug>/pages/<page_type>/sections/<section_key>"


@v1_bp.route("/pages/<page_type>/schema", methods=["GET"])
def get_page_schema(page_type):
    return jsonify({
        "page_type": page_type,
        "schema_version": SCHEMA_VERSION,
        "sections": [
            normalize_section_definition(d) for d in get_default_sections(page_type)
        ],
    }), 200


@v1_bp.route("/logbooks/<slug>/pages/<page_type>", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def get_page(slug, page_type):
    sections = resolve_cached(page_type, g.current_logbook.id)
    session = EditSession(g.current_membership.role)

    return jsonify(normalize_page(page_type, sections, edit_session=session)), 200


# ------------------------
# Section mutations
# ------------------------
@v1_bp.route(f"{SECTION_URL}/visibility", methods=["PUT"])
@jwt_required()
@user_required
@logbook_member_required
def put_section_visibility(slug, page_type, section_key):
    data = request.get_json(silent=True) or {}

    section = set_section_visibility(
        logbook_id=g.current_logbook.id,
        page_type=page_type,
        section_key=section_key,
        visible=data.get("visible"),
        caller_id=g.current_user.id,
    )

    return jsonify(normalize_section(section)), 200


@v1_bp.route(f"{SECTION_URL}/fields/<field_name>", methods=["PUT"])
@jwt_required()
@user_required
@logbook_member_required
def put_section_field(slug, page_type, section_key, field_name):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "value" not in data:
        return jsonify({"error": "ValidationError", "message": "Body must be {\"value\": ...}"}), 400

    section = set_section_field(
        logbook_id=g.current_logbook.id,
        page_type=page_type,
        section_key=section_key,
        field_name=field_name,
        value=data["value"],
        caller_id=g.current_user.id,
    )

    return jsonify(normalize_section(section)), 200


@v1_bp.route(SECTION_URL, methods=["PATCH"])
@jwt_required()
@user_required
@logbook_member_required
def patch_section(slug, page_type, section_key):
    patch = request.get_json(silent=True)

    section = update_section(
        logbook_id=g.current_logbook.id,
        page_type=page_type,
        section_key=section_key,
        patch=patch,
        caller_id=g.current_user.id,
    )

    return jsonify(normalize_section(section)), 200


@v1_bp.route(f"{SECTION_URL}/reset", methods=["POST"])
@jwt_required()
@user_required
@logbook_member_required
def post_section_reset(slug, page_type, section_key):
    section = reset_section(
        logbook_id=g.current_logbook.id,
        page_type=page_type,
        section_key=section_key,
        caller_id=g.current_user.id,
    )

    return jsonify(normalize_section(section)), 200
