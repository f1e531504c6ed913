# family_logbook/api/v1/logbooks.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from family_logbook.application.logbooks.create_logbook import create_logbook, check_slug_availability
from family_logbook.application.logbooks.stats import get_logbook_stats
from family_logbook.application.logbooks.update_theme import update_logbook_theme
from family_logbook.application.logbooks.members import (
    list_members,
    change_member_role,
    revoke_member,
    touch_last_visited,
)
from family_logbook.normalizers.logbook import normalize_logbook, normalize_member
from family_logbook.utils.decorators import user_required, logbook_member_required
from . import v1_bp


@v1_bp.route("/logbooks", methods=["POST"])
@jwt_required()
@user_required
def create_logbook_route():
    data = request.get_json(silent=True) or {}

    logbook = create_logbook(actor_id=g.current_user.id, data=data)

    return jsonify({
        **normalize_logbook(logbook),
        "role": "parent",
        "message": "Logbook created successfully"
    }), 201


@v1_bp.route("/logbooks", methods=["GET"])
@jwt_required()
@user_required
def list_logbooks():
    memberships = sorted(
        g.current_user.memberships,
        key=lambda m: m.last_visited_at or m.created_at,
        reverse=True,
    )
    return jsonify([
        normalize_logbook(m.logbook, m) for m in memberships
    ]), 200


@v1_bp.route("/logbooks/slug-available", methods=["GET"])
def slug_available():
    return jsonify(check_slug_availability(request.args.get("slug"))), 200


@v1_bp.route("/logbooks/<slug>", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def get_logbook(slug):
    touch_last_visited(g.current_membership)
    return jsonify(normalize_logbook(g.current_logbook, g.current_membership)), 200


@v1_bp.route("/logbooks/<slug>/theme", methods=["PUT"])
@jwt_required()
@user_required
@logbook_member_required
def update_theme(slug):
    data = request.get_json(silent=True) or {}

    logbook = update_logbook_theme(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
        theme=data.get("theme"),
    )

    return jsonify({"theme": logbook.theme}), 200


@v1_bp.route("/logbooks/<slug>/stats", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def logbook_stats(slug):
    return jsonify(get_logbook_stats(logbook_id=g.current_logbook.id)), 200


# ------------------------
# Members
# ------------------------
@v1_bp.route("/logbooks/<slug>/members", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def list_members_route(slug):
    members = list_members(logbook_id=g.current_logbook.id)
    return jsonify([normalize_member(m) for m in members]), 200


@v1_bp.route("/logbooks/<slug>/members/<user_id>", methods=["PUT"])
@jwt_required()
@user_required
@logbook_member_required
def change_member_role_route(slug, user_id):
    data = request.get_json(silent=True) or {}

    member = change_member_role(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
        user_id=user_id,
        role=data.get("role"),
    )

    return jsonify(normalize_member(member)), 200


@v1_bp.route("/logbooks/<slug>/members/<user_id>", methods=["DELETE"])
@jwt_required()
@user_required
@logbook_member_required
def revoke_member_route(slug, user_id):
    revoke_member(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
        user_id=user_id,
    )
    return jsonify({"message": "Member removed"}), 200
