from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from family_logbook.application.logbooks.invites import (
    create_invite_code,
    list_invite_codes,
    delete_invite_code,
    validate_invite_code,
    redeem_invite_code,
)
from family_logbook.normalizers.logbook import normalize_invite, normalize_logbook
from family_logbook.utils.decorators import user_required, logbook_member_required
from . import v1_bp


@v1_bp.route("/logbooks/<slug>/invites", methods=["POST"])
@jwt_required()
@user_required
@logbook_member_required
def create_invite(slug):
    data = request.get_json(silent=True) or {}

    invite = create_invite_code(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
        role=data.get("role"),
        max_uses=data.get("max_uses"),
        expires_in_days=data.get("expires_in_days"),
    )

    return jsonify(normalize_invite(invite)), 201


@v1_bp.route("/logbooks/<slug>/invites", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def list_invites(slug):
    invites = list_invite_codes(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
    )
    return jsonify([normalize_invite(i) for i in invites]), 200


@v1_bp.route("/logbooks/<slug>/invites/<invite_id>", methods=["DELETE"])
@jwt_required()
@user_required
@logbook_member_required
def delete_invite(slug, invite_id):
    delete_invite_code(
        logbook_id=g.current_logbook.id,
        actor_id=g.current_user.id,
        invite_id=invite_id,
    )
    return jsonify({"message": "Invite code deleted"}), 200


@v1_bp.route("/invites/<code>", methods=["GET"])
def check_invite(code):
    invite = validate_invite_code(code)
    return jsonify({
        "valid": True,
        "role": invite.role,
        "logbook_name": invite.logbook.name,
    }), 200


@v1_bp.route("/invites/<code>/redeem", methods=["POST"])
@jwt_required()
@user_required
def redeem_invite(code):
    membership = redeem_invite_code(code=code, user_id=g.current_user.id)
    return jsonify(normalize_logbook(membership.logbook, membership)), 201
