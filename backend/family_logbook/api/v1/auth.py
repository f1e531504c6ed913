from flask import request, jsonify, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required
)
from family_logbook.application.users.accounts import sign_up, authenticate
from family_logbook.middleware.identity_middleware import get_current_user
from family_logbook.normalizers.logbook import normalize_logbook
from family_logbook.utils.decorators import user_required
from . import v1_bp


def _tokens_for(user):
    claims = {"email": user.email}
    return {
        "access_token": create_access_token(identity=user.id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=user.id),
    }


@v1_bp.route("/auth/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True) or {}

    user, membership = sign_up(
        email=data.get("email"),
        password=data.get("password"),
        display_name=data.get("display_name"),
        invite_code=data.get("invite_code"),
    )

    body = {"user": {"id": user.id, "email": user.email}, **_tokens_for(user)}

    if membership is not None:
        body["logbook"] = normalize_logbook(membership.logbook, membership)

    return jsonify(body), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "BadRequest", "message": "Invalid request body"}), 400

    user = authenticate(email=data.get("email"), password=data.get("password"))

    return jsonify(_tokens_for(user)), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
@jwt_required(refresh=True)
@user_required
def refresh():
    return jsonify({
        "access_token": create_access_token(
            identity=get_jwt_identity(),
            additional_claims={"email": g.current_user.email},
        )
    }), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
@user_required
def me():
    user = g.current_user
    return jsonify({
        **get_current_user(),
        "display_name": user.display_name,
        "logbooks": [
            normalize_logbook(m.logbook, m) for m in user.memberships
        ],
    }), 200
