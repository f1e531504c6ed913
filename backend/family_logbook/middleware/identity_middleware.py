from flask import g, request
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from family_logbook.extensions import db
from family_logbook.models.user import User

REFRESH_ENDPOINTS = {"v1.refresh"}


def identity_middleware(app):
    @app.before_request
    def load_current_user():
        g.current_user = None

        # Optional here; protected routes still declare @jwt_required()
        verify_jwt_in_request(optional=True, refresh=request.endpoint in REFRESH_ENDPOINTS)
        user_id = get_jwt_identity()
        if not user_id:
            return

        user = db.session.get(User, user_id)
        if user is not None and user.is_active:
            # Attach user to global context
            g.current_user = user


def get_current_user():
    """{id, email} of the authenticated caller, or None."""
    user = g.get("current_user")
    if user is None:
        return None
    return {"id": user.id, "email": user.email}
