from functools import wraps
from flask import g, jsonify
from family_logbook.application.logbooks.members import get_logbook_by_slug, require_member


def user_required(fn):
    """Use after @jwt_required(): the token's user must still exist and be active."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if g.get("current_user") is None:
            return jsonify({"error": "Unauthorized", "message": "User account not found"}), 401
        return fn(*args, **kwargs)
    return wrapper


def logbook_member_required(fn):
    """
    Resolves the <slug> route argument into g.current_logbook and
    g.current_membership. Any role passes; role checks live in the services.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        logbook = get_logbook_by_slug(kwargs["slug"])
        membership = require_member(logbook_id=logbook.id, user_id=g.current_user.id)

        g.current_logbook = logbook
        g.current_membership = membership

        return fn(*args, **kwargs)
    return wrapper
