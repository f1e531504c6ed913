from flask import request, jsonify, g
from flask_jwt_extended import jwt_required
from family_logbook.application.logbooks.members import require_parent
from family_logbook.models.audit_log import AuditLog
from family_logbook.normalizers.audit import normalize_audit_log
from family_logbook.normalizers.pagination import normalize_pagination
from family_logbook.utils.decorators import user_required, logbook_member_required
from family_logbook.utils.pagination import paginate_cursor
from . import v1_bp


@v1_bp.route("/logbooks/<slug>/audit", methods=["GET"])
@jwt_required()
@user_required
@logbook_member_required
def list_audit_logs(slug):
    logbook = g.current_logbook
    require_parent(logbook_id=logbook.id, user_id=g.current_user.id)

    limit = min(request.args.get("limit", 20, type=int), 100)

    query = AuditLog.query.filter(AuditLog.logbook_id == logbook.id)

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    logs, cursor = paginate_cursor(
        query,
        model=AuditLog,
        limit=limit,
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=cursor)), 200
