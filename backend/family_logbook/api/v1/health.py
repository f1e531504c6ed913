from flask import jsonify
from family_logbook.domain.sections.registry import SCHEMA_VERSION
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    return jsonify({
        "status": "ok",
        "service": "family-logbook",
        "schema_version": SCHEMA_VERSION
    })
