from flask import jsonify
from werkzeug.exceptions import HTTPException
from family_logbook.domain.exceptions import DomainError, PersistenceError


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        message = str(error)
        if isinstance(error, PersistenceError):
            message = message or "Temporary storage failure, please try again"

        response = jsonify({
            "error": type(error).__name__,
            "message": message
        })
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
