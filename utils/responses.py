# utils/responses.py
from flask import jsonify, request, current_app

from utils.errors import ApplicationError


def request_shape():
    """What the request looked like, minus the values, for log lines."""
    return {
        "route": request.path,
        "method": request.method,
        "origin": request.headers.get("Origin"),
        "form": sorted(request.form.keys()) if request.form else [],
        "files": sorted(request.files.keys()) if request.files else [],
    }


def error_response(e: ApplicationError):
    return jsonify({"success": False, "message": e.message}), e.status_code


def internal_error(context: str):
    current_app.logger.exception("%s: %s", context, request_shape())
    return jsonify({"success": False, "message": "Internal server error"}), 500
