# routes/applications.py
from flask import Blueprint, request, jsonify, current_app

from controllers.application_controller import (
    OFFER_LETTER_FIELD,
    submit_application,
    upload_offer_letter,
)
from utils.errors import ApplicationError, NotFound
from utils.rate_limiter import limit_mutations
from utils.responses import error_response, internal_error, request_shape

bp = Blueprint("applications", __name__, url_prefix="/api/applications")


def _repository():
    return current_app.extensions["repository"]


def _file_store():
    return current_app.extensions["file_store"]


@bp.route("", methods=["POST"])
@limit_mutations
def create_application():
    # Parsed outside the try so an oversized body surfaces as 413
    form, files = request.form.to_dict(), request.files
    try:
        result = submit_application(form, files, _repository(), _file_store())
    except ApplicationError as e:
        current_app.logger.info("Application rejected (%s): %s %s", e.status_code, e.message, request_shape())
        return error_response(e)
    except Exception:
        return internal_error("Error processing application")

    return jsonify({
        "success": True,
        "referenceId": result["reference_id"],
        "message": "Application submitted successfully",
    }), 201


@bp.route("", methods=["GET"])
def list_applications():
    status = request.args.get("status") or None
    try:
        applications = _repository().list(status=status)
    except ApplicationError as e:
        return error_response(e)
    except Exception:
        return internal_error("Error fetching applications")

    return jsonify({"success": True, "data": [a.to_dict() for a in applications]})


@bp.route("/<int:application_id>", methods=["GET"])
def get_application(application_id):
    try:
        application = _repository().get_by_id(application_id)
    except NotFound as e:
        return error_response(e)
    except Exception:
        return internal_error("Error fetching application")

    return jsonify({"success": True, "data": application.to_dict()})


@bp.route("/<int:application_id>", methods=["PUT"])
@limit_mutations
def update_application_status(application_id):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    try:
        application = _repository().update_status(application_id, payload.get("status"))
    except ApplicationError as e:
        return error_response(e)
    except Exception:
        return internal_error("Error updating status")

    current_app.logger.info("Application %s status set to %s", application.reference_id, application.status)
    return jsonify({
        "success": True,
        "data": application.to_dict(),
        "message": "Status updated successfully",
    })


@bp.route("/<int:application_id>/offer-letter", methods=["POST"])
@limit_mutations
def attach_offer_letter(application_id):
    upload = request.files.get(OFFER_LETTER_FIELD)
    try:
        upload_offer_letter(application_id, upload, _repository(), _file_store())
    except ApplicationError as e:
        current_app.logger.info("Offer letter rejected (%s): %s %s", e.status_code, e.message, request_shape())
        return error_response(e)
    except Exception:
        return internal_error("Error uploading offer letter")

    return jsonify({"success": True, "message": "Offer letter uploaded successfully"})
