# routes/files.py
from flask import Blueprint, request, jsonify, current_app, send_file

from utils.errors import NotFound
from utils.responses import error_response, internal_error

bp = Blueprint("files", __name__, url_prefix="/api")


@bp.route("/offer-letter", methods=["GET"])
def get_offer_letter():
    reference_id = request.args.get("reference_id")
    email = request.args.get("email")
    if not reference_id or not email:
        return jsonify({"success": False, "message": "Reference ID and Email are required"}), 400

    try:
        stored_name = current_app.extensions["repository"].get_offer_letter(reference_id, email)
    except NotFound as e:
        return error_response(e)
    except Exception:
        return internal_error("Error retrieving offer letter")

    # Only the opaque stored name; it is fetched through /api/files/<name>
    return jsonify({"success": True, "data": {"offer_letter_path": stored_name}})


@bp.route("/files/<filename>", methods=["GET"])
def download_file(filename):
    try:
        stream = current_app.extensions["file_store"].open(filename)
    except NotFound:
        current_app.logger.info("File not found: %s", filename)
        return error_response(NotFound("File not found"))
    except Exception:
        return internal_error("Error reading file")

    return send_file(
        stream,
        mimetype="application/pdf",
        as_attachment=True,
        download_name=filename,
    )
