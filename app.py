# app.py
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config.config import Config
from db.database import make_engine, make_session_factory, init_db, ping
from db.repository import ApplicationRepository
from routes.applications import bp as applications_bp
from routes.files import bp as files_bp
from utils.file_store import FileStore
from utils.rate_limiter import init_limiter
from utils.responses import request_shape

CONFIG_KEYS = (
    "DEBUG", "LOG_LEVEL", "ALLOWED_ORIGINS", "UPLOAD_DIR", "MAX_UPLOAD_BYTES", "MAX_CONTENT_LENGTH",
    "RATE_LIMIT", "RATELIMIT_ENABLED", "RATELIMIT_STORAGE_URI", "RATELIMIT_STRATEGY", "DATABASE_URL",
)


def create_app(overrides=None):
    app = Flask(__name__)

    # Load config values from Config, then any explicit overrides (tests)
    for key in CONFIG_KEYS:
        app.config[key] = getattr(Config, key)
    app.config.update(overrides or {})

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # CORS: flask-cors answers allowed origins; anything else is refused outright
    CORS(app, origins=app.config["ALLOWED_ORIGINS"], supports_credentials=True)

    @app.before_request
    def reject_unknown_origin():
        origin = request.headers.get("Origin")
        if origin and origin not in app.config["ALLOWED_ORIGINS"]:
            app.logger.warning("CORS error: Origin %s not allowed", origin)
            return jsonify({"success": False, "message": "Not allowed by CORS"}), 403

    # Process-wide resources, created once and shared by every request
    engine = make_engine(app.config["DATABASE_URL"])
    init_db(engine)
    app.extensions["db_engine"] = engine
    app.extensions["repository"] = ApplicationRepository(make_session_factory(engine))
    app.extensions["file_store"] = FileStore(app.config["UPLOAD_DIR"], max_bytes=app.config["MAX_UPLOAD_BYTES"])

    # rate limiting
    init_limiter(app)

    # register blueprints
    app.register_blueprint(applications_bp)
    app.register_blueprint(files_bp)

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code == 413:
            message = "Request too large"
        elif e.code == 429:
            message = "Too many requests, please try again later"
        else:
            message = e.description or e.name
        if e.code >= 500:
            app.logger.error("HTTP %s: %s", e.code, request_shape())
        return jsonify({"success": False, "message": message}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception("Unhandled error: %s", request_shape())
        return jsonify({"success": False, "message": "Something went wrong"}), 500

    @app.route("/", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/health/db", methods=["GET"])
    def health_db():
        """Simple DB health check endpoint.
        Returns 200 if DB is reachable and a basic select 1 works, otherwise returns 503.
        """
        try:
            ping(engine)
            return jsonify({"db": "ok"})
        except Exception as e:
            app.logger.exception("DB health check failed: %s", e)
            return jsonify({"db": "error"}), 503

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(host=Config.APP_HOST, port=Config.APP_PORT, debug=Config.DEBUG)
