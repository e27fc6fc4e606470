##########################################
# External Modules
##########################################

from flask import Flask, jsonify
from flask_cors import CORS
from flask_talisman import Talisman
from common.exceptions import InvalidUsageError, NotFoundError, ValidationError
from common.log import get_logger, info, debug, warning
from common.utils import safe_get_env_var

logger = get_logger("portal")


def _register_error_handlers(app):
    def _error_response(message, status_code):
        return jsonify({
            "success": False,
            "message": message,
            "status_code": status_code
        }), status_code

    @app.errorhandler(InvalidUsageError)
    def handle_invalid_usage(e):
        warning(logger, "Invalid usage", detail=e.message, status_code=e.status_code)
        return _error_response(e.message, e.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        warning(logger, "Validation failed", detail=e.message)
        return _error_response(e.message, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return _error_response(e.message, 404)


def create_app():
    ##########################################
    # Environment Variables
    ##########################################
    client_origin_url = safe_get_env_var("CLIENT_ORIGIN_URL", "*")
    info(logger, "Client Origin URL", client_origin_url=client_origin_url)

    ##########################################
    # Flask App Instance
    ##########################################

    app = Flask(__name__, instance_relative_config=True)
    info(logger, "Started Flask")

    ##########################################
    # HTTP Security Headers
    ##########################################

    csp = {
        'default-src': ['\'self\''],
        'frame-ancestors': ['\'none\'']
    }

    Talisman(
        app,
        force_https=False,
        frame_options='DENY',
        content_security_policy=csp,
        referrer_policy='no-referrer',
        x_xss_protection=False,
        x_content_type_options=True
    )

    @app.after_request
    def add_headers(response):
        response.headers['Cache-Control'] = 'no-store, max-age=0, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    ##########################################
    # CORS
    ##########################################

    if "," in client_origin_url:
        client_origin_url = client_origin_url.split(",")

    if client_origin_url == "*":
        debug(logger, "Using wildcard for CORS client_origin_url - development only")
        CORS(app)
    else:
        debug(logger, "Using configured CORS origins", origins=client_origin_url)
        CORS(
            app,
            resources={r"/api/*": {"origins": client_origin_url}},
            allow_headers=["Authorization", "Content-Type"],
            methods=["GET", "POST"],
            max_age=86400
        )

    ##########################################
    # Blueprint Registration
    ##########################################

    _register_error_handlers(app)

    from api.registration import registration_views

    app.register_blueprint(registration_views.bp)

    return app
