from flask import current_app, jsonify
from fieldnotes.extensions import jwt
from fieldnotes.domain.invariants.exceptions import InvariantViolation, ValidationError
from fieldnotes.domain.lifecycle.exceptions import (
    AccessDenied,
    EditLocked,
    MediaNotFound,
    PostNotFound,
    RevisionNotFound,
)


def _sign_in_required(message):
    response = jsonify({
        "error": "Unauthorized",
        "message": message,
        "redirect": current_app.config["LOGIN_URL"],
    })
    response.status_code = 401
    return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "ValidationError",
            "message": str(error),
            "fields": error.fields,
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(PostNotFound)
    @app.errorhandler(RevisionNotFound)
    @app.errorhandler(MediaNotFound)
    def handle_not_found(error):
        response = jsonify({
            "error": "NotFound",
            "message": str(error)
        })
        response.status_code = 404
        return response

    @app.errorhandler(AccessDenied)
    def handle_access_denied(error):
        response = jsonify({
            "error": "Forbidden",
            "message": str(error)
        })
        response.status_code = 403
        return response

    @app.errorhandler(EditLocked)
    def handle_edit_locked(error):
        app.logger.info("Refused edit of locked post %s", error.post_id)
        response = jsonify({
            "error": "EditLocked",
            "message": str(error),
            "redirect": f"{app.config['EDITOR_URL']}?locked=1",
        })
        response.status_code = 409
        return response

    # -------------------------------------------------
    # JWT failures all send the caller to sign in
    # -------------------------------------------------
    @jwt.unauthorized_loader
    def handle_missing_token(reason):
        return _sign_in_required(reason)

    @jwt.invalid_token_loader
    def handle_invalid_token(reason):
        return _sign_in_required(reason)

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header, jwt_payload):
        return _sign_in_required("Token has expired")
