from functools import wraps
from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from fieldnotes.extensions import db
from fieldnotes.models.user import User


def login_required(fn):
    """
    Verify the caller's access token and load the active user into
    ``g.current_user``. Token problems are answered by the JWT callbacks
    registered in ``fieldnotes.errors``.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        user = db.session.get(User, get_jwt_identity())
        if user is None or not user.is_active:
            return jsonify({
                "error": "Unauthorized",
                "redirect": current_app.config["LOGIN_URL"],
            }), 401

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = g.get("current_user")

            if user is None or user.role not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
