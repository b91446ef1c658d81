from functools import wraps
from flask import g, jsonify

from library_app.services.auth_service import AuthService


def admin_required(view):
    """Rejects the request unless it carries an admin token; the admin is put on ``g.admin``."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        admin = AuthService.current_admin()
        if admin is None:
            return jsonify({"success": False, "message": "Admin login required"}), 403
        g.admin = admin
        return view(*args, **kwargs)
    return wrapped
