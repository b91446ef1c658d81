from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt

from library_app.errors import ValidationError
from library_app.repositories.admin_repo import AdminRepo
from library_app.services.auth_service import AuthService
from library_app.utils.http import text_field

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, admin = AuthService.login(
            text_field(data, "username"),
            str(data.get("password") or "")
        )
        return jsonify({
            "success": True,
            "access_token": token,
            "admin": {"id": admin.id, "username": admin.username}
        })
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 401


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    admin = AdminRepo.get_by_id(int(get_jwt_identity()))
    if not admin:
        return jsonify({"success": False, "message": "Admin not found"}), 404

    return jsonify({
        "success": True,
        "admin": {
            "id": admin.id,
            "username": admin.username,
            "role": get_jwt().get("role")
        }
    })
