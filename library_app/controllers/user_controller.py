from flask import Blueprint, jsonify, request

from library_app.errors import LibraryError
from library_app.models.user import User
from library_app.services.auth_service import AuthService
from library_app.services.user_service import UserService
from library_app.utils.http import error_response, json_error, text_field

user_bp = Blueprint("users", __name__)


@user_bp.post("/")
def register():
    data = request.get_json(silent=True) or {}

    try:
        user_id = text_field(data, "user_id")
        name = text_field(data, "name")
        email = text_field(data, "email") or None
    except LibraryError as e:
        return error_response(e)

    if not user_id or not name:
        return json_error("user_id and name are required", 400)

    if not UserService.register(User(user_id=user_id, name=name, email=email)):
        return json_error("User is already registered", 409)
    return jsonify({"success": True, "user_id": user_id}), 201


@user_bp.get("/")
def list_users():
    return jsonify({"success": True, "data": [u.to_dict() for u in UserService.list_users()]})


@user_bp.delete("/<user_id>")
def unregister(user_id: str):
    # the service enforces the admin check so it reports it like any other guard
    try:
        removed = UserService.unregister(user_id, AuthService.current_admin())
    except LibraryError as e:
        return error_response(e)

    if not removed:
        return json_error("User not found", 404)
    return jsonify({"success": True})
