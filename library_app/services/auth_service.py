from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request

from library_app.errors import ValidationError
from library_app.models.admin import Admin
from library_app.repositories.admin_repo import AdminRepo


class AuthService:
    @staticmethod
    def create_admin(username: str, password: str):
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("username and password are required")
        if AdminRepo.get_by_username(username):
            raise ValidationError("Username is already taken")

        admin = Admin(username=username)
        admin.set_password(password)
        AdminRepo.create(admin)
        return admin

    @staticmethod
    def login(username: str, password: str):
        admin = AdminRepo.get_by_username(username)
        if not admin or not admin.check_password(password):
            raise ValidationError("Invalid username or password")

        token = create_access_token(
            identity=str(admin.id),
            additional_claims={"role": "admin", "username": admin.username}
        )
        return token, admin

    @staticmethod
    def current_admin():
        """Admin behind the request's bearer token, or None when there is none."""
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
        if identity is None or (get_jwt() or {}).get("role") != "admin":
            return None
        return AdminRepo.get_by_id(int(identity))
