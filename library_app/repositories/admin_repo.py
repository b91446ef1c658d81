from library_app.models.admin import Admin
from library_app.extensions import db


class AdminRepo:
    @staticmethod
    def get_by_username(username: str):
        return Admin.query.filter_by(username=username).first()

    @staticmethod
    def get_by_id(admin_id: int):
        return db.session.get(Admin, admin_id)

    @staticmethod
    def create(admin: Admin):
        db.session.add(admin)
        db.session.commit()
        return admin
