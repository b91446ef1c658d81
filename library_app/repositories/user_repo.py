from library_app.models.user import User
from library_app.extensions import db


class UserRepo:
    @staticmethod
    def get_by_user_id(user_id: str):
        return User.query.filter_by(user_id=user_id).first()

    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(pk: int):
        return db.session.get(User, pk)

    @staticmethod
    def list_all():
        return User.query.order_by(User.id).all()

    @staticmethod
    def add(user: User):
        db.session.add(user)
        return user

    @staticmethod
    def delete(user: User):
        db.session.delete(user)

    @staticmethod
    def commit():
        db.session.commit()
