from library_app.models.fine import Fine
from library_app.extensions import db


class FineRepo:
    @staticmethod
    def list_by_user(user_pk: int):
        return Fine.query.filter_by(user_id=user_pk).order_by(Fine.id).all()

    @staticmethod
    def list_unpaid_by_user(user_pk: int):
        # id order == insertion order, payments are applied oldest first
        return Fine.query.filter_by(user_id=user_pk, is_paid=False).order_by(Fine.id).all()

    @staticmethod
    def has_unpaid(user_pk: int) -> bool:
        return Fine.query.filter_by(user_id=user_pk, is_paid=False).first() is not None

    @staticmethod
    def get_by_loan(loan_id: int):
        return Fine.query.filter_by(loan_id=loan_id).first()

    @staticmethod
    def add(fine: Fine):
        db.session.add(fine)
        return fine

    @staticmethod
    def commit():
        db.session.commit()
