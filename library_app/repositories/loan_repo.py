from datetime import date

from library_app.models.loan import Loan
from library_app.extensions import db


class LoanRepo:
    @staticmethod
    def get(loan_id: int):
        return db.session.get(Loan, loan_id)

    @staticmethod
    def list_all():
        return Loan.query.order_by(Loan.id).all()

    @staticmethod
    def list_by_user(user_pk: int):
        return Loan.query.filter_by(user_id=user_pk).order_by(Loan.id).all()

    @staticmethod
    def list_active_by_user(user_pk: int):
        return Loan.query.filter(
            Loan.user_id == user_pk,
            Loan.return_date.is_(None),
        ).order_by(Loan.id).all()

    @staticmethod
    def add(loan: Loan):
        db.session.add(loan)
        return loan

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def find_overdue(as_of: date, user_pk: int = None):
        query = Loan.query.filter(
            Loan.return_date.is_(None),
            Loan.due_date < as_of,
        )
        if user_pk is not None:
            query = query.filter(Loan.user_id == user_pk)
        return query.order_by(Loan.id).all()
