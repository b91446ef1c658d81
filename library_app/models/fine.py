from datetime import datetime
from decimal import Decimal

from library_app.extensions import db

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS)


class Fine(db.Model):
    __tablename__ = "fines"
    __table_args__ = (
        db.CheckConstraint("amount >= 0", name="ck_fines_amount_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    loan_id = db.Column(db.Integer, db.ForeignKey("loans.id"), unique=True, nullable=True, index=True)

    # amount is what is still owed; assessed_amount is everything ever charged
    amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    assessed_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    is_paid = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="fines")
    loan = db.relationship("Loan", backref=db.backref("fine", uselist=False))

    @classmethod
    def charge(cls, user, amount, loan=None) -> "Fine":
        amount = to_money(amount)
        return cls(user=user, loan=loan, amount=amount, assessed_amount=amount, is_paid=amount <= 0)

    def add_charge(self, extra) -> None:
        extra = to_money(extra)
        self.amount = to_money(self.amount) + extra
        self.assessed_amount = to_money(self.assessed_amount) + extra
        self.is_paid = self.amount <= 0

    def pay(self, payment) -> Decimal:
        """Apply up to ``payment`` to this fine and return how much was used."""
        payment = to_money(payment)
        outstanding = to_money(self.amount)
        if payment <= 0 or outstanding <= 0:
            return Decimal("0.00")

        used = min(payment, outstanding)
        self.amount = outstanding - used
        if self.amount <= 0:
            self.amount = Decimal("0.00")
            self.is_paid = True
        return used

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user.user_id if self.user else None,
            "loan_id": self.loan_id,
            "amount": float(self.amount),
            "assessed_amount": float(self.assessed_amount),
            "is_paid": bool(self.is_paid),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
