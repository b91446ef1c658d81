from datetime import datetime, date, timedelta

from library_app.extensions import db
from library_app.errors import AlreadyReturnedError, ValidationError
from library_app.policy import ItemType


class Loan(db.Model):
    __tablename__ = "loans"

    id = db.Column(db.Integer, primary_key=True)

    # item is referenced by type + identifier; title copied for reports
    item_type = db.Column(db.Enum(ItemType, native_enum=False, length=20), nullable=False)
    item_identifier = db.Column(db.String(100), nullable=False, index=True)
    item_title = db.Column(db.String(255), nullable=False)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    borrow_date = db.Column(db.Date, nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    return_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", back_populates="loans")

    @classmethod
    def open(cls, item, user, borrow_date: date) -> "Loan":
        if item is None or user is None or borrow_date is None:
            raise ValidationError("Item, user and borrow date are required")
        return cls(
            item_type=item.item_type,
            item_identifier=item.identifier,
            item_title=item.title,
            user=user,
            borrow_date=borrow_date,
            due_date=borrow_date + timedelta(days=item.loan_period_days),
        )

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None

    @property
    def status(self) -> str:
        return "returned" if self.is_returned else "active"

    def is_overdue(self, as_of: date) -> bool:
        return self.return_date is None and as_of > self.due_date

    def days_overdue(self, as_of: date) -> int:
        if not self.is_overdue(as_of):
            return 0
        return (as_of - self.due_date).days

    def mark_returned(self, on: date) -> None:
        if self.is_returned:
            raise AlreadyReturnedError(f"Loan {self.id} was already returned on {self.return_date}")
        self.return_date = on

    def to_dict(self):
        return {
            "id": self.id,
            "item_type": self.item_type.name,
            "item_identifier": self.item_identifier,
            "item_title": self.item_title,
            "user_id": self.user.user_id if self.user else None,
            "borrow_date": self.borrow_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "status": self.status,
        }

    def __repr__(self):
        return f"<Loan {self.id} {self.item_type.name}:{self.item_identifier}>"
