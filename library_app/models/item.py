from datetime import datetime
from library_app.extensions import db
from library_app.policy import ItemType


class LibraryItem(db.Model):
    """
    One row per physical item. Books, CDs and journals share the table and are
    told apart by ``item_type``; ``identifier`` is the ISBN, catalog number or
    ISSN and ``creator`` the author, artist or publisher.
    """
    __tablename__ = "items"
    __table_args__ = (
        db.UniqueConstraint("item_type", "identifier", name="uq_items_type_identifier"),
    )

    id = db.Column(db.Integer, primary_key=True)

    item_type = db.Column(db.Enum(ItemType, native_enum=False, length=20), nullable=False, index=True)
    identifier = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(255), nullable=False, index=True)
    creator = db.Column(db.String(255), nullable=True)

    available = db.Column(db.Boolean, nullable=False, default=True)
    loan_period_days = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "item_type": self.item_type.name,
            "identifier": self.identifier,
            "title": self.title,
            "creator": self.creator,
            "available": bool(self.available),
            "loan_period_days": self.loan_period_days,
        }

    def __repr__(self):
        return f"<LibraryItem {self.item_type.name}:{self.identifier}>"
