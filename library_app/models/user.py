from datetime import datetime
from library_app.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    # external library card id, identity of the user
    user_id = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # no delete cascade: removing a user keeps loan/fine history, FK is nulled
    loans = db.relationship("Loan", back_populates="user", order_by="Loan.id")
    fines = db.relationship("Fine", back_populates="user", order_by="Fine.id")

    def to_dict(self):
        return {"user_id": self.user_id, "name": self.name, "email": self.email}

    def __repr__(self):
        return f"<User {self.user_id}>"
