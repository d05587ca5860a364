from datetime import datetime, timezone
from webapp.extensions import db


class Account(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(), nullable=False)
    last_name = db.Column(db.String(), nullable=False)
    username = db.Column(db.String(), unique=True, nullable=False, index=True)
    password = db.Column(db.String(), nullable=False)  # argon2 hash
    account_created = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    account_updated = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    products = db.relationship("Product", backref="owner", lazy="dynamic")

    def __repr__(self):
        return f"<Account {self.id}: {self.username}>"
