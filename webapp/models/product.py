from datetime import datetime, timezone
from webapp.extensions import db


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(), nullable=False)
    description = db.Column(db.String(), nullable=False)
    sku = db.Column(db.String(), nullable=False)
    manufacturer = db.Column(db.String(), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    owner_user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    date_added = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    date_last_updated = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    images = db.relationship("Image", backref="product", lazy="dynamic")

    __table_args__ = (
        db.CheckConstraint(
            "quantity >= 0 AND quantity <= 100", name="ck_product_quantity"
        ),
    )

    def is_owned_by(self, account):
        return account is not None and self.owner_user_id == account.id

    def __repr__(self):
        return f"<Product {self.id}: {self.name}>"
