from datetime import datetime, timezone
from webapp.extensions import db


class Image(db.Model):
    __tablename__ = "image"

    image_id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("product.id"),
        nullable=False,
        index=True,
    )
    file_name = db.Column(db.String(), nullable=False)
    s3_bucket_path = db.Column(db.String(), nullable=False)
    date_created = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self):
        return f"<Image {self.image_id} of product {self.product_id}>"
