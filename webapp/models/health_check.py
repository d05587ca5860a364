from datetime import datetime, timezone
from webapp.extensions import db


class HealthCheck(db.Model):
    __tablename__ = "health_checks"

    check_id = db.Column(db.Integer, primary_key=True)
    check_datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    def __repr__(self):
        return f"<HealthCheck {self.check_id} at {self.check_datetime}>"
