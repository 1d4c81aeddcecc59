from datetime import datetime, timezone
from ..extensions import db
from .. import records


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.String(36), primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)  # werkzeug hash
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    expenses = db.relationship("Expense", backref="user", lazy=True)

    def to_record(self) -> records.User:
        return records.User(
            id=self.id,
            email=self.email,
            password=self.password,
            created_at=_as_utc(self.created_at),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
