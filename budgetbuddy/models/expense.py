from ..extensions import db
from .. import records
from .user import _as_utc


class Expense(db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.String(36), primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(50), nullable=False)
    spent_on = db.Column(db.Date, nullable=False)
    note = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    seq = db.Column(db.Integer, nullable=False, default=0)  # insertion order, breaks created_at ties

    def to_record(self) -> records.Expense:
        return records.Expense(
            id=self.id,
            user_id=self.user_id,
            amount=self.amount,
            category=self.category,
            date=self.spent_on,
            note=self.note,
            created_at=_as_utc(self.created_at),
        )
