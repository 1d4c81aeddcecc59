"""Plain records handed out by every store backend.

The SQLAlchemy models in :mod:`budgetbuddy.models` convert to these, so route
code never depends on which backend is active.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from flask_login import UserMixin
from werkzeug.security import check_password_hash

CATEGORIES = ("Food", "Transport", "Shopping", "Bills", "Others")


@dataclass(frozen=True)
class User(UserMixin):
    id: str
    email: str
    password: str
    created_at: datetime

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password, password)

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True)
class Expense:
    id: str
    user_id: str
    amount: float
    category: str
    date: date
    note: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount,
            "category": self.category,
            "date": self.date.isoformat(),
            "note": self.note,
            "createdAt": self.created_at.isoformat(),
        }
