import threading
import uuid

from ..errors import DuplicateEmailError
from ..records import Expense, User
from .base import Store, utcnow


class MemoryStore(Store):
    """Volatile single-process store. Nothing survives a restart."""

    def __init__(self, clock=utcnow):
        self._clock = clock
        self._users = {}
        self._expenses = {}
        self._lock = threading.Lock()

    def get_user(self, user_id):
        return self._users.get(user_id)

    def get_user_by_email(self, email):
        for user in list(self._users.values()):
            if user.email == email:
                return user
        return None

    def create_user(self, email, password):
        # check and insert under one lock so two signups cannot both pass the check
        with self._lock:
            if self.get_user_by_email(email) is not None:
                raise DuplicateEmailError(email)
            user = User(id=str(uuid.uuid4()), email=email, password=password, created_at=self._clock())
            self._users[user.id] = user
        return user

    def get_expenses_by_user_id(self, user_id):
        owned = [e for e in reversed(list(self._expenses.values())) if e.user_id == user_id]
        # stable sort: equal timestamps keep newest insertion first
        return sorted(owned, key=lambda e: e.created_at, reverse=True)

    def create_expense(self, user_id, amount, category, date, note=None):
        with self._lock:
            expense = Expense(
                id=str(uuid.uuid4()),
                user_id=user_id,
                amount=float(amount),
                category=category,
                date=date,
                note=note,
                created_at=self._clock(),
            )
            self._expenses[expense.id] = expense
        return expense
