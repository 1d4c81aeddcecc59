from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import List, Optional

from ..records import Expense, User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Store(ABC):
    """Users and expenses, keyed by generated identifiers.

    There are no update or delete operations: both record kinds are
    immutable once created.
    """

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive match on the stored email."""

    @abstractmethod
    def create_user(self, email: str, password: str) -> User:
        """Store a new user. Raises DuplicateEmailError if the email is taken."""

    @abstractmethod
    def get_expenses_by_user_id(self, user_id: str) -> List[Expense]:
        """The owner's expenses, newest created first."""

    @abstractmethod
    def create_expense(
        self,
        user_id: str,
        amount: float,
        category: str,
        date: date,
        note: Optional[str] = None,
    ) -> Expense:
        ...
