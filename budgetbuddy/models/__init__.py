from .user import User
from .expense import Expense

__all__ = ["User", "Expense"]
