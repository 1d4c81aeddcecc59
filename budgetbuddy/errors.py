class BudgetBuddyError(Exception):
    """Base class for errors raised by Budget Buddy services."""


class DuplicateEmailError(BudgetBuddyError):
    def __init__(self, email):
        super().__init__("User with this email already exists")
        self.email = email


class AdviceProviderError(BudgetBuddyError):
    """The text-generation provider could not be reached or answered badly."""
