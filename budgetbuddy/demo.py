from datetime import date, timedelta

from werkzeug.security import generate_password_hash

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo1234"


def seed_demo(store, today=None):
    """Create a demo account with a few expenses for this and last month.

    Does nothing if the demo account already exists. Returns the demo user.
    """
    existing = store.get_user_by_email(DEMO_EMAIL)
    if existing:
        return existing

    today = today or date.today()
    last_month = today.replace(day=1) - timedelta(days=1)
    user = store.create_user(DEMO_EMAIL, generate_password_hash(DEMO_PASSWORD))
    demo = [
        (45.0, "Food", last_month, "Groceries"),
        (1200.0, "Bills", today.replace(day=1), "Rent share"),
        (32.5, "Transport", today, "Cab"),
        (89.99, "Shopping", today, "Shoes"),
        (18.0, "Food", today, "Lunch"),
    ]
    for amount, category, spent_on, note in demo:
        store.create_expense(user.id, amount, category, spent_on, note)
    return user
