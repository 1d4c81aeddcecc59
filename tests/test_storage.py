import threading
from datetime import date

import pytest

from budgetbuddy import create_app
from budgetbuddy.config import TestingConfig
from budgetbuddy.errors import DuplicateEmailError
from budgetbuddy.storage import MemoryStore, build_store
from budgetbuddy.storage.sql import SqlAlchemyStore

from conftest import TickingClock


class SqlTestingConfig(TestingConfig):
    STORAGE_BACKEND = "sqlalchemy"


@pytest.fixture(params=["memory", "sqlalchemy"])
def any_store(request):
    if request.param == "memory":
        yield MemoryStore(clock=TickingClock())
        return
    store = SqlAlchemyStore(clock=TickingClock())
    app = create_app(SqlTestingConfig, store=store)
    with app.app_context():
        yield store


def test_signups_with_distinct_emails_get_distinct_ids(any_store):
    a = any_store.create_user("a@example.com", "hash-a")
    b = any_store.create_user("b@example.com", "hash-b")
    assert a.id != b.id
    with pytest.raises(DuplicateEmailError):
        any_store.create_user("a@example.com", "other")


def test_email_lookup_is_case_sensitive(any_store):
    user = any_store.create_user("Case@example.com", "hash")
    assert any_store.get_user_by_email("Case@example.com") == user
    assert any_store.get_user_by_email("case@example.com") is None
    # a different case is a different email
    any_store.create_user("case@example.com", "hash")


def test_get_user(any_store):
    user = any_store.create_user("a@example.com", "hash")
    assert any_store.get_user(user.id).email == "a@example.com"
    assert any_store.get_user("missing") is None


def test_expenses_filtered_by_owner_newest_first(any_store):
    alice = any_store.create_user("alice@example.com", "h")
    bob = any_store.create_user("bob@example.com", "h")
    first = any_store.create_expense(alice.id, 10, "Food", date(2026, 3, 1))
    any_store.create_expense(bob.id, 99, "Bills", date(2026, 3, 2))
    second = any_store.create_expense(alice.id, 20, "Transport", date(2026, 2, 1), "bus")

    listed = any_store.get_expenses_by_user_id(alice.id)
    assert [e.id for e in listed] == [second.id, first.id]
    assert all(e.user_id == alice.id for e in listed)
    assert listed[0].note == "bus"
    assert listed[1].note is None


def test_expenses_for_unknown_owner_is_empty(any_store):
    assert any_store.get_expenses_by_user_id("nobody") == []


def test_created_expense_fields(any_store):
    user = any_store.create_user("a@example.com", "h")
    exp = any_store.create_expense(user.id, 12.5, "Shopping", date(2026, 4, 9), "socks")
    assert exp.id
    assert exp.amount == 12.5
    assert exp.category == "Shopping"
    assert exp.date == date(2026, 4, 9)
    assert exp.created_at.tzinfo is not None


def test_memory_store_keeps_insertion_order_on_equal_timestamps():
    fixed = TickingClock().now
    store = MemoryStore(clock=lambda: fixed)
    a = store.create_expense("u", 1, "Food", date(2026, 1, 1))
    b = store.create_expense("u", 2, "Food", date(2026, 1, 1))
    assert [e.id for e in store.get_expenses_by_user_id("u")] == [b.id, a.id]


def test_build_store_rejects_unknown_backend():
    assert isinstance(build_store("memory"), MemoryStore)
    with pytest.raises(ValueError):
        build_store("redis")


def test_concurrent_signups_with_same_email_create_one_user():
    store = MemoryStore()
    start = threading.Barrier(8)
    created, rejected = [], []

    def signup():
        start.wait()
        try:
            created.append(store.create_user("race@example.com", "h"))
        except DuplicateEmailError:
            rejected.append(True)

    threads = [threading.Thread(target=signup) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert len(rejected) == 7
    assert store.get_user_by_email("race@example.com") == created[0]
