from datetime import datetime, timedelta, timezone

import pytest

from budgetbuddy import create_app
from budgetbuddy.config import TestingConfig
from budgetbuddy.errors import AdviceProviderError
from budgetbuddy.services.advice import AdviceService
from budgetbuddy.storage import MemoryStore


class StubProvider:
    name = "stub"

    def __init__(self, reply='{"tips": ["Cook at home", "Walk more"]}', exc=None):
        self.reply = reply
        self.exc = exc
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.exc is not None:
            raise self.exc
        return self.reply


class TickingClock:
    """Each call returns a timestamp one second after the previous one."""

    def __init__(self, start=datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def store():
    return MemoryStore(clock=TickingClock())


@pytest.fixture
def app(store, provider):
    return create_app(TestingConfig, store=store, advice_service=AdviceService(provider))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def failing_provider():
    return StubProvider(exc=AdviceProviderError("connection refused"))


@pytest.fixture
def signed_up(client):
    resp = client.post("/api/auth/signup", json={"email": "ana@example.com", "password": "secret1"})
    assert resp.status_code == 200
    return resp.get_json()["user"]
