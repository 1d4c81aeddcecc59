from flask import current_app

from .base import Store
from .memory import MemoryStore

EXTENSION_KEY = "budgetbuddy.store"


def build_store(backend):
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlalchemy":
        from .sql import SqlAlchemyStore
        return SqlAlchemyStore()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def get_store() -> Store:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["Store", "MemoryStore", "build_store", "get_store", "EXTENSION_KEY"]
