"""Store layer - provides persistence for the application.

This module re-exports the public store classes and functions for easy importing.
"""

from spendtrack.store.records import (
    STORAGE_KEY,
    ExpenseStore,
    RecordStore,
    deserialize_expenses,
    get_expense_store,
    serialize_expenses,
)
from spendtrack.store.storage import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    get_storage_path,
)

__all__ = [
    # Records
    "STORAGE_KEY",
    "ExpenseStore",
    "RecordStore",
    "deserialize_expenses",
    "get_expense_store",
    "serialize_expenses",
    # Storage backends
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "get_storage_path",
]
