"""Expense record store.

The whole expense collection is persisted as one JSON array under a fixed
key. Every mutation is a full read-modify-write with no locking; two writers
racing on the same storage will lose one of the writes.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

from spendtrack.domain.models import Expense, ExpenseId
from spendtrack.store.storage import FileStorage, KeyValueStorage

STORAGE_KEY = "expense-tracker-data"

logger = structlog.get_logger(__name__)


def serialize_expenses(expenses: list[Expense]) -> str:
    """Serialize expenses to the persisted JSON array.

    Raises:
        ValueError: If an amount is not a finite number.
    """
    return json.dumps([expense.to_dict() for expense in expenses], separators=(",", ":"), allow_nan=False)


def deserialize_expenses(payload: str) -> list[Expense]:
    """Parse the persisted JSON array.

    Args:
        payload: JSON text.

    Returns:
        Parsed expenses.

    Raises:
        ValueError: If the payload is not valid JSON or not a list of expenses.
        KeyError: If a record is missing a field.
        TypeError: If a record field has the wrong type.
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("Persisted expenses must be a JSON array")
    return [Expense.from_dict(item) for item in data]


class RecordStore(ABC):
    """Capability interface for persisting the expense collection.

    Backends implement load, save and clear; the mutators are built on top of
    them and each returns the new full collection.
    """

    @abstractmethod
    def load(self) -> list[Expense]:
        """Load all expenses. Returns an empty list if nothing usable is stored."""

    @abstractmethod
    def save(self, expenses: list[Expense]) -> None:
        """Persist the full collection, replacing whatever was stored."""

    @abstractmethod
    def clear(self) -> None:
        """Delete the persisted collection."""

    def add(self, expense: Expense) -> list[Expense]:
        """Append an expense and persist.

        Args:
            expense: New expense.

        Returns:
            Updated collection.
        """
        expenses = [*self.load(), expense]
        self.save(expenses)
        logger.info("expense_added", expense_id=expense.id)
        return expenses

    def update(self, expense_id: ExpenseId, expense: Expense) -> list[Expense]:
        """Replace the expense with the given id and persist.

        Args:
            expense_id: Id of the expense to replace.
            expense: Replacement record.

        Returns:
            Updated collection. Unchanged if no expense has that id.
        """
        expenses = [expense if existing.id == expense_id else existing for existing in self.load()]
        self.save(expenses)
        logger.info("expense_updated", expense_id=expense_id)
        return expenses

    def remove(self, expense_id: ExpenseId) -> list[Expense]:
        """Delete the expense with the given id and persist.

        Args:
            expense_id: Id of the expense to delete.

        Returns:
            Updated collection. Unchanged if no expense has that id.
        """
        expenses = [existing for existing in self.load() if existing.id != expense_id]
        self.save(expenses)
        logger.info("expense_removed", expense_id=expense_id)
        return expenses

    def find(self, expense_id: ExpenseId) -> Expense | None:
        """Get an expense by id, or None if absent."""
        return next((expense for expense in self.load() if expense.id == expense_id), None)


class ExpenseStore(RecordStore):
    """Record store over any KeyValueStorage.

    Read and parse failures load as an empty collection; write failures are
    logged and otherwise ignored.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[Expense]:
        try:
            payload = self.storage.get_item(self.key)
            if not payload:
                return []
            return deserialize_expenses(payload)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("expenses_load_failed", key=self.key, error=str(e))
            return []

    def save(self, expenses: list[Expense]) -> None:
        try:
            self.storage.set_item(self.key, serialize_expenses(expenses))
        except (OSError, ValueError) as e:
            logger.error("expenses_save_failed", key=self.key, count=len(expenses), error=str(e))

    def clear(self) -> None:
        self.storage.remove_item(self.key)
        logger.info("expenses_cleared", key=self.key)


def get_expense_store(data_path: Path | None = None) -> ExpenseStore:
    """Create the file-backed expense store.

    Args:
        data_path: Storage file path. If None, uses default location.

    Returns:
        ExpenseStore persisting to a FileStorage.
    """
    return ExpenseStore(FileStorage(data_path))
