"""YAML file record store.

One document with a list per record type:

    categories:
      - {id: 1, name: Software, color: "#3b82f6"}
    expenses:
      - {id: 1, amount: 49.90, category_id: 1, expense_date: 2024-03-02}
    invoices: [...]
    clients: [...]
    worked_hours: [...]
"""
import logging
from pathlib import Path

import yaml

from ..models import CategoryRecord, Client, ExpenseRecord, InvoiceRecord, WorkedHourEntry
from .memory import MemoryStore

logger = logging.getLogger(__name__)


class YamlStore(MemoryStore):
    """Reads every record once at construction."""

    def __init__(self, path):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Data file not found: {self.path}")

        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        super().__init__(
            invoices=[InvoiceRecord.from_dict(r) for r in data.get('invoices', [])],
            expenses=[ExpenseRecord.from_dict(r) for r in data.get('expenses', [])],
            categories=[CategoryRecord.from_dict(r) for r in data.get('categories', [])],
            clients=[Client.from_dict(r) for r in data.get('clients', [])],
            worked_hours=[WorkedHourEntry.from_dict(r) for r in data.get('worked_hours', [])],
        )
        logger.info(
            f"Loaded {self.path}: {len(self.invoices)} invoices, {len(self.expenses)} expenses, "
            f"{len(self.worked_hours)} worked-hours entries"
        )
