"""In-memory record store."""
from typing import Iterable, List, Optional

from ..models import CategoryRecord, Client, ExpenseRecord, InvoiceRecord, WorkedHourEntry
from .backend import RecordStore


class MemoryStore(RecordStore):
    """Holds records in tuples. Used by tests and as the YAML store's base."""

    def __init__(
        self,
        invoices: Iterable[InvoiceRecord] = (),
        expenses: Iterable[ExpenseRecord] = (),
        categories: Iterable[CategoryRecord] = (),
        clients: Iterable[Client] = (),
        worked_hours: Iterable[WorkedHourEntry] = (),
    ):
        self.invoices = tuple(invoices)
        self.expenses = tuple(expenses)
        self.categories = tuple(categories)
        self.clients = tuple(clients)
        self.worked_hours = tuple(worked_hours)

    def list_invoices(self) -> List[InvoiceRecord]:
        return list(self.invoices)

    def list_expenses(self) -> List[ExpenseRecord]:
        return list(self.expenses)

    def list_categories(self) -> List[CategoryRecord]:
        return list(self.categories)

    def list_clients(self) -> List[Client]:
        return list(self.clients)

    def list_worked_hours(self, client_id: Optional[int] = None) -> List[WorkedHourEntry]:
        return [e for e in self.worked_hours if client_id is None or e.client_id == client_id]
