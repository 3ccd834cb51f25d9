"""Abstract record store."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import CategoryRecord, Client, ExpenseRecord, InvoiceRecord, WorkedHourEntry


class RecordStore(ABC):
    """Abstract base class for the data-access layer.

    Stores hand out immutable records; the engine never writes back.
    """

    @abstractmethod
    def list_invoices(self) -> List[InvoiceRecord]:
        pass

    @abstractmethod
    def list_expenses(self) -> List[ExpenseRecord]:
        pass

    @abstractmethod
    def list_categories(self) -> List[CategoryRecord]:
        pass

    @abstractmethod
    def list_clients(self) -> List[Client]:
        pass

    @abstractmethod
    def list_worked_hours(self, client_id: Optional[int] = None) -> List[WorkedHourEntry]:
        """Entries in arrival order, optionally for one client."""
        pass

    def get_client(self, client_id: int) -> Optional[Client]:
        for client in self.list_clients():
            if client.id == client_id:
                return client
        return None
