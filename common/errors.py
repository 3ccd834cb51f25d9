"""Error taxonomy shared by all modules."""
from typing import Optional


class FinanceError(Exception):
    """Base class for backoffice errors."""


class InvalidArgument(FinanceError, ValueError):
    """Malformed or out-of-range input. Caller's fault, maps to a 4xx."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class InvalidPeriod(InvalidArgument):
    """Structurally invalid period (month outside 1-12, empty window)."""


class RenderError(FinanceError):
    """Report renderer could not produce a document."""
