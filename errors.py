"""Error types raised by the ledger and its backing store."""

from typing import List, Optional


class SaldoError(Exception):
    """Base class for all Saldo errors."""


class ValidationError(SaldoError):
    """Required transaction or category fields are missing or invalid.

    Raised before any state is changed.
    """

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = list(fields or [])
        if self.fields:
            message = f"{message} ({', '.join(self.fields)})"
        super().__init__(message)


class NotFoundError(SaldoError):
    """An update or delete referenced an id that does not exist."""

    def __init__(self, kind: str, id: str):
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} with ID '{id}' not found")


class SyncFailure(SaldoError):
    """A round trip to the backing store failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        message = f"Failed to sync '{operation}' with the backing store"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
