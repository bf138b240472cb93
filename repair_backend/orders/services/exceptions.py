# orders/services/exceptions.py

"""
ORDER SERVICE ERRORS

Closed failure taxonomy for the order store plus the errors the service
layer lets escape to callers (bad input, duplicate serial).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONNECTIVITY = "connectivity"
    CONSTRAINT_VIOLATION = "constraint_violation"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """Raised by OrderRepository; never carries a raw database payload."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class OrderServiceError(Exception):
    """Base exception for errors the service layer raises to callers."""


class InvalidIdentifierError(OrderServiceError, ValueError):
    """Raised when an identifier is not a well-formed UUID."""


class InvalidStageError(OrderServiceError, ValueError):
    """Raised when a status is not one of the workflow stages."""


class DuplicateSerialNumberError(OrderServiceError):
    """Raised when an intake collides with an existing serial number."""

    def __init__(self, serial_number: str = ""):
        self.serial_number = serial_number
        super().__init__("Duplicate Serial Number. Please refresh and try again.")


class InvalidAmountError(OrderServiceError, ValueError):
    """Raised when a money value cannot be read as a decimal amount."""


class UnknownStoreError(OrderServiceError, ValueError):
    """Raised when an intake names a store that does not exist."""

    def __init__(self, store_id=""):
        self.store_id = store_id
        super().__init__(f"Unknown store_id: {store_id}")
