# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Raised before any data access; everything else follows the order service's
collapse-to-default policy.
"""

from orders.services.exceptions import OrderServiceError


class AccountingServiceError(OrderServiceError):
    """Base exception for accounting service input errors."""


class InvalidPortalError(AccountingServiceError, ValueError):
    """Raised when expense distribution names an unknown portal."""


class InvalidPeriodError(AccountingServiceError, ValueError):
    """Raised when a P&L period is not this_month / prev_month / custom."""
