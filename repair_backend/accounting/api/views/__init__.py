# accounting/api/views/__init__.py

"""
accounting.api.views package

Read-only reports over completed orders.
"""

from accounting.api.views.profit_and_loss import ProfitAndLossView

__all__ = [
    "ProfitAndLossView",
]
