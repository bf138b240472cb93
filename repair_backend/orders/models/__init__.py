# orders/models/__init__.py

"""
ORDERS MODELS PACKAGE EXPORTS

Keep this file imports-only.
"""

from orders.models.complaint import Complaint, OrderComplaint
from orders.models.group import GroupExpense, OrderGroup
from orders.models.order import Order

__all__ = [
    "Order",
    "Complaint",
    "OrderComplaint",
    "OrderGroup",
    "GroupExpense",
]
