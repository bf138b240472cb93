# orders/board.py

"""
HUB BOARD VIEW MODEL

Groups a snapshot of orders into one column per workflow stage.

Visible set = store selection AND in-house exclusion AND completion filter
AND search query. Columns always come back in stage order, empty columns
included, so the UI can render a fixed layout.
"""

from __future__ import annotations

from orders.services.lifecycle import STAGE_LABELS, STAGES
from orders.services.search import (
    ALL_STORES,
    filter_by_completion,
    filter_by_store,
    search_orders,
)


def _status_of(order):
    if isinstance(order, dict):
        return order.get("status")
    return getattr(order, "status", None)


class OrderBoard:
    def __init__(
        self,
        orders,
        *,
        store_id=ALL_STORES,
        query: str = "",
        exclude_in_house: bool = False,
        completed=None,
    ):
        self.orders = list(orders)
        self.store_id = store_id or ALL_STORES
        self.query = query or ""
        self.exclude_in_house = exclude_in_house
        self.completed = completed

    @property
    def in_scope(self) -> list:
        """Orders selected by store / in-house / completion, before the search query."""
        scoped = filter_by_store(
            self.orders, self.store_id, exclude_in_house=self.exclude_in_house
        )
        return filter_by_completion(scoped, self.completed)

    @property
    def visible(self) -> list:
        return search_orders(self.in_scope, self.query)

    def columns(self) -> dict:
        columns = {stage: [] for stage in STAGES}
        for order in self.visible:
            status = _status_of(order)
            if status in columns:
                columns[status].append(order)
        return columns

    def summary(self) -> dict:
        return {
            "shown": len(self.visible),
            "in_scope": len(self.in_scope),
            "total": len(self.orders),
        }

    def as_dict(self) -> dict:
        columns = self.columns()
        return {
            "columns": [
                {
                    "status": stage,
                    "label": STAGE_LABELS[stage],
                    "count": len(columns[stage]),
                    "orders": columns[stage],
                }
                for stage in STAGES
            ],
            "summary": self.summary(),
        }
