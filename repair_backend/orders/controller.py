# orders/controller.py

"""
OPTIMISTIC UPDATE CONTROLLER

Holds the portal's in-memory snapshot of orders (API shape: dicts keyed by
field name) and applies single-field edits optimistically:

1) rewrite only the matching order in memory
2) issue the remote update through the backend
3) on an exception or a falsy result, reconcile

Reconciliation is chosen per operation:
- REFETCH      discard local state and reload the whole collection
- FIELD_REVERT restore only the fields this operation changed

Defaults: REFETCH everywhere except the completion toggle (FIELD_REVERT).
Pass policies={...} to override some operations, or a single ReconcilePolicy
to use one policy for all of them.

Backend protocol (see LocalOrderBackend):
    fetch_orders() -> list[dict]
    set_price / set_hub_price / set_expense(order_id, value) -> truthy on success
    record_balance_payment(order_id, balance_paid, payment_method)
    set_completion(order_id, is_completed)
    move(order_id, status)
    bulk_move(order_ids, status) -> BatchOutcome
    distribute_expense(order_ids, amount, note, portal) -> BatchOutcome
"""

from __future__ import annotations

import logging
from enum import Enum

from accounting.services.expense_service import PORTAL_STORE, distribute_expense
from orders.api.serializers import OrderSerializer
from orders.board import OrderBoard
from orders.services import order_service
from orders.services.batch import BatchOutcome
from orders.services.exceptions import ErrorKind, OrderServiceError
from orders.services.lifecycle import TERMINAL_STAGE, notify_if_terminal, validate_stage
from orders.services.money import ZERO, to_money

logger = logging.getLogger(__name__)


class ReconcilePolicy(str, Enum):
    REFETCH = "refetch"
    FIELD_REVERT = "field_revert"


OP_PRICE = "price"
OP_HUB_PRICE = "hub_price"
OP_EXPENSE = "expense"
OP_BALANCE_PAYMENT = "balance_payment"
OP_COMPLETION = "completion"
OP_STATUS = "status"

DEFAULT_POLICIES = {
    OP_PRICE: ReconcilePolicy.REFETCH,
    OP_HUB_PRICE: ReconcilePolicy.REFETCH,
    OP_EXPENSE: ReconcilePolicy.REFETCH,
    OP_BALANCE_PAYMENT: ReconcilePolicy.REFETCH,
    OP_COMPLETION: ReconcilePolicy.FIELD_REVERT,
    OP_STATUS: ReconcilePolicy.REFETCH,
}


def _money_str(value) -> str:
    return str(to_money(value))


class OptimisticOrderController:
    def __init__(self, backend, *, notifier=None, policies=None):
        self.backend = backend
        self.notifier = notifier
        self.orders: list[dict] = []
        self.last_notification = None

        if isinstance(policies, ReconcilePolicy):
            self.policies = {op: policies for op in DEFAULT_POLICIES}
        else:
            self.policies = {**DEFAULT_POLICIES, **(policies or {})}

    # ======================================================
    # SNAPSHOT
    # ======================================================

    def refresh(self) -> list[dict]:
        self.orders = [dict(o) for o in self.backend.fetch_orders()]
        return self.orders

    def get(self, order_id) -> dict | None:
        index = self._index_of(order_id)
        return None if index is None else self.orders[index]

    def board(self, **filters) -> OrderBoard:
        return OrderBoard(self.orders, **filters)

    def _index_of(self, order_id):
        key = str(order_id)
        for i, order in enumerate(self.orders):
            if str(order.get("id")) == key:
                return i
        return None

    # ======================================================
    # CORE
    # ======================================================

    def _apply(self, operation: str, order_id, changes: dict, call) -> bool:
        index = self._index_of(order_id)
        previous = None
        if index is not None:
            current = self.orders[index]
            previous = {k: current.get(k) for k in changes}
            self.orders[index] = {**current, **changes}

        try:
            result = call()
        except OrderServiceError:
            self._reconcile(operation, order_id, previous)
            raise
        except Exception:
            logger.exception(
                "Remote update failed",
                extra={"operation": operation, "order_id": str(order_id)},
            )
            self._reconcile(operation, order_id, previous)
            return False

        if not result:
            logger.warning(
                "Remote update rejected",
                extra={"operation": operation, "order_id": str(order_id)},
            )
            self._reconcile(operation, order_id, previous)
            return False
        return True

    def _reconcile(self, operation: str, order_id, previous: dict | None) -> None:
        policy = self.policies.get(operation, ReconcilePolicy.REFETCH)
        if policy == ReconcilePolicy.REFETCH:
            self.refresh()
            return

        index = self._index_of(order_id)
        if index is not None and previous is not None:
            self.orders[index] = {**self.orders[index], **previous}

    # ======================================================
    # SINGLE-ORDER EDITS
    # ======================================================

    def set_price(self, order_id, price) -> bool:
        changes = {"total_price": _money_str(price), "is_price_unknown": False}
        return self._apply(
            OP_PRICE, order_id, changes, lambda: self.backend.set_price(order_id, price)
        )

    def set_hub_price(self, order_id, price) -> bool:
        return self._apply(
            OP_HUB_PRICE,
            order_id,
            {"hub_price": _money_str(price)},
            lambda: self.backend.set_hub_price(order_id, price),
        )

    def set_expense(self, order_id, expense) -> bool:
        return self._apply(
            OP_EXPENSE,
            order_id,
            {"expense": _money_str(expense)},
            lambda: self.backend.set_expense(order_id, expense),
        )

    def record_balance_payment(self, order_id, balance_paid, payment_method: str) -> bool:
        changes = {
            "balance_paid": _money_str(balance_paid),
            "balance_payment_method": payment_method,
        }
        return self._apply(
            OP_BALANCE_PAYMENT,
            order_id,
            changes,
            lambda: self.backend.record_balance_payment(order_id, balance_paid, payment_method),
        )

    def set_completion(self, order_id, is_completed: bool) -> bool:
        return self._apply(
            OP_COMPLETION,
            order_id,
            {"is_completed": bool(is_completed)},
            lambda: self.backend.set_completion(order_id, bool(is_completed)),
        )

    def move(self, order_id, status: str) -> bool:
        """Stage change; reaching the terminal stage notifies once, after the write."""
        stage = validate_stage(status)
        ok = self._apply(
            OP_STATUS, order_id, {"status": stage}, lambda: self.backend.move(order_id, stage)
        )
        self.last_notification = None
        if ok and stage == TERMINAL_STAGE:
            self.last_notification = notify_if_terminal(self.get(order_id), stage, self.notifier)
        return ok

    # ======================================================
    # MULTI-ORDER
    # ======================================================

    def bulk_move(self, order_ids, status: str) -> BatchOutcome:
        stage = validate_stage(status)
        ids = list(order_ids or [])
        if not ids:
            return BatchOutcome()

        try:
            outcome = self.backend.bulk_move(ids, stage)
        except OrderServiceError:
            raise
        except Exception:
            logger.exception("Bulk move failed", extra={"count": len(ids)})
            return BatchOutcome.failed(ids, ErrorKind.UNKNOWN)

        if outcome.succeeded_ids:
            self.refresh()
        return outcome

    def distribute_expense(self, order_ids, amount, note: str = "", portal: str = PORTAL_STORE) -> BatchOutcome:
        ids = list(order_ids or [])
        if not ids or to_money(amount) <= ZERO:
            return BatchOutcome()

        try:
            outcome = self.backend.distribute_expense(ids, amount, note, portal)
        except OrderServiceError:
            raise
        except Exception:
            logger.exception("Expense distribution failed", extra={"count": len(ids)})
            outcome = BatchOutcome.failed(ids, ErrorKind.UNKNOWN)

        self.refresh()
        return outcome


class LocalOrderBackend:
    """Backend that talks to the order store in-process through the services."""

    def __init__(self, repo, *, store_id=None):
        self.repo = repo
        self.store_id = store_id

    def fetch_orders(self) -> list[dict]:
        orders = order_service.list_orders(self.repo, store_id=self.store_id)
        return [dict(o) for o in OrderSerializer(orders, many=True).data]

    def set_price(self, order_id, price):
        return order_service.update_order_price(self.repo, order_id=order_id, price=price)

    def set_hub_price(self, order_id, price):
        return order_service.update_hub_price(self.repo, order_id=order_id, price=price)

    def set_expense(self, order_id, expense):
        return order_service.update_expense(self.repo, order_id=order_id, expense=expense)

    def record_balance_payment(self, order_id, balance_paid, payment_method):
        return order_service.update_balance_payment(
            self.repo,
            order_id=order_id,
            balance_paid=balance_paid,
            payment_method=payment_method,
        )

    def set_completion(self, order_id, is_completed):
        return order_service.update_order_completion(
            self.repo, order_id=order_id, is_completed=is_completed
        )

    def move(self, order_id, status):
        return order_service.update_order_status(self.repo, order_id=order_id, status=status)

    def bulk_move(self, order_ids, status):
        return order_service.bulk_update_status(self.repo, order_ids=order_ids, status=status)

    def distribute_expense(self, order_ids, amount, note, portal):
        return distribute_expense(
            self.repo, order_ids=order_ids, amount=amount, note=note, portal=portal
        )
