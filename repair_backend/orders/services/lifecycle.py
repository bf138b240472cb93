# orders/services/lifecycle.py

"""
ORDER LIFECYCLE

Stages are ordered for display only: any stage may move to any other stage.
Reaching the terminal stage (in store, ready for pickup) hands a templated
message to the messaging collaborator, whatever the previous stage was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from orders.models import Order
from orders.services.exceptions import InvalidStageError

logger = logging.getLogger(__name__)

STAGES = tuple(value for value, _ in Order.STATUS_CHOICES)
STAGE_LABELS = dict(Order.STATUS_CHOICES)
TERMINAL_STAGE = Order.STATUS_IN_STORE

PICKUP_MESSAGE = (
    "Hello {name}, your shoes {model} (SN: {serial}) have arrived at the store "
    "and are ready for pickup!"
)


def is_valid_stage(status) -> bool:
    return status in STAGES


def validate_stage(status) -> str:
    value = (str(status or "")).strip()
    if not is_valid_stage(value):
        raise InvalidStageError(f"Unknown status {value!r}. Use one of: {', '.join(STAGES)}")
    return value


def _get(order, name):
    if isinstance(order, dict):
        return order.get(name)
    return getattr(order, name, None)


def build_pickup_message(order) -> str:
    return PICKUP_MESSAGE.format(
        name=_get(order, "customer_name") or "",
        model=_get(order, "shoe_model") or "",
        serial=_get(order, "serial_number") or "",
    )


def notify_if_terminal(order, status: str, notifier):
    """Returns the Notification handed off, or None when nothing was sent."""
    if status != TERMINAL_STAGE or notifier is None or order is None:
        return None
    notification = notifier.notify(_get(order, "whatsapp_number") or "", build_pickup_message(order))
    logger.info(
        "Pickup notification prepared",
        extra={"order_id": str(_get(order, "id")), "serial_number": _get(order, "serial_number")},
    )
    return notification


@dataclass(frozen=True)
class MoveResult:
    order: Order | None
    notification: object | None = None

    @property
    def ok(self) -> bool:
        return self.order is not None


def move_order(repo, *, order_id, status: str, notifier=None) -> MoveResult:
    """Write the new stage, then notify once if it is the terminal stage."""
    from orders.services.order_service import update_order_status

    order = update_order_status(repo, order_id=order_id, status=status)
    if order is None:
        return MoveResult(order=None)
    return MoveResult(order=order, notification=notify_if_terminal(order, order.status, notifier))
