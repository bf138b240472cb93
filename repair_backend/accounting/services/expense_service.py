# PATH: accounting/services/expense_service.py

"""
EXPENSE DISTRIBUTION SERVICE

Spreads a shared cost over a set of orders.

Portal decides the target field:
- "hub"   -> hub_price (hub processing cost)
- "store" -> expense   (miscellaneous expense)

Rules:
- amount <= 0 or no orders -> no-op, empty outcome
- shares are cents; remainder cents go to the first orders, so the shares
  always sum to the amount exactly
- every order is incremented on its own (no atomicity across the set);
  the caller gets one result per order
"""

from __future__ import annotations

import logging
from decimal import Decimal

from accounting.services.exceptions import InvalidPortalError
from orders.identifiers import parse_identifiers
from orders.services.batch import BatchOutcome
from orders.services.exceptions import ErrorKind, RepositoryError
from orders.services.money import TWOPLACES, ZERO, to_money

logger = logging.getLogger(__name__)

PORTAL_HUB = "hub"
PORTAL_STORE = "store"

PORTAL_TARGET_FIELDS = {
    PORTAL_HUB: "hub_price",
    PORTAL_STORE: "expense",
}


def target_field_for(portal: str) -> str:
    try:
        return PORTAL_TARGET_FIELDS[str(portal or "").strip().lower()]
    except KeyError:
        raise InvalidPortalError(
            f"Unknown portal {portal!r}. Use one of: {', '.join(PORTAL_TARGET_FIELDS)}"
        ) from None


def split_amount(amount, count: int) -> list[Decimal]:
    """
    amount / count in cents.

    split_amount(100, 3) -> [33.34, 33.33, 33.33]
    """
    total = to_money(amount)
    if count <= 0 or total <= ZERO:
        return []

    cents = int(total * 100)
    base, remainder = divmod(cents, count)
    return [
        (Decimal(base + (1 if i < remainder else 0)) * TWOPLACES)
        for i in range(count)
    ]


def distribute_expense(
    repo,
    *,
    order_ids,
    amount,
    note: str = "",
    portal: str = PORTAL_STORE,
    touch: bool = True,
) -> BatchOutcome:
    field_name = target_field_for(portal)
    ids = parse_identifiers(order_ids, label="order_id")
    shares = split_amount(amount, len(ids))
    if not shares:
        return BatchOutcome()
    if repo is None:
        logger.warning("Order store unavailable; expense distribution skipped")
        return BatchOutcome.failed(ids, ErrorKind.CONNECTIVITY)

    outcome = BatchOutcome()
    for oid, share in zip(ids, shares):
        try:
            repo.increment_order_field(oid, field_name, share, touch=touch)
        except RepositoryError as exc:
            logger.error(
                "Error distributing expense to order",
                extra={"order_id": str(oid), "kind": exc.kind.value, "detail": exc.detail},
            )
            outcome.add(oid, ok=False, error_kind=exc.kind)
        else:
            outcome.add(oid, ok=True)

    logger.info(
        "Expense distributed",
        extra={
            "portal": portal,
            "field": field_name,
            "amount": str(to_money(amount)),
            "note": note,
            "succeeded": len(outcome.succeeded_ids),
            "failed": len(outcome.failed_ids),
        },
    )
    return outcome
