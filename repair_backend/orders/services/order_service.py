# orders/services/order_service.py

"""
ORDER SERVICE

Stateless wrappers translating portal intents into order-store operations.

Error policy:
- InvalidIdentifierError / InvalidStageError / InvalidAmountError: raised
  before any data access
- UnknownStoreError: intake names a store that does not exist
- DuplicateSerialNumberError: intake hit the constraint and the serial is taken
- everything else: logged and collapsed to None / [] (see degrade.py)
"""

from __future__ import annotations

import logging

from orders.identifiers import parse_identifier, parse_identifiers, try_parse_identifier
from orders.models import Order
from orders.services.batch import BatchOutcome
from orders.services.degrade import degrade_on_failure
from orders.services.exceptions import (
    DuplicateSerialNumberError,
    ErrorKind,
    RepositoryError,
    UnknownStoreError,
)
from orders.services.lifecycle import validate_stage
from orders.services.money import to_money
from orders.services.serials import allocate_serial_number

logger = logging.getLogger(__name__)

_INTAKE_FIELDS = (
    "customer_name",
    "whatsapp_number",
    "shoe_model",
    "custom_complaint",
    "is_price_unknown",
    "total_price",
    "status",
    "expected_return_date",
    "advance_amount",
    "payment_method",
    "is_in_house",
)


# ======================================================
# READS
# ======================================================


@degrade_on_failure("fetching orders", default=list)
def list_orders(repo, *, store_id=None, refine=None) -> list[Order]:
    """
    Newest first, with store name and complaints expanded.

    A malformed store_id is treated as "no store filter".
    """
    sid = try_parse_identifier(store_id) if store_id else None
    return repo.list_orders(store_id=sid, refine=refine)


@degrade_on_failure("fetching order")
def get_order(repo, *, order_id) -> Order | None:
    return repo.get_order(parse_identifier(order_id, label="order_id"))


def next_serial_number(repo) -> str:
    return allocate_serial_number(repo)


# ======================================================
# INTAKE
# ======================================================


@degrade_on_failure("creating order")
def create_order(repo, *, data: dict, complaint_ids=None) -> Order | None:
    store_raw = data.get("store_id")
    store_id = parse_identifier(store_raw, label="store_id") if store_raw else None
    complaints = parse_identifiers(complaint_ids, label="complaint_id")

    fields = {k: data[k] for k in _INTAKE_FIELDS if k in data and data[k] is not None}
    fields["advance_amount"] = to_money(data.get("advance_amount"))
    fields["is_in_house"] = bool(data.get("is_in_house", False))
    if "status" in fields:
        fields["status"] = validate_stage(fields["status"])
    if data.get("total_price") is not None:
        fields["total_price"] = to_money(data["total_price"])

    if store_id is not None and not repo.store_exists(store_id):
        raise UnknownStoreError(store_id)

    serial = (data.get("serial_number") or "").strip() or allocate_serial_number(repo)

    try:
        order = repo.insert_order(store_id=store_id, serial_number=serial, **fields)
    except RepositoryError as exc:
        if exc.kind == ErrorKind.CONSTRAINT_VIOLATION and repo.serial_number_exists(serial):
            logger.warning(
                "Duplicate serial number on intake",
                extra={"serial_number": serial, "detail": exc.detail},
            )
            raise DuplicateSerialNumberError(serial) from exc
        raise

    if complaints:
        try:
            repo.link_complaints(order.id, repo.existing_complaint_ids(complaints))
        except RepositoryError as exc:
            logger.error(
                "Error linking complaints",
                extra={"order_id": str(order.id), "kind": exc.kind.value},
            )

    logger.info(
        "Order created",
        extra={"order_id": str(order.id), "serial_number": serial, "store_id": str(store_id) if store_id else None},
    )
    return repo.get_order(order.id)


# ======================================================
# SINGLE-FIELD UPDATES
# ======================================================


@degrade_on_failure("updating status")
def update_order_status(repo, *, order_id, status: str) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(oid, status=validate_stage(status))


@degrade_on_failure("updating price")
def update_order_price(repo, *, order_id, price) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(oid, total_price=to_money(price), is_price_unknown=False)


@degrade_on_failure("updating hub price")
def update_hub_price(repo, *, order_id, price) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(oid, hub_price=to_money(price))


@degrade_on_failure("updating expense")
def update_expense(repo, *, order_id, expense) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(oid, expense=to_money(expense))


@degrade_on_failure("updating balance payment")
def update_balance_payment(repo, *, order_id, balance_paid, payment_method: str) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(
        oid,
        balance_paid=to_money(balance_paid),
        balance_payment_method=(payment_method or "").strip(),
    )


@degrade_on_failure("updating order completion")
def update_order_completion(repo, *, order_id, is_completed: bool) -> Order | None:
    oid = parse_identifier(order_id, label="order_id")
    return repo.update_order(oid, is_completed=bool(is_completed))


# ======================================================
# BULK
# ======================================================


def bulk_update_status(repo, *, order_ids, status: str) -> BatchOutcome:
    """
    One status for many orders, one write.

    Ids that no longer exist come back as NOT_FOUND; a store failure marks
    every id with the failure kind.
    """
    ids = parse_identifiers(order_ids, label="order_id")
    stage = validate_stage(status)
    if not ids:
        return BatchOutcome()
    if repo is None:
        return BatchOutcome.failed(ids, ErrorKind.CONNECTIVITY)

    try:
        updated = repo.update_orders(ids, status=stage)
    except RepositoryError as exc:
        logger.error(
            "Error bulk updating status",
            extra={"count": len(ids), "kind": exc.kind.value, "detail": exc.detail},
        )
        return BatchOutcome.failed(ids, exc.kind)

    outcome = BatchOutcome()
    for oid in ids:
        outcome.add(oid, ok=oid in updated, error_kind=ErrorKind.NOT_FOUND)
    return outcome
