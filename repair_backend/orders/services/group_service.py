# orders/services/group_service.py

"""
ORDER GROUPS + GROUP EXPENSE LEDGER

A group batches orders so shared costs (courier, materials) can be recorded
once and spread over the members.

add_group_expense:
1) append the ledger row
2) fan amount / members onto each current member's expense, once

Later members never receive earlier shares. Fan-out does not bump
updated_at, so completed orders keep their P&L period.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from accounting.services.expense_service import PORTAL_STORE, distribute_expense
from orders.identifiers import parse_identifier, parse_identifiers
from orders.models import GroupExpense, OrderGroup
from orders.services.batch import BatchOutcome
from orders.services.degrade import degrade_on_failure
from orders.services.exceptions import RepositoryError
from orders.services.money import ZERO, to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupExpenseResult:
    expense: GroupExpense
    distribution: BatchOutcome


@degrade_on_failure("creating group")
def create_group(repo, *, name: str, order_ids) -> OrderGroup | None:
    ids = parse_identifiers(order_ids, label="order_id")
    group = repo.insert_group(name=(name or "").strip())
    if ids:
        assigned = repo.assign_group(ids, group.id)
        missing = [str(oid) for oid in ids if oid not in assigned]
        if missing:
            logger.warning(
                "Group created without some orders",
                extra={"group_id": str(group.id), "missing": missing},
            )
    logger.info("Group created", extra={"group_id": str(group.id), "orders": len(ids)})
    return repo.get_group(group.id)


@degrade_on_failure("fetching groups", default=list)
def list_groups(repo) -> list[OrderGroup]:
    return repo.list_groups()


@degrade_on_failure("adding group expense")
def add_group_expense(repo, *, group_id, description: str, amount) -> GroupExpenseResult | None:
    gid = parse_identifier(group_id, label="group_id")
    value = to_money(amount)
    if value <= ZERO:
        return None

    expense = repo.insert_group_expense(
        group_id=gid, description=(description or "").strip(), amount=value
    )

    try:
        members = repo.group_member_ids(gid)
    except RepositoryError as exc:
        logger.error(
            "Group expense recorded but members could not be loaded",
            extra={"group_id": str(gid), "kind": exc.kind.value, "detail": exc.detail},
        )
        members = []

    distribution = distribute_expense(
        repo,
        order_ids=members,
        amount=value,
        note=expense.description,
        portal=PORTAL_STORE,
        touch=False,
    )
    return GroupExpenseResult(expense=expense, distribution=distribution)


@degrade_on_failure("deleting group", default=False)
def delete_group(repo, *, group_id) -> bool:
    """Unlink members, drop the ledger, drop the group. False if any step fails."""
    gid = parse_identifier(group_id, label="group_id")
    repo.clear_group(gid)
    repo.delete_group_expenses(gid)
    repo.delete_group(gid)
    logger.info("Group deleted", extra={"group_id": str(gid)})
    return True
