# orders/repository.py

"""
ORDER STORE DATA-ACCESS HANDLE

Responsibilities:
- Single gateway to the orders / complaints / order_complaints / stores /
  order_groups / group_expenses tables
- Every write runs in its own savepoint (no atomicity across multi-order
  operations)
- Database failures are translated into RepositoryError(ErrorKind)

Lifecycle:
- Constructed once at startup (OrdersConfig.ready) and passed explicitly into
  the service layer
- close() releases the underlying connection; a closed handle reports
  CONNECTIVITY for every call
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from decimal import Decimal

from django.apps import apps
from django.core.exceptions import ObjectDoesNotExist
from django.db import (
    DatabaseError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    connections,
    transaction,
)
from django.db.models import F, Prefetch
from django.utils import timezone

from orders.models import Complaint, GroupExpense, Order, OrderComplaint, OrderGroup
from orders.services.exceptions import ErrorKind, RepositoryError
from store.models import Store

logger = logging.getLogger(__name__)


class OrderRepository:
    def __init__(self, *, using: str = "default"):
        self.using = using
        self._closed = False

    # ======================================================
    # LIFECYCLE
    # ======================================================

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        connection = connections[self.using]
        # Never drop a connection in the middle of an open transaction.
        if not connection.in_atomic_block:
            connection.close()

    def is_available(self) -> bool:
        if self._closed:
            return False
        try:
            connections[self.using].ensure_connection()
        except (OperationalError, InterfaceError):
            logger.warning("Order store unreachable", extra={"using": self.using})
            return False
        return True

    @contextmanager
    def _translate(self, action: str, *, atomic: bool = True):
        if self._closed:
            raise RepositoryError(ErrorKind.CONNECTIVITY, "repository is closed")
        try:
            if atomic:
                with transaction.atomic(using=self.using):
                    yield
            else:
                yield
        except RepositoryError:
            raise
        except ObjectDoesNotExist as exc:
            raise RepositoryError(ErrorKind.NOT_FOUND, f"{action}: {exc}") from exc
        except IntegrityError as exc:
            raise RepositoryError(
                ErrorKind.CONSTRAINT_VIOLATION, f"{action}: {exc}"
            ) from exc
        except (OperationalError, InterfaceError) as exc:
            raise RepositoryError(ErrorKind.CONNECTIVITY, f"{action}: {exc}") from exc
        except DatabaseError as exc:
            raise RepositoryError(ErrorKind.UNKNOWN, f"{action}: {exc}") from exc

    def _orders(self):
        return (
            Order.objects.using(self.using)
            .select_related("store", "group")
            .prefetch_related("complaints")
        )

    # ======================================================
    # ORDERS
    # ======================================================

    def list_orders(self, *, store_id: uuid.UUID | None = None, refine=None) -> list[Order]:
        with self._translate("list orders", atomic=False):
            qs = self._orders()
            if store_id is not None:
                qs = qs.filter(store_id=store_id)
            if refine is not None:
                qs = refine(qs)
            return list(qs.order_by("-created_at"))

    def list_completed_orders(
        self,
        *,
        store_id: uuid.UUID | None = None,
        updated_from=None,
        updated_to=None,
    ) -> list[Order]:
        with self._translate("list completed orders", atomic=False):
            qs = self._orders().filter(is_completed=True)
            if store_id is not None:
                qs = qs.filter(store_id=store_id)
            if updated_from is not None:
                qs = qs.filter(updated_at__gte=updated_from)
            if updated_to is not None:
                qs = qs.filter(updated_at__lte=updated_to)
            return list(qs.order_by("-updated_at"))

    def get_order(self, order_id: uuid.UUID) -> Order:
        with self._translate("get order", atomic=False):
            return self._orders().get(pk=order_id)

    def latest_serial_number(self) -> str | None:
        with self._translate("latest serial number", atomic=False):
            return (
                Order.objects.using(self.using)
                .order_by("-created_at")
                .values_list("serial_number", flat=True)
                .first()
            )

    def serial_number_exists(self, serial_number: str) -> bool:
        with self._translate("check serial number", atomic=False):
            return (
                Order.objects.using(self.using)
                .filter(serial_number=serial_number)
                .exists()
            )

    def insert_order(self, **fields) -> Order:
        with self._translate("insert order"):
            order = Order(**fields)
            order.save(using=self.using, force_insert=True)
        return order

    def link_complaints(self, order_id: uuid.UUID, complaint_ids: list[uuid.UUID]) -> int:
        if not complaint_ids:
            return 0
        with self._translate("link complaints"):
            rows = OrderComplaint.objects.using(self.using).bulk_create(
                [
                    OrderComplaint(order_id=order_id, complaint_id=cid)
                    for cid in dict.fromkeys(complaint_ids)
                ]
            )
        return len(rows)

    def update_order(self, order_id: uuid.UUID, *, touch: bool = True, **fields) -> Order:
        if touch:
            fields["updated_at"] = timezone.now()
        with self._translate("update order"):
            updated = Order.objects.using(self.using).filter(pk=order_id).update(**fields)
            if not updated:
                raise RepositoryError(ErrorKind.NOT_FOUND, f"order {order_id} not found")
        return self.get_order(order_id)

    def update_orders(self, order_ids: list[uuid.UUID], *, touch: bool = True, **fields) -> set[uuid.UUID]:
        """Apply the same field values to many orders; returns the ids that existed."""
        if touch:
            fields["updated_at"] = timezone.now()
        with self._translate("update orders"):
            qs = Order.objects.using(self.using).filter(pk__in=order_ids)
            existing = set(qs.values_list("id", flat=True))
            if existing:
                qs.update(**fields)
        return existing

    def increment_order_field(
        self,
        order_id: uuid.UUID,
        field_name: str,
        delta: Decimal,
        *,
        touch: bool = True,
    ) -> None:
        changes = {field_name: F(field_name) + delta}
        if touch:
            changes["updated_at"] = timezone.now()
        with self._translate(f"increment {field_name}"):
            updated = Order.objects.using(self.using).filter(pk=order_id).update(**changes)
            if not updated:
                raise RepositoryError(ErrorKind.NOT_FOUND, f"order {order_id} not found")

    def count_orders(self, *, store_id: uuid.UUID) -> int:
        with self._translate("count orders", atomic=False):
            return Order.objects.using(self.using).filter(store_id=store_id).count()

    # ======================================================
    # COMPLAINTS
    # ======================================================

    def list_complaints(self) -> list[Complaint]:
        with self._translate("list complaints", atomic=False):
            return list(Complaint.objects.using(self.using).order_by("description"))

    def existing_complaint_ids(self, complaint_ids: list[uuid.UUID]) -> list[uuid.UUID]:
        with self._translate("resolve complaints", atomic=False):
            found = set(
                Complaint.objects.using(self.using)
                .filter(pk__in=complaint_ids)
                .values_list("id", flat=True)
            )
        return [cid for cid in dict.fromkeys(complaint_ids) if cid in found]

    def insert_complaint(self, *, description: str, default_price: Decimal) -> Complaint:
        with self._translate("insert complaint"):
            return Complaint.objects.using(self.using).create(
                description=description, default_price=default_price
            )

    def delete_complaint(self, complaint_id: uuid.UUID) -> None:
        with self._translate("delete complaint"):
            deleted, _ = Complaint.objects.using(self.using).filter(pk=complaint_id).delete()
            if not deleted:
                raise RepositoryError(
                    ErrorKind.NOT_FOUND, f"complaint {complaint_id} not found"
                )

    # ======================================================
    # GROUPS
    # ======================================================

    def _groups(self):
        return OrderGroup.objects.using(self.using).prefetch_related(
            Prefetch("orders", queryset=Order.objects.using(self.using).order_by("-created_at")),
            "expenses",
        )

    def insert_group(self, *, name: str) -> OrderGroup:
        with self._translate("insert group"):
            return OrderGroup.objects.using(self.using).create(name=name)

    def list_groups(self) -> list[OrderGroup]:
        with self._translate("list groups", atomic=False):
            return list(self._groups().order_by("-created_at"))

    def get_group(self, group_id: uuid.UUID) -> OrderGroup:
        with self._translate("get group", atomic=False):
            return self._groups().get(pk=group_id)

    def assign_group(self, order_ids: list[uuid.UUID], group_id: uuid.UUID | None) -> set[uuid.UUID]:
        return self.update_orders(order_ids, touch=False, group_id=group_id)

    def group_member_ids(self, group_id: uuid.UUID) -> list[uuid.UUID]:
        with self._translate("group members", atomic=False):
            return list(
                Order.objects.using(self.using)
                .filter(group_id=group_id)
                .order_by("created_at")
                .values_list("id", flat=True)
            )

    def clear_group(self, group_id: uuid.UUID) -> int:
        with self._translate("unlink group orders"):
            return Order.objects.using(self.using).filter(group_id=group_id).update(group=None)

    def insert_group_expense(
        self, *, group_id: uuid.UUID, description: str, amount: Decimal
    ) -> GroupExpense:
        with self._translate("insert group expense"):
            if not OrderGroup.objects.using(self.using).filter(pk=group_id).exists():
                raise RepositoryError(ErrorKind.NOT_FOUND, f"group {group_id} not found")
            return GroupExpense.objects.using(self.using).create(
                group_id=group_id, description=description, amount=amount
            )

    def delete_group_expenses(self, group_id: uuid.UUID) -> int:
        with self._translate("delete group expenses"):
            deleted, _ = GroupExpense.objects.using(self.using).filter(group_id=group_id).delete()
        return deleted

    def delete_group(self, group_id: uuid.UUID) -> None:
        with self._translate("delete group"):
            deleted, _ = OrderGroup.objects.using(self.using).filter(pk=group_id).delete()
            if not deleted:
                raise RepositoryError(ErrorKind.NOT_FOUND, f"group {group_id} not found")

    # ======================================================
    # STORES
    # ======================================================

    def insert_store(self, *, name: str, password_hash: str) -> Store:
        with self._translate("insert store"):
            return Store.objects.using(self.using).create(
                name=name, password_hash=password_hash
            )

    def list_stores(self) -> list[Store]:
        with self._translate("list stores", atomic=False):
            return list(Store.objects.using(self.using).order_by("created_at"))

    def get_store(self, store_id: uuid.UUID) -> Store:
        with self._translate("get store", atomic=False):
            return Store.objects.using(self.using).get(pk=store_id)

    def update_store(self, store_id: uuid.UUID, **fields) -> Store:
        fields["updated_at"] = timezone.now()
        with self._translate("update store"):
            updated = Store.objects.using(self.using).filter(pk=store_id).update(**fields)
            if not updated:
                raise RepositoryError(ErrorKind.NOT_FOUND, f"store {store_id} not found")
        return self.get_store(store_id)

    def store_exists(self, store_id: uuid.UUID) -> bool:
        with self._translate("check store", atomic=False):
            return Store.objects.using(self.using).filter(pk=store_id).exists()

    def store_has_orders(self, store_id: uuid.UUID) -> bool:
        with self._translate("check store orders", atomic=False):
            return Order.objects.using(self.using).filter(store_id=store_id).exists()

    def delete_store(self, store_id: uuid.UUID) -> None:
        with self._translate("delete store"):
            deleted, _ = Store.objects.using(self.using).filter(pk=store_id).delete()
            if not deleted:
                raise RepositoryError(ErrorKind.NOT_FOUND, f"store {store_id} not found")


def get_repository() -> OrderRepository:
    """The handle built at startup by OrdersConfig.ready()."""
    return apps.get_app_config("orders").repository
