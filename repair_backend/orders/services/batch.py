# orders/services/batch.py

"""
Per-identifier outcomes for multi-order operations.

Multi-order writes are independent: one order failing never rolls back the
others, so callers get one ItemResult per identifier and decide for
themselves how to report partial failure.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from orders.services.exceptions import ErrorKind


@dataclass(frozen=True)
class ItemResult:
    order_id: uuid.UUID
    ok: bool
    error_kind: ErrorKind | None = None

    def as_dict(self) -> dict:
        return {
            "order_id": str(self.order_id),
            "ok": self.ok,
            "error": self.error_kind.value if self.error_kind else None,
        }


@dataclass
class BatchOutcome:
    results: list[ItemResult] = field(default_factory=list)

    @classmethod
    def failed(cls, order_ids, kind: ErrorKind) -> "BatchOutcome":
        return cls([ItemResult(oid, False, kind) for oid in order_ids])

    def add(self, order_id: uuid.UUID, *, ok: bool, error_kind: ErrorKind | None = None):
        self.results.append(ItemResult(order_id, ok, None if ok else error_kind))

    @property
    def succeeded_ids(self) -> list[uuid.UUID]:
        return [r.order_id for r in self.results if r.ok]

    @property
    def failed_ids(self) -> list[uuid.UUID]:
        return [r.order_id for r in self.results if not r.ok]

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def all_ok(self) -> bool:
        return bool(self.results) and all(r.ok for r in self.results)

    @property
    def is_partial(self) -> bool:
        return bool(self.succeeded_ids) and bool(self.failed_ids)

    def as_dict(self) -> dict:
        return {
            "succeeded": len(self.succeeded_ids),
            "failed": len(self.failed_ids),
            "results": [r.as_dict() for r in self.results],
        }
