# orders/services/complaint_service.py

"""
COMPLAINT PRESETS

Standard repair types with default prices, picked at intake.
Deletion is admin-only (enforced by the API permission).
"""

from __future__ import annotations

import logging

from orders.identifiers import parse_identifier
from orders.models import Complaint
from orders.services.degrade import degrade_on_failure
from orders.services.money import to_money

logger = logging.getLogger(__name__)


@degrade_on_failure("fetching complaints", default=list)
def list_complaints(repo) -> list[Complaint]:
    return repo.list_complaints()


@degrade_on_failure("adding complaint")
def add_complaint(repo, *, description: str, default_price) -> Complaint | None:
    complaint = repo.insert_complaint(
        description=(description or "").strip(),
        default_price=to_money(default_price),
    )
    logger.info("Complaint preset added", extra={"complaint_id": str(complaint.id)})
    return complaint


@degrade_on_failure("deleting complaint", default=False)
def delete_complaint(repo, *, complaint_id) -> bool:
    repo.delete_complaint(parse_identifier(complaint_id, label="complaint_id"))
    return True
