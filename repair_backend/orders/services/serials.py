# orders/services/serials.py

"""
SERIAL NUMBER ALLOCATOR

Serials look like LW01, LW02 ... LW99, LW100.

No reservation is taken: two intakes racing for the same serial both get it,
and the unique constraint rejects the second insert
(DuplicateSerialNumberError).
"""

from __future__ import annotations

import logging
import re

from orders.services.exceptions import RepositoryError

logger = logging.getLogger(__name__)

SERIAL_PREFIX = "LW"
SEED_SERIAL = "LW01"

_SERIAL_RE = re.compile(r"LW(\d+)", re.IGNORECASE)


def next_serial_number(last_serial: str | None) -> str:
    if not last_serial:
        return SEED_SERIAL

    match = _SERIAL_RE.search(str(last_serial))
    if not match:
        return SEED_SERIAL

    return f"{SERIAL_PREFIX}{int(match.group(1)) + 1:02d}"


def allocate_serial_number(repo) -> str:
    if repo is None:
        return SEED_SERIAL
    try:
        last = repo.latest_serial_number()
    except RepositoryError as exc:
        logger.error(
            "Error fetching last serial number",
            extra={"kind": exc.kind.value, "detail": exc.detail},
        )
        return SEED_SERIAL
    return next_serial_number(last)
