# orders/identifiers.py

"""
Typed identifiers.

Every id that reaches the order store goes through parse_identifier first, so
malformed input is rejected at the boundary and never becomes a query filter.
"""

from __future__ import annotations

import re
import uuid

from orders.services.exceptions import InvalidIdentifierError

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def parse_identifier(value, *, label: str = "identifier") -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value

    raw = str(value or "").strip()
    if not _UUID_RE.match(raw):
        raise InvalidIdentifierError(f"Invalid {label}: {raw!r}")
    return uuid.UUID(raw)


def try_parse_identifier(value) -> uuid.UUID | None:
    """Lenient variant for optional filters: malformed input means "no filter"."""
    try:
        return parse_identifier(value)
    except InvalidIdentifierError:
        return None


def parse_identifiers(values, *, label: str = "identifier") -> list[uuid.UUID]:
    return [parse_identifier(v, label=label) for v in (values or [])]
