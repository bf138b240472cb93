# orders/services/search.py

"""
ORDER SEARCH / FILTER

Two renditions of the same rule:
- matches_query / search_orders: in-memory predicate (board, controller)
- filter_queryset: ORM filter (API ?q=)

Rule:
- blank query -> no filter, input order preserved
- customer_name, shoe_model, serial_number: case-insensitive substring
- whatsapp_number: raw substring, no case folding
"""

from __future__ import annotations

from django.db.models import Q

from orders.identifiers import try_parse_identifier

ALL_STORES = "all"

_FOLDED_FIELDS = ("customer_name", "shoe_model", "serial_number")
_RAW_FIELDS = ("whatsapp_number",)


def _value(order, name):
    if isinstance(order, dict):
        return order.get(name)
    return getattr(order, name, None)


def _normalise(query) -> str:
    return str(query or "").strip()


def matches_query(order, query) -> bool:
    needle = _normalise(query)
    if not needle:
        return True

    folded = needle.lower()
    for name in _FOLDED_FIELDS:
        if folded in str(_value(order, name) or "").lower():
            return True
    for name in _RAW_FIELDS:
        if needle in str(_value(order, name) or ""):
            return True
    return False


def search_orders(orders, query) -> list:
    if not _normalise(query):
        return list(orders)
    return [o for o in orders if matches_query(o, query)]


def _store_id_of(order):
    if isinstance(order, dict):
        return order.get("store_id")
    return getattr(order, "store_id", None)


def _same_store(order, selected: str, selected_id) -> bool:
    raw = _store_id_of(order)
    if selected_id is not None:
        return try_parse_identifier(raw) == selected_id
    return str(raw or "") == selected


def filter_by_store(orders, store_id=ALL_STORES, *, exclude_in_house: bool = False) -> list:
    """
    Store selection ("all" or a store id) AND optional in-house exclusion.

    UUIDs compare by value, so any spelling of the same id selects the store.
    """
    selected = _normalise(store_id) or ALL_STORES
    selected_id = try_parse_identifier(selected) if selected != ALL_STORES else None
    result = []
    for order in orders:
        if selected != ALL_STORES and not _same_store(order, selected, selected_id):
            continue
        if exclude_in_house and _value(order, "is_in_house"):
            continue
        result.append(order)
    return result


def filter_by_completion(orders, completed=None) -> list:
    if completed is None:
        return list(orders)
    return [o for o in orders if bool(_value(o, "is_completed")) == bool(completed)]


def filter_queryset(qs, query):
    needle = _normalise(query)
    if not needle:
        return qs

    condition = Q(whatsapp_number__contains=needle)
    for name in _FOLDED_FIELDS:
        condition |= Q(**{f"{name}__icontains": needle})
    return qs.filter(condition)
