# store/services/store_service.py

"""
STORE SERVICE

Branch stores that take in repair orders.

Rules:
- passwords are hashed with Django's password hashers, never stored raw
- a store with orders cannot be deleted (StoreHasOrdersError)
- failures follow the order service policy: logged, collapsed to None/False/0
"""

from __future__ import annotations

import logging

from django.contrib.auth.hashers import check_password, make_password

from orders.identifiers import parse_identifier
from orders.services.degrade import degrade_on_failure
from orders.services.exceptions import OrderServiceError
from store.models import Store

logger = logging.getLogger(__name__)


class StoreHasOrdersError(OrderServiceError):
    """Raised when deleting a store that still has orders."""

    def __init__(self, store_id=None):
        self.store_id = store_id
        super().__init__("Cannot delete a store that has orders.")


@degrade_on_failure("creating store")
def create_store(repo, *, name: str, password: str) -> Store | None:
    store = repo.insert_store(name=(name or "").strip(), password_hash=make_password(password))
    logger.info("Store created", extra={"store_id": str(store.id)})
    return store


@degrade_on_failure("fetching stores", default=list)
def list_stores(repo) -> list[Store]:
    return repo.list_stores()


@degrade_on_failure("fetching store")
def get_store(repo, *, store_id) -> Store | None:
    return repo.get_store(parse_identifier(store_id, label="store_id"))


@degrade_on_failure("updating store")
def rename_store(repo, *, store_id, name: str) -> Store | None:
    sid = parse_identifier(store_id, label="store_id")
    return repo.update_store(sid, name=(name or "").strip())


@degrade_on_failure("authenticating store")
def authenticate_store(repo, *, password: str) -> Store | None:
    """The store whose password matches, or None."""
    if not password:
        return None
    for store in repo.list_stores():
        if check_password(password, store.password_hash):
            return store
    return None


@degrade_on_failure("deleting store", default=False)
def delete_store(repo, *, store_id) -> bool:
    sid = parse_identifier(store_id, label="store_id")
    if repo.store_has_orders(sid):
        logger.warning("Refusing to delete store with orders", extra={"store_id": str(sid)})
        raise StoreHasOrdersError(sid)
    repo.delete_store(sid)
    logger.info("Store deleted", extra={"store_id": str(sid)})
    return True


@degrade_on_failure("counting store orders", default=0)
def store_order_count(repo, *, store_id) -> int:
    return repo.count_orders(store_id=parse_identifier(store_id, label="store_id"))
