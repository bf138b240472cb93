# orders/services/degrade.py

"""
Failure normalisation for service functions.

A decorated function receives the repository as its first argument.
- repo is None (store never initialised)      -> default, no call made
- RepositoryError of any kind                  -> logged, default returned
- OrderServiceError (bad id, duplicate serial) -> propagates
"""

from __future__ import annotations

import functools
import logging

from orders.services.exceptions import RepositoryError

logger = logging.getLogger("orders.services")


def _fallback(default):
    return default() if callable(default) else default


def degrade_on_failure(action: str, *, default=None):
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(repo, *args, **kwargs):
            if repo is None:
                logger.warning("Order store unavailable; %s skipped", action)
                return _fallback(default)
            try:
                return fn(repo, *args, **kwargs)
            except RepositoryError as exc:
                logger.error(
                    "Error %s",
                    action,
                    extra={"kind": exc.kind.value, "detail": exc.detail},
                )
                return _fallback(default)

        return wrapper

    return decorator
