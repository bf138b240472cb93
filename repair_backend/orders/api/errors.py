# orders/api/errors.py

"""
Service outcome -> HTTP response.

- invalid id / stage / amount / portal / period -> 400
- unknown store on intake                       -> 400
- duplicate serial number                       -> 409
- missing object (store reachable)              -> 404
- collapsed failure (store unreachable)         -> 503
"""

from rest_framework import status
from rest_framework.response import Response

from orders.services.exceptions import DuplicateSerialNumberError, OrderServiceError


def service_error_response(exc: OrderServiceError) -> Response:
    if isinstance(exc, DuplicateSerialNumberError):
        return Response(
            {"detail": str(exc), "serial_number": exc.serial_number},
            status=status.HTTP_409_CONFLICT,
        )
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def unavailable_response(action: str) -> Response:
    return Response(
        {"detail": f"Could not {action}. Please try again."},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def missing_or_unavailable(repo, action: str, *, what: str = "Order") -> Response:
    """A None from the services means not-found when the store answers, outage otherwise."""
    if repo is not None and repo.is_available():
        return Response({"detail": f"{what} not found."}, status=status.HTTP_404_NOT_FOUND)
    return unavailable_response(action)
