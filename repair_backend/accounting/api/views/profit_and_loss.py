# PATH: accounting/api/views/profit_and_loss.py

"""
PROFIT & LOSS (P&L) API VIEW

Read-only snapshot of completed-order profit over a period.

Query params:
- period: this_month (default) | prev_month | custom
- start_date / end_date: YYYY-MM-DD, used by period=custom
- store_id: a store id, or "all" / omitted for every store
"""

from __future__ import annotations

from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.exceptions import AccountingServiceError
from accounting.services.profit_and_loss_service import (
    PERIOD_THIS_MONTH,
    PERIODS,
    get_order_profit_and_loss,
)
from orders.repository import get_repository


def _parse_date(value: str | None, field_name: str):
    s = str(value or "").strip()
    if s == "":
        return None

    d = parse_date(s)
    if d is None:
        raise ValueError(f"Invalid {field_name} (expected YYYY-MM-DD)")
    return d


class ProfitAndLossView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter(
                name="period",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(PERIODS),
                description="Window over Order.updated_at. Defaults to this_month.",
            ),
            OpenApiParameter(
                name="start_date",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="YYYY-MM-DD, inclusive. Only used with period=custom.",
            ),
            OpenApiParameter(
                name="end_date",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="YYYY-MM-DD, inclusive to 23:59:59. Only used with period=custom.",
            ),
            OpenApiParameter(
                name="store_id",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Store UUID, or "all".',
            ),
        ],
        responses={200: dict},
    )
    def get(self, request):
        params = request.query_params
        try:
            start_date = _parse_date(params.get("start_date"), "start_date")
            end_date = _parse_date(params.get("end_date"), "end_date")
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        if start_date and end_date and start_date > end_date:
            return Response(
                {"detail": "start_date cannot be after end_date"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            report = get_order_profit_and_loss(
                get_repository(),
                period=params.get("period") or PERIOD_THIS_MONTH,
                start_date=start_date,
                end_date=end_date,
                store_id=params.get("store_id"),
            )
        except AccountingServiceError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        if report is None:
            return Response(
                {"detail": "Profit and loss is temporarily unavailable."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response(report.as_dict(), status=status.HTTP_200_OK)
