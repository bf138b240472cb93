# orders/api/views.py

"""
======================================================
PATH: orders/api/views.py
======================================================
ORDER WORKFLOW API

Every view goes through the service layer with the order-store handle built
at startup (orders.repository.get_repository). Views never touch the ORM.

Endpoints:
- /api/orders/orders/                     list (+ filters) / intake
- /api/orders/orders/<id>/                retrieve
- /api/orders/orders/next-serial/         next LW serial
- /api/orders/orders/board/               stage columns for the hub board
- /api/orders/orders/<id>/status|price|hub-price|expense|balance-payment|completion/
- /api/orders/orders/bulk-status/
- /api/orders/orders/distribute-expense/
- /api/orders/complaints/                 presets (delete: admin only)
- /api/orders/groups/                     groups + /<id>/expenses/
======================================================
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from accounting.services.expense_service import distribute_expense
from orders.api.errors import (
    missing_or_unavailable,
    service_error_response,
    unavailable_response,
)
from orders.api.filters import refine_from_params
from orders.api.serializers import (
    BalancePaymentSerializer,
    BulkStatusSerializer,
    ComplaintCreateSerializer,
    ComplaintSerializer,
    CompletionSerializer,
    DistributeExpenseSerializer,
    ExpenseUpdateSerializer,
    GroupCreateSerializer,
    GroupExpenseCreateSerializer,
    GroupExpenseSerializer,
    OrderGroupSerializer,
    OrderIntakeSerializer,
    OrderSerializer,
    PriceUpdateSerializer,
    StatusUpdateSerializer,
)
from orders.board import OrderBoard
from orders.notifications import WhatsAppLinkNotifier
from orders.repository import get_repository
from orders.services import complaint_service, group_service, order_service
from orders.services.exceptions import OrderServiceError
from orders.services.lifecycle import move_order
from orders.services.search import ALL_STORES


def _as_bool(value):
    if value is None or value == "":
        return None
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class OrderViewSet(viewsets.ViewSet):
    """
    Repair orders.

    Single-field updates return the refreshed order; a None from the service
    becomes 404 (order gone) or 503 (store unreachable).
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[^/]+"

    # ======================================================
    # HELPERS
    # ======================================================

    def _update(self, request, pk, serializer_class, call, action_name):
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        repo = get_repository()
        try:
            order = call(repo, pk, serializer.validated_data)
        except OrderServiceError as e:
            return service_error_response(e)

        if order is None:
            return missing_or_unavailable(repo, action_name)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    # ======================================================
    # READ
    # ======================================================

    @extend_schema(
        parameters=[
            OpenApiParameter("store_id", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("exclude_in_house", bool, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("is_completed", bool, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("group_id", str, OpenApiParameter.QUERY, required=False),
        ],
        responses=OrderSerializer(many=True),
    )
    def list(self, request):
        refine, errors = refine_from_params(request.query_params)
        if errors:
            return Response(errors, status=status.HTTP_400_BAD_REQUEST)

        orders = order_service.list_orders(
            get_repository(),
            store_id=request.query_params.get("store_id"),
            refine=refine,
        )
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(responses=OrderSerializer)
    def retrieve(self, request, pk=None):
        repo = get_repository()
        try:
            order = order_service.get_order(repo, order_id=pk)
        except OrderServiceError as e:
            return service_error_response(e)

        if order is None:
            return missing_or_unavailable(repo, "load the order")
        return Response(OrderSerializer(order).data)

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path="next-serial")
    def next_serial(self, request):
        return Response({"serial_number": order_service.next_serial_number(get_repository())})

    @extend_schema(
        parameters=[
            OpenApiParameter("store_id", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("exclude_in_house", bool, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("is_completed", bool, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: dict},
    )
    @action(detail=False, methods=["get"], url_path="board")
    def board(self, request):
        params = request.query_params
        orders = OrderSerializer(order_service.list_orders(get_repository()), many=True).data
        board = OrderBoard(
            orders,
            store_id=params.get("store_id") or ALL_STORES,
            query=params.get("q") or "",
            exclude_in_house=bool(_as_bool(params.get("exclude_in_house"))),
            completed=_as_bool(params.get("is_completed")),
        )
        return Response(board.as_dict())

    # ======================================================
    # INTAKE
    # ======================================================

    @extend_schema(request=OrderIntakeSerializer, responses={201: OrderSerializer})
    def create(self, request):
        serializer = OrderIntakeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        complaint_ids = data.pop("complaint_ids", [])

        try:
            order = order_service.create_order(
                get_repository(), data=data, complaint_ids=complaint_ids
            )
        except OrderServiceError as e:
            return service_error_response(e)

        if order is None:
            return unavailable_response("create the order")
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ======================================================
    # SINGLE-FIELD UPDATES
    # ======================================================

    @extend_schema(request=StatusUpdateSerializer, responses={200: dict})
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        """Stage move; arriving in store returns the pickup WhatsApp link."""
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repo = get_repository()
        try:
            result = move_order(
                repo,
                order_id=pk,
                status=serializer.validated_data["status"],
                notifier=WhatsAppLinkNotifier(),
            )
        except OrderServiceError as e:
            return service_error_response(e)

        if not result.ok:
            return missing_or_unavailable(repo, "update the status")
        return Response(
            {
                "order": OrderSerializer(result.order).data,
                "notification": result.notification.as_dict() if result.notification else None,
            }
        )

    @extend_schema(request=PriceUpdateSerializer, responses=OrderSerializer)
    @action(detail=True, methods=["post"], url_path="price")
    def set_price(self, request, pk=None):
        return self._update(
            request,
            pk,
            PriceUpdateSerializer,
            lambda repo, oid, v: order_service.update_order_price(repo, order_id=oid, price=v["price"]),
            "update the price",
        )

    @extend_schema(request=PriceUpdateSerializer, responses=OrderSerializer)
    @action(detail=True, methods=["post"], url_path="hub-price")
    def set_hub_price(self, request, pk=None):
        return self._update(
            request,
            pk,
            PriceUpdateSerializer,
            lambda repo, oid, v: order_service.update_hub_price(repo, order_id=oid, price=v["price"]),
            "update the hub price",
        )

    @extend_schema(request=ExpenseUpdateSerializer, responses=OrderSerializer)
    @action(detail=True, methods=["post"], url_path="expense")
    def set_expense(self, request, pk=None):
        return self._update(
            request,
            pk,
            ExpenseUpdateSerializer,
            lambda repo, oid, v: order_service.update_expense(repo, order_id=oid, expense=v["expense"]),
            "update the expense",
        )

    @extend_schema(request=BalancePaymentSerializer, responses=OrderSerializer)
    @action(detail=True, methods=["post"], url_path="balance-payment")
    def balance_payment(self, request, pk=None):
        return self._update(
            request,
            pk,
            BalancePaymentSerializer,
            lambda repo, oid, v: order_service.update_balance_payment(
                repo,
                order_id=oid,
                balance_paid=v["balance_paid"],
                payment_method=v["payment_method"],
            ),
            "record the balance payment",
        )

    @extend_schema(request=CompletionSerializer, responses=OrderSerializer)
    @action(detail=True, methods=["post"], url_path="completion")
    def completion(self, request, pk=None):
        return self._update(
            request,
            pk,
            CompletionSerializer,
            lambda repo, oid, v: order_service.update_order_completion(
                repo, order_id=oid, is_completed=v["is_completed"]
            ),
            "update completion",
        )

    # ======================================================
    # MULTI-ORDER
    # ======================================================

    @extend_schema(request=BulkStatusSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        serializer = BulkStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            outcome = order_service.bulk_update_status(
                get_repository(),
                order_ids=serializer.validated_data["order_ids"],
                status=serializer.validated_data["status"],
            )
        except OrderServiceError as e:
            return service_error_response(e)
        return Response(outcome.as_dict())

    @extend_schema(request=DistributeExpenseSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="distribute-expense")
    def distribute_expense(self, request):
        serializer = DistributeExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        try:
            outcome = distribute_expense(
                get_repository(),
                order_ids=v["order_ids"],
                amount=v["amount"],
                note=v["note"],
                portal=v["portal"],
            )
        except OrderServiceError as e:
            return service_error_response(e)
        return Response(outcome.as_dict())


class ComplaintViewSet(viewsets.ViewSet):
    """Complaint presets. Anyone signed in can add; only admins delete."""

    lookup_value_regex = "[^/]+"

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    @extend_schema(responses=ComplaintSerializer(many=True))
    def list(self, request):
        complaints = complaint_service.list_complaints(get_repository())
        return Response(ComplaintSerializer(complaints, many=True).data)

    @extend_schema(request=ComplaintCreateSerializer, responses={201: ComplaintSerializer})
    def create(self, request):
        serializer = ComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        complaint = complaint_service.add_complaint(get_repository(), **serializer.validated_data)
        if complaint is None:
            return unavailable_response("add the complaint")
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        repo = get_repository()
        try:
            deleted = complaint_service.delete_complaint(repo, complaint_id=pk)
        except OrderServiceError as e:
            return service_error_response(e)

        if not deleted:
            return missing_or_unavailable(repo, "delete the complaint", what="Complaint")
        return Response(status=status.HTTP_204_NO_CONTENT)


class OrderGroupViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[^/]+"

    @extend_schema(responses=OrderGroupSerializer(many=True))
    def list(self, request):
        groups = group_service.list_groups(get_repository())
        return Response(OrderGroupSerializer(groups, many=True).data)

    @extend_schema(request=GroupCreateSerializer, responses={201: OrderGroupSerializer})
    def create(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = group_service.create_group(get_repository(), **serializer.validated_data)
        except OrderServiceError as e:
            return service_error_response(e)

        if group is None:
            return unavailable_response("create the group")
        return Response(OrderGroupSerializer(group).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        repo = get_repository()
        try:
            deleted = group_service.delete_group(repo, group_id=pk)
        except OrderServiceError as e:
            return service_error_response(e)

        if not deleted:
            return missing_or_unavailable(repo, "delete the group", what="Group")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=GroupExpenseCreateSerializer, responses={201: dict})
    @action(detail=True, methods=["post"], url_path="expenses")
    def expenses(self, request, pk=None):
        serializer = GroupExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        if v["amount"] <= 0:
            return Response(
                {"detail": "amount must be greater than 0"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        repo = get_repository()
        try:
            result = group_service.add_group_expense(
                repo, group_id=pk, description=v["description"], amount=v["amount"]
            )
        except OrderServiceError as e:
            return service_error_response(e)

        if result is None:
            return missing_or_unavailable(repo, "record the group expense", what="Group")
        return Response(
            {
                "expense": GroupExpenseSerializer(result.expense).data,
                "distribution": result.distribution.as_dict(),
            },
            status=status.HTTP_201_CREATED,
        )
