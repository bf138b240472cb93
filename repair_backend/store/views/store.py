# store/views/store.py

"""
STORE VIEWSET

Purpose:
- Store management for the hub (create / delete: admin only)
- Store portal sign-in by store password

Endpoints:
- GET/POST        /api/store/stores/
- GET/PATCH/DELETE /api/store/stores/<id>/
- GET             /api/store/stores/<id>/order-count/
- POST            /api/store/stores/authenticate/
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from orders.api.errors import (
    missing_or_unavailable,
    service_error_response,
    unavailable_response,
)
from orders.repository import get_repository
from orders.services.exceptions import OrderServiceError
from store.serializers.store import (
    StoreAuthenticateSerializer,
    StoreCreateSerializer,
    StoreRenameSerializer,
    StoreSerializer,
)
from store.services import store_service


class StoreViewSet(viewsets.ViewSet):
    """
    Store / Branch API
    """

    lookup_value_regex = "[^/]+"

    def get_permissions(self):
        if self.action in {"create", "destroy"}:
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    @extend_schema(responses=StoreSerializer(many=True))
    def list(self, request):
        stores = store_service.list_stores(get_repository())
        return Response(StoreSerializer(stores, many=True).data)

    @extend_schema(responses=StoreSerializer)
    def retrieve(self, request, pk=None):
        repo = get_repository()
        try:
            store = store_service.get_store(repo, store_id=pk)
        except OrderServiceError as e:
            return service_error_response(e)

        if store is None:
            return missing_or_unavailable(repo, "load the store", what="Store")
        return Response(StoreSerializer(store).data)

    @extend_schema(request=StoreCreateSerializer, responses={201: StoreSerializer})
    def create(self, request):
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = store_service.create_store(get_repository(), **serializer.validated_data)
        if store is None:
            return unavailable_response("create the store")
        return Response(StoreSerializer(store).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=StoreRenameSerializer, responses=StoreSerializer)
    def partial_update(self, request, pk=None):
        serializer = StoreRenameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repo = get_repository()
        try:
            store = store_service.rename_store(
                repo, store_id=pk, name=serializer.validated_data["name"]
            )
        except OrderServiceError as e:
            return service_error_response(e)

        if store is None:
            return missing_or_unavailable(repo, "rename the store", what="Store")
        return Response(StoreSerializer(store).data)

    def destroy(self, request, pk=None):
        repo = get_repository()
        try:
            deleted = store_service.delete_store(repo, store_id=pk)
        except store_service.StoreHasOrdersError as e:
            return Response({"detail": str(e)}, status=status.HTTP_409_CONFLICT)
        except OrderServiceError as e:
            return service_error_response(e)

        if not deleted:
            return missing_or_unavailable(repo, "delete the store", what="Store")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: dict})
    @action(detail=True, methods=["get"], url_path="order-count")
    def order_count(self, request, pk=None):
        try:
            count = store_service.store_order_count(get_repository(), store_id=pk)
        except OrderServiceError as e:
            return service_error_response(e)
        return Response({"store_id": pk, "order_count": count})

    @extend_schema(request=StoreAuthenticateSerializer, responses=StoreSerializer)
    @action(detail=False, methods=["post"], url_path="authenticate")
    def authenticate(self, request):
        """Store portal sign-in: the store whose password matches."""
        serializer = StoreAuthenticateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repo = get_repository()
        store = store_service.authenticate_store(
            repo, password=serializer.validated_data["password"]
        )
        if store is None and not (repo is not None and repo.is_available()):
            return unavailable_response("sign in")
        if store is None:
            return Response(
                {"detail": "Invalid store password."},
                status=status.HTTP_401_UNAUTHORIZED,
            )
        return Response(StoreSerializer(store).data)
