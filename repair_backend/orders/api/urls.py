# orders/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from orders.api.views import ComplaintViewSet, OrderGroupViewSet, OrderViewSet

router = DefaultRouter()
router.register(r"orders", OrderViewSet, basename="orders")
router.register(r"complaints", ComplaintViewSet, basename="complaints")
router.register(r"groups", OrderGroupViewSet, basename="groups")

urlpatterns = [
    path("", include(router.urls)),
]
