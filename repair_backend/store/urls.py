# store/urls.py

"""
STORE URLS

Mounted at /api/store/:
- stores/                      list / create (admin)
- stores/<id>/                 retrieve / rename / delete (admin)
- stores/<id>/order-count/
- stores/authenticate/         store portal sign-in
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from store.views import StoreViewSet

router = DefaultRouter()
router.register(r"stores", StoreViewSet, basename="stores")

urlpatterns = [
    path("", include(router.urls)),
]
