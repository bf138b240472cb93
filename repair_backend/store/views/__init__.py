from store.views.store import StoreViewSet

__all__ = ["StoreViewSet"]
