# orders/apps.py

"""
ORDERS APP CONFIG

Owns the order-store handle:
- built once when the app registry is ready
- closed at interpreter shutdown
"""

import atexit

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Repair Orders"

    repository = None

    def ready(self):
        from orders.repository import OrderRepository

        self.repository = OrderRepository(using="default")
        atexit.register(self.repository.close)
