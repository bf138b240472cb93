from decimal import Decimal

from django.contrib.auth.hashers import make_password

from orders.models import Order
from store.models import Store


def make_store(name="Andheri", password="store-pass"):
    return Store.objects.create(name=name, password_hash=make_password(password))


def make_order(serial_number, **overrides):
    fields = {
        "customer_name": "Asha Rao",
        "whatsapp_number": "+91 98200 12345",
        "shoe_model": "Nike Air Max",
        "total_price": Decimal("1000.00"),
    }
    fields.update(overrides)
    return Order.objects.create(serial_number=serial_number, **fields)
