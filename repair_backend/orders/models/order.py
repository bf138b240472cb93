# orders/models/order.py

import uuid
from decimal import Decimal

from django.db import models


class Order(models.Model):
    """
    A single repair job, tracked from store intake to pickup.

    GUARANTEES:
    - serial_number is globally unique (LW<NN> scheme)
    - status is one of the ordered workflow stages; is_completed is orthogonal
    - profit is never stored (total_price - hub_price - expense)
    """

    STATUS_PENDING = "pending"
    STATUS_SENT_TO_HUB = "sent_to_hub"
    STATUS_PROCESSING = "processing"
    STATUS_READY = "ready"
    STATUS_IN_STORE = "in_store"

    # Ordered: this is the board's column order.
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_SENT_TO_HUB, "Sent to Hub"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_READY, "Ready for Return"),
        (STATUS_IN_STORE, "In Store"),
    ]

    PAYMENT_CASH = "cash"
    PAYMENT_UPI = "upi"
    PAYMENT_CARD = "card"
    PAYMENT_BANK = "bank"

    PAYMENT_METHODS = [
        (PAYMENT_CASH, "Cash"),
        (PAYMENT_UPI, "UPI"),
        (PAYMENT_CARD, "Card"),
        (PAYMENT_BANK, "Bank Transfer"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    serial_number = models.CharField(max_length=32, unique=True)

    customer_name = models.CharField(max_length=255)
    whatsapp_number = models.CharField(max_length=32)
    shoe_model = models.CharField(max_length=255)
    custom_complaint = models.TextField(blank=True, default="")

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )

    status = models.CharField(
        max_length=32, choices=STATUS_CHOICES, default=STATUS_PENDING
    )

    is_price_unknown = models.BooleanField(default=False)
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Customer price. NULL while the price is unknown.",
    )
    hub_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Hub processing cost.",
    )
    expense = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Miscellaneous expenses (including distributed group shares).",
    )
    advance_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    payment_method = models.CharField(
        max_length=16, choices=PAYMENT_METHODS, blank=True, default=""
    )
    balance_paid = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    balance_payment_method = models.CharField(
        max_length=16, choices=PAYMENT_METHODS, blank=True, default=""
    )

    expected_return_date = models.DateField(null=True, blank=True)

    is_in_house = models.BooleanField(
        default=False,
        help_text="In-house orders are hidden from the hub board.",
    )
    is_completed = models.BooleanField(default=False)

    group = models.ForeignKey(
        "orders.OrderGroup",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    complaints = models.ManyToManyField(
        "orders.Complaint",
        through="orders.OrderComplaint",
        related_name="orders",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["created_at"], name="orders_created_idx"),
            models.Index(
                fields=["is_completed", "updated_at"], name="orders_completed_idx"
            ),
        ]

    def __str__(self):
        return f"{self.serial_number} | {self.customer_name}"
