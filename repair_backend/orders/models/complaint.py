# orders/models/complaint.py

import uuid
from decimal import Decimal

from django.db import models


class Complaint(models.Model):
    """
    A standard repair type ("complaint") with a default price.

    Presets live independently of orders and are only removed by an admin.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    description = models.CharField(max_length=255)
    default_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["description"]

    def __str__(self):
        return f"{self.description} ({self.default_price})"


class OrderComplaint(models.Model):
    """Join row: order <-> complaint."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        "orders.Order", on_delete=models.CASCADE, related_name="order_complaints"
    )
    complaint = models.ForeignKey(
        Complaint, on_delete=models.CASCADE, related_name="order_links"
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["order", "complaint"], name="uniq_order_complaint"
            ),
        ]
