# orders/models/group.py

import uuid

from django.db import models


class OrderGroup(models.Model):
    """
    An ad-hoc batch of orders that share distributed expenses.

    Members point at the group through Order.group (SET_NULL).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class GroupExpense(models.Model):
    """
    Append-only ledger row for a group.

    The amount is fanned out to the members present when the row is recorded;
    later members never receive earlier shares.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(
        OrderGroup, on_delete=models.CASCADE, related_name="expenses"
    )
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.description} - {self.amount}"
