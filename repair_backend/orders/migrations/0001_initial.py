"""
PATH: orders/migrations/0001_initial.py

MIGRATION: CREATE Order, Complaint, OrderComplaint, OrderGroup, GroupExpense
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


PAYMENT_METHODS = [
    ("cash", "Cash"),
    ("upi", "UPI"),
    ("card", "Card"),
    ("bank", "Bank Transfer"),
]


def _uuid_pk():
    return models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        serialize=False,
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("id", _uuid_pk()),
                ("description", models.CharField(max_length=255)),
                (
                    "default_price",
                    models.DecimalField(
                        max_digits=12, decimal_places=2, default=Decimal("0.00")
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["description"],
            },
        ),
        migrations.CreateModel(
            name="OrderGroup",
            fields=[
                ("id", _uuid_pk()),
                ("name", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", _uuid_pk()),
                ("serial_number", models.CharField(max_length=32, unique=True)),
                ("customer_name", models.CharField(max_length=255)),
                ("whatsapp_number", models.CharField(max_length=32)),
                ("shoe_model", models.CharField(max_length=255)),
                ("custom_complaint", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        max_length=32,
                        choices=[
                            ("pending", "Pending"),
                            ("sent_to_hub", "Sent to Hub"),
                            ("processing", "Processing"),
                            ("ready", "Ready for Return"),
                            ("in_store", "In Store"),
                        ],
                        default="pending",
                    ),
                ),
                ("is_price_unknown", models.BooleanField(default=False)),
                (
                    "total_price",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=2,
                        null=True,
                        blank=True,
                        help_text="Customer price. NULL while the price is unknown.",
                    ),
                ),
                (
                    "hub_price",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Hub processing cost.",
                    ),
                ),
                (
                    "expense",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Miscellaneous expenses (including distributed group shares).",
                    ),
                ),
                (
                    "advance_amount",
                    models.DecimalField(
                        max_digits=12, decimal_places=2, default=Decimal("0.00")
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        max_length=16, choices=PAYMENT_METHODS, blank=True, default=""
                    ),
                ),
                (
                    "balance_paid",
                    models.DecimalField(
                        max_digits=12, decimal_places=2, default=Decimal("0.00")
                    ),
                ),
                (
                    "balance_payment_method",
                    models.CharField(
                        max_length=16, choices=PAYMENT_METHODS, blank=True, default=""
                    ),
                ),
                ("expected_return_date", models.DateField(null=True, blank=True)),
                (
                    "is_in_house",
                    models.BooleanField(
                        default=False,
                        help_text="In-house orders are hidden from the hub board.",
                    ),
                ),
                ("is_completed", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store",
                    models.ForeignKey(
                        to="store.store",
                        null=True,
                        blank=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                    ),
                ),
                (
                    "group",
                    models.ForeignKey(
                        to="orders.ordergroup",
                        null=True,
                        blank=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderComplaint",
            fields=[
                ("id", _uuid_pk()),
                (
                    "order",
                    models.ForeignKey(
                        to="orders.order",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="order_complaints",
                    ),
                ),
                (
                    "complaint",
                    models.ForeignKey(
                        to="orders.complaint",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="order_links",
                    ),
                ),
            ],
        ),
        migrations.AddField(
            model_name="order",
            name="complaints",
            field=models.ManyToManyField(
                to="orders.complaint",
                through="orders.OrderComplaint",
                related_name="orders",
                blank=True,
            ),
        ),
        migrations.CreateModel(
            name="GroupExpense",
            fields=[
                ("id", _uuid_pk()),
                ("description", models.CharField(max_length=255)),
                ("amount", models.DecimalField(max_digits=12, decimal_places=2)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "group",
                    models.ForeignKey(
                        to="orders.ordergroup",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="expenses",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="ordercomplaint",
            constraint=models.UniqueConstraint(
                fields=["order", "complaint"], name="uniq_order_complaint"
            ),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["status"], name="orders_status_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["created_at"], name="orders_created_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(
                fields=["is_completed", "updated_at"], name="orders_completed_idx"
            ),
        ),
    ]
