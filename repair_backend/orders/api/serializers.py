# orders/api/serializers.py

"""
ORDER API SERIALIZERS

Output:
- OrderSerializer: the portal's order shape (store name + complaints expanded,
  profit derived, never stored)

Input (validation only; writes go through the services):
- OrderIntakeSerializer
- one small serializer per single-field update
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from accounting.services.expense_service import PORTAL_STORE, PORTAL_TARGET_FIELDS
from accounting.services.profit_and_loss_service import order_profit
from orders.models import Complaint, GroupExpense, Order, OrderGroup

MONEY = {"max_digits": 12, "decimal_places": 2}
NON_NEGATIVE_MONEY = {**MONEY, "min_value": Decimal("0.00")}


# ======================================================
# OUTPUT
# ======================================================


class ComplaintSerializer(serializers.ModelSerializer):
    class Meta:
        model = Complaint
        fields = ["id", "description", "default_price", "created_at"]
        read_only_fields = ["id", "created_at"]


class OrderSerializer(serializers.ModelSerializer):
    store_id = serializers.UUIDField(read_only=True, allow_null=True)
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)
    group_id = serializers.UUIDField(read_only=True, allow_null=True)
    complaints = ComplaintSerializer(many=True, read_only=True)
    status_label = serializers.CharField(source="get_status_display", read_only=True)
    profit = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "serial_number",
            "customer_name",
            "whatsapp_number",
            "shoe_model",
            "custom_complaint",
            "complaints",
            "store_id",
            "store_name",
            "status",
            "status_label",
            "is_price_unknown",
            "total_price",
            "hub_price",
            "expense",
            "profit",
            "advance_amount",
            "payment_method",
            "balance_paid",
            "balance_payment_method",
            "expected_return_date",
            "is_in_house",
            "is_completed",
            "group_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_profit(self, obj) -> str:
        return str(order_profit(obj))


class GroupExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = GroupExpense
        fields = ["id", "description", "amount", "created_at"]
        read_only_fields = fields


class OrderGroupSerializer(serializers.ModelSerializer):
    orders = OrderSerializer(many=True, read_only=True)
    expenses = GroupExpenseSerializer(many=True, read_only=True)
    total_expense = serializers.SerializerMethodField()

    class Meta:
        model = OrderGroup
        fields = ["id", "name", "created_at", "orders", "expenses", "total_expense"]
        read_only_fields = fields

    def get_total_expense(self, obj) -> str:
        return str(sum((e.amount for e in obj.expenses.all()), Decimal("0.00")))


# ======================================================
# INPUT
# ======================================================


class OrderIntakeSerializer(serializers.Serializer):
    serial_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    customer_name = serializers.CharField(max_length=255)
    whatsapp_number = serializers.CharField(max_length=32)
    shoe_model = serializers.CharField(max_length=255)
    custom_complaint = serializers.CharField(required=False, allow_blank=True, default="")
    complaint_ids = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    store_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(
        choices=Order.STATUS_CHOICES, required=False, default=Order.STATUS_PENDING
    )
    is_price_unknown = serializers.BooleanField(required=False, default=False)
    total_price = serializers.DecimalField(**NON_NEGATIVE_MONEY, required=False, allow_null=True)
    advance_amount = serializers.DecimalField(**NON_NEGATIVE_MONEY, required=False, default=Decimal("0.00"))
    payment_method = serializers.ChoiceField(
        choices=Order.PAYMENT_METHODS, required=False, allow_blank=True, default=""
    )
    expected_return_date = serializers.DateField(required=False, allow_null=True)
    is_in_house = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if attrs.get("is_price_unknown"):
            attrs["total_price"] = None
        elif attrs.get("total_price") is None:
            raise serializers.ValidationError(
                {"total_price": "Required unless is_price_unknown is set."}
            )
        return attrs


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()


class PriceUpdateSerializer(serializers.Serializer):
    price = serializers.DecimalField(**NON_NEGATIVE_MONEY)


class ExpenseUpdateSerializer(serializers.Serializer):
    expense = serializers.DecimalField(**NON_NEGATIVE_MONEY)


class BalancePaymentSerializer(serializers.Serializer):
    balance_paid = serializers.DecimalField(**NON_NEGATIVE_MONEY)
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHODS)


class CompletionSerializer(serializers.Serializer):
    is_completed = serializers.BooleanField()


class BulkStatusSerializer(serializers.Serializer):
    order_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    status = serializers.CharField()


class DistributeExpenseSerializer(serializers.Serializer):
    order_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    amount = serializers.DecimalField(**MONEY)
    note = serializers.CharField(required=False, allow_blank=True, default="")
    portal = serializers.ChoiceField(
        choices=list(PORTAL_TARGET_FIELDS), required=False, default=PORTAL_STORE
    )


class ComplaintCreateSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=255)
    default_price = serializers.DecimalField(**NON_NEGATIVE_MONEY, required=False, default=Decimal("0.00"))


class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    order_ids = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class GroupExpenseCreateSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(**MONEY)
