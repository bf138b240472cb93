# orders/admin.py
"""
=====================================================
PATH: orders/admin.py
=====================================================

Admin rules:
- serial_number, timestamps and the money the hub distributes are shown but
  not edited here; the portals go through the services
- GroupExpense rows are append-only (no change / delete from admin)
"""

from django.contrib import admin

from orders.models import Complaint, GroupExpense, Order, OrderComplaint, OrderGroup


class OrderComplaintInline(admin.TabularInline):
    model = OrderComplaint
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "serial_number",
        "customer_name",
        "shoe_model",
        "store",
        "status",
        "total_price",
        "is_completed",
        "created_at",
    )
    list_filter = ("status", "is_completed", "is_in_house", "store")
    search_fields = ("serial_number", "customer_name", "shoe_model", "whatsapp_number")
    readonly_fields = ("serial_number", "created_at", "updated_at")
    inlines = [OrderComplaintInline]


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("description", "default_price", "created_at")
    search_fields = ("description",)


class GroupExpenseInline(admin.TabularInline):
    model = GroupExpense
    extra = 0
    readonly_fields = ("description", "amount", "created_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(OrderGroup)
class OrderGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    inlines = [GroupExpenseInline]
