import uuid
from decimal import Decimal

from django.test import TestCase

from orders.models import GroupExpense, Order, OrderGroup
from orders.repository import OrderRepository
from orders.services import group_service
from orders.services.exceptions import InvalidIdentifierError
from orders.tests.helpers import make_order


class OrderGroupTests(TestCase):
    """
    GUARANTEES:
    - group expenses fan out once, to the members present at the time
    - fan-out does not move an order's updated_at
    - deleting a group keeps its orders, ungrouped
    """

    def setUp(self):
        self.repo = OrderRepository()
        self.a = make_order("LW01")
        self.b = make_order("LW02")
        self.c = make_order("LW03")

    def _group(self, *orders):
        return group_service.create_group(
            self.repo, name="Courier batch", order_ids=[str(o.id) for o in orders]
        )

    def test_create_and_list(self):
        group = self._group(self.a, self.b)

        self.assertEqual({o.id for o in group.orders.all()}, {self.a.id, self.b.id})
        self.assertEqual([g.id for g in group_service.list_groups(self.repo)], [group.id])

    def test_expense_splits_over_current_members(self):
        group = self._group(self.a, self.b, self.c)

        result = group_service.add_group_expense(
            self.repo, group_id=group.id, description="Courier", amount="100"
        )

        self.assertTrue(result.distribution.all_ok)
        expenses = sorted(
            Order.objects.filter(group=group).values_list("expense", flat=True)
        )
        self.assertEqual(expenses, [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")])
        self.assertEqual(sum(expenses), Decimal("100.00"))
        self.assertEqual(GroupExpense.objects.get().amount, Decimal("100.00"))

    def test_later_members_do_not_receive_earlier_shares(self):
        group = self._group(self.a)
        group_service.add_group_expense(
            self.repo, group_id=group.id, description="Courier", amount="50"
        )

        Order.objects.filter(pk=self.b.pk).update(group=group)

        self.assertEqual(Order.objects.get(pk=self.a.pk).expense, Decimal("50.00"))
        self.assertEqual(Order.objects.get(pk=self.b.pk).expense, Decimal("0.00"))

    def test_fan_out_keeps_updated_at(self):
        group = self._group(self.a)
        before = Order.objects.get(pk=self.a.pk).updated_at

        group_service.add_group_expense(
            self.repo, group_id=group.id, description="Glue", amount="20"
        )

        self.assertEqual(Order.objects.get(pk=self.a.pk).updated_at, before)

    def test_non_positive_amount_is_noop(self):
        group = self._group(self.a)

        self.assertIsNone(
            group_service.add_group_expense(
                self.repo, group_id=group.id, description="Nothing", amount="0"
            )
        )
        self.assertFalse(GroupExpense.objects.exists())

    def test_expense_for_missing_group_returns_none(self):
        self.assertIsNone(
            group_service.add_group_expense(
                self.repo, group_id=uuid.uuid4(), description="Courier", amount="10"
            )
        )

    def test_delete_keeps_orders_ungrouped(self):
        group = self._group(self.a, self.b)
        group_service.add_group_expense(
            self.repo, group_id=group.id, description="Courier", amount="10"
        )

        self.assertTrue(group_service.delete_group(self.repo, group_id=group.id))

        self.assertFalse(OrderGroup.objects.exists())
        self.assertFalse(GroupExpense.objects.exists())
        self.assertEqual(Order.objects.filter(group__isnull=True).count(), 3)

    def test_delete_missing_group_is_false(self):
        self.assertFalse(group_service.delete_group(self.repo, group_id=uuid.uuid4()))

    def test_malformed_group_id_raises(self):
        with self.assertRaises(InvalidIdentifierError):
            group_service.delete_group(self.repo, group_id="group-1")
