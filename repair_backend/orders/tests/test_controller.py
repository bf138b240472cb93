from django.test import SimpleTestCase, TestCase

from orders.controller import (
    LocalOrderBackend,
    OptimisticOrderController,
    ReconcilePolicy,
)
from orders.models import Order
from orders.repository import OrderRepository
from orders.services.batch import BatchOutcome
from orders.services.exceptions import InvalidAmountError
from orders.tests.helpers import make_order


class FakeBackend:
    """In-memory remote; `fail` makes every write return None, `explode` raise."""

    def __init__(self, orders):
        self.remote = {o["id"]: dict(o) for o in orders}
        self.fetches = 0
        self.fail = False
        self.explode = False
        self.writes = []

    def fetch_orders(self):
        self.fetches += 1
        return [dict(o) for o in self.remote.values()]

    def _write(self, order_id, **changes):
        self.writes.append((order_id, changes))
        if self.explode:
            raise RuntimeError("network down")
        if self.fail:
            return None
        self.remote[order_id].update(changes)
        return self.remote[order_id]

    def set_price(self, order_id, price):
        return self._write(order_id, total_price=str(price), is_price_unknown=False)

    def set_hub_price(self, order_id, price):
        return self._write(order_id, hub_price=str(price))

    def set_expense(self, order_id, expense):
        return self._write(order_id, expense=str(expense))

    def record_balance_payment(self, order_id, balance_paid, payment_method):
        return self._write(
            order_id, balance_paid=str(balance_paid), balance_payment_method=payment_method
        )

    def set_completion(self, order_id, is_completed):
        return self._write(order_id, is_completed=is_completed)

    def move(self, order_id, status):
        return self._write(order_id, status=status)

    def bulk_move(self, order_ids, status):
        outcome = BatchOutcome()
        for oid in order_ids:
            ok = oid in self.remote and not self.fail
            if ok:
                self.remote[oid]["status"] = status
            outcome.add(oid, ok=ok)
        return outcome

    def distribute_expense(self, order_ids, amount, note, portal):
        outcome = BatchOutcome()
        for oid in order_ids:
            outcome.add(oid, ok=True)
        return outcome


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def notify(self, phone, message):
        self.calls.append((phone, message))
        return message


def _order(order_id, **fields):
    base = {
        "id": order_id,
        "serial_number": order_id.upper(),
        "customer_name": "Asha",
        "shoe_model": "Nike",
        "whatsapp_number": "9820012345",
        "status": "pending",
        "total_price": "100.00",
        "hub_price": "0.00",
        "expense": "0.00",
        "is_price_unknown": False,
        "is_completed": False,
    }
    base.update(fields)
    return base


class OptimisticControllerTests(SimpleTestCase):
    def setUp(self):
        self.backend = FakeBackend([_order("a"), _order("b")])
        self.notifier = RecordingNotifier()
        self.controller = OptimisticOrderController(self.backend, notifier=self.notifier)
        self.controller.refresh()

    def test_success_rewrites_only_the_matching_order(self):
        self.assertTrue(self.controller.set_price("a", "250"))

        self.assertEqual(self.controller.get("a")["total_price"], "250.00")
        self.assertEqual(self.controller.get("b")["total_price"], "100.00")
        self.assertEqual(self.backend.fetches, 1)

    def test_falsy_result_refetches_by_default(self):
        self.backend.fail = True

        self.assertFalse(self.controller.set_hub_price("a", "80"))

        self.assertEqual(self.backend.fetches, 2)
        self.assertEqual(self.controller.get("a")["hub_price"], "0.00")

    def test_exception_refetches(self):
        self.backend.explode = True

        self.assertFalse(self.controller.set_expense("a", "15"))

        self.assertEqual(self.backend.fetches, 2)
        self.assertEqual(self.controller.get("a")["expense"], "0.00")

    def test_garbage_amount_is_rejected_before_any_write(self):
        with self.assertRaises(InvalidAmountError):
            self.controller.set_price("a", "abc")

        self.assertEqual(self.controller.get("a")["total_price"], "100.00")
        self.assertEqual(self.backend.writes, [])

    def test_completion_reverts_only_its_field(self):
        self.controller.orders[1]["customer_name"] = "Local edit"
        self.backend.fail = True

        self.assertFalse(self.controller.set_completion("b", True))

        self.assertEqual(self.backend.fetches, 1)
        self.assertFalse(self.controller.get("b")["is_completed"])
        self.assertEqual(self.controller.get("b")["customer_name"], "Local edit")

    def test_uniform_policy_override(self):
        controller = OptimisticOrderController(
            self.backend, policies=ReconcilePolicy.FIELD_REVERT
        )
        controller.refresh()
        self.backend.fail = True

        self.assertFalse(controller.set_price("a", "999"))

        self.assertEqual(self.backend.fetches, 2)
        self.assertEqual(controller.get("a")["total_price"], "100.00")

    def test_move_to_in_store_notifies_after_success(self):
        self.assertTrue(self.controller.move("a", Order.STATUS_IN_STORE))

        self.assertEqual(len(self.notifier.calls), 1)
        self.assertIn("(SN: A)", self.notifier.calls[0][1])

    def test_failed_move_does_not_notify(self):
        self.backend.fail = True

        self.assertFalse(self.controller.move("a", Order.STATUS_IN_STORE))

        self.assertEqual(self.notifier.calls, [])
        self.assertEqual(self.controller.get("a")["status"], "pending")

    def test_bulk_move_refreshes_when_anything_succeeded(self):
        outcome = self.controller.bulk_move(["a", "missing"], "ready")

        self.assertEqual(outcome.succeeded_ids, ["a"])
        self.assertEqual(self.controller.get("a")["status"], "ready")
        self.assertEqual(self.notifier.calls, [])

    def test_distribution_noop_for_empty_selection_or_amount(self):
        self.assertTrue(self.controller.distribute_expense([], "100").is_empty)
        self.assertTrue(self.controller.distribute_expense(["a"], "0").is_empty)
        self.assertEqual(self.backend.fetches, 1)

    def test_distribution_refreshes(self):
        outcome = self.controller.distribute_expense(["a", "b"], "100", portal="hub")

        self.assertTrue(outcome.all_ok)
        self.assertEqual(self.backend.fetches, 2)


class LocalBackendTests(TestCase):
    def test_controller_round_trip_through_services(self):
        order = make_order("LW01")
        controller = OptimisticOrderController(LocalOrderBackend(OrderRepository()))
        controller.refresh()

        self.assertTrue(controller.set_price(order.id, "750"))
        self.assertTrue(controller.move(order.id, Order.STATUS_SENT_TO_HUB))

        refreshed = Order.objects.get(pk=order.pk)
        self.assertEqual(str(refreshed.total_price), "750.00")
        self.assertEqual(refreshed.status, Order.STATUS_SENT_TO_HUB)
        self.assertEqual(controller.get(order.id)["status"], Order.STATUS_SENT_TO_HUB)
