from datetime import date, datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from accounting.services.exceptions import InvalidPeriodError
from accounting.services.profit_and_loss_service import (
    get_order_profit_and_loss,
    order_profit,
    resolve_period_window,
    summarize_profit,
)
from orders.models import Order
from orders.repository import OrderRepository
from orders.tests.helpers import make_order, make_store

User = get_user_model()


def _aware(*args):
    return timezone.make_aware(datetime(*args), timezone.get_current_timezone())


class ProfitMathTests(SimpleTestCase):
    def test_missing_values_count_as_zero(self):
        self.assertEqual(
            order_profit({"total_price": None, "hub_price": "100", "expense": None}),
            Decimal("-100.00"),
        )

    def test_empty_set_average_is_zero(self):
        report = summarize_profit([])

        self.assertEqual(report.total_orders, 0)
        self.assertEqual(report.average_profit, Decimal("0.00"))

    def test_total_and_average(self):
        report = summarize_profit(
            [
                {"total_price": "1000", "hub_price": "400", "expense": "100"},
                {"total_price": "600", "hub_price": "300", "expense": "0"},
            ]
        )

        self.assertEqual(report.total_profit, Decimal("800.00"))
        self.assertEqual(report.average_profit, Decimal("400.00"))
        self.assertEqual(report.as_dict()["total_profit_minor"], 80000)


class PeriodWindowTests(SimpleTestCase):
    def setUp(self):
        self.now = _aware(2026, 3, 15, 10, 30)

    def test_this_month(self):
        start, end = resolve_period_window("this_month", now=self.now)

        self.assertEqual(start, _aware(2026, 3, 1, 0, 0))
        self.assertIsNone(end)

    def test_prev_month_ends_last_second_of_last_day(self):
        start, end = resolve_period_window("prev_month", now=self.now)

        self.assertEqual(start, _aware(2026, 2, 1, 0, 0))
        self.assertEqual(end, _aware(2026, 2, 28, 23, 59, 59))

    def test_prev_month_across_year(self):
        start, end = resolve_period_window("prev_month", now=_aware(2026, 1, 5, 9, 0))

        self.assertEqual(start, _aware(2025, 12, 1, 0, 0))
        self.assertEqual(end, _aware(2025, 12, 31, 23, 59, 59))

    def test_custom_range(self):
        start, end = resolve_period_window(
            "custom", now=self.now, start_date=date(2026, 1, 10), end_date=date(2026, 1, 20)
        )

        self.assertEqual(start, _aware(2026, 1, 10, 0, 0))
        self.assertEqual(end, _aware(2026, 1, 20, 23, 59, 59))

    def test_custom_missing_date_means_no_filter(self):
        self.assertEqual(
            resolve_period_window("custom", now=self.now, start_date=date(2026, 1, 10)),
            (None, None),
        )

    def test_unknown_period(self):
        with self.assertRaises(InvalidPeriodError):
            resolve_period_window("last_year", now=self.now)


class ProfitAndLossTests(TestCase):
    """
    GUARANTEES:
    - only completed orders count
    - the window applies to updated_at
    - optional store scope
    """

    def setUp(self):
        self.repo = OrderRepository()
        self.now = _aware(2026, 3, 15, 10, 30)
        self.store = make_store()

        self._completed("LW01", _aware(2026, 3, 2, 9, 0), store=self.store)
        self._completed("LW02", _aware(2026, 2, 28, 23, 59, 59))
        self._completed("LW03", _aware(2026, 1, 31, 12, 0))
        make_order("LW04", hub_price=Decimal("100.00"))

    def _completed(self, serial, updated_at, **fields):
        order = make_order(
            serial,
            total_price=Decimal("1000.00"),
            hub_price=Decimal("300.00"),
            expense=Decimal("50.00"),
            is_completed=True,
            **fields,
        )
        Order.objects.filter(pk=order.pk).update(updated_at=updated_at)
        return order

    def _serials(self, report):
        return sorted(row["serial_number"] for row in report.orders)

    def test_this_month(self):
        report = get_order_profit_and_loss(self.repo, period="this_month", now=self.now)

        self.assertEqual(self._serials(report), ["LW01"])
        self.assertEqual(report.total_profit, Decimal("650.00"))

    def test_prev_month_includes_last_second(self):
        report = get_order_profit_and_loss(self.repo, period="prev_month", now=self.now)

        self.assertEqual(self._serials(report), ["LW02"])

    def test_custom_without_dates_covers_everything_completed(self):
        report = get_order_profit_and_loss(self.repo, period="custom", now=self.now)

        self.assertEqual(self._serials(report), ["LW01", "LW02", "LW03"])
        self.assertEqual(report.average_profit, Decimal("650.00"))

    def test_store_scope(self):
        report = get_order_profit_and_loss(
            self.repo, period="custom", store_id=str(self.store.id), now=self.now
        )

        self.assertEqual(self._serials(report), ["LW01"])

    def test_unavailable_store_returns_none(self):
        self.repo.close()
        self.assertIsNone(get_order_profit_and_loss(self.repo, period="custom"))


class ProfitAndLossApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(User.objects.create_user(username="hub", password="pass"))

    def test_custom_period(self):
        order = make_order(
            "LW01",
            total_price=Decimal("500.00"),
            hub_price=Decimal("200.00"),
            is_completed=True,
        )
        Order.objects.filter(pk=order.pk).update(updated_at=_aware(2026, 1, 20, 18, 0))

        response = self.client.get(
            "/api/accounting/profit-and-loss/",
            {"period": "custom", "start_date": "2026-01-20", "end_date": "2026-01-20"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total_orders"], 1)
        self.assertEqual(response.data["total_profit"], 300.0)
        self.assertEqual(response.data["orders"][0]["profit"], 300.0)

    def test_bad_inputs(self):
        url = "/api/accounting/profit-and-loss/"

        self.assertEqual(self.client.get(url, {"period": "decade"}).status_code, 400)
        self.assertEqual(self.client.get(url, {"start_date": "20-01-2026"}).status_code, 400)
        self.assertEqual(
            self.client.get(
                url,
                {"period": "custom", "start_date": "2026-02-01", "end_date": "2026-01-01"},
            ).status_code,
            400,
        )
