# accounting/services/profit_and_loss_service.py

"""
PROFIT & LOSS SERVICE (COMPLETED ORDERS)

Read-only aggregation over completed orders.

Per order:
    profit = total_price - hub_price - expense   (missing values count as 0)

Period windows (on Order.updated_at, local time):
- this_month : >= first day of the current month
- prev_month : first day of the previous month .. its last day 23:59:59
- custom     : start_date 00:00 .. end_date 23:59:59
               either date missing -> no date filter

Contract-locked numbers:
{
  "total_orders": int,
  "total_profit": float,
  "average_profit": float,     # 0 when there are no orders
  "total_profit_minor": int,
  "average_profit_minor": int,
  "orders": [...]
}

Profit is never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from accounting.services.exceptions import InvalidPeriodError
from orders.identifiers import try_parse_identifier
from orders.services.degrade import degrade_on_failure
from orders.services.money import TWOPLACES, ZERO, to_money

PERIOD_THIS_MONTH = "this_month"
PERIOD_PREV_MONTH = "prev_month"
PERIOD_CUSTOM = "custom"

PERIODS = (PERIOD_THIS_MONTH, PERIOD_PREV_MONTH, PERIOD_CUSTOM)

_END_OF_DAY = time(23, 59, 59)


def _to_minor_int(amount: Decimal) -> int:
    return int((to_money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def _value(order, name):
    if isinstance(order, dict):
        return order.get(name)
    return getattr(order, name, None)


def _aware(d: date, t: time) -> datetime:
    return timezone.make_aware(datetime.combine(d, t), timezone.get_current_timezone())


def order_profit(order) -> Decimal:
    return (
        to_money(_value(order, "total_price"))
        - to_money(_value(order, "hub_price"))
        - to_money(_value(order, "expense"))
    )


def resolve_period_window(period: str, *, now=None, start_date=None, end_date=None):
    """Returns (updated_from, updated_to); either bound may be None."""
    period = (period or PERIOD_THIS_MONTH).strip()
    today = timezone.localtime(now or timezone.now()).date()
    first_of_month = today.replace(day=1)

    if period == PERIOD_THIS_MONTH:
        return _aware(first_of_month, time.min), None

    if period == PERIOD_PREV_MONTH:
        last_of_prev = first_of_month - timedelta(days=1)
        return _aware(last_of_prev.replace(day=1), time.min), _aware(last_of_prev, _END_OF_DAY)

    if period == PERIOD_CUSTOM:
        if not start_date or not end_date:
            return None, None
        return _aware(start_date, time.min), _aware(end_date, _END_OF_DAY)

    raise InvalidPeriodError(f"Unknown period {period!r}. Use one of: {', '.join(PERIODS)}")


@dataclass
class ProfitAndLossReport:
    period: str
    updated_from: datetime | None = None
    updated_to: datetime | None = None
    total_profit: Decimal = ZERO
    average_profit: Decimal = ZERO
    orders: list = field(default_factory=list)

    @property
    def total_orders(self) -> int:
        return len(self.orders)

    def as_dict(self) -> dict:
        return {
            "period": self.period,
            "updated_from": self.updated_from.isoformat() if self.updated_from else None,
            "updated_to": self.updated_to.isoformat() if self.updated_to else None,
            "total_orders": self.total_orders,
            "total_profit": float(self.total_profit),
            "average_profit": float(self.average_profit),
            "total_profit_minor": _to_minor_int(self.total_profit),
            "average_profit_minor": _to_minor_int(self.average_profit),
            "orders": self.orders,
        }


def _row(order, profit: Decimal) -> dict:
    store = _value(order, "store")
    return {
        "id": str(_value(order, "id")),
        "serial_number": _value(order, "serial_number"),
        "customer_name": _value(order, "customer_name"),
        "store_name": getattr(store, "name", None),
        "total_price": float(to_money(_value(order, "total_price"))),
        "hub_price": float(to_money(_value(order, "hub_price"))),
        "expense": float(to_money(_value(order, "expense"))),
        "profit": float(profit),
    }


def summarize_profit(orders, *, period: str = PERIOD_CUSTOM, updated_from=None, updated_to=None):
    report = ProfitAndLossReport(period=period, updated_from=updated_from, updated_to=updated_to)
    total = ZERO
    for order in orders:
        profit = order_profit(order)
        total += profit
        report.orders.append(_row(order, profit))

    report.total_profit = to_money(total)
    if report.orders:
        report.average_profit = (total / len(report.orders)).quantize(
            TWOPLACES, rounding=ROUND_HALF_UP
        )
    return report


@degrade_on_failure("fetching profit and loss")
def get_order_profit_and_loss(
    repo,
    *,
    period: str = PERIOD_THIS_MONTH,
    start_date=None,
    end_date=None,
    store_id=None,
    now=None,
) -> ProfitAndLossReport | None:
    period = (period or PERIOD_THIS_MONTH).strip()
    updated_from, updated_to = resolve_period_window(
        period, now=now, start_date=start_date, end_date=end_date
    )
    sid = try_parse_identifier(store_id) if store_id and store_id != "all" else None

    orders = repo.list_completed_orders(
        store_id=sid, updated_from=updated_from, updated_to=updated_to
    )
    return summarize_profit(
        orders, period=period, updated_from=updated_from, updated_to=updated_to
    )
