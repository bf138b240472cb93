import uuid

from django.test import SimpleTestCase, TestCase

from orders.board import OrderBoard
from orders.models import Order
from orders.services.search import (
    filter_by_store,
    filter_queryset,
    matches_query,
    search_orders,
)
from orders.tests.helpers import make_order


def _order(**fields):
    base = {
        "id": fields.get("serial_number", "x"),
        "serial_number": "LW01",
        "customer_name": "Asha Rao",
        "shoe_model": "Nike Air Max",
        "whatsapp_number": "+91 98200 12345",
        "status": "pending",
        "store_id": None,
        "is_in_house": False,
        "is_completed": False,
    }
    base.update(fields)
    return base


class MatchesQueryTests(SimpleTestCase):
    def test_blank_query_matches_everything(self):
        self.assertTrue(matches_query(_order(), ""))
        self.assertTrue(matches_query(_order(), "   "))
        self.assertTrue(matches_query(_order(), None))

    def test_name_model_and_serial_ignore_case(self):
        order = _order()
        self.assertTrue(matches_query(order, "asha"))
        self.assertTrue(matches_query(order, "AIR MAX"))
        self.assertTrue(matches_query(order, "lw01"))

    def test_contact_number_is_raw_substring(self):
        order = _order(whatsapp_number="+91 98200 12345")
        self.assertTrue(matches_query(order, "98200"))
        self.assertTrue(matches_query(order, "+91"))
        self.assertFalse(matches_query(order, "9820012345"))

    def test_no_match(self):
        self.assertFalse(matches_query(_order(), "adidas"))

    def test_blank_search_preserves_order(self):
        orders = [_order(serial_number="LW02"), _order(serial_number="LW01")]
        self.assertEqual(search_orders(orders, ""), orders)

    def test_store_and_in_house_filters_compose(self):
        orders = [
            _order(serial_number="LW01", store_id="s1"),
            _order(serial_number="LW02", store_id="s2"),
            _order(serial_number="LW03", store_id="s1", is_in_house=True),
        ]

        self.assertEqual(len(filter_by_store(orders, "all")), 3)
        self.assertEqual(
            [o["serial_number"] for o in filter_by_store(orders, "s1")],
            ["LW01", "LW03"],
        )
        self.assertEqual(
            [o["serial_number"] for o in filter_by_store(orders, "s1", exclude_in_house=True)],
            ["LW01"],
        )


    def test_store_filter_compares_uuids_by_value(self):
        store_id = uuid.uuid4()
        orders = [
            _order(serial_number="LW01", store_id=str(store_id)),
            _order(serial_number="LW02", store_id=str(uuid.uuid4())),
        ]

        for spelling in (str(store_id).upper(), f" {store_id} ", store_id):
            self.assertEqual(
                [o["serial_number"] for o in filter_by_store(orders, spelling)], ["LW01"]
            )


class FilterQuerysetTests(TestCase):
    def setUp(self):
        make_order("LW01", customer_name="Asha Rao", shoe_model="Nike Air Max")
        make_order("LW02", customer_name="Vikram", shoe_model="Adidas Samba", whatsapp_number="99887")

    def test_blank_query_is_no_filter(self):
        self.assertEqual(filter_queryset(Order.objects.all(), "").count(), 2)

    def test_case_insensitive_fields(self):
        qs = filter_queryset(Order.objects.all(), "SAMBA")
        self.assertEqual(list(qs.values_list("serial_number", flat=True)), ["LW02"])

    def test_contact_number_substring(self):
        qs = filter_queryset(Order.objects.all(), "998")
        self.assertEqual(list(qs.values_list("serial_number", flat=True)), ["LW02"])


class OrderBoardTests(SimpleTestCase):
    def setUp(self):
        self.orders = [
            _order(serial_number="LW01", status="pending", store_id="s1"),
            _order(serial_number="LW02", status="in_store", store_id="s1", customer_name="Vikram"),
            _order(serial_number="LW03", status="pending", store_id="s2", is_in_house=True),
            _order(serial_number="LW04", status="ready", store_id="s2", is_completed=True),
        ]

    def test_columns_follow_stage_order(self):
        board = OrderBoard(self.orders)
        columns = board.as_dict()["columns"]

        self.assertEqual(
            [c["status"] for c in columns],
            ["pending", "sent_to_hub", "processing", "ready", "in_store"],
        )
        self.assertEqual(columns[0]["count"], 2)
        self.assertEqual(columns[1]["count"], 0)

    def test_filters_compose_with_search(self):
        board = OrderBoard(self.orders, store_id="s1", query="vikram")

        self.assertEqual([o["serial_number"] for o in board.visible], ["LW02"])
        self.assertEqual(board.summary(), {"shown": 1, "in_scope": 2, "total": 4})

    def test_in_house_and_completion_filters(self):
        board = OrderBoard(self.orders, exclude_in_house=True, completed=False)

        self.assertEqual([o["serial_number"] for o in board.visible], ["LW01", "LW02"])
