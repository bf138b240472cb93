from django.test import SimpleTestCase, TestCase

from orders.repository import OrderRepository
from orders.services.serials import SEED_SERIAL, allocate_serial_number, next_serial_number
from orders.tests.helpers import make_order


class NextSerialNumberTests(SimpleTestCase):
    def test_missing_serial_seeds(self):
        self.assertEqual(next_serial_number(None), "LW01")
        self.assertEqual(next_serial_number(""), "LW01")

    def test_unparseable_serial_seeds(self):
        self.assertEqual(next_serial_number("ABC"), SEED_SERIAL)

    def test_increments_and_pads(self):
        self.assertEqual(next_serial_number("LW01"), "LW02")
        self.assertEqual(next_serial_number("LW09"), "LW10")

    def test_grows_past_two_digits(self):
        self.assertEqual(next_serial_number("LW99"), "LW100")
        self.assertEqual(next_serial_number("LW100"), "LW101")

    def test_prefix_is_case_insensitive(self):
        self.assertEqual(next_serial_number("lw07"), "LW08")


class AllocateSerialNumberTests(TestCase):
    def test_empty_store_gets_seed(self):
        self.assertEqual(allocate_serial_number(OrderRepository()), "LW01")

    def test_follows_most_recently_created_order(self):
        make_order("LW05")
        make_order("LW03")

        self.assertEqual(allocate_serial_number(OrderRepository()), "LW04")

    def test_unavailable_store_gets_seed(self):
        repo = OrderRepository()
        repo.close()

        self.assertEqual(allocate_serial_number(repo), "LW01")
        self.assertEqual(allocate_serial_number(None), "LW01")
