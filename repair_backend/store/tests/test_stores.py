import uuid
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.test import TestCase
from rest_framework.test import APIClient

from orders.repository import OrderRepository
from orders.services.exceptions import InvalidIdentifierError
from orders.tests.helpers import make_order
from store.models import Store
from store.services import store_service

User = get_user_model()


class StoreServiceTests(TestCase):
    """
    GUARANTEES:
    - passwords are stored hashed
    - stores are listed oldest first
    - a store with orders cannot be deleted
    """

    def setUp(self):
        self.repo = OrderRepository()

    def test_create_hashes_password(self):
        store = store_service.create_store(self.repo, name=" Andheri ", password="secret-1")

        self.assertEqual(store.name, "Andheri")
        self.assertNotEqual(store.password_hash, "secret-1")
        self.assertEqual(
            store_service.authenticate_store(self.repo, password="secret-1").id, store.id
        )
        self.assertIsNone(store_service.authenticate_store(self.repo, password="wrong"))

    def test_list_oldest_first_and_rename(self):
        first = store_service.create_store(self.repo, name="Andheri", password="a-pass")
        store_service.create_store(self.repo, name="Bandra", password="b-pass")

        renamed = store_service.rename_store(self.repo, store_id=first.id, name="Andheri West")

        self.assertEqual(renamed.name, "Andheri West")
        self.assertEqual(
            [s.name for s in store_service.list_stores(self.repo)],
            ["Andheri West", "Bandra"],
        )

    def test_delete_refused_with_orders(self):
        store = store_service.create_store(self.repo, name="Andheri", password="a-pass")
        make_order("LW01", store=store)

        with self.assertRaises(store_service.StoreHasOrdersError):
            store_service.delete_store(self.repo, store_id=store.id)

        self.assertEqual(store_service.store_order_count(self.repo, store_id=store.id), 1)
        self.assertTrue(Store.objects.filter(pk=store.pk).exists())

    def test_delete_empty_store(self):
        store = store_service.create_store(self.repo, name="Andheri", password="a-pass")

        self.assertTrue(store_service.delete_store(self.repo, store_id=store.id))
        self.assertFalse(store_service.delete_store(self.repo, store_id=store.id))

    def test_malformed_id_raises(self):
        with self.assertRaises(InvalidIdentifierError):
            store_service.get_store(self.repo, store_id="andheri")

    def test_missing_store_is_none(self):
        self.assertIsNone(store_service.get_store(self.repo, store_id=uuid.uuid4()))


class StoreApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="store", password="pass")
        self.admin = User.objects.create_user(username="admin", password="pass", is_staff=True)

    def test_create_is_admin_only(self):
        self.client.force_authenticate(self.user)
        response = self.client.post(
            "/api/store/stores/", {"name": "Andheri", "password": "secret-1"}, format="json"
        )
        self.assertEqual(response.status_code, 403)

        self.client.force_authenticate(self.admin)
        response = self.client.post(
            "/api/store/stores/", {"name": "Andheri", "password": "secret-1"}, format="json"
        )
        self.assertEqual(response.status_code, 201)
        self.assertNotIn("password_hash", response.data)

    def test_authenticate_and_order_count(self):
        self.client.force_authenticate(self.admin)
        store_id = self.client.post(
            "/api/store/stores/", {"name": "Andheri", "password": "secret-1"}, format="json"
        ).data["id"]
        make_order("LW01", store_id=store_id)

        self.client.force_authenticate(self.user)
        response = self.client.post(
            "/api/store/stores/authenticate/", {"password": "secret-1"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], store_id)

        response = self.client.post(
            "/api/store/stores/authenticate/", {"password": "nope"}, format="json"
        )
        self.assertEqual(response.status_code, 401)

        response = self.client.get(f"/api/store/stores/{store_id}/order-count/")
        self.assertEqual(response.data["order_count"], 1)

    def test_authenticate_during_outage_is_service_unavailable(self):
        Store.objects.create(name="Andheri", password_hash=make_password("secret-1"))
        closed = OrderRepository()
        closed.close()

        self.client.force_authenticate(self.user)
        with patch("store.views.store.get_repository", return_value=closed):
            response = self.client.post(
                "/api/store/stores/authenticate/", {"password": "secret-1"}, format="json"
            )

        self.assertEqual(response.status_code, 503)

    def test_delete_store_with_orders_is_conflict(self):
        self.client.force_authenticate(self.admin)
        store_id = self.client.post(
            "/api/store/stores/", {"name": "Andheri", "password": "secret-1"}, format="json"
        ).data["id"]
        make_order("LW01", store_id=store_id)

        response = self.client.delete(f"/api/store/stores/{store_id}/")

        self.assertEqual(response.status_code, 409)

    def test_rename(self):
        store = Store.objects.create(name="Andheri", password_hash="x")
        self.client.force_authenticate(self.user)

        response = self.client.patch(
            f"/api/store/stores/{store.id}/", {"name": "Juhu"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["name"], "Juhu")
