import unittest
import uuid

from bakery.models import InventoryMovement

from api_support import ApiTestCase


class InventoryApiTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()
        self.product = self.create_product(self.headers).json()["data"]

    def movement(self, **overrides):
        payload = {
            "product": self.product["id"],
            "amount": 5,
            "location": "Almacen central",
            "movement": "in",
            "reason": "Produccion diaria",
        }
        payload.update(overrides)
        return payload

    def record(self, **overrides):
        return self.client.post("/api/inventory", json=self.movement(**overrides), headers=self.headers)

    def test_create_records_authenticated_user(self):
        response = self.record(batch="L-01", expiration_date="2026-11-01")
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["message"], "Inventory in movement recorded")
        data = body["data"]
        self.assertEqual(data["product_id"], self.product["id"])
        self.assertIsNotNone(data["user_id"])
        self.assertEqual(data["batch"], "L-01")
        self.assertEqual(data["expiration_date"], "2026-11-01")

    def test_amount_must_be_positive_and_storable(self):
        for amount in (0, -3, 10**20):
            with self.subTest(amount=amount):
                response = self.record(amount=amount)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["errors"][0]["field"], "amount")
        self.assertEqual(self.count_rows(InventoryMovement), 0)

    def test_product_reference_is_validated(self):
        response = self.record(product="not-an-id")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "product_id")

        response = self.record(product=str(uuid.uuid4()))
        self.assertEqual(response.status_code, 404)

    def test_reads_expand_references(self):
        movement_id = self.record().json()["data"]["id"]

        data = self.client.get("/api/inventory/{}".format(movement_id), headers=self.headers).json()["data"]
        self.assertEqual(data["product"], {"id": self.product["id"], "name": "Pan", "sku": "PAN-1"})
        self.assertEqual(data["user"]["email"], "ana@x.com")
        self.assertEqual(set(data["user"]), {"id", "name", "email"})

        data = self.client.get(
            "/api/inventory/{}".format(movement_id),
            params={"expand": ""},
            headers=self.headers,
        ).json()["data"]
        self.assertIsNone(data["product"])
        self.assertIsNone(data["user"])

        response = self.client.get("/api/inventory", params={"expand": "owner"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)

    def test_list_orders_by_recency_and_filters(self):
        self.record(reason="primero")
        self.record(reason="segundo", movement="out")
        data = self.client.get("/api/inventory", headers=self.headers).json()["data"]
        self.assertEqual([item["reason"] for item in data], ["segundo", "primero"])

        data = self.client.get("/api/inventory", params={"movement": "out"}, headers=self.headers).json()["data"]
        self.assertEqual([item["reason"] for item in data], ["segundo"])

    def test_update_replaces_movement(self):
        movement_id = self.record(notes="inicial").json()["data"]["id"]
        response = self.client.put(
            "/api/inventory",
            json=dict(self.movement(amount=2, movement="adjustment", reason="Conteo"), id=movement_id),
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual((data["amount"], data["movement"], data["notes"]), (2, "adjustment", None))

    def test_update_validates_identifier_and_existence(self):
        response = self.client.put("/api/inventory", json=dict(self.movement(), id="abc"), headers=self.headers)
        self.assertEqual(response.status_code, 400)

        response = self.client.put(
            "/api/inventory",
            json=dict(self.movement(), id=str(uuid.uuid4())),
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 404)

    def test_get_with_malformed_identifier_is_bad_request(self):
        response = self.client.get("/api/inventory/12345", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid identifier")

    def test_delete(self):
        movement_id = self.record().json()["data"]["id"]
        path = "/api/inventory/{}".format(movement_id)
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 200)
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 404)
        self.assertEqual(self.client.get(path, headers=self.headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
