import unittest
import uuid
from datetime import datetime, timezone

from bakery.core.errors import ErrorKind, ServiceError
from bakery.database import Database, build_engine
from bakery.models import InventoryMovement
from bakery.schemas.event import EventCreate, EventUpdate
from bakery.schemas.inventory import InventoryMovementCreate, InventoryMovementUpdate
from bakery.schemas.product import ProductCreate, ProductUpdate
from bakery.schemas.user import UserCreate, UserLogin
from bakery.services import event_service, inventory_service, product_service, user_service

from api_support import make_settings


class ServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.settings = make_settings()
        self.database = Database(build_engine("sqlite:///:memory:"))
        self.database.create_all()
        self.db = self.database.session()
        self.addCleanup(self.database.dispose)
        self.addCleanup(self.db.close)

    def make_product(self, **overrides):
        values = dict(name="Pan", price=3.5, sku="pan-1", category="pan", stock=5)
        values.update(overrides)
        return product_service.create_product(self.db, ProductCreate(**values))

    def make_user(self, email="ana@x.com"):
        return user_service.register_user(
            self.db,
            UserCreate(name="Ana", email=email, password="secret1"),
            self.settings,
        )


class UserServiceTest(ServiceTestCase):
    def test_register_hashes_password(self):
        user = self.make_user()
        self.assertEqual(user.role, "user")
        self.assertFalse(user.confirmed)
        self.assertNotEqual(user.password_hash, "secret1")

    def test_duplicate_email_in_any_case_conflicts(self):
        self.make_user("ana@x.com")
        with self.assertRaises(ServiceError) as ctx:
            self.make_user("ANA@X.COM")
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFLICT)

    def test_login_failures_are_indistinguishable(self):
        self.make_user()
        messages = []
        for email, password in (("ana@x.com", "wrong-pass"), ("nobody@x.com", "secret1")):
            with self.assertRaises(ServiceError) as ctx:
                user_service.login_user(self.db, UserLogin(email=email, password=password), self.settings)
            self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_CREDENTIALS)
            messages.append(ctx.exception.message)
        self.assertEqual(messages[0], messages[1])

    def test_register_admin_role(self):
        user = user_service.register_user(
            self.db,
            UserCreate(name="Admin", email="admin@x.com", password="secret1"),
            self.settings,
            role="admin",
        )
        self.assertEqual(user.role, "admin")


class ProductServiceTest(ServiceTestCase):
    def test_duplicate_sku_conflicts_regardless_of_case_or_fields(self):
        self.make_product(sku="pan-1")
        with self.assertRaises(ServiceError) as ctx:
            self.make_product(sku="PAN-1", name="Otro", price=9, category="tortas")
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFLICT)

    def test_lookup_is_case_insensitive(self):
        self.make_product(sku="pan-1")
        self.assertEqual(product_service.get_product(self.db, "Pan-1").sku, "PAN-1")

    def test_partial_update_keeps_other_fields(self):
        created = self.make_product(description="Masa madre", stock=7)
        before = {field: getattr(created, field) for field in ("name", "description", "category", "stock", "status", "image")}

        product_service.update_product(self.db, "pan-1", ProductUpdate(price=4.25))

        refetched = product_service.get_product(self.db, "pan-1")
        self.assertEqual(refetched.price, 4.25)
        for field, value in before.items():
            self.assertEqual(getattr(refetched, field), value)

    def test_sku_change_to_existing_sku_conflicts(self):
        self.make_product(sku="pan-1")
        self.make_product(sku="pan-2")
        with self.assertRaises(ServiceError) as ctx:
            product_service.update_product(self.db, "pan-2", ProductUpdate(sku="pan-1"))
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFLICT)

    def test_list_filters_and_orders_by_recency(self):
        self.make_product(sku="a", category="pan")
        self.make_product(sku="b", category="tortas")
        self.make_product(sku="c", category="pan", status="inactive")
        self.assertEqual([p.sku for p in product_service.list_products(self.db)], ["C", "B", "A"])
        self.assertEqual([p.sku for p in product_service.list_products(self.db, category="pan")], ["C", "A"])
        self.assertEqual([p.sku for p in product_service.list_products(self.db, status="active")], ["B", "A"])

    def test_delete_missing_sku_is_not_found(self):
        with self.assertRaises(ServiceError) as ctx:
            product_service.delete_product(self.db, "missing")
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)


class InventoryServiceTest(ServiceTestCase):
    def movement_payload(self, product_id, **overrides):
        values = dict(product_id=product_id, amount=3, location="Horno", movement="in", reason="Produccion")
        values.update(overrides)
        return values

    def test_create_requires_existing_product(self):
        with self.assertRaises(ServiceError) as ctx:
            inventory_service.create_movement(
                self.db, InventoryMovementCreate(**self.movement_payload(str(uuid.uuid4())))
            )
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(self.db.query(InventoryMovement).count(), 0)

    def test_expand_embeds_product_and_user_summaries(self):
        product = self.make_product()
        user = self.make_user()
        movement = inventory_service.create_movement(
            self.db, InventoryMovementCreate(**self.movement_payload(product.id)), user_id=user.id
        )

        expanded = inventory_service.expand_references(self.db, [movement])[0]
        self.assertEqual(expanded.product.sku, "PAN-1")
        self.assertEqual(expanded.user.email, "ana@x.com")

        bare = inventory_service.expand_references(self.db, [movement], ())[0]
        self.assertIsNone(bare.product)
        self.assertIsNone(bare.user)

    def test_update_replaces_fields(self):
        product = self.make_product()
        movement = inventory_service.create_movement(
            self.db, InventoryMovementCreate(**self.movement_payload(product.id, notes="first"))
        )
        updated = inventory_service.update_movement(
            self.db,
            InventoryMovementUpdate(id=movement.id, **self.movement_payload(product.id, amount=8, movement="out")),
        )
        self.assertEqual(updated.amount, 8)
        self.assertEqual(updated.movement, "out")
        self.assertIsNone(updated.notes)

    def test_parse_expand(self):
        self.assertEqual(inventory_service.parse_expand(None), ("product", "user"))
        self.assertEqual(inventory_service.parse_expand(""), ())
        self.assertEqual(inventory_service.parse_expand("user"), ("user",))
        with self.assertRaises(ServiceError):
            inventory_service.parse_expand("product,organizer")

    def test_invalid_identifier_fails_before_lookup(self):
        with self.assertRaises(ServiceError) as ctx:
            inventory_service.get_movement(self.db, "12345")
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_IDENTIFIER)


class EventServiceTest(ServiceTestCase):
    def make_event(self):
        return event_service.create_event(
            self.db,
            EventCreate(
                title="Feria",
                description="Feria del pan",
                start_date=datetime(2026, 5, 1, 10, tzinfo=timezone.utc),
                end_date=datetime(2026, 5, 1, 18, tzinfo=timezone.utc),
                location="Plaza",
            ),
        )

    def test_defaults_are_applied(self):
        event = self.make_event()
        self.assertEqual(event.status, "active")
        self.assertEqual(event.image, "default-event.jpg")

    def test_update_with_only_end_date_checks_stored_start(self):
        event = self.make_event()
        with self.assertRaises(ServiceError) as ctx:
            event_service.update_event(
                self.db,
                EventUpdate(id=event.id, end_date=datetime(2026, 4, 30, tzinfo=timezone.utc)),
            )
        self.assertEqual(ctx.exception.kind, ErrorKind.VALIDATION)

    def test_update_with_only_start_date_checks_stored_end(self):
        event = self.make_event()
        with self.assertRaises(ServiceError):
            event_service.update_event(
                self.db,
                EventUpdate(id=event.id, start_date=datetime(2026, 5, 2, tzinfo=timezone.utc)),
            )

    def test_partial_update_keeps_other_fields(self):
        event = self.make_event()
        updated = event_service.update_event(self.db, EventUpdate(id=event.id, status="completed"))
        self.assertEqual(updated.status, "completed")
        self.assertEqual(updated.title, "Feria")
        self.assertEqual(updated.location, "Plaza")

    def test_delete_missing_event_is_not_found(self):
        with self.assertRaises(ServiceError) as ctx:
            event_service.delete_event(self.db, str(uuid.uuid4()))
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
