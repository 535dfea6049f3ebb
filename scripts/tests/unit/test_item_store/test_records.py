"""Tests for the record model – identity, rendering, derived fields, validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from item_store import ItemRecord, Product, RecordType, Service
from item_store.records import variant_for


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class TestIdentity:
    def test_id_generated(self):
        p = Product(name="Laptop", price=1500)
        assert p.id
        assert isinstance(p.id, str)

    def test_ids_unique(self):
        ids = {Product().id for _ in range(200)} | {Service().id for _ in range(200)}
        assert len(ids) == 400

    def test_id_is_frozen(self):
        p = Product(name="Laptop")
        with pytest.raises(ValidationError):
            p.id = "other"

    def test_explicit_id_kept(self):
        s = Service(id="svc-1", name="Hosting")
        assert s.id == "svc-1"

    def test_name_defaults_to_empty(self):
        assert Product().name == ""
        assert Service().name == ""

    def test_name_is_mutable(self):
        p = Product(name="before")
        p.name = "after"
        assert p.name == "after"

    def test_kind_matches_class(self):
        assert Product().kind == RecordType.PRODUCT
        assert Service().kind == RecordType.SERVICE

    def test_kind_is_frozen(self):
        p = Product()
        with pytest.raises(ValidationError):
            p.kind = "Service"


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class TestProduct:
    def test_price_is_decimal(self):
        p = Product(name="Mouse", price="25.99")
        assert p.price == Decimal("25.99")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(name="Bad", price=-1)

    def test_negative_price_rejected_on_assignment(self):
        p = Product(name="Mouse", price=1)
        with pytest.raises(ValidationError):
            p.price = -5

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            Product(name="x", colour="red")

    def test_str(self):
        p = Product(id="p1", name="Laptop", price=1500)
        assert str(p) == "Product: Laptop (Id=p1) | Price: 1500"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TestService:
    def test_total(self):
        s = Service(name="Hosting", hourly_rate=10, hours=12)
        assert s.total == Decimal("120")

    def test_total_recomputed_on_access(self):
        s = Service(name="Support", hourly_rate="30", hours=2)
        assert s.total == Decimal("60")
        s.hours = 5
        assert s.total == Decimal("150")
        s.hourly_rate = Decimal("1.5")
        assert s.total == Decimal("7.5")

    def test_zero_and_negative_hours_allowed(self):
        assert Service(hourly_rate=10, hours=0).total == 0
        assert Service(hourly_rate=10, hours=-3).total == Decimal("-30")

    def test_total_not_dumped(self):
        s = Service(name="Hosting", hourly_rate=10, hours=12)
        assert "total" not in s.model_dump()

    def test_str(self):
        s = Service(id="s1", name="Hosting", hourly_rate=10, hours=12)
        assert str(s) == "Service: Hosting (Id=s1) | HourlyRate: 10, Hours: 12, Total: 120"


# ---------------------------------------------------------------------------
# Variant registry
# ---------------------------------------------------------------------------

class TestVariants:
    def test_persisted_fields_order(self):
        assert Product.persisted_fields() == ("id", "name", "price")
        assert Service.persisted_fields() == ("id", "name", "hourly_rate", "hours")

    def test_variant_for_known_tags(self):
        assert variant_for("Product") is Product
        assert variant_for(RecordType.SERVICE) is Service

    def test_variant_for_unknown_tag(self):
        assert variant_for("Gadget") is None

    def test_variants_share_base(self):
        assert isinstance(Product(), ItemRecord)
        assert isinstance(Service(), ItemRecord)
