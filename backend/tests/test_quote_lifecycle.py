from decimal import Decimal

import pytest
from freezegun import freeze_time

from cleanpro import models, schemas
from cleanpro.core.config import settings
from cleanpro.crud import crud_quote, crud_rate
from cleanpro.utils.errors import InvalidArgumentError, NotFoundError, ValidationError


def new_quote(db, **overrides):
    data = {
        "customer_name": "Dana Reyes",
        "customer_email": "dana@example.com",
        "customer_phone": "555-0100",
        "square_footage": 1500,
        "service_frequency": "weekly",
        "add_ons": ["pethaircleanup"],
    }
    data.update(overrides)
    return crud_quote.create_quote(db, schemas.QuoteCreate(**data))


def test_create_prices_and_stores_pending_quote(db, catalog):
    quote = new_quote(db)
    assert quote.id is not None
    assert quote.status == models.QuoteStatus.PENDING
    assert quote.base_price == Decimal("120")
    assert quote.surcharges == Decimal("25")
    assert quote.discounts == Decimal("14.50")
    assert quote.total_price == Decimal("130.50")
    assert quote.add_ons == ["pethaircleanup"]


def test_create_normalizes_add_on_keys(db, catalog):
    quote = new_quote(db, add_ons=["Deep Cleaning", "deepcleaning", "", "Pet Hair Cleanup"])
    assert quote.add_ons == ["Deep Cleaning", "Pet Hair Cleanup"]
    assert quote.surcharges == Decimal("65")


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"customer_name": "   "}, "customer_name"),
        ({"customer_email": None}, "customer_email"),
        ({"square_footage": None}, "square_footage"),
        ({"square_footage": 0}, "square_footage"),
    ],
)
def test_create_requires_customer_and_size(db, catalog, overrides, field):
    with pytest.raises(ValidationError) as exc:
        new_quote(db, **overrides)
    assert exc.value.message == "Customer name, email, and square footage are required"
    assert field in exc.value.field_errors
    assert crud_quote.get_all_quotes(db) == []


def test_quote_without_catalog_prices_at_zero(db):
    quote = new_quote(db)
    assert quote.total_price == Decimal("0")
    assert quote.status == models.QuoteStatus.PENDING


def test_update_reprices_when_size_changes(db, catalog):
    quote = new_quote(db, square_footage=500, service_frequency=None, add_ons=[])
    assert quote.base_price == Decimal("80")

    updated = crud_quote.update_quote(db, quote.id, schemas.QuoteUpdate(square_footage=2500))

    assert updated.base_price == Decimal("160")
    assert updated.total_price == Decimal("160")
    assert updated.customer_name == "Dana Reyes"


def test_update_without_pricing_fields_keeps_stored_prices(db, catalog):
    quote = new_quote(db)
    crud_rate.update_rate(db, catalog["medium"].id, schemas.RateUpdate(base_price=Decimal("999")))

    updated = crud_quote.update_quote(
        db, quote.id, schemas.QuoteUpdate(status="accepted", customer_phone="555-0199")
    )

    assert updated.status == models.QuoteStatus.ACCEPTED
    assert updated.customer_phone == "555-0199"
    assert updated.total_price == Decimal("130.50")


def test_update_add_ons_reprices(db, catalog):
    quote = new_quote(db, service_frequency=None, add_ons=[])
    updated = crud_quote.update_quote(
        db, quote.id, schemas.QuoteUpdate(add_ons=["deepCleaning", "petHairCleanup"])
    )
    assert updated.add_ons == ["deepCleaning", "petHairCleanup"]
    assert updated.surcharges == Decimal("65")
    assert updated.total_price == Decimal("185")


def test_update_cannot_clear_required_fields(db, catalog):
    quote = new_quote(db)
    with pytest.raises(ValidationError) as exc:
        crud_quote.update_quote(db, quote.id, schemas.QuoteUpdate(customer_email=" "))
    assert exc.value.field_errors == {"customer_email": "required"}
    assert crud_quote.get_quote(db, quote.id).customer_email == "dana@example.com"


def test_update_checks_the_id_before_the_fields(db, catalog):
    new_quote(db)
    with pytest.raises(InvalidArgumentError):
        crud_quote.update_quote(db, "abc", schemas.QuoteUpdate(customer_name=""))
    with pytest.raises(NotFoundError):
        crud_quote.update_quote(db, 999, schemas.QuoteUpdate(customer_name=""))


def test_update_touches_updated_at(db, catalog):
    with freeze_time("2030-03-01 10:00:00"):
        quote = new_quote(db)
    with freeze_time("2030-03-02 10:00:00"):
        updated = crud_quote.update_quote(db, quote.id, schemas.QuoteUpdate(status="rejected"))
    assert updated.created_at.day == 1
    assert updated.updated_at.day == 2


def test_delete_is_permanent(db, catalog):
    quote = new_quote(db)
    crud_quote.delete_quote(db, quote.id)
    with pytest.raises(NotFoundError) as exc:
        crud_quote.get_quote(db, quote.id)
    assert exc.value.message == f"Quote with ID {quote.id} not found"


def test_ids_must_be_integers(db):
    with pytest.raises(InvalidArgumentError) as exc:
        crud_quote.get_quote(db, "twelve")
    assert exc.value.message == "Quote ID must be a valid integer"
    with pytest.raises(InvalidArgumentError):
        crud_quote.delete_quote(db, "1.5")


def test_filter_by_status(db, catalog):
    first = new_quote(db)
    second = new_quote(db, customer_email="sam@example.com")
    crud_quote.update_quote(db, second.id, schemas.QuoteUpdate(status="accepted"))

    pending = crud_quote.get_quotes_by_status(db, models.QuoteStatus.PENDING)
    accepted = crud_quote.get_quotes_by_status(db, "accepted")
    assert [q.id for q in pending] == [first.id]
    assert [q.id for q in accepted] == [second.id]
    assert crud_quote.get_quotes_by_status(db, "expired") == []


def test_recent_quotes_newest_first(db, catalog):
    for day in (3, 1, 2):
        with freeze_time(f"2030-06-0{day} 12:00:00"):
            new_quote(db, customer_email=f"c{day}@example.com")

    recent = crud_quote.get_recent_quotes(db, limit=2)
    assert [q.customer_email for q in recent] == ["c3@example.com", "c2@example.com"]


def test_recent_quotes_default_limit(db, catalog, monkeypatch):
    monkeypatch.setattr(settings, "RECENT_QUOTES_LIMIT", 3)
    for i in range(5):
        new_quote(db, customer_email=f"c{i}@example.com")
    assert len(crud_quote.get_recent_quotes(db)) == 3
    assert crud_quote.get_recent_quotes(db, limit=0) == []
