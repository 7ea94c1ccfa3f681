from decimal import Decimal

import pytest
from freezegun import freeze_time

from cleanpro import models, schemas
from cleanpro.crud import crud_rate
from cleanpro.services.rate_seed import DEFAULT_RATES, seed_default_rates
from cleanpro.utils.errors import InvalidArgumentError, NotFoundError, ValidationError


def test_tiers_are_active_and_ordered_by_minimum(db, add_rate):
    add_rate(category="squareFootage", min_sq_ft=2000, max_sq_ft=2999, base_price=Decimal("160"))
    small = add_rate(category="squareFootage", min_sq_ft=0, max_sq_ft=999, base_price=Decimal("80"))
    add_rate(category="squareFootage", min_sq_ft=1000, max_sq_ft=1999, base_price=Decimal("120"))
    crud_rate.delete_rate(db, small.id)

    tiers = crud_rate.get_square_footage_tiers(db)
    assert [t.min_sq_ft for t in tiers] == [1000, 2000]


def test_category_queries_only_return_active_rates(db, catalog):
    crud_rate.delete_rate(db, catalog["deep"].id)
    names = [r.name for r in crud_rate.get_surcharges(db)]
    assert names == ["Pet Hair Cleanup"]
    assert [r.frequency for r in crud_rate.get_discounts(db)] == [models.ServiceFrequency.WEEKLY]
    assert len(crud_rate.get_rates_by_category(db, "squareFootage")) == 3
    # the unfiltered listing keeps inactive rows
    assert len(crud_rate.get_all_rates(db)) == 6


def test_soft_delete_keeps_the_row(db, catalog):
    rate_id = catalog["pets"].id
    with freeze_time("2031-05-01 09:00:00"):
        rate = crud_rate.delete_rate(db, rate_id)
    assert rate.is_active is False
    assert rate.updated_at.year == 2031
    assert crud_rate.get_rate(db, rate_id).is_active is False
    assert crud_rate.get_rate(db, rate_id).name == "Pet Hair Cleanup"


def test_deleted_surcharge_no_longer_prices(db, catalog):
    assert crud_rate.get_catalog_snapshot(db).find_surcharge("pethaircleanup") is not None
    crud_rate.delete_rate(db, catalog["pets"].id)
    assert crud_rate.get_catalog_snapshot(db).find_surcharge("pethaircleanup") is None


def test_create_rate_requires_category_fields(db):
    with pytest.raises(ValidationError) as exc:
        crud_rate.create_rate(
            db, schemas.RateCreate(category="squareFootage", min_sq_ft=0, base_price=Decimal("80"))
        )
    assert exc.value.message == "Square footage rates require minSqFt, maxSqFt, and basePrice"
    assert exc.value.field_errors == {"max_sq_ft": "required"}
    assert crud_rate.get_all_rates(db) == []


def test_discount_requires_frequency(db):
    with pytest.raises(ValidationError) as exc:
        crud_rate.create_rate(
            db,
            schemas.RateCreate(category="discount", discount_type="percentage", discount_value=Decimal("5")),
        )
    assert "frequency" in exc.value.field_errors


def test_zero_values_count_as_present(db, add_rate):
    rate = add_rate(category="surcharge", name="Free Touch-up", surcharge_type="fixed", surcharge_value=Decimal("0"))
    assert rate.is_active is True
    assert rate.surcharge_value == Decimal("0")


def test_new_rates_start_active_with_timestamps(db, add_rate):
    with freeze_time("2030-01-02 03:04:05"):
        rate = add_rate(category="surcharge", name="Fridge", surcharge_type="fixed", surcharge_value=Decimal("20"))
    assert rate.is_active is True
    assert rate.created_at.isoformat() == "2030-01-02T03:04:05"
    assert rate.updated_at == rate.created_at


def test_update_merges_only_given_fields(db, catalog):
    rate_id = catalog["medium"].id
    updated = crud_rate.update_rate(db, rate_id, schemas.RateUpdate(base_price=Decimal("125")))
    assert updated.base_price == Decimal("125")
    assert updated.min_sq_ft == 1000
    assert updated.max_sq_ft == 1999
    assert crud_rate.calculate_base_price(db, 1500) == Decimal("125")


def test_update_can_reactivate(db, catalog):
    rate_id = catalog["deep"].id
    crud_rate.delete_rate(db, rate_id)
    assert crud_rate.update_rate(db, rate_id, schemas.RateUpdate(is_active=True)).is_active is True


def test_get_rate_rejects_non_integer_id(db):
    with pytest.raises(InvalidArgumentError) as exc:
        crud_rate.get_rate(db, "abc")
    assert exc.value.message == "Rate ID must be a valid integer"


def test_get_rate_unknown_id(db):
    with pytest.raises(NotFoundError):
        crud_rate.get_rate(db, 999)
    with pytest.raises(NotFoundError):
        crud_rate.delete_rate(db, "999")


def test_string_id_is_accepted(db, catalog):
    assert crud_rate.get_rate(db, str(catalog["weekly"].id)).id == catalog["weekly"].id


def test_base_price_lookup(db, catalog):
    assert crud_rate.calculate_base_price(db, 750) == Decimal("80")
    assert crud_rate.calculate_base_price(db, 1500) == Decimal("120")
    assert crud_rate.calculate_base_price(db, 5_000_000) == Decimal("0")


def test_seed_only_fills_an_empty_catalog(db):
    assert seed_default_rates(db) == len(DEFAULT_RATES)
    assert seed_default_rates(db) == 0
    assert len(crud_rate.get_all_rates(db)) == len(DEFAULT_RATES)
    assert [t.base_price for t in crud_rate.get_square_footage_tiers(db)] == [
        Decimal("80"),
        Decimal("120"),
        Decimal("160"),
    ]


def test_explicit_null_max_creates_open_ended_tier(db, add_rate):
    add_rate(category="squareFootage", min_sq_ft=0, max_sq_ft=1999, base_price=Decimal("120"))
    top = add_rate(category="squareFootage", min_sq_ft=2000, max_sq_ft=None, base_price=Decimal("160"))

    assert top.max_sq_ft is None
    assert crud_rate.calculate_base_price(db, 2000) == Decimal("160")
    assert crud_rate.calculate_base_price(db, 10_000_000) == Decimal("160")


def test_omitted_max_is_still_required(db):
    with pytest.raises(ValidationError) as exc:
        crud_rate.create_rate(
            db, schemas.RateCreate(category="squareFootage", min_sq_ft=2000, base_price=Decimal("160"))
        )
    assert exc.value.field_errors == {"max_sq_ft": "required"}


def test_seeded_large_home_tier_is_open_ended(db):
    seed_default_rates(db)
    largest = crud_rate.get_square_footage_tiers(db)[-1]
    assert largest.max_sq_ft is None
    assert crud_rate.calculate_base_price(db, 50_000) == Decimal("160")
