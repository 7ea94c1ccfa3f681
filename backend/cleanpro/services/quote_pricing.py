"""Quote pricing over a frozen snapshot of the rate catalog.

Everything here is pure: the same request priced against the same snapshot
always yields the same :class:`~cleanpro.schemas.PricedQuote`. Catalog gaps
never raise. A square footage outside every tier prices at zero, an add-on
without a surcharge adds nothing and a frequency without a discount gets no
discount. Each of those degradations is logged and counted so a misconfigured
catalog is visible without changing the permissive behaviour.

Money is computed with ``Decimal`` at full precision and every output field
is quantized to cents with ``ROUND_HALF_UP``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from .. import schemas
from ..models.rate import AdjustmentType, ServiceFrequency
from ..utils import metrics
from ..utils.addon_keys import addon_key, unique_addon_keys

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _to_decimal(value: Any, default: Decimal = _ZERO) -> Decimal:
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TierRule:
    rate_id: int
    min_sq_ft: int
    max_sq_ft: Optional[int]  # None: no upper bound
    base_price: Decimal

    def covers(self, square_footage: int) -> bool:
        if square_footage < self.min_sq_ft:
            return False
        return self.max_sq_ft is None or square_footage <= self.max_sq_ft


@dataclass(frozen=True)
class SurchargeRule:
    rate_id: int
    name: str
    surcharge_type: AdjustmentType
    value: Decimal

    @property
    def key(self) -> str:
        return addon_key(self.name)

    def amount(self, base_price: Decimal) -> Decimal:
        if self.surcharge_type == AdjustmentType.PERCENTAGE:
            return base_price * self.value / _HUNDRED
        return self.value


@dataclass(frozen=True)
class DiscountRule:
    rate_id: int
    frequency: ServiceFrequency
    discount_type: AdjustmentType
    value: Decimal

    def amount(self, subtotal: Decimal) -> Decimal:
        if self.discount_type == AdjustmentType.PERCENTAGE:
            return subtotal * self.value / _HUNDRED
        return self.value


@dataclass(frozen=True)
class RateCatalogSnapshot:
    """Active rules only. Tiers sorted by ``min_sq_ft``, the rest in catalog order."""

    tiers: tuple[TierRule, ...] = field(default_factory=tuple)
    surcharges: tuple[SurchargeRule, ...] = field(default_factory=tuple)
    discounts: tuple[DiscountRule, ...] = field(default_factory=tuple)

    def find_tier(self, square_footage: int) -> Optional[TierRule]:
        for tier in self.tiers:
            if tier.covers(square_footage):
                return tier
        return None

    def find_surcharge(self, key: str) -> Optional[SurchargeRule]:
        wanted = addon_key(key)
        for surcharge in self.surcharges:
            if surcharge.key == wanted:
                return surcharge
        return None

    def find_discount(self, frequency: Optional[ServiceFrequency]) -> Optional[DiscountRule]:
        if frequency is None:
            return None
        # First active match in catalog order wins
        for discount in self.discounts:
            if discount.frequency == frequency:
                return discount
        return None


def build_snapshot(
    tiers: Iterable[TierRule],
    surcharges: Iterable[SurchargeRule],
    discounts: Iterable[DiscountRule],
) -> RateCatalogSnapshot:
    ordered_tiers = sorted(tiers, key=lambda t: (t.min_sq_ft, t.rate_id))
    discount_list = list(discounts)
    seen: dict[ServiceFrequency, int] = {}
    for d in discount_list:
        if d.frequency in seen:
            logger.warning(
                "Duplicate active discounts for frequency %s (rates %s and %s); the first one is applied",
                d.frequency.value,
                seen[d.frequency],
                d.rate_id,
            )
            metrics.incr("rates.discount_duplicate", tags={"frequency": d.frequency.value})
        else:
            seen[d.frequency] = d.rate_id
    return RateCatalogSnapshot(
        tiers=tuple(ordered_tiers),
        surcharges=tuple(surcharges),
        discounts=tuple(discount_list),
    )


def calculate_base_price(snapshot: RateCatalogSnapshot, square_footage: Any) -> Decimal:
    """Base price of the first tier covering ``square_footage``; zero if none does."""
    try:
        sqft = int(square_footage)
    except (TypeError, ValueError):
        sqft = None
    tier = snapshot.find_tier(sqft) if sqft is not None else None
    if tier is None:
        logger.warning("No active square footage tier covers %s; base price is 0", square_footage)
        metrics.incr("pricing.tier_miss")
        return _ZERO
    return tier.base_price


def _surcharge_total(
    snapshot: RateCatalogSnapshot, base_price: Decimal, add_ons: Sequence[str]
) -> Decimal:
    total = _ZERO
    for key in unique_addon_keys(add_ons):
        surcharge = snapshot.find_surcharge(key)
        if surcharge is None:
            logger.info("Add-on %r matches no active surcharge; ignored", key)
            metrics.incr("pricing.addon_miss", tags={"addon": key})
            continue
        total += surcharge.amount(base_price)
    return total


def calculate_quote(request: schemas.QuoteRequest, snapshot: RateCatalogSnapshot) -> schemas.PricedQuote:
    base_price = calculate_base_price(snapshot, request.square_footage)
    surcharges = _surcharge_total(snapshot, base_price, request.add_ons)

    discount_rule = snapshot.find_discount(request.service_frequency)
    if discount_rule is None:
        discounts = _ZERO
        if request.service_frequency is not None:
            logger.info("No active discount for frequency %s", request.service_frequency.value)
            metrics.incr("pricing.discount_miss", tags={"frequency": request.service_frequency.value})
    else:
        discounts = discount_rule.amount(base_price + surcharges)

    total_price = max(_ZERO, base_price + surcharges - discounts)

    return schemas.PricedQuote(
        base_price=round_money(base_price),
        surcharges=round_money(surcharges),
        discounts=round_money(discounts),
        total_price=round_money(total_price),
    )


def calculate_quote_for_db(db: Session, request: schemas.QuoteRequest) -> schemas.PricedQuote:
    """Price ``request`` against the catalog as it is right now."""
    from ..crud import crud_rate

    return calculate_quote(request, crud_rate.get_catalog_snapshot(db))
