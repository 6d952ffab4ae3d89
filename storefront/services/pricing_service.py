from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.errors import (
    BusinessClosedError,
    ConfigMissingError,
    FeeMismatchError,
    NotFoundError,
    OutOfRangeError,
    ServiceDisabledError,
    ValidationError,
)
from storefront.models import Business, BusinessType, DeliveryZone, Postal, PostalPricing
from storefront.phrases import normalize_language
from storefront.services.geo_service import haversine_km

FREE_DELIVERY_LABEL = 'Free Delivery'
STANDARD_DELIVERY_LABEL = 'Standard Delivery'


@dataclass(frozen=True)
class DeliverySelection:
    latitude: float | None = None
    longitude: float | None = None
    postal_pricing_id: int | None = None


@dataclass(frozen=True)
class DeliveryQuote:
    fee: Decimal
    zone: str | None
    distance_km: float
    postal_pricing_id: int | None = None
    postal_delivery_time: str | None = None


class DeliveryPricingStrategy(Protocol):
    def quote(self, db: Session, *, business: Business, selection: DeliverySelection) -> DeliveryQuote: ...


def _flat_fee_quote(business: Business, distance_km: float) -> DeliveryQuote:
    fee = business.delivery_fee
    if fee is None:
        raise ConfigMissingError('Delivery fee not configured - please contact store to set up delivery pricing')
    if fee < 0:
        raise ConfigMissingError('Invalid delivery fee configuration')
    label = FREE_DELIVERY_LABEL if fee == 0 else STANDARD_DELIVERY_LABEL
    return DeliveryQuote(fee=Decimal(fee), zone=label, distance_km=distance_km)


def select_zone(zones: list[DeliveryZone], distance_km: float) -> DeliveryZone:
    """Pick the first zone (ascending max_distance) that covers the distance."""
    ordered = sorted(zones, key=lambda zone: zone.max_distance)
    for zone in ordered:
        if distance_km <= zone.max_distance:
            return zone
    farthest = ordered[-1]
    if distance_km > farthest.max_distance:
        raise OutOfRangeError(
            f'Address is outside all configured delivery zones (maximum {farthest.max_distance:g}km)'
        )
    return farthest


def active_zones(db: Session, *, business_id: int) -> list[DeliveryZone]:
    return db.execute(
        select(DeliveryZone)
        .where(DeliveryZone.business_id == business_id, DeliveryZone.is_active.is_(True))
        .order_by(DeliveryZone.max_distance.asc())
    ).scalars().all()


class ZoneDistanceStrategy:
    def quote(self, db: Session, *, business: Business, selection: DeliverySelection) -> DeliveryQuote:
        radius = business.delivery_radius
        if not radius or radius <= 0:
            raise ConfigMissingError('Delivery radius not configured - cannot calculate delivery')

        # Without a store address there is nothing to measure from: one fee covers the radius.
        if not business.address:
            return _flat_fee_quote(business, 0.0)

        if business.store_latitude is None or business.store_longitude is None:
            raise ConfigMissingError('Store coordinates not configured - cannot calculate delivery distance')
        if selection.latitude is None or selection.longitude is None:
            raise ValidationError('Delivery coordinates required')

        distance_km = haversine_km(
            business.store_latitude,
            business.store_longitude,
            selection.latitude,
            selection.longitude,
        )
        if distance_km > radius:
            raise OutOfRangeError(f'Address is outside delivery area (maximum {radius:g}km)')

        display_distance = round(distance_km, 2)
        zones = active_zones(db, business_id=business.id)
        if not zones:
            return _flat_fee_quote(business, display_distance)

        zone = select_zone(zones, distance_km)
        if zone.fee is None or zone.fee < 0:
            raise ConfigMissingError(f'Invalid fee configuration for {zone.name}')
        return DeliveryQuote(fee=Decimal(zone.fee), zone=zone.name, distance_km=display_distance)


def localized_postal_name(postal: Postal, language: str | None) -> str:
    lang = normalize_language(language)
    if lang == 'sq':
        localized = postal.name_al
    elif lang == 'el':
        localized = postal.name_el
    else:
        localized = postal.name_en
    return localized or postal.name


def localized_delivery_time(pricing: PostalPricing, language: str | None) -> str | None:
    lang = normalize_language(language)
    if lang == 'sq':
        localized = pricing.delivery_time_al
    elif lang == 'el':
        localized = pricing.delivery_time_el
    else:
        localized = pricing.delivery_time_en
    return localized or pricing.delivery_time


class PostalTableStrategy:
    def quote(self, db: Session, *, business: Business, selection: DeliverySelection) -> DeliveryQuote:
        if selection.postal_pricing_id is None:
            raise ValidationError('Postal pricing selection required')

        row = db.execute(
            select(PostalPricing, Postal)
            .join(Postal, Postal.id == PostalPricing.postal_id)
            .where(
                PostalPricing.id == selection.postal_pricing_id,
                PostalPricing.deleted_at.is_(None),
                Postal.deleted_at.is_(None),
            )
        ).one_or_none()
        if not row:
            raise NotFoundError('Postal pricing not found', status_code=400)
        pricing, postal = row
        if pricing.business_id != business.id:
            raise NotFoundError('Postal pricing not found', status_code=400)
        if pricing.price is None or pricing.price < 0:
            raise ConfigMissingError(f'Invalid price configuration for {postal.name}')

        return DeliveryQuote(
            fee=Decimal(pricing.price),
            zone=localized_postal_name(postal, business.language),
            distance_km=0.0,
            postal_pricing_id=pricing.id,
            postal_delivery_time=localized_delivery_time(pricing, business.language),
        )


def strategy_for(business: Business, selection: DeliverySelection) -> DeliveryPricingStrategy:
    if business.business_type == BusinessType.RETAIL and selection.postal_pricing_id is not None:
        return PostalTableStrategy()
    return ZoneDistanceStrategy()


def ensure_open(business: Business | None) -> Business:
    if business is None:
        raise NotFoundError('Store not found')
    if business.is_temporarily_closed:
        raise BusinessClosedError(
            'Store is temporarily closed',
            message=business.closure_message or 'We are temporarily closed. Please check back later.',
            reason=business.closure_reason,
        )
    return business


def resolve_delivery_fee(db: Session, *, business: Business | None, selection: DeliverySelection) -> DeliveryQuote:
    business = ensure_open(business)
    if not business.delivery_enabled:
        raise ServiceDisabledError('Delivery is not enabled for this store')
    return strategy_for(business, selection).quote(db, business=business, selection=selection)


def verify_submitted_fee(calculated: Decimal, submitted: Decimal | None, *, tolerance: Decimal | None = None) -> None:
    allowed = settings.fee_tolerance if tolerance is None else tolerance
    provided = submitted if submitted is not None else Decimal('0')
    if abs(Decimal(calculated) - Decimal(provided)) > allowed:
        raise FeeMismatchError('Delivery fee mismatch', calculatedFee=calculated, providedFee=provided)
