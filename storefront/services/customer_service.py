from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models import Business, Customer
from storefront.schemas import OrderCreateRequest
from storefront.services.address_service import ParsedAddress, parse_address, parse_structured_address
from storefront.services.phone_service import phones_match


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _clean(value: str | None) -> str:
    return (value or '').strip()


def find_customer_by_phone(db: Session, *, business_id: int, phone: str) -> Customer | None:
    # Stored phones are display strings in whatever format they arrived in, so no index lookup.
    customers = db.execute(
        select(Customer).where(Customer.business_id == business_id).order_by(Customer.id.asc())
    ).scalars().all()
    for customer in customers:
        if phones_match(customer.phone, phone):
            return customer
    return None


def parse_order_address(payload: OrderCreateRequest) -> ParsedAddress | None:
    if payload.delivery_type != 'delivery' or not _clean(payload.delivery_address):
        return None
    if payload.has_structured_address:
        return parse_structured_address(
            payload.delivery_address,
            city=payload.city,
            country_code=payload.country_code,
            postal_code=payload.postal_code,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    return parse_address(payload.delivery_address, payload.latitude, payload.longitude)


def should_replace_address(customer: Customer, parsed: ParsedAddress) -> bool:
    """Trust the latest order unless it would degrade a known-good address."""
    if not _clean(customer.address):
        return True
    existing = customer.address_json if isinstance(customer.address_json, dict) else {}
    old_street = _clean(existing.get('street'))
    if not old_street:
        return True
    if _clean(parsed.street).lower() != old_street.lower():
        return True
    old_city = _clean(existing.get('city'))
    new_city = _clean(parsed.city)
    return bool(old_city and new_city and old_city.lower() != new_city.lower())


def _address_fields(parsed: ParsedAddress, raw_address: str | None) -> dict:
    return {
        'address': parsed.display() or _clean(raw_address) or None,
        'address_json': parsed.to_json(),
    }


def resolve_customer(db: Session, *, business: Business, payload: OrderCreateRequest) -> Customer:
    phone = _clean(payload.customer_phone)
    parsed = parse_order_address(payload)
    customer = find_customer_by_phone(db, business_id=business.id, phone=phone)

    if customer is None:
        customer = Customer(
            business_id=business.id,
            name=_clean(payload.customer_name),
            phone=phone,
            email=_clean(payload.customer_email) or None,
            address=None,
            address_json=None,
            added_by_admin=False,
            tier='REGULAR',
        )
        if parsed is not None:
            for key, value in _address_fields(parsed, payload.delivery_address).items():
                setattr(customer, key, value)
        db.add(customer)
        db.flush()
        return customer

    updates: dict = {}
    name = _clean(payload.customer_name)
    if name and name != customer.name:
        updates['name'] = name
    email = _clean(payload.customer_email)
    if email and email != customer.email:
        updates['email'] = email
    if parsed is not None and should_replace_address(customer, parsed):
        updates.update(_address_fields(parsed, payload.delivery_address))

    if updates:
        for key, value in updates.items():
            setattr(customer, key, value)
        customer.updated_at = _now()
        db.flush()
        db.refresh(customer)
    return customer
