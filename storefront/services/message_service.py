"""Plain-text order summary used for WhatsApp links and direct sends."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from storefront.phrases import country_name, currency_symbol, message_terms, normalize_language

DELIVERY = 'delivery'
PICKUP = 'pickup'
DINE_IN = 'dineIn'


@dataclass(frozen=True)
class SummaryModifier:
    name: str
    price: Decimal = Decimal('0')


@dataclass(frozen=True)
class SummaryLine:
    quantity: int
    name: str
    price: Decimal
    variant: str | None = None
    modifiers: tuple[SummaryModifier, ...] = ()


@dataclass(frozen=True)
class OrderSummary:
    """Detached snapshot of a placed order.

    Built while the request session is open and handed to post-commit
    tasks, which never touch the request's ORM objects.
    """

    order_id: int
    order_number: str
    status: str
    delivery_type: str
    business_id: int
    business_name: str
    business_type: str
    language: str
    currency: str
    customer_name: str
    customer_phone: str
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    lines: tuple[SummaryLine, ...] = field(default_factory=tuple)
    discount: Decimal = Decimal('0')
    customer_email: str | None = None
    business_address: str | None = None
    business_website: str | None = None
    delivery_zone: str | None = None
    delivery_distance: float = 0.0
    postal_service: str | None = None
    postal_delivery_time: str | None = None
    delivery_address: str | None = None
    city: str | None = None
    country_code: str | None = None
    postal_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    delivery_time: datetime | None = None
    payment_method: str | None = None
    special_instructions: str | None = None

    @property
    def is_retail(self) -> bool:
        return self.business_type == 'RETAIL'


def format_money(amount: Decimal | float | int, currency: str | None) -> str:
    return f'{currency_symbol(currency)}{Decimal(str(amount)):.2f}'


def format_time(value: datetime | None, language: str | None) -> str | None:
    if value is None:
        return None
    if normalize_language(language) == 'en':
        return value.strftime('%m/%d/%Y, %I:%M %p')
    return value.strftime('%d/%m/%Y, %H:%M')


def format_delivery_address(
    address: str | None,
    *,
    country_code: str | None,
    postal_code: str | None,
    language: str | None,
) -> str:
    text = (address or '').strip()
    if not text:
        return ''
    if country_code:
        localized = country_name(country_code, language)
        if localized and localized.upper() != country_code.upper():
            text = re.sub(rf'\b{re.escape(country_code)}\b', localized, text, flags=re.IGNORECASE)
    if postal_code and postal_code.strip() and postal_code.strip() not in text:
        text = f'{text}, {postal_code.strip()}'
    return text


def _fulfillment_label(terms: dict[str, str], delivery_type: str) -> str:
    return terms.get(f'{delivery_type}_type') or delivery_type


def format_order_summary(summary: OrderSummary) -> str:
    terms = message_terms(summary.language, summary.business_type)
    currency = summary.currency
    parts: list[str] = [f"*{terms['order']} {summary.order_number}*\n\n"]
    parts.append(f"📋 {terms['orderType']}: *{_fulfillment_label(terms, summary.delivery_type)}*\n\n")

    for line in summary.lines:
        variant = f' ({line.variant})' if line.variant else ''
        parts.append(f'{line.quantity}x {line.name}{variant} - {format_money(line.price, currency)}\n')
        for modifier in line.modifiers:
            if modifier.name:
                parts.append(f'  + {modifier.name} (+{format_money(modifier.price, currency)})\n')

    parts.append('\n---\n')
    parts.append(f"{terms['subtotal']}: {format_money(summary.subtotal, currency)}\n")
    if summary.discount and summary.discount > 0:
        parts.append(f"{terms['discount']}: -{format_money(summary.discount, currency)}\n")
    if summary.delivery_type == DELIVERY and summary.delivery_fee > 0:
        label = summary.postal_service or summary.delivery_zone
        suffix = f' ({label})' if label else ''
        parts.append(f"{terms['delivery']}{suffix}: {format_money(summary.delivery_fee, currency)}\n")
    parts.append(f"*{terms['total']}: {format_money(summary.total, currency)}*\n\n")

    parts.append('---\n')
    parts.append(f"👤 {terms['customer']}: {summary.customer_name}\n")
    parts.append(f"📞 {terms['phone']}: {summary.customer_phone}\n")

    when = format_time(summary.delivery_time, summary.language)
    if summary.delivery_type == DELIVERY:
        address = format_delivery_address(
            summary.delivery_address,
            country_code=summary.country_code,
            postal_code=summary.postal_code,
            language=summary.language,
        )
        if address:
            parts.append(f"📍 {terms['deliveryAddress']}: {address}\n")
        if not summary.is_retail:
            if summary.latitude is not None and summary.longitude is not None:
                parts.append(
                    f"🗺️ {terms['location']}: https://maps.google.com/?q={summary.latitude},{summary.longitude}\n"
                )
            if summary.delivery_distance:
                parts.append(f"📏 {terms['distance']}: {summary.delivery_distance}km\n")
        parts.append(f"⏰ {terms['deliveryTime']}: {when or summary.postal_delivery_time or terms['asap']}\n")
    elif summary.delivery_type == PICKUP:
        parts.append(f"🏪 {terms['pickupLocation']}: {summary.business_address or 'Store location'}\n")
        parts.append(f"⏰ {terms['pickupTime']}: {when or terms['asap']}\n")
    elif summary.delivery_type == DINE_IN:
        parts.append(f"🍽️ {summary.business_address or 'Restaurant location'}\n")
        parts.append(f"⏰ {terms['arrivalTime']}: {when or terms['asap']}\n")

    if summary.payment_method:
        parts.append(f"💳 {terms['payment']}: {summary.payment_method}\n")
    if summary.special_instructions:
        parts.append(f"📝 {terms['notes']}: {summary.special_instructions}\n")

    parts.append('\n---\n')
    parts.append(f'🏪 {summary.business_name}\n')
    if summary.business_website:
        parts.append(f'🌐 {summary.business_website}\n')
    return ''.join(parts)
