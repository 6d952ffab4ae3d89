from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.dependencies import RequestMeta
from storefront.errors import ConflictError, OrderError, ServiceDisabledError, ValidationError
from storefront.models import (
    Business,
    BusinessType,
    Customer,
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    PaymentStatus,
)
from storefront.schemas import FeeQuoteRequest, OrderCreateRequest
from storefront.services.audit_service import log_event, report_exception
from storefront.services.customer_service import resolve_customer
from storefront.services.inventory_service import ResolvedLine, SaleLine, apply_order_sale, validate_stock
from storefront.services.message_service import (
    DELIVERY,
    OrderSummary,
    SummaryLine,
    SummaryModifier,
    format_order_summary,
)
from storefront.services.notification_provider import EmailSender, MessageSender
from storefront.services.notification_service import DispatchPlan, plan_notifications, whatsapp_url
from storefront.services.phone_service import is_valid_phone
from storefront.services.post_commit import PostCommitTask
from storefront.services.pricing_service import (
    DeliveryQuote,
    DeliverySelection,
    ensure_open,
    resolve_delivery_fee,
    verify_submitted_fee,
)

logger = logging.getLogger(__name__)

DEFAULT_ORDER_NUMBER_FORMAT = 'ORD-{number}'
DEFAULT_PAYMENT_METHOD = 'CASH'
DIRECT_NOTIFICATION_MESSAGE = 'Order sent to the store on WhatsApp'

ORDER_TYPES = {
    'delivery': OrderType.DELIVERY,
    'pickup': OrderType.PICKUP,
    'dineIn': OrderType.DINE_IN,
}

SERVICE_FLAGS = {
    'delivery': ('delivery_enabled', 'Delivery not available'),
    'pickup': ('pickup_enabled', 'Pickup not available'),
    'dineIn': ('dine_in_enabled', 'Dine-in not available'),
}


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _clean(value: str | None) -> str:
    return (value or '').strip()


@dataclass
class OrderPlacement:
    order_id: int
    order_number: str
    business_id: int
    quote: DeliveryQuote
    notifications: DispatchPlan
    tasks: list[PostCommitTask] = field(default_factory=list)

    def to_response(self) -> dict:
        body = {
            'success': True,
            'orderId': self.order_id,
            'orderNumber': self.order_number,
            'calculatedDeliveryFee': float(self.quote.fee),
            'deliveryZone': self.quote.zone,
            'deliveryDistance': self.quote.distance_km,
            'directNotification': self.notifications.direct_notification,
            'whatsappUrl': self.notifications.whatsapp_url,
        }
        if self.notifications.direct_notification:
            body['message'] = DIRECT_NOTIFICATION_MESSAGE
        return body


def generate_order_number(number_format: str | None, *, now: datetime | None = None, rng=random) -> str:
    """Fill `{number}` with the last 6 digits of the epoch millis plus 3 random digits."""
    millis = int((now or _now()).timestamp() * 1000)
    number = f'{str(millis)[-6:]}{rng.randint(0, 999):03d}'
    return (number_format or DEFAULT_ORDER_NUMBER_FORMAT).replace('{number}', number)


def load_business(db: Session, *, slug: str) -> Business:
    business = db.execute(
        select(Business).where(Business.slug == slug, Business.is_active.is_(True))
    ).scalar_one_or_none()
    return ensure_open(business)


def validate_order_payload(business: Business, payload: OrderCreateRequest) -> OrderType:
    if not _clean(payload.customer_name):
        raise ValidationError('Customer name is required')
    if not _clean(payload.customer_phone):
        raise ValidationError('Customer phone is required')
    if not payload.items:
        raise ValidationError('Order must contain at least one item')
    if not payload.delivery_type:
        raise ValidationError('Delivery type is required')
    if payload.delivery_type not in ORDER_TYPES:
        raise ValidationError(f'Invalid delivery type: {payload.delivery_type}')

    flag, message = SERVICE_FLAGS[payload.delivery_type]
    if not getattr(business, flag):
        raise ServiceDisabledError(message)

    if payload.delivery_type == DELIVERY:
        if not _clean(payload.delivery_address):
            raise ValidationError('Delivery address is required')
        if business.business_type == BusinessType.RETAIL:
            if payload.postal_pricing_id is None:
                raise ValidationError('Postal pricing selection is required')
        elif payload.latitude is None or payload.longitude is None:
            raise ValidationError('Delivery coordinates are required')

    return ORDER_TYPES[payload.delivery_type]


def price_order(db: Session, *, business: Business, payload: OrderCreateRequest, order_type: OrderType) -> DeliveryQuote:
    if order_type != OrderType.DELIVERY:
        return DeliveryQuote(fee=Decimal('0'), zone=None, distance_km=0.0)
    quote = resolve_delivery_fee(
        db,
        business=business,
        selection=DeliverySelection(
            latitude=payload.latitude,
            longitude=payload.longitude,
            postal_pricing_id=payload.postal_pricing_id,
        ),
    )
    verify_submitted_fee(quote.fee, payload.delivery_fee)
    return quote


def _persist_order(
    db: Session,
    *,
    business: Business,
    customer: Customer,
    payload: OrderCreateRequest,
    order_type: OrderType,
    quote: DeliveryQuote,
    lines: list[ResolvedLine],
) -> Order:
    is_delivery = order_type == OrderType.DELIVERY
    order = Order(
        order_number=generate_order_number(business.order_number_format),
        status=OrderStatus.PENDING,
        type=order_type,
        business_id=business.id,
        customer_id=customer.id,
        subtotal=payload.subtotal,
        delivery_fee=quote.fee,
        tax=payload.tax,
        discount=payload.discount,
        total=payload.total,
        delivery_address=(_clean(payload.delivery_address) or None) if is_delivery else None,
        delivery_time=payload.delivery_time,
        notes=_clean(payload.special_instructions) or None,
        payment_method=payload.payment_method or DEFAULT_PAYMENT_METHOD,
        payment_status=PaymentStatus.PENDING,
        customer_latitude=payload.latitude if is_delivery else None,
        customer_longitude=payload.longitude if is_delivery else None,
        postal_pricing_id=quote.postal_pricing_id,
        country_code=payload.country_code if is_delivery else None,
        city=payload.city if is_delivery else None,
        postal_code=payload.postal_code if is_delivery else None,
    )
    db.add(order)
    db.flush()

    for line in lines:
        db.add(
            OrderItem(
                order_id=order.id,
                product_id=line.item.product_id,
                variant_id=line.item.variant_id,
                quantity=line.item.quantity,
                price=line.item.price,
                original_price=line.item.original_price,
                modifiers=line.item.modifier_ids(),
            )
        )
    db.flush()
    return order


def build_order_summary(
    *,
    business: Business,
    order: Order,
    customer: Customer,
    payload: OrderCreateRequest,
    quote: DeliveryQuote,
    lines: list[ResolvedLine],
) -> OrderSummary:
    return OrderSummary(
        order_id=order.id,
        order_number=order.order_number,
        status=OrderStatus.PENDING.value,
        delivery_type=payload.delivery_type,
        business_id=business.id,
        business_name=business.name,
        business_type=business.business_type.value,
        language=business.language,
        currency=business.currency,
        customer_name=customer.name,
        customer_phone=_clean(payload.customer_phone),
        customer_email=customer.email,
        subtotal=order.subtotal,
        discount=order.discount,
        delivery_fee=order.delivery_fee,
        total=order.total,
        lines=tuple(
            SummaryLine(
                quantity=line.item.quantity,
                name=line.product_name,
                variant=line.variant_name,
                price=line.item.price,
                modifiers=tuple(
                    SummaryModifier(name=modifier.name or '', price=modifier.price)
                    for modifier in line.item.modifier_details()
                ),
            )
            for line in lines
        ),
        business_address=business.address,
        business_website=business.website,
        delivery_zone=quote.zone,
        delivery_distance=quote.distance_km,
        postal_service=quote.zone if quote.postal_pricing_id is not None else None,
        postal_delivery_time=quote.postal_delivery_time,
        delivery_address=order.delivery_address,
        city=order.city,
        country_code=order.country_code,
        postal_code=order.postal_code,
        latitude=order.customer_latitude,
        longitude=order.customer_longitude,
        delivery_time=order.delivery_time,
        payment_method=order.payment_method,
        special_instructions=order.notes,
    )


def _create_order(
    db: Session,
    *,
    business: Business,
    payload: OrderCreateRequest,
    request_meta: RequestMeta | None,
) -> tuple[Order, Customer, DeliveryQuote, list[ResolvedLine]]:
    order_type = validate_order_payload(business, payload)
    lines = validate_stock(db, business_id=business.id, items=payload.items)
    quote = price_order(db, business=business, payload=payload, order_type=order_type)
    if not is_valid_phone(payload.customer_phone):
        raise ValidationError('Invalid phone number')

    customer = resolve_customer(db, business=business, payload=payload)
    try:
        order = _persist_order(
            db,
            business=business,
            customer=customer,
            payload=payload,
            order_type=order_type,
            quote=quote,
            lines=lines,
        )
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError('Order could not be saved, please try again') from exc
    log_event(
        db,
        action='ORDER_CREATED',
        business_id=business.id,
        order_id=order.id,
        request_meta=request_meta,
        metadata={
            'order_number': order.order_number,
            'delivery_type': payload.delivery_type,
            'delivery_fee': str(quote.fee),
            'total': str(order.total),
            'item_count': len(lines),
        },
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError('Order could not be saved, please try again') from exc
    return order, customer, quote, lines


def _log_rejection(
    db: Session, *, slug: str, business: Business | None, exc: OrderError, request_meta: RequestMeta | None
) -> None:
    try:
        log_event(
            db,
            action='ORDER_REJECTED',
            business_id=business.id if business else None,
            request_meta=request_meta,
            metadata={'slug': slug, 'code': exc.code, 'error': exc.message},
        )
        db.commit()
    except Exception as audit_exc:
        db.rollback()
        report_exception(audit_exc, operation='log_order_rejection', context={'slug': slug})


def _plan_side_effects(
    *,
    business: Business,
    order: Order,
    customer: Customer,
    payload: OrderCreateRequest,
    quote: DeliveryQuote,
    lines: list[ResolvedLine],
    email_sender: EmailSender,
    message_sender: MessageSender,
) -> DispatchPlan:
    try:
        summary = build_order_summary(
            business=business, order=order, customer=customer, payload=payload, quote=quote, lines=lines
        )
        return plan_notifications(
            business,
            summary,
            text=format_order_summary(summary),
            email_sender=email_sender,
            message_sender=message_sender,
        )
    except Exception as exc:
        # The order is committed; degrade to a bare link rather than fail the response.
        report_exception(exc, operation='plan_notifications', context={'order_id': order.id})
        return DispatchPlan(direct_notification=False, whatsapp_url=whatsapp_url(business.whatsapp_number, order.order_number))


def place_order(
    db: Session,
    *,
    slug: str,
    payload: OrderCreateRequest,
    email_sender: EmailSender,
    message_sender: MessageSender,
    request_meta: RequestMeta | None = None,
) -> OrderPlacement:
    business: Business | None = None
    try:
        business = load_business(db, slug=slug)
        order, customer, quote, lines = _create_order(db, business=business, payload=payload, request_meta=request_meta)
    except OrderError as exc:
        db.rollback()
        logger.info('Order rejected for %s: %s', slug, exc.message)
        _log_rejection(db, slug=slug, business=business, exc=exc, request_meta=request_meta)
        raise

    logger.info('Order %s created for business %s', order.order_number, business.id)

    sale_lines = [
        SaleLine(product_id=line.item.product_id, variant_id=line.item.variant_id, quantity=line.item.quantity)
        for line in lines
    ]
    order_id = order.id
    business_id = business.id
    tasks = [
        PostCommitTask(
            name='inventory_order_sale',
            run=lambda session: apply_order_sale(session, order_id=order_id, business_id=business_id, items=sale_lines),
        )
    ]
    notifications = _plan_side_effects(
        business=business,
        order=order,
        customer=customer,
        payload=payload,
        quote=quote,
        lines=lines,
        email_sender=email_sender,
        message_sender=message_sender,
    )
    tasks.extend(notifications.tasks)

    return OrderPlacement(
        order_id=order_id,
        order_number=order.order_number,
        business_id=business_id,
        quote=quote,
        notifications=notifications,
        tasks=tasks,
    )


def quote_delivery_fee(db: Session, *, slug: str, payload: FeeQuoteRequest) -> DeliveryQuote:
    business = db.execute(
        select(Business).where(Business.slug == slug, Business.is_active.is_(True))
    ).scalar_one_or_none()
    return resolve_delivery_fee(
        db,
        business=business,
        selection=DeliverySelection(
            latitude=payload.customer_lat,
            longitude=payload.customer_lng,
            postal_pricing_id=payload.postal_pricing_id,
        ),
    )
