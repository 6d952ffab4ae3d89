from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements INTEGER primary keys.
BigId = BigInteger().with_variant(Integer, 'sqlite')
Money = Numeric(12, 2)


class Base(DeclarativeBase):
    pass


class BusinessType(str, Enum):
    RESTAURANT = 'RESTAURANT'
    CAFE = 'CAFE'
    RETAIL = 'RETAIL'
    GROCERY = 'GROCERY'
    JEWELRY = 'JEWELRY'
    FLORIST = 'FLORIST'
    HEALTH_BEAUTY = 'HEALTH_BEAUTY'
    OTHER = 'OTHER'
    SALON = 'SALON'
    SERVICES = 'SERVICES'


class OrderType(str, Enum):
    DELIVERY = 'DELIVERY'
    PICKUP = 'PICKUP'
    DINE_IN = 'DINE_IN'


class OrderStatus(str, Enum):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    PREPARING = 'PREPARING'
    READY = 'READY'
    PICKED_UP = 'PICKED_UP'
    OUT_FOR_DELIVERY = 'OUT_FOR_DELIVERY'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'
    REFUNDED = 'REFUNDED'


class PaymentStatus(str, Enum):
    PENDING = 'PENDING'
    PAID = 'PAID'
    FAILED = 'FAILED'
    REFUNDED = 'REFUNDED'


class InventoryActivityType(str, Enum):
    ORDER_SALE = 'ORDER_SALE'
    MANUAL_ADJUSTMENT = 'MANUAL_ADJUSTMENT'
    RESTOCK = 'RESTOCK'


class Business(Base):
    __tablename__ = 'businesses'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default='true')
    business_type: Mapped[BusinessType] = mapped_column(
        SQLEnum(BusinessType, name='business_type'),
        nullable=False,
        default=BusinessType.RESTAURANT,
        server_default='RESTAURANT',
    )
    currency: Mapped[str] = mapped_column(Text, nullable=False, default='USD', server_default='USD')
    language: Mapped[str] = mapped_column(Text, nullable=False, default='en', server_default='en')
    address: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(Text)
    whatsapp_number: Mapped[str | None] = mapped_column(Text)
    order_number_format: Mapped[str] = mapped_column(
        Text, nullable=False, default='ORD-{number}', server_default='ORD-{number}'
    )

    delivery_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default='true')
    pickup_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default='false')
    dine_in_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default='false')
    delivery_fee: Mapped[Decimal | None] = mapped_column(Money)
    delivery_radius: Mapped[float | None] = mapped_column(Float)
    store_latitude: Mapped[float | None] = mapped_column(Float)
    store_longitude: Mapped[float | None] = mapped_column(Float)

    is_temporarily_closed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default='false'
    )
    closure_reason: Mapped[str | None] = mapped_column(Text)
    closure_message: Mapped[str | None] = mapped_column(Text)

    order_notifications_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default='false'
    )
    order_notification_email: Mapped[str | None] = mapped_column(Text)
    direct_notifications_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default='false'
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class DeliveryZone(Base):
    __tablename__ = 'delivery_zones'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    max_distance: Mapped[float] = mapped_column(Float, nullable=False)
    fee: Mapped[Decimal | None] = mapped_column(Money)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default='true')


class Postal(Base):
    __tablename__ = 'postals'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    name_en: Mapped[str | None] = mapped_column(Text)
    name_al: Mapped[str | None] = mapped_column(Text)
    name_el: Mapped[str | None] = mapped_column(Text)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class PostalPricing(Base):
    __tablename__ = 'postal_pricing'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)
    postal_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('postals.id'), nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    delivery_time: Mapped[str | None] = mapped_column(Text)
    delivery_time_en: Mapped[str | None] = mapped_column(Text)
    delivery_time_al: Mapped[str | None] = mapped_column(Text)
    delivery_time_el: Mapped[str | None] = mapped_column(Text)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class Customer(Base):
    __tablename__ = 'customers'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(Text)
    address_json: Mapped[dict | None] = mapped_column(JSON)
    added_by_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default='false')
    tier: Mapped[str] = mapped_column(Text, nullable=False, default='REGULAR', server_default='REGULAR')
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Product(Base):
    __tablename__ = 'products'
    __table_args__ = (
        CheckConstraint('stock >= 0', name='products_stock_non_negative_ck'),
    )

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal('0'))
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default='0')
    track_inventory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default='false')
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default='true')


class ProductVariant(Base):
    __tablename__ = 'product_variants'
    __table_args__ = (
        CheckConstraint('stock >= 0', name='product_variants_stock_non_negative_ck'),
    )

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    product_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal | None] = mapped_column(Money)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default='0')


class Order(Base):
    __tablename__ = 'orders'
    __table_args__ = (
        UniqueConstraint('business_id', 'order_number', name='orders_business_order_number_uniq'),
    )

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    order_number: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus, name='order_status'), nullable=False, default=OrderStatus.PENDING, server_default='PENDING'
    )
    type: Mapped[OrderType] = mapped_column(SQLEnum(OrderType, name='order_type'), nullable=False)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id'), nullable=False)
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('customers.id'), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Money, nullable=False)
    delivery_fee: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal('0'))
    tax: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal('0'))
    discount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal('0'))
    total: Mapped[Decimal] = mapped_column(Money, nullable=False)
    delivery_address: Mapped[str | None] = mapped_column(Text)
    delivery_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)
    payment_method: Mapped[str | None] = mapped_column(Text)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name='payment_status'),
        nullable=False,
        default=PaymentStatus.PENDING,
        server_default='PENDING',
    )
    customer_latitude: Mapped[float | None] = mapped_column(Float)
    customer_longitude: Mapped[float | None] = mapped_column(Float)
    postal_pricing_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey('postal_pricing.id'))
    country_code: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(Text)
    postal_code: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class OrderItem(Base):
    __tablename__ = 'order_items'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    order_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('products.id'), nullable=False)
    variant_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey('product_variants.id'))
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    original_price: Mapped[Decimal | None] = mapped_column(Money)
    modifiers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class InventoryActivity(Base):
    __tablename__ = 'inventory_activities'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    product_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('products.id'), nullable=False)
    variant_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey('product_variants.id'))
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id'), nullable=False)
    type: Mapped[InventoryActivityType] = mapped_column(
        SQLEnum(InventoryActivityType, name='inventory_activity_type'), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    old_stock: Mapped[int] = mapped_column(Integer, nullable=False)
    new_stock: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    changed_by: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class OrderNotification(Base):
    __tablename__ = 'order_notifications'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    business_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('businesses.id'), nullable=False)
    order_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    order_number: Mapped[str] = mapped_column(Text, nullable=False)
    order_status: Mapped[str] = mapped_column(Text, nullable=False)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    total: Mapped[Decimal] = mapped_column(Money, nullable=False)
    email_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default='false')
    email_error: Mapped[str | None] = mapped_column(Text)
    notified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class AuditLog(Base):
    __tablename__ = 'audit_log'

    id: Mapped[int] = mapped_column(BigId, primary_key=True)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    business_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey('businesses.id'))
    order_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey('orders.id'))
    ip: Mapped[str | None] = mapped_column(Text)
    user_agent: Mapped[str | None] = mapped_column(Text)
    referrer: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(Text)
    meta: Mapped[dict] = mapped_column('metadata', JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
