from __future__ import annotations

from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.models import Base, Business, BusinessType, DeliveryZone, Postal, PostalPricing, Product


def make_session_factory() -> sessionmaker:
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def add_restaurant(db: Session, **overrides) -> Business:
    values = dict(
        slug='bistro',
        name='Bistro',
        business_type=BusinessType.RESTAURANT,
        currency='EUR',
        language='en',
        address='Rruga e Kavajes 1, Tirana',
        whatsapp_number='+355 69 000 1111',
        delivery_enabled=True,
        pickup_enabled=True,
        delivery_fee=Decimal('2.00'),
        delivery_radius=10,
        store_latitude=41.33,
        store_longitude=19.82,
    )
    values.update(overrides)
    business = Business(**values)
    db.add(business)
    db.flush()
    return business


def add_zones(db: Session, business: Business, zones: list[tuple[str, float, str]]) -> None:
    for name, max_distance, fee in zones:
        db.add(DeliveryZone(business_id=business.id, name=name, max_distance=max_distance, fee=Decimal(fee)))
    db.flush()


def add_retail_with_postal(db: Session, *, price: str = '4.50', **overrides) -> tuple[Business, PostalPricing]:
    values = dict(
        slug='boutique',
        name='Boutique',
        business_type=BusinessType.RETAIL,
        currency='EUR',
        language='en',
        whatsapp_number='+355 68 222 3333',
        delivery_enabled=True,
        delivery_radius=500,
    )
    values.update(overrides)
    business = Business(**values)
    db.add(business)
    db.flush()
    postal = Postal(business_id=business.id, name='Posta Shqiptare', name_en='Albanian Post', name_al='Posta Shqiptare')
    db.add(postal)
    db.flush()
    pricing = PostalPricing(
        business_id=business.id,
        postal_id=postal.id,
        price=Decimal(price),
        delivery_time='2-3 days',
    )
    db.add(pricing)
    db.flush()
    return business, pricing


def add_product(db: Session, business: Business, *, name: str = 'Pizza', stock: int = 0, track: bool = False) -> Product:
    product = Product(business_id=business.id, name=name, price=Decimal('10.00'), stock=stock, track_inventory=track)
    db.add(product)
    db.flush()
    return product
