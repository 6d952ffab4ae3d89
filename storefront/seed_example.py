from decimal import Decimal

from sqlalchemy import select

from storefront.db import SessionLocal, engine
from storefront.models import (
    Base,
    Business,
    BusinessType,
    DeliveryZone,
    Postal,
    PostalPricing,
    Product,
    ProductVariant,
)


def _seed_restaurant(db) -> None:
    business = db.execute(select(Business).where(Business.slug == 'demo-bistro')).scalar_one_or_none()
    if business:
        return
    business = Business(
        slug='demo-bistro',
        name='Demo Bistro',
        business_type=BusinessType.RESTAURANT,
        currency='EUR',
        language='en',
        address='Rruga e Durresit 10, Tirana',
        whatsapp_number='+355 69 123 4567',
        website='https://demo-bistro.example',
        delivery_enabled=True,
        pickup_enabled=True,
        dine_in_enabled=True,
        delivery_fee=Decimal('2.00'),
        delivery_radius=10,
        store_latitude=41.3275,
        store_longitude=19.8187,
    )
    db.add(business)
    db.flush()
    for name, max_distance, fee in (('Zone 1', 2, '1.00'), ('Zone 2', 5, '2.50'), ('Zone 3', 10, '4.00')):
        db.add(DeliveryZone(business_id=business.id, name=name, max_distance=max_distance, fee=Decimal(fee)))
    db.add(Product(business_id=business.id, name='Margherita', price=Decimal('8.50')))
    db.add(Product(business_id=business.id, name='Tiramisu', price=Decimal('4.00'), stock=12, track_inventory=True))


def _seed_retail(db) -> None:
    business = db.execute(select(Business).where(Business.slug == 'demo-boutique')).scalar_one_or_none()
    if business:
        return
    business = Business(
        slug='demo-boutique',
        name='Demo Boutique',
        business_type=BusinessType.RETAIL,
        currency='ALL',
        language='sq',
        whatsapp_number='+355 68 765 4321',
        delivery_enabled=True,
        pickup_enabled=True,
        delivery_radius=500,
        order_number_format='BTQ-{number}',
    )
    db.add(business)
    db.flush()

    postal = Postal(business_id=business.id, name='Posta Shqiptare', name_en='Albanian Post', name_al='Posta Shqiptare')
    db.add(postal)
    db.flush()
    db.add(
        PostalPricing(
            business_id=business.id,
            postal_id=postal.id,
            price=Decimal('300.00'),
            delivery_time='2-3 days',
            delivery_time_al='2-3 ditë',
        )
    )

    shirt = Product(business_id=business.id, name='Linen Shirt', price=Decimal('2500.00'), track_inventory=True)
    db.add(shirt)
    db.flush()
    for size, stock in (('S', 3), ('M', 5), ('L', 2)):
        db.add(ProductVariant(product_id=shirt.id, name=size, price=Decimal('2500.00'), stock=stock))


def seed() -> None:
    Base.metadata.create_all(engine)
    with SessionLocal() as db:
        _seed_restaurant(db)
        _seed_retail(db)
        db.commit()


if __name__ == '__main__':
    seed()
    print('Seed complete: demo-bistro (zones) and demo-boutique (postal pricing).')
