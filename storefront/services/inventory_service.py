from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.errors import InsufficientStockError, NotFoundError, ValidationError
from storefront.models import InventoryActivity, InventoryActivityType, Product, ProductVariant
from storefront.schemas import OrderItemIn

logger = logging.getLogger(__name__)

ORDER_SALE_ACTOR = 'Customer Order'


@dataclass(frozen=True)
class ResolvedLine:
    item: OrderItemIn
    product_name: str
    variant_name: str | None


@dataclass(frozen=True)
class SaleLine:
    product_id: int
    variant_id: int | None
    quantity: int


def _validate_item_shape(item: OrderItemIn) -> None:
    if not item.product_id:
        raise ValidationError('Each item requires a productId')
    if item.quantity <= 0:
        raise ValidationError(f'Invalid quantity for product {item.product_id}')
    if item.price < 0:
        raise ValidationError(f'Invalid price for product {item.product_id}')


def validate_stock(db: Session, *, business_id: int, items: list[OrderItemIn]) -> list[ResolvedLine]:
    """Check every line against current stock before the order exists.

    This is the strict gate; the post-commit decrement tolerates whatever
    changed in between.
    """
    resolved: list[ResolvedLine] = []
    for item in items:
        _validate_item_shape(item)

        product = db.execute(select(Product).where(Product.id == item.product_id)).scalar_one_or_none()
        if not product or product.business_id != business_id:
            raise NotFoundError(f'Product not found: {item.product_id}', status_code=400)

        variant = None
        if item.variant_id is not None:
            variant = db.execute(
                select(ProductVariant).where(ProductVariant.id == item.variant_id)
            ).scalar_one_or_none()
            if not variant or variant.product_id != product.id:
                raise NotFoundError(f'Product variant not found: {item.variant_id}', status_code=400)

        if product.track_inventory:
            if variant is not None and variant.stock < item.quantity:
                raise InsufficientStockError(
                    f'Insufficient stock for {product.name} - {variant.name}. '
                    f'Available: {variant.stock}, Requested: {item.quantity}'
                )
            if variant is None and product.stock < item.quantity:
                raise InsufficientStockError(
                    f'Insufficient stock for {product.name}. Available: {product.stock}, Requested: {item.quantity}'
                )

        resolved.append(
            ResolvedLine(item=item, product_name=product.name, variant_name=variant.name if variant else None)
        )
    return resolved


def _record_sale(
    db: Session,
    *,
    order_id: int,
    business_id: int,
    product_id: int,
    variant: ProductVariant | None,
    old_stock: int,
    quantity: int,
) -> int:
    new_stock = max(0, old_stock - quantity)
    reason = f'Order sale - Order ID: {order_id}'
    if variant is not None:
        reason += f' (Variant: {variant.name})'
    if quantity > old_stock:
        reason += ' (Oversold)'
        logger.warning(
            'Oversold product %s variant %s on order %s: available %s, ordered %s',
            product_id,
            variant.id if variant else None,
            order_id,
            old_stock,
            quantity,
        )

    db.add(
        InventoryActivity(
            product_id=product_id,
            variant_id=variant.id if variant else None,
            business_id=business_id,
            type=InventoryActivityType.ORDER_SALE,
            quantity=-quantity,
            old_stock=old_stock,
            new_stock=new_stock,
            reason=reason,
            changed_by=ORDER_SALE_ACTOR,
        )
    )
    return new_stock


def apply_order_sale(db: Session, *, order_id: int, business_id: int, items: list[SaleLine]) -> int:
    """Decrement stock for a placed order, clamping at zero.

    Returns the number of inventory activities written. Rows are locked
    while read so concurrent orders serialize on the same product.
    """
    written = 0
    for line in items:
        product = db.execute(
            select(Product).where(Product.id == line.product_id).with_for_update()
        ).scalar_one_or_none()
        if not product or not product.track_inventory:
            logger.debug('Skipping inventory for product %s: tracking disabled', line.product_id)
            continue

        if line.variant_id is not None:
            variant = db.execute(
                select(ProductVariant).where(ProductVariant.id == line.variant_id).with_for_update()
            ).scalar_one_or_none()
            if not variant:
                logger.warning('Variant %s vanished before order %s was recorded', line.variant_id, order_id)
                continue
            variant.stock = _record_sale(
                db,
                order_id=order_id,
                business_id=business_id,
                product_id=product.id,
                variant=variant,
                old_stock=variant.stock,
                quantity=line.quantity,
            )
        else:
            product.stock = _record_sale(
                db,
                order_id=order_id,
                business_id=business_id,
                product_id=product.id,
                variant=None,
                old_stock=product.stock,
                quantity=line.quantity,
            )
        written += 1

    db.flush()
    return written
