from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')


class ModifierIn(CamelModel):
    # Modifier objects are echoed from the menu and carry display-only keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    id: str | int
    name: str | None = None
    price: Decimal = Decimal('0')


class OrderItemIn(CamelModel):
    product_id: int
    variant_id: int | None = None
    quantity: int
    price: Decimal
    original_price: Decimal | None = None
    modifiers: list[ModifierIn | str | int] = Field(default_factory=list)

    def modifier_ids(self) -> list[str]:
        return [str(modifier.id) if isinstance(modifier, ModifierIn) else str(modifier) for modifier in self.modifiers]

    def modifier_details(self) -> list[ModifierIn]:
        return [modifier for modifier in self.modifiers if isinstance(modifier, ModifierIn)]


class OrderCreateRequest(CamelModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    delivery_address: str | None = None
    delivery_type: str | None = None
    delivery_time: datetime | None = None
    payment_method: str | None = None
    special_instructions: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    postal_pricing_id: int | None = None
    country_code: str | None = None
    city: str | None = None
    postal_code: str | None = None
    items: list[OrderItemIn] = Field(default_factory=list)
    subtotal: Decimal = Decimal('0')
    delivery_fee: Decimal = Decimal('0')
    tax: Decimal = Decimal('0')
    discount: Decimal = Decimal('0')
    total: Decimal = Decimal('0')

    @field_validator('delivery_time', mode='before')
    @classmethod
    def _blank_time_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_structured_address(self) -> bool:
        return bool(self.city or self.country_code or self.postal_code)


class FeeQuoteRequest(CamelModel):
    customer_lat: float | None = None
    customer_lng: float | None = None
    postal_pricing_id: int | None = None
