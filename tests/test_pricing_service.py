from __future__ import annotations

import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

from sqlalchemy import update

from storefront.errors import (
    BusinessClosedError,
    ConfigMissingError,
    FeeMismatchError,
    NotFoundError,
    OutOfRangeError,
    ServiceDisabledError,
    ValidationError,
)
from storefront.models import BusinessType, DeliveryZone
from storefront.services.pricing_service import (
    DeliverySelection,
    PostalTableStrategy,
    ZoneDistanceStrategy,
    resolve_delivery_fee,
    select_zone,
    strategy_for,
    verify_submitted_fee,
)

from sqlite_support import add_restaurant, add_retail_with_postal, add_zones, make_session_factory


def _zone(name: str, max_distance: float, fee: str) -> SimpleNamespace:
    return SimpleNamespace(name=name, max_distance=max_distance, fee=Decimal(fee))


ZONES = [_zone('third', 10, '8'), _zone('first', 2, '3'), _zone('second', 5, '5')]


def _business(**overrides) -> SimpleNamespace:
    values = dict(
        id=1,
        business_type=BusinessType.RESTAURANT,
        language='en',
        address='Main square',
        delivery_enabled=True,
        is_temporarily_closed=False,
        closure_message=None,
        closure_reason=None,
        delivery_fee=Decimal('2.00'),
        delivery_radius=10,
        store_latitude=41.33,
        store_longitude=19.82,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class ZoneSelectionTests(unittest.TestCase):
    def test_first_zone_covering_distance_wins(self) -> None:
        self.assertEqual(select_zone(ZONES, 1.5).fee, Decimal('3'))
        self.assertEqual(select_zone(ZONES, 7).fee, Decimal('8'))

    def test_upper_bound_is_inclusive(self) -> None:
        self.assertEqual(select_zone(ZONES, 5).name, 'second')

    def test_beyond_farthest_zone_is_out_of_range(self) -> None:
        with self.assertRaises(OutOfRangeError):
            select_zone(ZONES, 10.5)


class ZoneDistanceStrategyTests(unittest.TestCase):
    def _quote(self, distance: float, business=None, zones=ZONES):
        business = business or _business()
        selection = DeliverySelection(latitude=41.35, longitude=19.80)
        with (
            patch('storefront.services.pricing_service.haversine_km', return_value=distance),
            patch('storefront.services.pricing_service.active_zones', return_value=zones),
        ):
            return ZoneDistanceStrategy().quote(None, business=business, selection=selection)

    def test_zone_fee_and_rounded_distance(self) -> None:
        quote = self._quote(1.5)
        self.assertEqual(quote.fee, Decimal('3'))
        self.assertEqual(quote.zone, 'first')
        self.assertEqual(quote.distance_km, 1.5)

        quote = self._quote(7.12345)
        self.assertEqual(quote.fee, Decimal('8'))
        self.assertEqual(quote.distance_km, 7.12)

    def test_distance_past_radius_is_out_of_range(self) -> None:
        with self.assertRaises(OutOfRangeError) as ctx:
            self._quote(11)
        self.assertIn('maximum 10km', ctx.exception.message)

    def test_no_zones_uses_flat_fee(self) -> None:
        quote = self._quote(3.456, zones=[])
        self.assertEqual(quote.fee, Decimal('2.00'))
        self.assertEqual(quote.zone, 'Standard Delivery')
        self.assertEqual(quote.distance_km, 3.46)

    def test_free_flat_fee_label(self) -> None:
        quote = self._quote(1, business=_business(delivery_fee=Decimal('0')), zones=[])
        self.assertEqual(quote.zone, 'Free Delivery')

    def test_no_store_address_uses_flat_fee_without_distance(self) -> None:
        quote = ZoneDistanceStrategy().quote(
            None, business=_business(address=None), selection=DeliverySelection()
        )
        self.assertEqual(quote.fee, Decimal('2.00'))
        self.assertEqual(quote.distance_km, 0.0)

    def test_no_store_address_and_no_fee_is_config_missing(self) -> None:
        with self.assertRaises(ConfigMissingError):
            ZoneDistanceStrategy().quote(
                None, business=_business(address=None, delivery_fee=None), selection=DeliverySelection()
            )

    def test_missing_radius_is_config_missing(self) -> None:
        with self.assertRaises(ConfigMissingError):
            self._quote(1, business=_business(delivery_radius=0))

    def test_missing_store_coordinates_is_config_missing(self) -> None:
        with self.assertRaises(ConfigMissingError):
            self._quote(1, business=_business(store_latitude=None))

    def test_missing_customer_coordinates_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ZoneDistanceStrategy().quote(None, business=_business(), selection=DeliverySelection())


class FeeVerificationTests(unittest.TestCase):
    def test_difference_at_tolerance_is_accepted(self) -> None:
        verify_submitted_fee(Decimal('5.00'), Decimal('5.01'))
        verify_submitted_fee(Decimal('5.00'), Decimal('5.00'))

    def test_difference_over_tolerance_is_rejected(self) -> None:
        with self.assertRaises(FeeMismatchError) as ctx:
            verify_submitted_fee(Decimal('5.00'), Decimal('5.02'))
        body = ctx.exception.to_body()
        self.assertEqual(body['error'], 'Delivery fee mismatch')
        self.assertEqual(body['calculatedFee'], 5.0)
        self.assertEqual(body['providedFee'], 5.02)

    def test_missing_submitted_fee_counts_as_zero(self) -> None:
        verify_submitted_fee(Decimal('0'), None)
        with self.assertRaises(FeeMismatchError):
            verify_submitted_fee(Decimal('3'), None)


class ResolveDeliveryFeeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionFactory = make_session_factory()
        self.db = self.SessionFactory()

    def tearDown(self) -> None:
        self.db.close()

    def test_missing_business_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            resolve_delivery_fee(self.db, business=None, selection=DeliverySelection())
        self.assertEqual(ctx.exception.status_code, 404)

    def test_closed_business_carries_reason(self) -> None:
        business = _business(is_temporarily_closed=True, closure_reason='Holiday', closure_message='Back Monday')
        with self.assertRaises(BusinessClosedError) as ctx:
            resolve_delivery_fee(self.db, business=business, selection=DeliverySelection())
        self.assertEqual(ctx.exception.to_body()['reason'], 'Holiday')
        self.assertEqual(ctx.exception.to_body()['message'], 'Back Monday')

    def test_delivery_disabled(self) -> None:
        with self.assertRaises(ServiceDisabledError):
            resolve_delivery_fee(self.db, business=_business(delivery_enabled=False), selection=DeliverySelection())

    def test_restaurant_resolves_zone_from_coordinates(self) -> None:
        business = add_restaurant(self.db)
        add_zones(self.db, business, [('Zone 1', 2, '2.00'), ('Zone 2', 5, '4.00')])
        quote = resolve_delivery_fee(
            self.db, business=business, selection=DeliverySelection(latitude=41.35, longitude=19.80)
        )
        self.assertEqual(quote.zone, 'Zone 2')
        self.assertEqual(quote.fee, Decimal('4.00'))
        self.assertAlmostEqual(quote.distance_km, 2.78, places=1)

    def test_inactive_zones_are_ignored(self) -> None:
        business = add_restaurant(self.db)
        add_zones(self.db, business, [('Zone 1', 2, '2.00')])
        self.db.execute(update(DeliveryZone).values(is_active=False))
        quote = resolve_delivery_fee(
            self.db, business=business, selection=DeliverySelection(latitude=41.35, longitude=19.80)
        )
        self.assertEqual(quote.zone, 'Standard Delivery')

    def test_retail_postal_pricing(self) -> None:
        business, pricing = add_retail_with_postal(self.db)
        selection = DeliverySelection(postal_pricing_id=pricing.id)
        self.assertIsInstance(strategy_for(business, selection), PostalTableStrategy)
        quote = resolve_delivery_fee(self.db, business=business, selection=selection)
        self.assertEqual(quote.fee, Decimal('4.50'))
        self.assertEqual(quote.zone, 'Albanian Post')
        self.assertEqual(quote.distance_km, 0.0)
        self.assertEqual(quote.postal_pricing_id, pricing.id)
        self.assertEqual(quote.postal_delivery_time, '2-3 days')

    def test_postal_name_follows_business_language(self) -> None:
        business, pricing = add_retail_with_postal(self.db, language='sq')
        quote = resolve_delivery_fee(self.db, business=business, selection=DeliverySelection(postal_pricing_id=pricing.id))
        self.assertEqual(quote.zone, 'Posta Shqiptare')

    def test_postal_pricing_of_other_business_is_rejected(self) -> None:
        _, pricing = add_retail_with_postal(self.db)
        other, _ = add_retail_with_postal(self.db, slug='other-shop')
        with self.assertRaises(NotFoundError) as ctx:
            resolve_delivery_fee(self.db, business=other, selection=DeliverySelection(postal_pricing_id=pricing.id))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_retail_without_postal_selection_uses_zones(self) -> None:
        business, _ = add_retail_with_postal(self.db)
        self.assertIsInstance(strategy_for(business, DeliverySelection()), ZoneDistanceStrategy)


if __name__ == '__main__':
    unittest.main()
