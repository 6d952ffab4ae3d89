from __future__ import annotations

import unittest

from storefront.services.phone_service import (
    is_valid_phone,
    normalize_phone,
    phones_match,
    whatsapp_address,
    whatsapp_link_number,
)


class PhoneServiceTests(unittest.TestCase):
    def test_normalize_strips_punctuation_and_international_prefix(self) -> None:
        self.assertEqual(normalize_phone('+1 (555) 123-4567'), '15551234567')
        self.assertEqual(normalize_phone('00355 69 123 4567'), '355691234567')
        self.assertEqual(normalize_phone('069 123 4567'), '691234567')

    def test_same_number_matches_itself(self) -> None:
        self.assertTrue(phones_match('+355 69 123 4567', '+355 69 123 4567'))

    def test_formatting_differences_match(self) -> None:
        self.assertTrue(phones_match('+15551234567', '15551234567'))
        self.assertTrue(phones_match('+1 (555) 123-4567', '1.555.123.4567'))

    def test_country_code_may_be_omitted(self) -> None:
        self.assertTrue(phones_match('+355 69 123 4567', '069 123 4567'))
        self.assertTrue(phones_match('+1 (555) 123-4567', '555-123-4567'))
        self.assertTrue(phones_match('0044 20 7946 0958', '020 7946 0958'))

    def test_different_subscribers_do_not_match(self) -> None:
        self.assertFalse(phones_match('+355691234567', '+355691234568'))

    def test_unknown_prefix_does_not_match(self) -> None:
        self.assertFalse(phones_match('99691234567', '691234567'))

    def test_short_suffix_does_not_match(self) -> None:
        self.assertFalse(phones_match('3551234567', '234567'))

    def test_blank_never_matches(self) -> None:
        self.assertFalse(phones_match('', ''))
        self.assertFalse(phones_match(None, '+355691234567'))

    def test_validity_uses_minimum_digit_count(self) -> None:
        self.assertFalse(is_valid_phone('069 123 456'))
        self.assertTrue(is_valid_phone('+355 69 123 4567'))
        self.assertTrue(is_valid_phone('12345', min_digits=5))

    def test_whatsapp_formats(self) -> None:
        self.assertEqual(whatsapp_link_number('+355 69 123 4567'), '355691234567')
        self.assertEqual(whatsapp_address('+355 69 123 4567'), 'whatsapp:+355691234567')
        self.assertEqual(whatsapp_address('355691234567'), 'whatsapp:+355691234567')


if __name__ == '__main__':
    unittest.main()
