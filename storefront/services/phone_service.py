from __future__ import annotations

import re

from storefront.config import settings

NON_DIGIT_RE = re.compile(r'\D+')

# Calling codes of the served markets: AL, XK, MK, GR, IT, ES, GB, FR, DE, NL, US.
KNOWN_COUNTRY_CODES = frozenset({'355', '383', '389', '30', '39', '34', '44', '33', '49', '31', '1'})
MIN_SUBSCRIBER_DIGITS = 7


def digits_only(phone: str | None) -> str:
    return NON_DIGIT_RE.sub('', phone or '')


def normalize_phone(phone: str | None) -> str:
    """Canonical digit string used only for equality checks.

    Punctuation, spacing, the '+' / '00' international prefix and trunk
    zeros are dropped. A country code, when present, is kept; `phones_match`
    decides whether a leading code can be ignored.
    """
    digits = digits_only(phone)
    if digits.startswith('00'):
        digits = digits[2:]
    return digits.lstrip('0')


def _is_country_prefix(prefix: str) -> bool:
    return prefix in KNOWN_COUNTRY_CODES or prefix.rstrip('0') in KNOWN_COUNTRY_CODES


def phones_match(phone_a: str | None, phone_b: str | None) -> bool:
    left = normalize_phone(phone_a)
    right = normalize_phone(phone_b)
    if not left or not right:
        return False
    if left == right:
        return True
    shorter, longer = sorted((left, right), key=len)
    if len(shorter) < MIN_SUBSCRIBER_DIGITS or not longer.endswith(shorter):
        return False
    return _is_country_prefix(longer[: len(longer) - len(shorter)])


def is_valid_phone(phone: str | None, *, min_digits: int | None = None) -> bool:
    threshold = settings.min_phone_digits if min_digits is None else min_digits
    return len(digits_only(phone)) >= threshold


def whatsapp_link_number(phone: str | None) -> str:
    return digits_only(phone)


def whatsapp_address(phone: str) -> str:
    cleaned = re.sub(r'[^\d+]', '', phone)
    if not cleaned.startswith('+'):
        cleaned = '+' + cleaned
    return f'whatsapp:{cleaned}'
