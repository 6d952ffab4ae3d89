from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_COUNTRY = 'US'
POSTAL_CODE_RE = re.compile(r'\b\d{3,5}\s?\d{0,2}\b')
WS_RE = re.compile(r'\s+')

# Served markets only. Anything else falls through to DEFAULT_COUNTRY.
COUNTRY_CODES = frozenset({'AL', 'GR', 'IT', 'ES', 'US', 'XK', 'MK', 'GB', 'FR', 'DE', 'NL'})
COUNTRY_NAMES = (
    ('north macedonia', 'MK'),
    ('macedonia', 'MK'),
    ('united kingdom', 'GB'),
    ('united states', 'US'),
    ('netherlands', 'NL'),
    ('deutschland', 'DE'),
    ('shqipëri', 'AL'),
    ('shqiperi', 'AL'),
    ('albania', 'AL'),
    ('greece', 'GR'),
    ('ελλάδα', 'GR'),
    ('italy', 'IT'),
    ('italia', 'IT'),
    ('spain', 'ES'),
    ('españa', 'ES'),
    ('kosovo', 'XK'),
    ('kosova', 'XK'),
    ('france', 'FR'),
    ('germany', 'DE'),
    ('usa', 'US'),
)


@dataclass(frozen=True)
class ParsedAddress:
    street: str
    additional: str = ''
    city: str = ''
    zip_code: str = ''
    country: str = DEFAULT_COUNTRY
    latitude: float | None = None
    longitude: float | None = None

    def to_json(self) -> dict:
        return {
            'street': self.street,
            'additional': self.additional,
            'zipCode': self.zip_code,
            'city': self.city,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }

    def display(self) -> str:
        return ', '.join(part for part in (self.street, self.additional, self.city, self.zip_code) if part)


def _clean(value: str) -> str:
    return WS_RE.sub(' ', value).strip(' ,')


def extract_postal_code(text: str) -> str:
    matches = POSTAL_CODE_RE.findall(text)
    if not matches:
        return ''
    return WS_RE.sub(' ', matches[-1]).strip()


def split_country(segment: str) -> tuple[str | None, str]:
    """Find a known country in a trailing address segment.

    Returns the ISO code (or None) and whatever text is left once the
    country token is removed.
    """
    lowered = segment.lower()
    for name, code in COUNTRY_NAMES:
        pattern = re.compile(rf'(?<!\w){re.escape(name)}(?!\w)', re.IGNORECASE)
        if pattern.search(lowered):
            return code, _clean(pattern.sub(' ', segment, count=1))

    bare = segment.strip().upper()
    if bare in COUNTRY_CODES:
        return bare, ''

    # Inside a longer segment only an uppercase code counts.
    for token in re.findall(r'\b[A-Z]{2,3}\b', segment):
        if token in COUNTRY_CODES:
            remainder = re.sub(rf'\b{token}\b', ' ', segment, count=1)
            return token, _clean(remainder)
    return None, segment.strip()


def parse_address(address: str | None, latitude: float | None = None, longitude: float | None = None) -> ParsedAddress | None:
    if not address or not address.strip():
        return None
    text = address.strip()

    if ',' not in text:
        return ParsedAddress(street=text, latitude=latitude, longitude=longitude)

    parts = [part.strip() for part in text.split(',')]
    street = parts[0]

    city = ''
    if len(parts) >= 2:
        city = _clean(POSTAL_CODE_RE.sub('', parts[1]))

    country = DEFAULT_COUNTRY
    additional = ''
    detected, remainder = split_country(parts[-1])
    if detected:
        country = detected
    if len(parts) >= 3:
        additional = remainder
    elif detected:
        # Two segments: the last one is both city and country.
        city = _clean(POSTAL_CODE_RE.sub('', remainder))

    return ParsedAddress(
        street=street,
        additional=additional,
        city=city,
        zip_code=extract_postal_code(text),
        country=country,
        latitude=latitude,
        longitude=longitude,
    )


def _last_index_ci(haystack: str, needle: str, *, whole_word: bool = False) -> int:
    if not needle:
        return -1
    if whole_word:
        matches = list(re.finditer(rf'\b{re.escape(needle)}\b', haystack, re.IGNORECASE))
        return matches[-1].start() if matches else -1
    return haystack.lower().rfind(needle.lower())


def parse_structured_address(
    address: str | None,
    *,
    city: str | None,
    country_code: str | None,
    postal_code: str | None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> ParsedAddress | None:
    """Parse an address whose city/country/postal code were entered as separate fields.

    Only street and the additional line come from the free text: everything
    before the last mention of the city (or the country code) is kept.
    """
    if not address or not address.strip():
        return None
    text = address.strip()
    city = (city or '').strip()
    country_code = (country_code or '').strip().upper()

    cut = _last_index_ci(text, city)
    if cut < 0:
        cut = _last_index_ci(text, country_code, whole_word=True)
    head = text[:cut] if cut > 0 else text
    segments = [segment for segment in (_clean(part) for part in head.split(',')) if segment]
    if not segments:
        segments = [text]

    return ParsedAddress(
        street=segments[0],
        additional=', '.join(segments[1:]),
        city=city,
        zip_code=(postal_code or '').strip(),
        country=country_code or DEFAULT_COUNTRY,
        latitude=latitude,
        longitude=longitude,
    )
