"""Static lookup tables and name helpers shared by the country adapters."""

from __future__ import annotations

import re
import unicodedata
from types import MappingProxyType
from typing import Optional

SUPPORTED_COUNTRIES = ('CA', 'US', 'UK', 'DE', 'FR', 'SE', 'AU', 'EU')

REP_TYPES = ('sen', 'rep', 'mp', 'mep')

# Prefix (first two digits) -> Riksdag valkrets
SWEDEN_POSTAL_TO_VALKRETS = MappingProxyType({
    # Stockholm
    '10': 'Stockholms kommun', '11': 'Stockholms kommun', '12': 'Stockholms kommun',
    '13': 'Stockholms län', '14': 'Stockholms län', '15': 'Stockholms län',
    '16': 'Stockholms län', '17': 'Stockholms län', '18': 'Stockholms län', '19': 'Stockholms län',
    # Uppsala
    '74': 'Uppsala län', '75': 'Uppsala län', '76': 'Uppsala län',
    # Södermanland
    '61': 'Södermanlands län', '63': 'Södermanlands län', '64': 'Södermanlands län',
    # Östergötland
    '58': 'Östergötlands län', '59': 'Östergötlands län', '60': 'Östergötlands län',
    # Jönköping
    '33': 'Jönköpings län', '34': 'Jönköpings län', '56': 'Jönköpings län',
    # Kronoberg
    '35': 'Kronobergs län', '36': 'Kronobergs län',
    # Kalmar
    '38': 'Kalmar län', '39': 'Kalmar län', '57': 'Kalmar län',
    # Gotland
    '62': 'Gotlands län',
    # Blekinge
    '37': 'Blekinge län',
    # Skåne
    '20': 'Malmö kommun', '21': 'Malmö kommun',
    '22': 'Skåne läns södra', '23': 'Skåne läns södra', '24': 'Skåne läns södra',
    '25': 'Skåne läns västra', '26': 'Skåne läns västra',
    '27': 'Skåne läns norra och östra', '28': 'Skåne läns norra och östra',
    '29': 'Skåne läns norra och östra',
    # Halland
    '30': 'Hallands län', '31': 'Hallands län', '32': 'Hallands län',
    # Västra Götaland
    '40': 'Göteborgs kommun', '41': 'Göteborgs kommun', '42': 'Göteborgs kommun',
    '43': 'Västra Götalands läns västra', '44': 'Västra Götalands läns västra',
    '45': 'Västra Götalands läns västra',
    '46': 'Västra Götalands läns norra', '47': 'Västra Götalands läns norra',
    '50': 'Västra Götalands läns östra', '51': 'Västra Götalands läns östra',
    '52': 'Västra Götalands läns östra',
    '53': 'Västra Götalands läns södra', '54': 'Västra Götalands läns södra',
    # Värmland
    '65': 'Värmlands län', '66': 'Värmlands län', '67': 'Värmlands län',
    '68': 'Värmlands län', '69': 'Värmlands län',
    # Örebro
    '70': 'Örebro län', '71': 'Örebro län',
    # Västmanland
    '72': 'Västmanlands län', '73': 'Västmanlands län',
    # Dalarna
    '77': 'Dalarnas län', '78': 'Dalarnas län', '79': 'Dalarnas län', '80': 'Dalarnas län',
    # Gävleborg
    '81': 'Gävleborgs län', '82': 'Gävleborgs län',
    # Jämtland
    '83': 'Jämtlands län', '84': 'Jämtlands län',
    # Västernorrland
    '85': 'Västernorrlands län', '86': 'Västernorrlands län', '87': 'Västernorrlands län',
    '88': 'Västernorrlands län', '89': 'Västernorrlands län',
    # Västerbotten
    '90': 'Västerbottens län', '91': 'Västerbottens län', '92': 'Västerbottens län',
    '93': 'Västerbottens län',
    # Norrbotten
    '94': 'Norrbottens län', '95': 'Norrbottens län', '96': 'Norrbottens län',
    '97': 'Norrbottens län', '98': 'Norrbottens län',
})

# Ordered: ACT must be checked before NSW because 2600-2639 sits inside NSW's span.
AUSTRALIA_POSTCODE_RANGES = (
    ('ACT', ((200, 299), (2600, 2639))),
    ('NSW', ((1000, 2599), (2640, 2999))),
    ('Victoria', ((3000, 3999), (8000, 8999))),
    ('Queensland', ((4000, 4999), (9000, 9999))),
    ('SA', ((5000, 5999),)),
    ('WA', ((6000, 6999),)),
    ('Tasmania', ((7000, 7999),)),
    ('NT', ((800, 999),)),
)

AUSTRALIA_STATES = ('NSW', 'Victoria', 'Queensland', 'SA', 'WA', 'Tasmania', 'NT', 'ACT')

EU_COUNTRY_TO_CODE = MappingProxyType({
    'Austria': 'AT', 'Belgium': 'BE', 'Bulgaria': 'BG', 'Croatia': 'HR',
    'Cyprus': 'CY', 'Czech Republic': 'CZ', 'Czechia': 'CZ', 'Denmark': 'DK',
    'Estonia': 'EE', 'Finland': 'FI', 'France': 'FR', 'Germany': 'DE',
    'Greece': 'GR', 'Hungary': 'HU', 'Ireland': 'IE', 'Italy': 'IT',
    'Latvia': 'LV', 'Lithuania': 'LT', 'Luxembourg': 'LU', 'Malta': 'MT',
    'Netherlands': 'NL', 'Poland': 'PL', 'Portugal': 'PT', 'Romania': 'RO',
    'Slovakia': 'SK', 'Slovenia': 'SI', 'Spain': 'ES', 'Sweden': 'SE',
})

EU_MEMBER_STATES = frozenset(EU_COUNTRY_TO_CODE.values())

# Committee code -> member listing page
EU_COMMITTEE_PAGES = MappingProxyType({
    'AFET': 'https://www.europarl.europa.eu/committees/en/afet/home/members',
    'DROI': 'https://www.europarl.europa.eu/committees/en/droi/home/members',
    'D-IR': 'https://www.europarl.europa.eu/delegations/en/d-ir/members',
})

EU_MAX_CONTACTS = 10

# Below this many MEP ids the cached committee map is treated as broken.
EU_COMMITTEE_MAP_MIN_SIZE = 50

GERMAN_TRANSLITERATION = MappingProxyType({
    'ä': 'ae',
    'ö': 'oe',
    'ü': 'ue',
    'ß': 'ss',
})

BUNDESTAG_PARLIAMENT_ID = 5
BUNDESTAG_FALLBACK_PERIOD_ID = 161  # 21. Wahlperiode (2025-2029)
GERMANY_MAX_CONSTITUENCIES = 5

_NON_LETTERS = re.compile(r'[^a-z]')
_NON_EMAIL_NAME = re.compile(r'[^a-z-]')
_REPEATED_HYPHENS = re.compile(r'-+')


def email_local_part(value: Optional[str], transliterate: bool = False) -> str:
    """Lowercase a name and keep ASCII letters only."""
    cleaned = (value or '').lower()
    if transliterate:
        for char, replacement in GERMAN_TRANSLITERATION.items():
            cleaned = cleaned.replace(char, replacement)
    return _NON_LETTERS.sub('', cleaned)


def dotted_email(first_name: Optional[str], last_name: Optional[str], domain: str,
                 transliterate: bool = False) -> str:
    """Build ``first.last@domain`` or return an empty string when a part is missing."""
    first = email_local_part(first_name, transliterate=transliterate)
    last = email_local_part(last_name, transliterate=transliterate)
    if first and last:
        return f"{first}.{last}@{domain}"
    return ''


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize('NFD', value)
    return ''.join(char for char in decomposed if not unicodedata.combining(char))


def mep_email(full_name: Optional[str]) -> str:
    """
    Guess an MEP address from a full-list name such as ``Mika AALTOLA``.

    Upper-case tokens are taken as the surname, everything else joins the
    given name with hyphens. This is an approximation; unusual names give
    unusual addresses or an empty string.
    """
    first_name = ''
    last_name = ''
    for part in (full_name or '').split(' '):
        if part == part.upper() and len(part) > 1:
            last_name = part.lower()
        else:
            first_name = f"{first_name}-{part.lower()}" if first_name else part.lower()

    def clean(value: str) -> str:
        value = _NON_EMAIL_NAME.sub('', strip_accents(value))
        return _REPEATED_HYPHENS.sub('-', value)

    first = clean(first_name)
    last = clean(last_name)
    if first and last:
        return f"{first}.{last}@europarl.europa.eu"
    return ''
