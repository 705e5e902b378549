"""Normalized records passed between adapters, the query service and views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import REP_TYPES, SUPPORTED_COUNTRIES

# attribute name -> wire name for optional fields
OPTIONAL_FIELDS = (
    ('phone', 'phone'),
    ('contact_form', 'contactForm'),
    ('bioguide_id', 'bioguideId'),
    ('committee', 'committee'),
    ('party', 'party'),
    ('member_state', 'memberState'),
    ('formatted_address', 'formattedAddress'),
)


@dataclass
class Representative:
    name: str
    district: str
    country: str
    title: str
    type: str
    email: str = ''
    photo: str = ''
    phone: Optional[str] = None
    contact_form: Optional[str] = None
    bioguide_id: Optional[str] = None
    committee: Optional[str] = None
    party: Optional[str] = None
    member_state: Optional[str] = None
    formatted_address: Optional[str] = None

    def __post_init__(self):
        self.name = (self.name or '').strip()
        self.district = (self.district or '').strip()
        self.email = self.email or ''
        self.photo = self.photo or ''
        if self.country not in SUPPORTED_COUNTRIES:
            raise ValueError(f"Unknown country {self.country!r}")
        if self.type not in REP_TYPES:
            raise ValueError(f"Unknown representative type {self.type!r}")

    @property
    def is_complete(self) -> bool:
        """Whether the record satisfies the minimum contract for callers."""
        return bool(self.name and self.district and self.country)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'district': self.district,
            'email': self.email,
            'photo': self.photo,
            'country': self.country,
            'title': self.title,
            'type': self.type,
        }
        for attribute, key in OPTIONAL_FIELDS:
            value = getattr(self, attribute)
            if value is not None:
                data[key] = value
        return data


@dataclass
class Locator:
    """What the caller knows about their location."""

    postal: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    member_state: Optional[str] = None

    @classmethod
    def from_query(cls, params) -> 'Locator':
        def value(key: str) -> Optional[str]:
            raw = params.get(key)
            if raw is None:
                return None
            raw = raw.strip()
            return raw or None

        return cls(
            postal=value('postal'),
            street=value('street'),
            city=value('city'),
            state=value('state'),
            member_state=value('memberState'),
        )

    def full_address(self) -> str:
        parts = [self.street, self.city, self.state, self.postal]
        return ' '.join(' '.join(part for part in parts if part).split())
