"""
app/catalog/models.py
---------------------
Catalog value types: grinds, presentations and the immutable Product
record mapped from the backend's product listing.
"""
from __future__ import annotations
import enum
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Optional


class Grind(enum.Enum):
    whole     = "whole"
    coarse    = "coarse"
    medium    = "medium"
    fine      = "fine"
    espresso  = "espresso"
    nespresso = "nespresso"


class Presentation(enum.Enum):
    quarter = "quarter"
    half    = "half"
    full    = "full"


GRIND_LABELS = {
    Grind.whole:     'Whole Bean',
    Grind.coarse:    'Coarse',
    Grind.medium:    'Medium',
    Grind.fine:      'Fine',
    Grind.espresso:  'Espresso',
    Grind.nespresso: 'Nespresso',
}

PRESENTATION_LABELS = {
    Presentation.quarter: '1/4 kg',
    Presentation.half:    '1/2 kg',
    Presentation.full:    '1 kg',
}

# Wholesale accounts buy in quarter-kilo and kilo units only
WHOLESALE_PRESENTATIONS = (Presentation.quarter, Presentation.full)

# Starting grind for each account type
DEFAULT_GRIND           = Grind.nespresso
DEFAULT_WHOLESALE_GRIND = Grind.whole


def grind_label(value) -> str:
    try:
        return GRIND_LABELS[Grind(value)]
    except ValueError:
        return str(value)


def presentation_label(value) -> str:
    try:
        return PRESENTATION_LABELS[Presentation(value)]
    except ValueError:
        return str(value)


@dataclass(frozen=True)
class Product:
    """A coffee from the catalog. Never mutated once loaded."""
    id:             str
    name:           str
    price:          Decimal
    description:    str = ''
    image:          str = ''
    badge:          Optional[str] = None
    rating:         Optional[float] = None
    original_price: Optional[str] = None
    region:         Optional[str] = None
    varietal:       Optional[str] = None
    altitude:       Optional[str] = None
    notes:          Optional[str] = None
    process:        Optional[str] = None

    def to_dict(self) -> dict:
        """JSON-safe dict; price kept as a string (no float contamination)."""
        data = asdict(self)
        data['price'] = str(self.price)
        return data

    def snapshot(self) -> dict:
        """The few fields a cart line keeps (session cookies are small)."""
        return {'id': self.id, 'name': self.name,
                'price': str(self.price), 'image': self.image}

    @classmethod
    def from_dict(cls, data: dict) -> Product:
        fields = {k: data.get(k) for k in cls.__dataclass_fields__ if k in data}
        fields['id']    = str(data['id'])
        fields['name']  = data.get('name', '')
        fields['price'] = Decimal(str(data['price']))
        return cls(**fields)

    def __repr__(self):
        return f"<Product {self.id!r} {self.name!r}>"
