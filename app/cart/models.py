"""
app/cart/models.py
------------------
Cart value types.

A selection is either Regular (one presentation × quantity) or Wholesale
(quarter-kilo and kilo unit counts). The two shapes never mix: which one
applies is decided by the acting account when the item is added.

Cart structure stored in the Flask session under key 'cart':
[
    {
        "cart_id":   int,          ← unique for the cart's lifetime
        "product":   {...},        ← Product.snapshot()
        "selection": {"kind": "regular", "grind": str,
                      "presentation": str, "quantity": int}
                   | {"kind": "wholesale", "grind": str,
                      "quarter_quantity": int, "full_quantity": int}
    },
    ...
]
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Union

from app.catalog.models import Presentation, Product, WHOLESALE_PRESENTATIONS

# Ceiling for any single quantity on a cart line, merged totals included
MAX_QUANTITY = 999


@dataclass(frozen=True)
class RegularSelection:
    grind:        str
    presentation: str = Presentation.quarter.value
    quantity:     int = 1

    kind = 'regular'

    @property
    def count(self) -> int:
        return self.quantity

    @property
    def within_limits(self) -> bool:
        return self.quantity <= MAX_QUANTITY

    def merged(self, other: RegularSelection) -> RegularSelection:
        """Quantities add up; the presentation already in the cart is kept."""
        return replace(self, quantity=self.quantity + other.quantity)

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'grind': self.grind,
                'presentation': self.presentation, 'quantity': self.quantity}


@dataclass(frozen=True)
class WholesaleSelection:
    grind:            str
    quarter_quantity: int = 0
    full_quantity:    int = 0

    kind = 'wholesale'

    @property
    def count(self) -> int:
        return self.quarter_quantity + self.full_quantity

    @property
    def within_limits(self) -> bool:
        return self.quarter_quantity <= MAX_QUANTITY and self.full_quantity <= MAX_QUANTITY

    def merged(self, other: WholesaleSelection) -> WholesaleSelection:
        return replace(
            self,
            quarter_quantity=self.quarter_quantity + other.quarter_quantity,
            full_quantity=self.full_quantity + other.full_quantity,
        )

    def without(self, presentation: str) -> WholesaleSelection:
        """Zero out one presentation, keeping the other intact."""
        if presentation == Presentation.quarter.value:
            return replace(self, quarter_quantity=0)
        if presentation == Presentation.full.value:
            return replace(self, full_quantity=0)
        raise ValueError(f'Wholesale items have no {presentation!r} presentation.')

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'grind': self.grind,
                'quarter_quantity': self.quarter_quantity,
                'full_quantity': self.full_quantity}


Selection = Union[RegularSelection, WholesaleSelection]


def selection_from_dict(data: dict) -> Selection:
    if data.get('kind') == WholesaleSelection.kind:
        return WholesaleSelection(
            grind=data['grind'],
            quarter_quantity=int(data.get('quarter_quantity') or 0),
            full_quantity=int(data.get('full_quantity') or 0),
        )
    return RegularSelection(
        grind=data['grind'],
        presentation=data.get('presentation') or Presentation.quarter.value,
        quantity=int(data.get('quantity') or 1),
    )


@dataclass(frozen=True)
class CartItem:
    """A Product merged with one selection, addressed by cart_id."""
    cart_id:   int
    product:   Product
    selection: Selection

    @property
    def is_wholesale(self) -> bool:
        return isinstance(self.selection, WholesaleSelection)

    @property
    def count(self) -> int:
        return self.selection.count

    def matches(self, product_id: str, selection: Selection) -> bool:
        """Same product, same grind, same selection kind."""
        return (self.product.id == product_id
                and self.selection.grind == selection.grind
                and self.selection.kind == selection.kind)

    def to_dict(self) -> dict:
        return {
            'cart_id':   self.cart_id,
            'product':   self.product.snapshot(),
            'selection': self.selection.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CartItem:
        return cls(
            cart_id=int(data['cart_id']),
            product=Product.from_dict(data['product']),
            selection=selection_from_dict(data['selection']),
        )


@dataclass(frozen=True)
class RowRef:
    """
    Identifies one presentation row of the cart view.

    presentation is None for a regular item (the row is the whole item)
    and 'quarter' / 'full' for one half of a wholesale item.
    Rendered as "12" or "12-quarter" for use in URLs.
    """
    cart_id:      int
    presentation: Optional[str] = None

    def __str__(self):
        if self.presentation is None:
            return str(self.cart_id)
        return f'{self.cart_id}-{self.presentation}'

    @classmethod
    def parse(cls, text: str) -> RowRef:
        text = (text or '').strip()
        head, sep, tail = text.partition('-')
        if not head.isdigit():
            raise ValueError(f'Invalid cart row identifier: {text!r}')
        if not sep:
            return cls(int(head))
        if tail not in {p.value for p in WHOLESALE_PRESENTATIONS}:
            raise ValueError(f'Invalid cart row identifier: {text!r}')
        return cls(int(head), tail)
