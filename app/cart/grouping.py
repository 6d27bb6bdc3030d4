"""
app/cart/grouping.py
--------------------
Display projection of the cart.

Line items sharing (product id, grind) collapse into one CartItemGroup.
Each group lists presentation rows; a wholesale item contributes up to
two rows (quarter and kilo) that can be removed independently.

Pure: never mutates the cart and keeps first-occurrence order.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from app.catalog.models import Presentation, Product, grind_label, presentation_label
from app.cart.models import CartItem, RowRef, WholesaleSelection
from app.cart.pricing import item_total


@dataclass(frozen=True)
class PresentationRow:
    ref:          RowRef
    presentation: str
    quantity:     int

    @property
    def label(self) -> str:
        return presentation_label(self.presentation)

    def to_dict(self) -> dict:
        return {
            'row_id':       str(self.ref),
            'presentation': self.presentation,
            'label':        self.label,
            'quantity':     self.quantity,
        }


@dataclass
class CartItemGroup:
    product: Product
    grind:   str
    items:   List[CartItem] = field(default_factory=list)
    rows:    List[PresentationRow] = field(default_factory=list)

    @property
    def grind_label(self) -> str:
        return grind_label(self.grind)

    @property
    def total(self) -> Decimal:
        return sum((item_total(i) for i in self.items), start=Decimal('0'))

    def to_dict(self) -> dict:
        return {
            'product':     self.product.to_dict(),
            'grind':       self.grind,
            'grind_label': self.grind_label,
            'rows':        [r.to_dict() for r in self.rows],
            'total':       f'{self.total:.2f}',
        }


def presentation_rows(item: CartItem) -> List[PresentationRow]:
    """The rows one line item shows in the cart view."""
    sel = item.selection
    if isinstance(sel, WholesaleSelection):
        rows = []
        if sel.quarter_quantity > 0:
            rows.append(PresentationRow(
                RowRef(item.cart_id, Presentation.quarter.value),
                Presentation.quarter.value, sel.quarter_quantity,
            ))
        if sel.full_quantity > 0:
            rows.append(PresentationRow(
                RowRef(item.cart_id, Presentation.full.value),
                Presentation.full.value, sel.full_quantity,
            ))
        return rows

    return [PresentationRow(RowRef(item.cart_id), sel.presentation, sel.quantity)]


def group_cart_items(items: Iterable[CartItem]) -> List[CartItemGroup]:
    """Group line items by (product id, grind), first occurrence first."""
    groups: Dict[Tuple[str, str], CartItemGroup] = {}

    for item in items:
        key = (item.product.id, item.selection.grind)
        group = groups.get(key)
        if group is None:
            group = groups[key] = CartItemGroup(product=item.product, grind=item.selection.grind)
        group.items.append(item)
        group.rows.extend(presentation_rows(item))

    # dicts keep insertion order
    return list(groups.values())
