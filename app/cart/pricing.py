"""
app/cart/pricing.py
-------------------
Pure-Python price calculator for cart items.

Regular items:    base × presentation multiplier × quantity
Wholesale items:  base × 1 × quarter units + base × 3.5 × kilo units

All arithmetic uses Decimal; display strings are fixed two-decimal.
A price that cannot be read as a positive number is replaced by
FALLBACK_BASE_PRICE so the storefront always renders; every
substitution is logged so upstream data problems stay visible.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

from app.catalog.models import Presentation
from app.cart.models import CartItem, RegularSelection, Selection, WholesaleSelection

logger = logging.getLogger(__name__)

Q = Decimal('0.01')   # quantize target

FALLBACK_BASE_PRICE = Decimal('12000')
TAX_RATE            = Decimal('0.21')

# Anything above this is treated as a data error, like a missing price
MAX_BASE_PRICE      = Decimal('1000000000')

PRESENTATION_MULTIPLIERS = {
    Presentation.quarter.value: Decimal('1'),
    Presentation.half.value:    Decimal('1.8'),
    Presentation.full.value:    Decimal('3.5'),
}

# Wholesale unit multipliers: a quarter-kilo unit and a kilo unit
QUARTER_UNIT_MULTIPLIER = Decimal('1')
FULL_UNIT_MULTIPLIER    = Decimal('3.5')


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax:      Decimal
    total:    Decimal

    @property
    def formatted_subtotal(self) -> str:
        return f'{self.subtotal:.2f}'

    @property
    def formatted_tax(self) -> str:
        return f'{self.tax:.2f}'

    @property
    def formatted_total(self) -> str:
        return f'{self.total:.2f}'

    def to_dict(self) -> dict:
        return {
            'subtotal':           str(self.subtotal),
            'tax':                str(self.tax),
            'total':              str(self.total),
            'tax_rate':           str(TAX_RATE),
            'formatted_subtotal': self.formatted_subtotal,
            'formatted_tax':      self.formatted_tax,
            'formatted_total':    self.formatted_total,
        }


# ── Price coercion ────────────────────────────────────────────────

def coerce_price(raw) -> Decimal:
    """
    Read a base price from a number or a formatted string ("$12,000").
    Returns FALLBACK_BASE_PRICE for anything missing, non-numeric,
    non-finite, not strictly positive or above MAX_BASE_PRICE. Never raises.
    """
    try:
        if isinstance(raw, bool) or raw is None:
            raise InvalidOperation
        if isinstance(raw, str):
            cleaned = raw.replace('$', '').replace(',', '').strip()
            price = Decimal(cleaned)
        elif isinstance(raw, Decimal):
            price = raw
        else:
            price = Decimal(str(raw))
    except (InvalidOperation, ValueError, TypeError):
        logger.warning(f"Unreadable price {raw!r}; using fallback {FALLBACK_BASE_PRICE}")
        return FALLBACK_BASE_PRICE

    if not price.is_finite() or price <= 0 or price > MAX_BASE_PRICE:
        logger.warning(f"Invalid price {raw!r}; using fallback {FALLBACK_BASE_PRICE}")
        return FALLBACK_BASE_PRICE
    return price


def presentation_multiplier(presentation) -> Decimal:
    """quarter → 1, half → 1.8, full → 3.5; anything else → 1."""
    if isinstance(presentation, Presentation):
        presentation = presentation.value
    return PRESENTATION_MULTIPLIERS.get(presentation, Decimal('1'))


# ── Per-item ──────────────────────────────────────────────────────

def selection_total(base_price, selection: Selection) -> Decimal:
    """Price of one selection at the given base price."""
    base = coerce_price(base_price)

    if isinstance(selection, WholesaleSelection):
        quarter_total = base * QUARTER_UNIT_MULTIPLIER * selection.quarter_quantity
        full_total    = base * FULL_UNIT_MULTIPLIER * selection.full_quantity
        return (quarter_total + full_total).quantize(Q)

    if isinstance(selection, RegularSelection):
        multiplier = presentation_multiplier(selection.presentation)
        return (base * multiplier * selection.quantity).quantize(Q)

    raise TypeError(f'Unknown selection type: {type(selection).__name__}')


def item_total(item: CartItem) -> Decimal:
    """Monetary total of one cart line item."""
    return selection_total(item.product.price, item.selection)


# ── Cart-level ────────────────────────────────────────────────────

def cart_totals(items: Iterable[CartItem]) -> Totals:
    """
    subtotal = Σ item totals
    tax      = subtotal × TAX_RATE
    total    = subtotal + tax
    """
    subtotal = sum((item_total(item) for item in items), start=Decimal('0')).quantize(Q)
    tax      = (subtotal * TAX_RATE).quantize(Q)
    return Totals(subtotal=subtotal, tax=tax, total=(subtotal + tax).quantize(Q))


def format_currency(amount) -> str:
    return f'${Decimal(amount).quantize(Q)}'
