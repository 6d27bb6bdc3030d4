"""
app/cart/store.py
-----------------
Stateless helpers for the session-based shopping cart.

The cart is an ordered list of CartItems kept in the Flask session
(see app/cart/models.py for the stored shape). It is never sent to the
backend; it is dropped on logout and after an order is placed.

cart_id values come from a per-session counter stored under 'cart_seq'
and are never reused, even after the item is removed.
"""
from typing import List, Tuple

from flask import session

from app.catalog.models import Product
from app.cart.models import MAX_QUANTITY, CartItem, RowRef, Selection, WholesaleSelection
from app.cart.signals import broadcast_count


CART_KEY = 'cart'
SEQ_KEY  = 'cart_seq'


class CartItemNotFound(LookupError):
    """No cart row matches the given identifier."""


class CartLimitExceeded(ValueError):
    """Adding the selection would push a line past MAX_QUANTITY units."""


# ── Read ──────────────────────────────────────────────────────────

def get_cart_items() -> List[CartItem]:
    """Return the current cart items in insertion order (may be empty)."""
    return [CartItem.from_dict(raw) for raw in session.get(CART_KEY, [])]


def cart_count(items) -> int:
    """
    Items shown on the header badge: quantity for regular items,
    quarter + kilo units for wholesale items. Always recomputed.
    """
    return sum(item.count for item in items)


# ── Write ─────────────────────────────────────────────────────────

def _save(items: List[CartItem], action: str) -> int:
    # zero-quantity items never survive a mutation
    items = [item for item in items if item.count > 0]
    session[CART_KEY] = [item.to_dict() for item in items]
    session.modified  = True

    count = cart_count(items)
    broadcast_count(count, action)
    return count


def _next_cart_id() -> int:
    next_id = int(session.get(SEQ_KEY, 0)) + 1
    session[SEQ_KEY] = next_id
    return next_id


def add_to_cart(product: Product, selection: Selection) -> Tuple[CartItem, str]:
    """
    Add `selection` of `product` to the cart.

    A line with the same product, grind and selection kind absorbs the
    new quantities instead of creating a second row. Otherwise a new
    line is appended at the end. A regular and a wholesale line of the
    same coffee and grind stay separate but share one display group.

    Returns (the resulting CartItem, confirmation message).
    Raises CartLimitExceeded, leaving the cart untouched, when a line
    would hold more than MAX_QUANTITY units of one presentation.
    """
    items = get_cart_items()

    for index, existing in enumerate(items):
        if existing.matches(product.id, selection):
            merged = existing.selection.merged(selection)
            if not merged.within_limits:
                raise CartLimitExceeded(
                    f'{product.name}: at most {MAX_QUANTITY} units per line.')
            item = CartItem(existing.cart_id, existing.product, merged)
            items[index] = item
            break
    else:
        if not selection.within_limits:
            raise CartLimitExceeded(f'{product.name}: at most {MAX_QUANTITY} units per line.')
        item = CartItem(_next_cart_id(), product, selection)
        items.append(item)

    _save(items, 'add')

    if isinstance(selection, WholesaleSelection):
        message = (f'{product.name} added to your wholesale order '
                   f'({selection.quarter_quantity} × 1/4 kg, {selection.full_quantity} × 1 kg).')
    else:
        message = f'{product.name} added to your cart.'
    return item, message


def remove_from_cart(ref: RowRef) -> str:
    """
    Remove one presentation row.

    RowRef(cart_id)            → delete the whole line.
    RowRef(cart_id, 'quarter') → zero the wholesale quarter units; the
                                 line goes away only if kilo units are
                                 zero too (and vice versa for 'full').

    Raises CartItemNotFound when no line / row matches.
    """
    items = get_cart_items()
    index = next((i for i, item in enumerate(items) if item.cart_id == ref.cart_id), None)
    if index is None:
        raise CartItemNotFound(f'No cart item {ref}.')

    item = items[index]
    if ref.presentation is None:
        del items[index]
    else:
        if not item.is_wholesale:
            raise CartItemNotFound(f'No cart row {ref}.')
        items[index] = CartItem(item.cart_id, item.product,
                                item.selection.without(ref.presentation))

    _save(items, 'remove')
    return f'{item.product.name} removed from your cart.'


def clear_cart() -> None:
    """Empty the cart (logout, order placed). The id counter keeps going."""
    had_items = bool(session.get(CART_KEY))
    session.pop(CART_KEY, None)
    session.modified = True
    if had_items:
        broadcast_count(0, 'clear')
