"""
app/orders/service.py
---------------------
Purchase summary and order hand-off to the backend.

The storefront does not persist orders: submit_order() posts the
summary to the backend and, on success, empties the session cart.
Checkout requires a signed-in shopper, a non-empty cart and a contact
phone and address (taken from the form, or the profile as fallback).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from app.backend import get_backend
from app.auth.models import User
from app.cart.grouping import group_cart_items
from app.cart.models import CartItem, WholesaleSelection
from app.cart.pricing import cart_totals, item_total
from app.cart.store import cart_count, clear_cart
from app.catalog.models import grind_label, presentation_label


class CheckoutError(ValueError):
    """Checkout refused before contacting the backend."""

    def __init__(self, errors: dict):
        super().__init__('; '.join(errors.values()))
        self.errors = errors


@dataclass(frozen=True)
class Contact:
    name:    str
    email:   str
    phone:   str
    address: str
    notes:   str = ''

    @classmethod
    def for_user(cls, user: User, form: Optional[dict] = None) -> Contact:
        form = form or {}

        def pick(key, fallback):
            value = str(form.get(key) or '').strip()
            return value or fallback

        return cls(
            name=user.name,
            email=user.email,
            phone=pick('phone', user.phone),
            address=pick('address', user.address),
            notes=str(form.get('notes') or '').strip(),
        )


def build_order_summary(items: List[CartItem]) -> dict:
    """Everything the purchase summary screen shows."""
    return {
        'groups': [g.to_dict() for g in group_cart_items(items)],
        'totals': cart_totals(items).to_dict(),
        'count':  cart_count(items),
    }


def order_line(item: CartItem) -> dict:
    sel = item.selection
    line = {
        'product_id':   item.product.id,
        'product_name': item.product.name,
        'grind':        sel.grind,
        'grind_label':  grind_label(sel.grind),
        'unit_price':   str(item.product.price),
        'total':        str(item_total(item)),
    }
    if isinstance(sel, WholesaleSelection):
        line.update(wholesale=True,
                    quarter_quantity=sel.quarter_quantity,
                    full_quantity=sel.full_quantity)
    else:
        line.update(wholesale=False,
                    presentation=sel.presentation,
                    presentation_label=presentation_label(sel.presentation),
                    quantity=sel.quantity)
    return line


def validate_checkout(user: Optional[User], items: List[CartItem], contact: Optional[Contact]) -> dict:
    errors = {}
    if user is None:
        errors['user'] = 'Please log in to place your order.'
    if not items:
        errors['cart'] = 'Your cart is empty.'
    if contact is not None:
        if not contact.phone:
            errors['phone'] = 'Phone is required.'
        if not contact.address:
            errors['address'] = 'Address is required.'
    return errors


def submit_order(user: Optional[User], items: List[CartItem], contact: Optional[Contact],
                 token: Optional[str] = None, backend=None) -> dict:
    """
    Send the order to the backend and clear the cart.

    Raises CheckoutError when the order cannot be placed and
    UpstreamError when the backend rejects it (cart kept intact).
    """
    errors = validate_checkout(user, items, contact)
    if errors:
        raise CheckoutError(errors)

    totals = cart_totals(items)
    payload = {
        'user_id': user.id,
        'customer': {
            'name':    contact.name,
            'email':   contact.email,
            'phone':   contact.phone,
            'address': contact.address,
        },
        'notes':     contact.notes,
        'wholesale': user.is_wholesale,
        'items':     [order_line(i) for i in items],
        'subtotal':  str(totals.subtotal),
        'tax':       str(totals.tax),
        'total':     str(totals.total),
    }

    backend = backend or get_backend()
    order = backend.post('/orders', payload, token=token)
    clear_cart()
    return order
