from flask import jsonify, flash, current_app

from app.cart import cart
from app.cart.grouping import group_cart_items
from app.cart.models import RowRef
from app.cart.pricing import cart_totals
from app.cart.selection import validate_selection_form, parse_selection_form
from app.cart.store import (
    get_cart_items, add_to_cart, remove_from_cart, clear_cart,
    cart_count, CartItemNotFound, CartLimitExceeded,
)
from app.catalog.service import get_product
from app.auth.session import SessionContext
from app.backend import UpstreamError
from app.utils.forms import request_data


def cart_view(items=None) -> dict:
    """Grouped rows, totals and badge count for the cart drawer."""
    items = get_cart_items() if items is None else items
    return {
        'groups': [g.to_dict() for g in group_cart_items(items)],
        'totals': cart_totals(items).to_dict(),
        'count':  cart_count(items),
    }


# ── VIEW ──────────────────────────────────────────────────────────

@cart.route('/')
def index():
    return jsonify(cart_view())


@cart.route('/count')
def count():
    """Header badge."""
    return jsonify({'count': cart_count(get_cart_items())})


# ── ADD ITEM ──────────────────────────────────────────────────────

@cart.route('/items', methods=['POST'])
def add_item():
    """
    Add a configured coffee to the cart.
    Body: product_id plus grind/presentation/quantity (regular accounts)
    or grind/quarter_quantity/full_quantity (wholesale accounts).
    """
    data = request_data()
    wholesale = SessionContext().is_wholesale

    product_id = str(data.get('product_id') or '').strip()
    errors = validate_selection_form(data, wholesale)
    if not product_id:
        errors['product_id'] = 'Choose a product.'
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        product = get_product(product_id)
    except UpstreamError as exc:
        current_app.logger.error(f"Add to cart: product {product_id} lookup failed: {exc}")
        return jsonify({'error': 'Could not load the product.'}), 502
    if product is None:
        return jsonify({'error': f'No product found for id "{product_id}".'}), 404

    try:
        item, message = add_to_cart(product, parse_selection_form(data, wholesale))
    except CartLimitExceeded as exc:
        return jsonify({'errors': {'quantity': str(exc)}}), 400
    flash(message, 'success')

    view = cart_view()
    view.update({'message': message, 'cart_id': item.cart_id})
    return jsonify(view), 201


# ── REMOVE ROW ────────────────────────────────────────────────────

@cart.route('/items/<row_id>', methods=['DELETE'])
def remove_item(row_id):
    """Remove one presentation row ("7" or "7-quarter" / "7-full")."""
    try:
        message = remove_from_cart(RowRef.parse(row_id))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    except CartItemNotFound as exc:
        return jsonify({'error': str(exc)}), 404

    flash(message, 'info')
    view = cart_view()
    view['message'] = message
    return jsonify(view)


@cart.route('/clear', methods=['POST'])
def clear():
    clear_cart()
    return jsonify(cart_view([]))
