"""
app/catalog/routes.py
─────────────────────
Product listing, detail, selection options and price preview.
"""
from flask import jsonify, current_app

from app.catalog import catalog
from app.catalog.models import (
    Grind, Presentation, GRIND_LABELS, PRESENTATION_LABELS, WHOLESALE_PRESENTATIONS,
    DEFAULT_GRIND, DEFAULT_WHOLESALE_GRIND,
)
from app.catalog.service import list_products, get_product
from app.auth.session import SessionContext
from app.backend import UpstreamError
from app.utils.forms import request_data


@catalog.route('/')
def index():
    try:
        products = list_products()
    except UpstreamError as exc:
        current_app.logger.error(f"Product listing failed: {exc}")
        return jsonify({'error': 'Could not load products.'}), 502
    return jsonify([p.to_dict() for p in products])


@catalog.route('/options')
def options():
    """Grind / presentation choices for the acting account type."""
    from app.cart.pricing import PRESENTATION_MULTIPLIERS

    wholesale = SessionContext().is_wholesale
    presentations = WHOLESALE_PRESENTATIONS if wholesale else tuple(Presentation)
    return jsonify({
        'wholesale':     wholesale,
        'default_grind': (DEFAULT_WHOLESALE_GRIND if wholesale else DEFAULT_GRIND).value,
        'grinds': [{'value': g.value, 'label': GRIND_LABELS[g]} for g in Grind],
        'presentations': [
            {'value': p.value, 'label': PRESENTATION_LABELS[p],
             'multiplier': str(PRESENTATION_MULTIPLIERS[p.value])}
            for p in presentations
        ],
    })


@catalog.route('/<product_id>')
def detail(product_id):
    try:
        product = get_product(product_id)
    except UpstreamError as exc:
        current_app.logger.error(f"Product {product_id} lookup failed: {exc}")
        return jsonify({'error': 'Could not load the product.'}), 502
    if product is None:
        return jsonify({'error': 'Product not found.'}), 404
    return jsonify(product.to_dict())


@catalog.route('/<product_id>/quote', methods=['POST'])
def quote(product_id):
    """Price a configuration before it goes into the cart."""
    from app.cart.pricing import selection_total, format_currency
    from app.cart.selection import validate_selection_form, parse_selection_form

    wholesale = SessionContext().is_wholesale
    data = request_data()
    errors = validate_selection_form(data, wholesale)
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        product = get_product(product_id)
    except UpstreamError as exc:
        current_app.logger.error(f"Product {product_id} lookup failed: {exc}")
        return jsonify({'error': 'Could not load the product.'}), 502
    if product is None:
        return jsonify({'error': 'Product not found.'}), 404

    selection = parse_selection_form(data, wholesale)
    total = selection_total(product.price, selection)
    return jsonify({
        'product_id': product.id,
        'selection':  selection.to_dict(),
        'total':      f'{total:.2f}',
        'display':    format_currency(total),
    })
