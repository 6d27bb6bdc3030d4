from flask import jsonify, flash, current_app

from app.orders import orders
from app.orders.service import (
    Contact, CheckoutError, build_order_summary, submit_order,
)
from app.auth.decorators import login_required
from app.auth.session import SessionContext
from app.backend import get_backend, UpstreamError
from app.cart.store import get_cart_items
from app.utils.forms import request_data


# ── PURCHASE SUMMARY ──────────────────────────────────────────────

@orders.route('/summary')
def summary():
    """Cart grouped for review, with tax. Prefills contact details when signed in."""
    view = build_order_summary(get_cart_items())
    user = SessionContext().load_user()
    view['contact'] = None
    if user:
        contact = Contact.for_user(user)
        view['contact'] = {'name': contact.name, 'email': contact.email,
                           'phone': contact.phone, 'address': contact.address}
    return jsonify(view)


# ── PLACE ORDER ───────────────────────────────────────────────────

@orders.route('/', methods=['POST'])
def create():
    """
    Finalise the purchase:
      1. Require a signed-in shopper (anonymous → 401, prompts login)
      2. Require a non-empty cart and a phone + address
      3. Post the order to the backend
      4. Clear the cart
    """
    context = SessionContext()
    user = context.load_user()
    if user is None:
        return jsonify({'error': 'Please log in to place your order.'}), 401

    items = get_cart_items()
    contact = Contact.for_user(user, request_data())

    try:
        order = submit_order(user, items, contact, token=context.load_token())
    except CheckoutError as exc:
        return jsonify({'errors': exc.errors}), 400
    except UpstreamError as exc:
        current_app.logger.error(f"Order submission failed for {user.email}: {exc}")
        return jsonify({'error': 'We could not place your order. Please try again.'}), 502

    order_id = order.get('id') if isinstance(order, dict) else None
    current_app.logger.info(f"Order placed by {user.email}: {order_id}")
    message = "Order placed! We'll contact you soon to confirm it."
    flash(message, 'success')
    return jsonify({'order': order, 'message': message}), 201


# ── HISTORY ───────────────────────────────────────────────────────

@orders.route('/history')
@login_required
def history():
    context = SessionContext()
    user = context.load_user()
    try:
        data = get_backend().get(f'/users/{user.id}/orders', token=context.load_token())
    except UpstreamError as exc:
        current_app.logger.error(f"Order history failed for {user.email}: {exc}")
        return jsonify({'error': 'Could not load your orders.'}), 502
    return jsonify({'orders': data})


@orders.route('/<int:order_id>')
@login_required
def detail(order_id):
    context = SessionContext()
    try:
        order = get_backend().get_or_none(f'/orders/{order_id}', token=context.load_token())
    except UpstreamError as exc:
        current_app.logger.error(f"Order {order_id} lookup failed: {exc}")
        return jsonify({'error': 'Could not load the order.'}), 502
    if order is None:
        return jsonify({'error': 'Order not found.'}), 404
    return jsonify({'order': order})
