"""
app/main/routes.py
──────────────────
Storefront landing data and health check.
"""
from datetime import datetime

from flask import jsonify, current_app

from app.main import main
from app.auth.session import SessionContext
from app.backend import get_backend, UpstreamError
from app.cart.store import get_cart_items, cart_count


@main.route('/')
def index():
    """What the page header needs: who is signed in and the cart badge."""
    user = SessionContext().load_user()
    return jsonify({
        'user':       user.to_dict() if user else None,
        'cart_count': cart_count(get_cart_items()),
    })


@main.route('/health')
def health():
    """Health check for load balancers and monitoring."""
    status = "ok"
    failures = []

    try:
        get_backend().get('/products')
    except UpstreamError as e:
        status = "error"
        failures.append(f"Backend: {e}")
        current_app.logger.error(f"Health check failed (backend): {e}")

    response = {
        "status": status,
        "timestamp": datetime.utcnow().isoformat(),
        "details": {"backend": "ok" if status == "ok" else "error"},
    }
    if failures:
        response["failures"] = failures

    return response, 200 if status == "ok" else 503
