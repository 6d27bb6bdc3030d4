"""
app/cart/signals.py
-------------------
Cart-changed broadcast.

The cart store publishes `cart_changed` after every mutation with the
recomputed item count. Listeners (the header badge, logging) never
touch the cart itself.

    from app.cart.signals import cart_changed

    @cart_changed.connect
    def on_change(sender, count, **extra):
        ...
"""
import logging

from blinker import Namespace
from flask import g, has_request_context

logger = logging.getLogger(__name__)

_signals = Namespace()

cart_changed = _signals.signal('cart-changed')

BADGE_HEADER = 'X-Cart-Count'


def broadcast_count(count: int, action: str) -> None:
    """Publish the new cart count. Called by the cart store only."""
    cart_changed.send(action, count=count)


# ── Built-in listeners ────────────────────────────────────────────

@cart_changed.connect
def _update_header_badge(sender, count, **extra):
    """Remember the count so the response can carry it to the header badge."""
    if has_request_context():
        g.cart_count = count


@cart_changed.connect
def _log_change(sender, count, **extra):
    logger.debug(f"Cart {sender}: {count} item(s)")


def attach_badge_header(response):
    """after_request hook: expose the latest count to the page header."""
    count = g.get('cart_count')
    if count is not None:
        response.headers[BADGE_HEADER] = str(count)
    return response
