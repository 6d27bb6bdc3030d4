"""
app/orders/__init__.py
----------------------
Checkout and order history blueprint.
URL prefix: /orders
"""
from flask import Blueprint

orders = Blueprint('orders', __name__)

from app.orders import routes  # noqa: E402, F401
