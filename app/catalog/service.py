"""
app/catalog/service.py
----------------------
Product listing from the backend.

The backend product record carries no price yet; the storefront prices
every coffee from its base price, falling back to FALLBACK_BASE_PRICE
(see app/cart/pricing.py) when the field is missing or unreadable.
"""
from typing import List, Optional

from app.backend import get_backend
from app.catalog.models import Product


def map_backend_product(record: dict) -> Product:
    from app.cart.pricing import coerce_price

    return Product(
        id=str(record['id']),
        name=record.get('name', ''),
        price=coerce_price(record.get('price')),
        description=record.get('description') or '',
        image=record.get('image') or '',
        badge=record.get('badge'),
        rating=record.get('rating'),
        original_price=record.get('original_price'),
        region=record.get('region'),
        varietal=record.get('varietal'),
        altitude=record.get('altitude'),
        notes=record.get('notes'),
        process=record.get('process'),
    )


def list_products(backend=None) -> List[Product]:
    backend = backend or get_backend()
    return [map_backend_product(r) for r in backend.get('/products')]


def get_product(product_id, backend=None) -> Optional[Product]:
    """None when the backend has no such product."""
    backend = backend or get_backend()
    record = backend.get_or_none(f'/products/{product_id}')
    return map_backend_product(record) if record else None
