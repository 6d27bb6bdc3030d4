"""
test_pricing.py — Tests for the cart price calculator.
Run: pytest test_pricing.py -v
"""
from decimal import Decimal

import pytest

from app.catalog.models import Product
from app.cart.models import CartItem, RegularSelection, WholesaleSelection
from app.cart.pricing import (
    FALLBACK_BASE_PRICE, cart_totals, coerce_price, format_currency,
    item_total, presentation_multiplier, selection_total,
)


def make_item(cart_id=1, price='12000', selection=None, product_id='1'):
    product = Product(id=product_id, name='Colombia Huila', price=Decimal(price))
    return CartItem(cart_id, product, selection or RegularSelection('medium'))


# ── 1. Base price coercion ────────────────────────────────────────

@pytest.mark.parametrize('raw', [None, '', 'abc', 'NaN', 'Infinity', '-5', 0, -100, True])
def test_unusable_price_falls_back(raw):
    assert coerce_price(raw) == FALLBACK_BASE_PRICE == Decimal('12000')


def test_formatted_price_string_is_read():
    assert coerce_price('$12,000') == Decimal('12000')
    assert coerce_price(' 15000.50 ') == Decimal('15000.50')
    assert coerce_price(9500) == Decimal('9500')


def test_fallback_is_logged(caplog):
    with caplog.at_level('WARNING', logger='app.cart.pricing'):
        coerce_price('free')
    assert 'fallback' in caplog.text


# ── 2. Regular selections ─────────────────────────────────────────

def test_presentation_multipliers():
    assert presentation_multiplier('quarter') == Decimal('1')
    assert presentation_multiplier('half') == Decimal('1.8')
    assert presentation_multiplier('full') == Decimal('3.5')
    assert presentation_multiplier('sack') == Decimal('1')


def test_half_kilo_times_two():
    total = selection_total(Decimal('12000'), RegularSelection('medium', 'half', 2))
    assert total == Decimal('43200.00')


def test_regular_total_uses_fallback_for_missing_price():
    assert selection_total(None, RegularSelection('fine', 'full', 1)) == Decimal('42000.00')


def test_unknown_presentation_prices_as_quarter():
    total = selection_total(Decimal('10000'), RegularSelection('fine', 'bucket', 3))
    assert total == Decimal('30000.00')


# ── 3. Wholesale selections ───────────────────────────────────────

def test_wholesale_quarter_and_kilo_units():
    # 12000 × 1 × 2 + 12000 × 3.5 × 1
    total = selection_total(Decimal('12000'), WholesaleSelection('whole', 2, 1))
    assert total == Decimal('66000.00')


def test_wholesale_zero_units_is_free():
    assert selection_total(Decimal('12000'), WholesaleSelection('whole', 0, 0)) == Decimal('0.00')


def test_item_total_uses_product_price():
    item = make_item(price='15000', selection=RegularSelection('espresso', 'quarter', 2))
    assert item_total(item) == Decimal('30000.00')


# ── 4. Cart totals ────────────────────────────────────────────────

def test_tax_is_twenty_one_percent():
    item = make_item(price='100', selection=RegularSelection('medium', 'quarter', 1))
    totals = cart_totals([item])
    assert totals.subtotal == Decimal('100.00')
    assert totals.tax == Decimal('21.00')
    assert totals.total == Decimal('121.00')


def test_totals_sum_every_item():
    items = [
        make_item(1, selection=RegularSelection('medium', 'half', 2)),        # 43200
        make_item(2, selection=WholesaleSelection('whole', 2, 1)),            # 66000
    ]
    totals = cart_totals(items)
    assert totals.subtotal == Decimal('109200.00')
    assert totals.tax == Decimal('22932.00')
    assert totals.total == Decimal('132132.00')


def test_empty_cart_totals_are_zero():
    totals = cart_totals([])
    assert totals.total == Decimal('0.00')
    assert totals.formatted_total == '0.00'


def test_totals_serialise_with_two_decimals():
    data = cart_totals([make_item(price='99.999')]).to_dict()
    assert data['formatted_subtotal'] == '100.00'
    assert data['tax_rate'] == '0.21'


def test_format_currency():
    assert format_currency(Decimal('43200')) == '$43200.00'


def test_implausible_price_falls_back():
    assert coerce_price('1e30') == FALLBACK_BASE_PRICE
    assert coerce_price('1000000001') == FALLBACK_BASE_PRICE
    assert coerce_price('1000000000') == Decimal('1000000000')
