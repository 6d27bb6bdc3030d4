"""
test_orders.py — Tests for the purchase summary and checkout.
Run: pytest test_orders.py -v
"""
import json

from conftest import login


def add_half_kilos(client, quantity=2):
    resp = client.post('/cart/items', json={
        'product_id': '1', 'grind': 'medium', 'presentation': 'half', 'quantity': quantity,
    })
    assert resp.status_code == 201


# ── 1. Summary ────────────────────────────────────────────────────

def test_summary_for_guest(client):
    add_half_kilos(client)
    data = client.get('/orders/summary').get_json()
    assert data['contact'] is None
    assert data['totals']['subtotal'] == '43200.00'
    assert data['totals']['tax'] == '9072.00'
    assert data['totals']['total'] == '52272.00'
    assert data['groups'][0]['product']['name'] == 'Colombia Huila'


def test_summary_prefills_contact(client):
    login(client)
    contact = client.get('/orders/summary').get_json()['contact']
    assert contact == {
        'name': 'Ana Gómez', 'email': 'ana@example.com', 'phone': '+54 11 5555-0000',
        'address': 'Av. Corrientes 1234, Buenos Aires, CABA, C1043',
    }


# ── 2. Checkout ───────────────────────────────────────────────────

def test_checkout_requires_login(client):
    add_half_kilos(client)
    resp = client.post('/orders/', json={})
    assert resp.status_code == 401
    assert client.get('/cart/count').get_json() == {'count': 2}


def test_checkout_with_empty_cart(client, backend):
    login(client)
    resp = client.post('/orders/', json={})
    assert resp.status_code == 400
    assert 'cart' in resp.get_json()['errors']
    assert backend.orders == []


def test_checkout_needs_a_phone(client, backend):
    login(client)
    backend.users['ana@example.com']['phone'] = ''
    client.post('/auth/login', json={'email': 'ana@example.com', 'password': 'secret1'})
    add_half_kilos(client)
    resp = client.post('/orders/', json={})
    assert resp.status_code == 400
    assert 'phone' in resp.get_json()['errors']

    # a phone typed at checkout is enough
    assert client.post('/orders/', json={'phone': '+54 11 7000-0000'}).status_code == 201


def test_checkout_places_order_and_clears_cart(client, backend):
    login(client)
    add_half_kilos(client)
    resp = client.post('/orders/', json={'notes': 'Ring twice'})
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['order']['id'] == 1
    assert data['message'] == "Order placed! We'll contact you soon to confirm it."

    request = backend.last('POST', '/orders')
    assert request.headers['Authorization'] == 'Bearer tok-1'
    sent = json.loads(request.content)
    assert sent['user_id'] == '1'
    assert sent['total'] == '52272.00'
    assert sent['notes'] == 'Ring twice'
    assert sent['wholesale'] is False
    assert sent['items'][0]['presentation'] == 'half'
    assert sent['items'][0]['quantity'] == 2

    assert client.get('/cart/count').get_json() == {'count': 0}


def test_wholesale_order_lines(client, backend):
    login(client, 'mayorista@example.com', 'test123')
    client.post('/cart/items', json={'product_id': '1', 'quarter_quantity': 2, 'full_quantity': 1})
    assert client.post('/orders/', json={}).status_code == 201

    sent = backend.orders[0]
    assert sent['wholesale'] is True
    assert sent['items'][0]['quarter_quantity'] == 2
    assert sent['items'][0]['full_quantity'] == 1
    assert sent['subtotal'] == '66000.00'


def test_backend_failure_keeps_cart(client, backend):
    login(client)
    add_half_kilos(client)
    backend.fail = True
    assert client.post('/orders/', json={}).status_code == 502
    backend.fail = False
    assert client.get('/cart/count').get_json() == {'count': 2}


# ── 3. History ────────────────────────────────────────────────────

def test_order_history_and_detail(client):
    login(client)
    add_half_kilos(client, quantity=1)
    order_id = client.post('/orders/', json={}).get_json()['order']['id']

    history = client.get('/orders/history').get_json()['orders']
    assert [o['id'] for o in history] == [order_id]

    detail = client.get(f'/orders/{order_id}').get_json()['order']
    assert detail['total'] == '26136.00'
    assert client.get('/orders/999').status_code == 404


def test_history_requires_login(client):
    assert client.get('/orders/history').status_code == 401


def test_order_reply_without_an_object(client, backend):
    backend.order_reply = ['accepted']
    login(client)
    add_half_kilos(client)
    resp = client.post('/orders/', json={})
    assert resp.status_code == 201
    assert resp.get_json()['order'] == ['accepted']
    assert client.get('/cart/count').get_json() == {'count': 0}
