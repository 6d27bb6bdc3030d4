"""
Shared fixtures: an in-memory stand-in for the backend REST API and the
geocoder, wired into the app through httpx.MockTransport.
"""
import json
import re

import httpx
import pytest

from app import create_app


ADDRESS = {
    'street': 'Av. Corrientes 1234', 'city': 'Buenos Aires', 'state': 'CABA',
    'postal_code': 'C1043', 'country': 'Argentina', 'is_default': False,
}


class FakeBackend:
    """Answers the handful of endpoints the storefront calls."""

    def __init__(self):
        self.products = {
            '1': {'id': 1, 'name': 'Colombia Huila', 'description': 'Caramel, red apple',
                  'image': '/img/huila.jpg', 'region': 'Huila', 'varietal': 'Caturra'},
            '2': {'id': 2, 'name': 'Ethiopia Yirgacheffe', 'description': 'Jasmine, lemon',
                  'image': '/img/yirga.jpg', 'price': '$15,000'},
        }
        self.users = {
            'ana@example.com': self._user(1, 'ana@example.com', 'Ana', 'Gómez', 'retail', 'secret1'),
            'mayorista@example.com': self._user(2, 'mayorista@example.com', 'Juan', 'Pérez',
                                                'wholesale', 'test123'),
            'admin@roastery.test': self._user(3, 'admin@roastery.test', 'Admin', 'Roastery',
                                              'retail', 'admin123'),
        }
        self.orders = []
        self.places = []
        self.requests = []
        self.fail = False
        # overrides the POST /orders body when set
        self.order_reply = None

    @staticmethod
    def _user(uid, email, first, last, user_type, password):
        return {
            'id': uid, 'email': email, 'first_name': first, 'last_name': last,
            'phone': '+54 11 5555-0000', 'user_type': user_type,
            'address': dict(ADDRESS), 'password': password,
        }

    @staticmethod
    def _public(user):
        return {k: v for k, v in user.items() if k != 'password'}

    def _by_id(self, uid):
        return next((u for u in self.users.values() if str(u['id']) == str(uid)), None)

    # ── httpx handler ─────────────────────────────────────────────
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, json={'detail': 'Backend down'})

        if request.url.host == 'geocoder.test':
            return httpx.Response(200, json=self.places)

        method, path = request.method, request.url.path
        body = json.loads(request.content) if request.content else {}

        if method == 'GET' and path == '/products':
            return httpx.Response(200, json=list(self.products.values()))

        m = re.fullmatch(r'/products/(\w+)', path)
        if method == 'GET' and m:
            product = self.products.get(m.group(1))
            if product is None:
                return httpx.Response(404, json={'detail': 'Product not found'})
            return httpx.Response(200, json=product)

        if method == 'POST' and path == '/user/login':
            user = self.users.get(body.get('email'))
            if user is None or user['password'] != body.get('password'):
                return httpx.Response(401, json={'detail': 'Invalid credentials'})
            return httpx.Response(200, json={'user': self._public(user),
                                             'access_token': f"tok-{user['id']}"})

        if method == 'POST' and path == '/user/register':
            if body['email'] in self.users:
                return httpx.Response(400, json={'detail': 'Email already registered'})
            user = dict(body, id=len(self.users) + 1)
            self.users[body['email']] = user
            return httpx.Response(201, json={'user': self._public(user),
                                             'access_token': f"tok-{user['id']}"})

        m = re.fullmatch(r'/user/(\w+)', path)
        if method == 'PUT' and m:
            user = self._by_id(m.group(1))
            if user is None:
                return httpx.Response(404, json={'detail': 'User not found'})
            user.update(body)
            return httpx.Response(200, json={'user': self._public(user)})

        if method == 'POST' and path == '/orders':
            order = dict(body, id=len(self.orders) + 1, status='pending', date='2026-10-19')
            self.orders.append(order)
            if self.order_reply is not None:
                return httpx.Response(201, json=self.order_reply)
            return httpx.Response(201, json={'id': order['id'], 'status': 'pending',
                                             'total': order['total']})

        m = re.fullmatch(r'/users/(\w+)/orders', path)
        if method == 'GET' and m:
            mine = [{'id': o['id'], 'date': o['date'], 'total': o['total'], 'status': o['status']}
                    for o in self.orders if str(o['user_id']) == m.group(1)]
            return httpx.Response(200, json=mine)

        m = re.fullmatch(r'/orders/(\d+)', path)
        if method == 'GET' and m:
            order = next((o for o in self.orders if o['id'] == int(m.group(1))), None)
            if order is None:
                return httpx.Response(404, json={'detail': 'Order not found'})
            return httpx.Response(200, json=order)

        return httpx.Response(404, json={'detail': 'Not found'})

    def last(self, method, path):
        return next(r for r in reversed(self.requests)
                    if r.method == method and r.url.path == path)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    app = create_app('testing')
    app.config['HTTPX_TRANSPORT'] = httpx.MockTransport(backend)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email='ana@example.com', password='secret1'):
    resp = client.post('/auth/login', json={'email': email, 'password': password})
    assert resp.status_code == 200, resp.get_json()
    return resp
