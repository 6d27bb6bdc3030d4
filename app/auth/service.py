"""
app/auth/service.py
-------------------
Register / login / profile update against the backend REST API.

Backend endpoints:
    POST /user/register   → {"user": {...}, "access_token": "..."}
    POST /user/login      → {"user": {...}, "access_token": "..."}
    PUT  /user/<id>       → {"user": {...}}

Successful calls store the user (and token, when sent) in the session.
Failures propagate as UpstreamError.
"""
from typing import Optional

from flask import current_app

from app.backend import get_backend
from app.auth.models import User, UserType, parse_address
from app.auth.session import SessionContext


class AuthService:

    def __init__(self, context: Optional[SessionContext] = None, backend=None):
        self.context = context or SessionContext()
        self.backend = backend or get_backend()

    def _country(self) -> str:
        return current_app.config['DEFAULT_COUNTRY']

    def _registration_payload(self, form: dict, user_type: UserType) -> dict:
        return {
            'email':      form['email'],
            'first_name': form['first_name'],
            'last_name':  form['last_name'],
            'phone':      form['phone'],
            'user_type':  'wholesale' if user_type is UserType.wholesale else 'retail',
            'address':    parse_address(form['address'], self._country()),
            'password':   form['password'],
        }

    def register(self, form: dict, user_type: UserType = UserType.regular,
                 sign_in: bool = True) -> User:
        """
        Create an account. With sign_in=False the new account is not
        stored in the current session (admin creating a wholesale user).
        """
        response = self.backend.post('/user/register', self._registration_payload(form, user_type))
        user = User.from_backend(response['user'])
        if sign_in:
            self.context.save(user, response.get('access_token'))
        return user

    def login(self, email: str, password: str) -> User:
        response = self.backend.post('/user/login', {'email': email, 'password': password})
        user = User.from_backend(response['user'])
        self.context.save(user, response.get('access_token'))
        return user

    def logout(self) -> None:
        self.context.clear()

    def update_user(self, user: User, updates: dict) -> User:
        """
        Send only the fields that changed (first/last name, phone,
        address). The free-text address is split into its components.
        """
        payload = {}
        if updates.get('first_name'):
            payload['first_name'] = updates['first_name']
        if updates.get('last_name'):
            payload['last_name'] = updates['last_name']
        if updates.get('phone'):
            payload['phone'] = updates['phone']
        if updates.get('address'):
            payload['address'] = parse_address(updates['address'], self._country())

        response = self.backend.put(f'/user/{user.id}', payload, token=self.context.load_token())
        updated = User.from_backend(response['user'])
        self.context.save(updated)
        return updated
