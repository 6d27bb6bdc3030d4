"""
app/auth/session.py
-------------------
Explicit holder for the signed-in shopper.

The user profile and the backend access token live in the Flask session
(signed cookie) under 'user' and 'auth_token'. Everything that needs
them goes through SessionContext instead of poking at the session.
"""
from typing import Optional

from flask import session

from app.auth.models import User


class SessionContext:
    USER_KEY  = 'user'
    TOKEN_KEY = 'auth_token'

    def __init__(self, store=None):
        self._store = session if store is None else store

    # ── Load ──────────────────────────────────────────────────────
    def load_user(self) -> Optional[User]:
        data = self._store.get(self.USER_KEY)
        return User.from_dict(data) if data else None

    def load_token(self) -> Optional[str]:
        return self._store.get(self.TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.USER_KEY in self._store

    @property
    def is_wholesale(self) -> bool:
        user = self.load_user()
        return bool(user and user.is_wholesale)

    # ── Save / clear ──────────────────────────────────────────────
    def save(self, user: User, token: Optional[str] = None) -> None:
        self._store[self.USER_KEY] = user.to_dict()
        if token:
            self._store[self.TOKEN_KEY] = token

    def clear(self) -> None:
        self._store.pop(self.USER_KEY, None)
        self._store.pop(self.TOKEN_KEY, None)
