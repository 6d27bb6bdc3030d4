"""
app/backend.py
--------------
Thin httpx client for the backend REST API (users, products, orders).

The storefront treats the backend purely as a data source/sink:
no retry, no backoff, no idempotency keys. Every failure surfaces as
UpstreamError and the calling route decides what the shopper sees.
"""
from typing import Any, Dict, Optional

import httpx
from flask import current_app


class UpstreamError(Exception):
    """A collaborator (backend API or geocoder) failed or refused a call."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class BackendClient:
    """JSON client bound to one backend base URL."""

    def __init__(self, base_url: str, timeout: float = 10.0, transport=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={'Content-Type': 'application/json', 'Accept': 'application/json'},
        )

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> httpx.Response:
        headers = {'Authorization': f'Bearer {token}'} if token else None
        try:
            return self._client.request(method, path, json=json, params=params, headers=headers)
        except httpx.RequestError as e:
            raise UpstreamError(f'Backend request failed: {method} {path}: {e}') from e

    @staticmethod
    def _decode(method: str, path: str, response: httpx.Response):
        if response.is_error:
            detail = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get('detail')
            except ValueError:
                pass
            raise UpstreamError(
                f'Backend returned {response.status_code} for {method} {path}',
                status_code=response.status_code,
                detail=detail if isinstance(detail, str) else None,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f'Backend sent invalid JSON for {method} {path}') from e

    # ── Verbs ─────────────────────────────────────────────────────

    def get(self, path: str, params=None, token=None):
        return self._decode('GET', path, self._request('GET', path, params=params, token=token))

    def get_or_none(self, path: str, params=None, token=None):
        """Like get(), but a 404 means "no such record" and returns None."""
        response = self._request('GET', path, params=params, token=token)
        if response.status_code == 404:
            return None
        return self._decode('GET', path, response)

    def post(self, path: str, data=None, token=None):
        return self._decode('POST', path, self._request('POST', path, json=data, token=token))

    def put(self, path: str, data=None, token=None):
        return self._decode('PUT', path, self._request('PUT', path, json=data, token=token))

    def close(self) -> None:
        self._client.close()


def get_backend() -> BackendClient:
    """Return the app-wide BackendClient, creating it on first use."""
    app = current_app._get_current_object()
    client = app.extensions.get('backend')
    if client is None:
        client = BackendClient(
            app.config['BACKEND_API_URL'],
            timeout=app.config['BACKEND_TIMEOUT'],
            transport=app.config.get('HTTPX_TRANSPORT'),
        )
        app.extensions['backend'] = client
    return client
