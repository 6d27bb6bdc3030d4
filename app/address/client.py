"""
app/address/client.py
---------------------
Address autocomplete through a Nominatim-compatible search endpoint.

Each query asks for a fixed number of candidates restricted to the
configured country codes. Queries shorter than MIN_QUERY_LENGTH never
leave the server. Superseded keystrokes are debounced in the browser;
here every request is answered on its own.
"""
import logging
from typing import List

import httpx
from flask import current_app

from app.backend import UpstreamError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class GeocodingClient:

    def __init__(self, url: str, country_codes: str = 'ar', limit: int = 5,
                 timeout: float = 5.0, user_agent: str = 'roastery-storefront',
                 default_country: str = 'Argentina', transport=None):
        self.url = url
        self.country_codes = country_codes
        self.limit = limit
        self.default_country = default_country
        # Nominatim's usage policy requires an identifying User-Agent
        self._client = httpx.Client(timeout=timeout, transport=transport,
                                    headers={'User-Agent': user_agent})

    def search(self, query: str) -> List[dict]:
        """Raw place candidates for a free-text query."""
        query = (query or '').strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        params = {
            'q':              query,
            'format':         'json',
            'addressdetails': 1,
            'limit':          self.limit,
            'countrycodes':   self.country_codes,
        }
        try:
            response = self._client.get(self.url, params=params)
            response.raise_for_status()
            results = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f'Geocoder returned {e.response.status_code}',
                                status_code=e.response.status_code) from e
        except (httpx.RequestError, ValueError) as e:
            raise UpstreamError(f'Geocoder request failed: {e}') from e

        if not isinstance(results, list):
            return []
        # keep only place objects
        results = [r for r in results if isinstance(r, dict)]
        logger.debug(f"Geocoder: {len(results)} result(s) for {query!r}")
        return results

    def suggest(self, query: str) -> List[dict]:
        """Candidates mapped to address records, ready for the form."""
        return [map_to_address(r, self.default_country) for r in self.search(query)]

    def close(self) -> None:
        self._client.close()


def map_to_address(result: dict, default_country: str = 'Argentina') -> dict:
    """
    One geocoder candidate → address record:
      street = road + house number, city = city | town | village.
    """
    addr = result.get('address') or {}
    street = ' '.join(p for p in (addr.get('road'), addr.get('house_number')) if p)
    return {
        'place_id':     result.get('place_id'),
        'display_name': result.get('display_name', ''),
        'street':       street,
        'city':         addr.get('city') or addr.get('town') or addr.get('village') or '',
        'state':        addr.get('state') or '',
        'postal_code':  addr.get('postcode') or '',
        'country':      addr.get('country') or default_country,
        'is_default':   False,
    }


def get_geocoder() -> GeocodingClient:
    """Return the app-wide GeocodingClient, creating it on first use."""
    app = current_app._get_current_object()
    client = app.extensions.get('geocoder')
    if client is None:
        cfg = app.config
        client = GeocodingClient(
            cfg['GEOCODER_URL'],
            country_codes=cfg['GEOCODER_COUNTRY_CODES'],
            limit=cfg['GEOCODER_RESULT_LIMIT'],
            timeout=cfg['GEOCODER_TIMEOUT'],
            user_agent=cfg['GEOCODER_USER_AGENT'],
            default_country=cfg['DEFAULT_COUNTRY'],
            transport=cfg.get('HTTPX_TRANSPORT'),
        )
        app.extensions['geocoder'] = client
    return client
