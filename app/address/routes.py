from flask import request, jsonify, current_app

from app.address import address
from app.address.client import get_geocoder
from app.backend import UpstreamError


@address.route('/search')
def search():
    """Autocomplete suggestions. A geocoder outage never blocks the form."""
    q = request.args.get('q', '').strip()
    try:
        suggestions = get_geocoder().suggest(q)
    except UpstreamError as exc:
        current_app.logger.warning(f"Address search failed for {q!r}: {exc}")
        return jsonify({'suggestions': [], 'error': 'Address suggestions are unavailable right now.'})
    return jsonify({'suggestions': suggestions})
