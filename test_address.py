"""
test_address.py — Tests for address autocomplete.
Run: pytest test_address.py -v
"""
from app.address.client import map_to_address


PLACE = {
    'place_id': 4242,
    'display_name': 'Avenida Corrientes 1234, San Nicolás, Buenos Aires, Argentina',
    'address': {
        'road': 'Avenida Corrientes', 'house_number': '1234', 'city': 'Buenos Aires',
        'state': 'Ciudad Autónoma de Buenos Aires', 'postcode': 'C1043',
        'country': 'Argentina',
    },
}


def test_map_to_address():
    assert map_to_address(PLACE) == {
        'place_id': 4242,
        'display_name': PLACE['display_name'],
        'street': 'Avenida Corrientes 1234',
        'city': 'Buenos Aires',
        'state': 'Ciudad Autónoma de Buenos Aires',
        'postal_code': 'C1043',
        'country': 'Argentina',
        'is_default': False,
    }


def test_map_to_address_town_and_default_country():
    record = map_to_address({'address': {'road': 'Ruta 40', 'town': 'Cafayate'}}, 'Argentina')
    assert record['street'] == 'Ruta 40'
    assert record['city'] == 'Cafayate'
    assert record['country'] == 'Argentina'


def test_short_query_is_not_sent(client, backend):
    resp = client.get('/address/search?q=av')
    assert resp.get_json() == {'suggestions': []}
    assert backend.requests == []


def test_search_params(client, backend):
    backend.places = [PLACE]
    resp = client.get('/address/search', query_string={'q': 'Corrientes 1234'})
    assert resp.status_code == 200
    assert resp.get_json()['suggestions'][0]['street'] == 'Avenida Corrientes 1234'

    request = backend.requests[-1]
    assert request.url.host == 'geocoder.test'
    params = request.url.params
    assert params['q'] == 'Corrientes 1234'
    assert params['format'] == 'json'
    assert params['addressdetails'] == '1'
    assert params['limit'] == '5'
    assert params['countrycodes'] == 'ar'
    assert request.headers['User-Agent'].startswith('roastery-storefront')


def test_geocoder_outage_never_blocks(client, backend):
    backend.fail = True
    resp = client.get('/address/search?q=Corrientes')
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['suggestions'] == []
    assert 'error' in data


def test_non_place_results_are_skipped(client, backend):
    backend.places = ['junk', 42, None, PLACE]
    resp = client.get('/address/search?q=Corrientes')
    assert resp.status_code == 200
    suggestions = resp.get_json()['suggestions']
    assert [s['place_id'] for s in suggestions] == [4242]
