import pytest

from skywatch.api import location as location_module
from skywatch.app import create_app
from skywatch.errors import UpstreamUnavailable
from skywatch.services.airport_info import AirportResolver


class FakeFlightClient:
    def __init__(self, configured=True, payload=None, error=None):
        self.is_configured = configured
        self.payload = payload if payload is not None else {'data': []}
        self.error = error
        self.requests = []

    def get_flight_positions(self, bounds):
        self.requests.append(bounds)
        if self.error:
            raise self.error
        return self.payload

    def get_flight_track(self, flight_id):
        self.requests.append(flight_id)
        if self.error:
            raise self.error
        return [{'fr24_id': flight_id, 'tracks': []}]


class FakeGeocoder:
    def location_name(self, lat, lon):
        return 'Sigtuna'


def _client(flight_client=None, use_mock_data=False):
    app = create_app(
        flight_client=flight_client or FakeFlightClient(),
        airport_resolver=AirportResolver(providers=[]),
        geocoder=FakeGeocoder(),
        use_mock_data=use_mock_data,
    )
    app.testing = True
    return app.test_client()


@pytest.mark.parametrize('query', ['', '?bounds=', '?bounds=60,59,17', '?bounds=a,b,c,d'])
def test_flights_requires_valid_bounds(query):
    response = _client().get(f'/api/flights{query}')

    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_flights_passes_payload_through(sk100_payload):
    upstream = FakeFlightClient(payload=sk100_payload)

    response = _client(upstream).get('/api/flights?bounds=60,59,17,18')

    assert response.status_code == 200
    assert response.get_json() == sk100_payload
    assert upstream.requests == ['60,59,17,18']
    assert 's-maxage=5' in response.headers['Cache-Control']


def test_flights_forwards_upstream_status():
    upstream = FakeFlightClient(error=UpstreamUnavailable('Upstream API Error: 429', status_code=429))

    response = _client(upstream).get('/api/flights?bounds=60,59,17,18')

    assert response.status_code == 429
    assert response.get_json() == {'error': 'Upstream API Error: 429'}


def test_flights_network_failure_is_bad_gateway():
    upstream = FakeFlightClient(error=UpstreamUnavailable('Upstream API timeout'))

    response = _client(upstream).get('/api/flights?bounds=60,59,17,18')

    assert response.status_code == 502


def test_flights_without_api_key_is_unavailable():
    response = _client(FakeFlightClient(configured=False)).get('/api/flights?bounds=60,59,17,18')

    assert response.status_code == 503
    assert response.get_json() == {'error': 'Service temporarily unavailable'}


def test_flights_mock_mode_serves_synthetic_data():
    client = _client(FakeFlightClient(configured=False), use_mock_data=True)

    response = client.get('/api/flights?bounds=60,59,17,18')

    assert response.status_code == 200
    assert len(response.get_json()['data']) == 12


def test_flight_track():
    upstream = FakeFlightClient()

    response = _client(upstream).get('/api/flights/3a1b2c/track')

    assert response.status_code == 200
    assert response.get_json()[0]['fr24_id'] == '3a1b2c'
    assert upstream.requests == ['3a1b2c']


def test_airport_lookup():
    client = _client()

    response = client.get('/api/airport/arn')

    assert response.status_code == 200
    body = response.get_json()
    assert body['iata'] == 'ARN'
    assert body['city'] == 'Stockholm'
    assert set(body) == {'iata', 'name', 'city', 'country', 'lat', 'lon'}


def test_airport_lookup_errors():
    client = _client()

    assert client.get('/api/airport/AR').status_code == 400
    assert client.get('/api/airport/A1B').status_code == 400

    response = client.get('/api/airport/ZZZ')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Airport not found'}


def test_reverse_geocode():
    response = _client().get('/api/location/reverse?lat=59.65&lon=17.92')

    assert response.status_code == 200
    assert response.get_json() == {
        'location': {'latitude': 59.65, 'longitude': 17.92},
        'name': 'Sigtuna',
    }


@pytest.mark.parametrize('query', ['', '?lat=abc&lon=1', '?lat=95&lon=1', '?lat=1&lon=200'])
def test_reverse_geocode_validates_coordinates(query):
    assert _client().get(f'/api/location/reverse{query}').status_code == 400


def test_auto_location(monkeypatch):
    monkeypatch.setattr(location_module, 'detect_location', lambda: (59.65, 17.92))

    response = _client().post('/api/location/auto')

    assert response.status_code == 200
    assert response.get_json()['location'] == {'latitude': 59.65, 'longitude': 17.92}


def test_auto_location_failure(monkeypatch):
    monkeypatch.setattr(location_module, 'detect_location', lambda: None)

    response = _client().post('/api/location/auto')

    assert response.status_code == 503
    assert response.get_json()['success'] is False


def test_health_and_not_found():
    client = _client()

    health = client.get('/health').get_json()
    assert health['status'] == 'ok'
    assert health['upstream_configured'] is True

    response = client.get('/api/nope')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}
