import pytest
import requests

from skywatch.client.proxy import ProxyClient
from skywatch.errors import UpstreamUnavailable
from tests.fakes import FakeResponse, FakeSession


def _proxy(responses):
    session = FakeSession(responses)
    return ProxyClient(base_url='http://skywatch.test/', timeout=2, session=session), session


def test_flights_payload(sk100_payload):
    proxy, session = _proxy(FakeResponse(200, sk100_payload))

    assert proxy.get_flights_payload('60,59,17,18') == sk100_payload
    assert session.calls[0]['url'] == 'http://skywatch.test/api/flights'
    assert session.calls[0]['params'] == {'bounds': '60,59,17,18'}


def test_flights_error_uses_server_message():
    proxy, _ = _proxy(FakeResponse(503, {'error': 'Service temporarily unavailable'}))

    with pytest.raises(UpstreamUnavailable, match='Service temporarily unavailable') as excinfo:
        proxy.get_flights_payload('60,59,17,18')

    assert excinfo.value.status_code == 503


def test_flights_error_without_body():
    proxy, _ = _proxy(FakeResponse(500, text='oops'))

    with pytest.raises(UpstreamUnavailable, match='API Error: 500'):
        proxy.get_flights_payload('60,59,17,18')


def test_unreachable_server():
    proxy, _ = _proxy(requests.ConnectionError('refused'))

    with pytest.raises(UpstreamUnavailable, match='Could not reach'):
        proxy.get_flights_payload('60,59,17,18')


def test_get_airport():
    proxy, session = _proxy(FakeResponse(200, {
        'iata': 'ARN', 'name': 'Stockholm Arlanda Airport', 'city': 'Stockholm',
        'country': 'SE', 'lat': 59.6519, 'lon': 17.9186,
    }))

    info = proxy.get_airport('ARN')

    assert session.calls[0]['url'] == 'http://skywatch.test/api/airport/ARN'
    assert info.city == 'Stockholm'


@pytest.mark.parametrize('status', [400, 404])
def test_unknown_airport_is_none(status):
    proxy, _ = _proxy(FakeResponse(status, {'error': 'Airport not found'}))

    assert proxy.get_airport('ZZZ') is None


def test_location_name():
    proxy, session = _proxy(FakeResponse(200, {'location': {}, 'name': 'Sigtuna'}))

    assert proxy.get_location_name(59.65, 17.92) == 'Sigtuna'
    assert session.calls[0]['params'] == {'lat': 59.65, 'lon': 17.92}
