import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
import requests

from skywatch.errors import InvalidAirportCode
from skywatch.models.airport import AirportInfo
from skywatch.services.airport_info import AirportResolver, AirportsApiProvider, ApiNinjasProvider
from skywatch.services.reference_data import (
    airline_code_from_flight_number,
    airline_name,
    aircraft_type_name,
    airport_city,
    lookup_local_airport,
)
from tests.fakes import FakeResponse, FakeSession


class FakeProvider:
    def __init__(self, name, result=None, error=None, gate=None):
        self.name = name
        self.result = result
        self.error = error
        self.gate = gate
        self.calls = []

    def lookup(self, code):
        self.calls.append(code)
        if self.gate is not None:
            self.gate.wait(5)
        if self.error:
            raise self.error
        return self.result


def _info(code, city='Somewhere'):
    return AirportInfo(iata=code, name=f'{city} Airport', city=city, country='SE', lat=1.0, lon=2.0)


@pytest.mark.parametrize('code', ['', 'AR', 'ARNX', 'A1N', None])
def test_rejects_malformed_codes(code):
    resolver = AirportResolver(providers=[])
    with pytest.raises(InvalidAirportCode):
        resolver.resolve(code)


def test_first_non_empty_provider_wins():
    empty = FakeProvider('empty')
    full = FakeProvider('full', result=_info('ARN', 'Stockholm'))
    resolver = AirportResolver(providers=[empty, full])

    info = resolver.resolve('arn')

    assert info.city == 'Stockholm'
    assert info.iata == 'ARN'


def test_failing_provider_is_skipped():
    broken = FakeProvider('broken', error=RuntimeError('boom'))
    full = FakeProvider('full', result=_info('ARN'))
    resolver = AirportResolver(providers=[broken, full])

    assert resolver.resolve('ARN').iata == 'ARN'


def test_fast_provider_does_not_wait_for_slow_one():
    gate = threading.Event()
    slow = FakeProvider('slow', result=_info('ARN', 'Slow'), gate=gate)
    fast = FakeProvider('fast', result=_info('ARN', 'Fast'))
    resolver = AirportResolver(providers=[slow, fast])

    try:
        assert resolver.resolve('ARN').city == 'Fast'
    finally:
        gate.set()


def test_falls_back_to_local_table():
    resolver = AirportResolver(providers=[FakeProvider('empty')])

    info = resolver.resolve('CPH')

    assert info.city == 'Copenhagen'
    assert info.lat == pytest.approx(55.6180)


def test_not_found_is_cached(clock):
    provider = FakeProvider('empty')
    resolver = AirportResolver(providers=[provider], clock=clock)

    assert resolver.resolve('ZZZ') is None
    assert resolver.resolve('zzz') is None

    assert provider.calls == ['ZZZ']
    assert resolver.stats['hits'] == 1


def test_entries_expire_after_ttl(clock):
    provider = FakeProvider('full', result=_info('ARN'))
    resolver = AirportResolver(providers=[provider], ttl_ms=1000, clock=clock)

    resolver.resolve('ARN')
    clock.advance(0.5)
    resolver.resolve('ARN')
    clock.advance(1.0)
    resolver.resolve('ARN')

    assert provider.calls == ['ARN', 'ARN']


def test_cache_is_bounded():
    resolver = AirportResolver(providers=[], max_entries=2)

    for code in ('ARN', 'CPH', 'OSL'):
        resolver.resolve(code)

    assert resolver.stats['cache_size'] == 2


def test_stats_stay_consistent_under_concurrent_lookups():
    resolver = AirportResolver(providers=[])
    resolver.resolve('ARN')

    def lookups():
        for _ in range(50):
            resolver.resolve('ARN')

    threads = [threading.Thread(target=lookups) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(5)

    assert resolver.stats['hits'] == 400
    assert resolver.stats['misses'] == 1


def test_close_shuts_down_own_pool():
    resolver = AirportResolver(providers=[FakeProvider('empty')])
    resolver.close()

    with pytest.raises(RuntimeError):
        resolver.resolve('ARN')


def test_close_leaves_injected_pool_running():
    pool = ThreadPoolExecutor(max_workers=1)
    try:
        AirportResolver(providers=[], executor=pool).close()
        assert pool.submit(lambda: 42).result(5) == 42
    finally:
        pool.shutdown()


def test_airportsapi_provider_parses_response():
    session = FakeSession(FakeResponse(200, {
        'name': 'Stockholm Arlanda Airport',
        'municipality': 'Stockholm',
        'country_code': 'SE',
        'latitude': '59.6519',
        'longitude': '17.9186',
    }))
    provider = AirportsApiProvider(base_url='https://airports.test/api/airports', session=session)

    info = provider.lookup('ARN')

    assert session.calls[0]['url'] == 'https://airports.test/api/airports/ARN'
    assert info.city == 'Stockholm'
    assert info.country == 'SE'
    assert info.lat == pytest.approx(59.6519)


def test_airportsapi_provider_returns_none_on_errors():
    assert AirportsApiProvider(session=FakeSession(FakeResponse(404, {}))).lookup('ZZZ') is None
    assert AirportsApiProvider(session=FakeSession(requests.ConnectionError('down'))).lookup('ARN') is None
    assert AirportsApiProvider(session=FakeSession(FakeResponse(200))).lookup('ARN') is None


def test_api_ninjas_provider_sends_key():
    session = FakeSession(FakeResponse(200, [{
        'name': 'Copenhagen Kastrup Airport',
        'city': 'Copenhagen',
        'country': 'DK',
        'latitude': '55.6180',
        'longitude': '12.6508',
    }]))
    provider = ApiNinjasProvider('secret', session=session)

    info = provider.lookup('CPH')

    assert session.calls[0]['headers']['X-Api-Key'] == 'secret'
    assert session.calls[0]['params'] == {'iata': 'CPH'}
    assert info.country == 'DK'


def test_api_ninjas_empty_list_is_none():
    assert ApiNinjasProvider('secret', session=FakeSession(FakeResponse(200, []))).lookup('ZZZ') is None


def test_reference_lookups():
    assert lookup_local_airport('arn').city == 'Stockholm'
    assert lookup_local_airport('N/A') is None
    assert airport_city('CPH') == 'Copenhagen'
    assert airline_code_from_flight_number('SK1420') == 'SK'
    assert airline_code_from_flight_number('1420') is None
    assert airline_name('SK') == 'SAS'
    assert airline_name('ZZ') == 'ZZ'
    assert aircraft_type_name('a20n') == 'Airbus A320neo'
    assert aircraft_type_name(None) is None
