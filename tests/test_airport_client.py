import itertools
import string
import threading

from skywatch.client.airports import AirportInfoClient
from skywatch.models.airport import AirportInfo


def _codes(count):
    letters = itertools.product(string.ascii_uppercase, repeat=3)
    return [''.join(combo) for combo in itertools.islice(letters, count)]


class CountingLookup:
    def __init__(self):
        self.calls = []

    def __call__(self, code):
        self.calls.append(code)
        return AirportInfo(iata=code, name='', city=code.title(), country='', lat=0.0, lon=0.0)


def test_lookup_is_cached():
    lookup = CountingLookup()
    client = AirportInfoClient(lookup, max_entries=100)

    assert client.fetch_airport_info('arn').iata == 'ARN'
    assert client.fetch_airport_info('ARN').iata == 'ARN'
    assert lookup.calls == ['ARN']


def test_101st_code_evicts_earliest_inserted():
    lookup = CountingLookup()
    client = AirportInfoClient(lookup, max_entries=100)
    codes = _codes(101)

    for code in codes[:100]:
        client.fetch_airport_info(code)
    # Reading the oldest entry must not protect it from eviction
    client.fetch_airport_info(codes[0])
    client.fetch_airport_info(codes[100])

    assert len(client) == 100
    assert codes[0] not in client.cached_codes()
    assert client.cached_codes()[0] == codes[1]

    client.fetch_airport_info(codes[0])
    assert lookup.calls.count(codes[0]) == 2


def test_placeholders_are_not_looked_up():
    lookup = CountingLookup()
    client = AirportInfoClient(lookup)

    assert client.fetch_airport_info('N/A') is None
    assert client.fetch_airport_info('') is None
    assert client.fetch_airport_info(None) is None
    assert lookup.calls == []


def test_failures_resolve_to_none_and_stay_cached():
    calls = []

    def failing(code):
        calls.append(code)
        raise RuntimeError('server unreachable')

    client = AirportInfoClient(failing)

    assert client.fetch_airport_info('ARN') is None
    assert client.fetch_airport_info('ARN') is None
    assert calls == ['ARN']


def test_concurrent_lookups_share_one_request():
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_lookup(code):
        calls.append(code)
        started.set()
        release.wait(5)
        return AirportInfo(iata=code, name='', city='Stockholm', country='', lat=0.0, lon=0.0)

    client = AirportInfoClient(slow_lookup)
    results = []

    threads = [threading.Thread(target=lambda: results.append(client.fetch_airport_info('ARN'))) for _ in range(3)]
    threads[0].start()
    assert started.wait(5)
    for thread in threads[1:]:
        thread.start()
    release.set()
    for thread in threads:
        thread.join(5)

    assert calls == ['ARN']
    assert [r.city for r in results] == ['Stockholm'] * 3
