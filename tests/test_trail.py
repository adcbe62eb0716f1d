import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from skywatch.client.trail import CancellationToken, TrailPoint, TrailTracker, parse_track_payload
from skywatch.errors import UpstreamUnavailable


def _track(flight_id, *points):
    return [{'fr24_id': flight_id, 'tracks': [{'lat': lat, 'lon': lon, 'alt': 1000} for lat, lon in points]}]


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=False)


def test_parse_track_payload_shapes():
    assert parse_track_payload(_track('a', (1, 2))) == [TrailPoint(lat=1.0, lon=2.0, altitude_feet=1000.0)]
    assert len(parse_track_payload({'tracks': [{'lat': 1, 'lon': 2}]})) == 1
    assert len(parse_track_payload([{'lat': 1, 'lon': 2}, {'lat': 'x'}, 'junk'])) == 1
    assert parse_track_payload([{'lat': 'inf', 'lon': 2}, {'lat': 1, 'lon': float('nan')}]) == []
    assert parse_track_payload(None) == []


def test_cancellation_token():
    token = CancellationToken('abc')
    assert not token.cancelled
    token.cancel()
    assert token.cancelled


def test_follow_loads_trail(executor):
    tracker = TrailTracker(lambda flight_id: _track(flight_id, (59.6, 17.9), (59.5, 17.8)), executor=executor)

    assert tracker.follow('abc').result(5) is True
    assert tracker.flight_id == 'abc'
    assert len(tracker.points) == 2
    assert tracker.error is None


def test_late_result_for_previous_selection_is_dropped(executor):
    release = threading.Event()

    def fetch(flight_id):
        if flight_id == 'first':
            release.wait(5)
            return _track('first', (1, 1), (2, 2), (3, 3))
        return _track('second', (10, 10))

    tracker = TrailTracker(fetch, executor=executor)
    first = tracker.follow('first')
    second = tracker.follow('second')

    assert second.result(5) is True
    release.set()
    assert first.result(5) is False

    assert tracker.flight_id == 'second'
    assert tracker.points == [TrailPoint(lat=10.0, lon=10.0, altitude_feet=1000.0)]


def test_clear_drops_pending_load(executor):
    release = threading.Event()

    def fetch(flight_id):
        release.wait(5)
        return _track(flight_id, (1, 1))

    tracker = TrailTracker(fetch, executor=executor)
    pending = tracker.follow('abc')
    tracker.clear()
    release.set()

    assert pending.result(5) is False
    assert tracker.points == []
    assert tracker.flight_id is None


def test_upstream_failure_is_recorded(executor):
    def fetch(flight_id):
        raise UpstreamUnavailable('API Error: 500')

    tracker = TrailTracker(fetch, executor=executor)

    assert tracker.follow('abc').result(5) is True
    assert tracker.points == []
    assert tracker.error == 'Failed to load trail: API Error: 500'


def test_close_shuts_down_own_pool():
    tracker = TrailTracker(lambda flight_id: _track(flight_id, (1, 1)))
    assert tracker.follow('abc').result(5) is True

    tracker.close()

    assert tracker.flight_id is None
    with pytest.raises(RuntimeError):
        tracker.follow('def')


def test_close_leaves_injected_pool_running(executor):
    tracker = TrailTracker(lambda flight_id: [], executor=executor)

    tracker.close()

    assert executor.submit(lambda: 42).result(5) == 42
