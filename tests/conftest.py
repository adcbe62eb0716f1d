import pytest

from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sk100_payload():
    return {
        'data': [
            {
                'callsign': 'SK100',
                'orig_iata': 'ARN',
                'dest_iata': 'CPH',
                'lat': 59.5,
                'lon': 17.9,
            }
        ]
    }
