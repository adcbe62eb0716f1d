from skywatch.client.trail import parse_track_payload
from skywatch.ingestion.mock_data import generate_mock_flights, generate_mock_track
from skywatch.models import BoundingBox, build_flight_records


def test_mock_flights_are_valid_and_inside_bounds():
    payload = generate_mock_flights('60,59,17,18')
    box = BoundingBox.parse('60,59,17,18')

    flights = build_flight_records(payload)

    assert len(flights) == 12
    assert all(box.contains(f.position.lat, f.position.lon) for f in flights)
    assert all(f.origin_code != f.dest_code for f in flights)


def test_mock_flights_are_deterministic_per_bounds():
    first = generate_mock_flights('60,59,17,18')['data']
    second = generate_mock_flights('60,59,17,18')['data']
    other = generate_mock_flights('56,55,12,13')['data']

    assert [f['callsign'] for f in first] == [f['callsign'] for f in second]
    assert [f['callsign'] for f in first] != [f['callsign'] for f in other]


def test_mock_track_parses():
    points = parse_track_payload(generate_mock_track('mock0001', points=5))

    assert len(points) == 5
