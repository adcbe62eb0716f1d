"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights?bounds=north,south,west,east - Live positions in a box
- GET /api/flights/<flight_id>/track - Position history for a flight

Both are thin pass-throughs to the upstream API: payloads are returned
unchanged and normalization is left to the consumer. Without an API key
the endpoints either serve synthetic data (mock mode) or answer 503.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from skywatch.errors import InvalidBounds, UpstreamUnavailable
from skywatch.ingestion.mock_data import generate_mock_flights, generate_mock_track
from skywatch.models.bounds import BoundingBox

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _services() -> dict:
    return current_app.extensions['skywatch']


def _upstream_error_response(e: UpstreamUnavailable):
    status = e.status_code if e.status_code and e.status_code >= 400 else 502
    return jsonify({'error': str(e)}), status


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    Proxy a bounding-box query to the flight-positions API.

    Query parameters:
    - bounds: 'north,south,west,east' (required)
    """
    bounds = request.args.get('bounds', '')

    try:
        BoundingBox.parse(bounds)
    except InvalidBounds as e:
        return jsonify({'error': str(e)}), 400

    services = _services()
    client = services['flight_client']

    if not client.is_configured:
        if services['use_mock_data']:
            return jsonify(generate_mock_flights(bounds))
        logger.error('FR24 API key not configured')
        return jsonify({'error': 'Service temporarily unavailable'}), 503

    try:
        payload = client.get_flight_positions(bounds)
    except UpstreamUnavailable as e:
        return _upstream_error_response(e)

    response = jsonify(payload)
    response.headers['Cache-Control'] = 's-maxage=5, stale-while-revalidate'
    return response


@flights_bp.route('/<flight_id>/track', methods=['GET'])
def get_flight_track(flight_id: str):
    """Position history (trail) for one flight."""
    services = _services()
    client = services['flight_client']

    if not client.is_configured:
        if services['use_mock_data']:
            return jsonify(generate_mock_track(flight_id))
        return jsonify({'error': 'Service temporarily unavailable'}), 503

    try:
        payload = client.get_flight_track(flight_id)
    except UpstreamUnavailable as e:
        return _upstream_error_response(e)

    return jsonify(payload)
