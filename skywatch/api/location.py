"""
Location API endpoints.

Provides endpoints for:
- GET /api/location/reverse?lat=&lon= - Place name for coordinates
- POST /api/location/auto - Approximate location from the server's IP
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from skywatch.analytics.geodesy import is_valid_coordinate
from skywatch.services.geocoding import detect_location

logger = logging.getLogger(__name__)

location_bp = Blueprint('location', __name__, url_prefix='/api/location')


@location_bp.route('/reverse', methods=['GET'])
def reverse_geocode():
    """Human-readable place name for a coordinate."""
    try:
        lat = float(request.args.get('lat', ''))
        lon = float(request.args.get('lon', ''))
    except ValueError:
        return jsonify({'error': 'lat and lon query parameters required'}), 400

    if not is_valid_coordinate(lat, lon):
        return jsonify({'error': 'Latitude must be between -90 and 90, longitude between -180 and 180'}), 400

    geocoder = current_app.extensions['skywatch']['geocoder']
    name = geocoder.location_name(lat, lon)

    return jsonify({
        'location': {'latitude': lat, 'longitude': lon},
        'name': name,
    })


@location_bp.route('/auto', methods=['POST'])
def auto_detect_location():
    """
    Auto-detect location using IP geolocation.

    Uses the geocoder library to determine approximate location
    based on the server's public IP address.
    """
    location = detect_location()

    if location is None:
        return jsonify({
            'success': False,
            'error': 'Could not determine location from IP',
        }), 503

    lat, lon = location
    return jsonify({
        'success': True,
        'location': {'latitude': lat, 'longitude': lon},
        'message': 'Location auto-detected from IP',
    })
