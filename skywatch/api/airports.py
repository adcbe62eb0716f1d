"""
Airport lookup API endpoint.

- GET /api/airport/<iata> - Airport name, city, country and coordinates
"""

import logging

from flask import Blueprint, current_app, jsonify

from skywatch.errors import InvalidAirportCode
from skywatch.services.reference_data import lookup_local_airport

logger = logging.getLogger(__name__)

airports_bp = Blueprint('airports', __name__, url_prefix='/api/airport')


@airports_bp.route('/<iata_code>', methods=['GET'])
def get_airport(iata_code: str):
    """
    Resolve an IATA code.

    400 for malformed codes, 404 when no source knows the airport.
    """
    resolver = current_app.extensions['skywatch']['airport_resolver']

    try:
        info = resolver.resolve(iata_code)
    except InvalidAirportCode as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f'Error fetching airport {iata_code}: {e}')
        # On error, try local database as last resort
        local = lookup_local_airport(iata_code)
        if local:
            return jsonify(local.to_dict())
        return jsonify({'error': 'Failed to fetch airport information'}), 500

    if info is None:
        return jsonify({'error': 'Airport not found'}), 404

    return jsonify(info.to_dict())
