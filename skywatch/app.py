"""
SkyWatch Flask Application.

Main entry point for the web application. Initializes:
- Upstream flight-positions client (or mock mode)
- Airport resolver with its shared cache
- Reverse geocoder
- API routes

Usage:
    python -m skywatch.app

Or with gunicorn:
    gunicorn 'skywatch.app:create_app()'
"""

import atexit
import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from skywatch.api import airports_bp, flights_bp, location_bp
from skywatch.config import config
from skywatch.ingestion import FlightRadarClient
from skywatch.services import AirportResolver, ReverseGeocoder

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    flight_client: Optional[FlightRadarClient] = None,
    airport_resolver: Optional[AirportResolver] = None,
    geocoder: Optional[ReverseGeocoder] = None,
    use_mock_data: Optional[bool] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        flight_client: Upstream flight-positions client (from config if None)
        airport_resolver: Airport resolver owning the process-wide airport cache
        geocoder: Reverse geocoder for place names
        use_mock_data: Serve synthetic flights when no API key is configured

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    flight_client = flight_client or FlightRadarClient.from_config()
    if use_mock_data is None:
        use_mock_data = config.flightradar.use_mock_data

    if airport_resolver is None:
        airport_resolver = AirportResolver()
        atexit.register(airport_resolver.close)

    app.extensions['skywatch'] = {
        'flight_client': flight_client,
        'airport_resolver': airport_resolver,
        'geocoder': geocoder or ReverseGeocoder(),
        'use_mock_data': use_mock_data,
    }

    if not flight_client.is_configured:
        if use_mock_data:
            logger.info('No FR24 API key configured - serving MOCK flight data')
        else:
            logger.warning('No FR24 API key configured. Set FR24_API_KEY or FLIGHTS_MOCK_MODE=true in .env')

    app.register_blueprint(flights_bp)
    app.register_blueprint(airports_bp)
    app.register_blueprint(location_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {
            'status': 'ok',
            'upstream_configured': flight_client.is_configured,
            'mock_data': use_mock_data,
            'airport_cache': app.extensions['skywatch']['airport_resolver'].stats,
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    # Get port from environment or default
    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting SkyWatch on http://localhost:{port}')
    logger.info(f'Flights: http://localhost:{port}/api/flights?bounds=60.15,59.15,17.42,18.42')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
