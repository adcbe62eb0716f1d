"""
Data ingestion module for SkyWatch.

Handles requests to the Flightradar24 live API and the synthetic
fallback used when no API key is configured.
"""

from skywatch.ingestion.fr24_client import FlightRadarClient
from skywatch.ingestion.mock_data import generate_mock_flights, generate_mock_track

__all__ = ['FlightRadarClient', 'generate_mock_flights', 'generate_mock_track']
