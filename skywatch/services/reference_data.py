"""
Static reference tables for display enrichment.

Read-only lookups used when the live feed or airport services don't
supply a value:
1. Airport coordinates (fallback tier of the airport resolver)
2. Airport city names
3. Airline names by IATA code
4. Aircraft type names by ICAO type designator

Usage:
    from skywatch.services.reference_data import airline_name

    airline_name('SK')  # 'SAS'
"""

import re
from typing import Dict, Optional, Tuple

from skywatch.models.airport import AirportInfo
from skywatch.models.flight import is_placeholder, normalize_identifier_field


# IATA -> (lat, lon, name, city)
AIRPORT_COORDINATES: Dict[str, Tuple[float, float, str, str]] = {
    # United States
    'ATL': (33.6407, -84.4277, 'Hartsfield-Jackson Atlanta International Airport', 'Atlanta'),
    'LAX': (33.9416, -118.4085, 'Los Angeles International Airport', 'Los Angeles'),
    'ORD': (41.9742, -87.9073, "O'Hare International Airport", 'Chicago'),
    'DFW': (32.8998, -97.0403, 'Dallas/Fort Worth International Airport', 'Dallas'),
    'DEN': (39.8561, -104.6737, 'Denver International Airport', 'Denver'),
    'JFK': (40.6413, -73.7781, 'John F. Kennedy International Airport', 'New York'),
    'SFO': (37.6213, -122.3790, 'San Francisco International Airport', 'San Francisco'),
    'LAS': (36.0840, -115.1537, 'Harry Reid International Airport', 'Las Vegas'),
    'SEA': (47.4502, -122.3088, 'Seattle-Tacoma International Airport', 'Seattle'),
    'MCO': (28.4312, -81.3081, 'Orlando International Airport', 'Orlando'),
    'MIA': (25.7959, -80.2870, 'Miami International Airport', 'Miami'),
    'BOS': (42.3656, -71.0096, 'Boston Logan International Airport', 'Boston'),
    'EWR': (40.6895, -74.1745, 'Newark Liberty International Airport', 'Newark'),
    'LGA': (40.7769, -73.8740, 'LaGuardia Airport', 'New York'),

    # Europe
    'LHR': (51.4700, -0.4543, 'London Heathrow Airport', 'London'),
    'LGW': (51.1537, -0.1821, 'London Gatwick Airport', 'London'),
    'CDG': (49.0097, 2.5479, 'Charles de Gaulle Airport', 'Paris'),
    'AMS': (52.3105, 4.7683, 'Amsterdam Airport Schiphol', 'Amsterdam'),
    'FRA': (50.0379, 8.5622, 'Frankfurt Airport', 'Frankfurt'),
    'MUC': (48.3538, 11.7861, 'Munich Airport', 'Munich'),
    'IST': (41.2753, 28.7519, 'Istanbul Airport', 'Istanbul'),
    'MAD': (40.4983, -3.5676, 'Madrid-Barajas Airport', 'Madrid'),
    'BCN': (41.2974, 2.0833, 'Barcelona-El Prat Airport', 'Barcelona'),
    'FCO': (41.8003, 12.2389, 'Leonardo da Vinci-Fiumicino Airport', 'Rome'),
    'ARN': (59.6519, 17.9186, 'Stockholm Arlanda Airport', 'Stockholm'),
    'BMA': (59.3544, 17.9417, 'Stockholm Bromma Airport', 'Stockholm'),
    'GOT': (57.6628, 12.2798, 'Gothenburg Landvetter Airport', 'Gothenburg'),
    'CPH': (55.6180, 12.6508, 'Copenhagen Airport', 'Copenhagen'),
    'OSL': (60.1939, 11.1004, 'Oslo Airport', 'Oslo'),
    'HEL': (60.3172, 24.9633, 'Helsinki-Vantaa Airport', 'Helsinki'),
    'ZRH': (47.4647, 8.5492, 'Zurich Airport', 'Zurich'),
    'VIE': (48.1100, 16.5697, 'Vienna International Airport', 'Vienna'),
    'BRU': (50.9010, 4.4844, 'Brussels Airport', 'Brussels'),
    'DUB': (53.4213, -6.2701, 'Dublin Airport', 'Dublin'),
    'LIS': (38.7742, -9.1342, 'Lisbon Portela Airport', 'Lisbon'),
    'ATH': (37.9364, 23.9445, 'Athens International Airport', 'Athens'),
    'MAN': (53.3537, -2.2750, 'Manchester Airport', 'Manchester'),
    'EDI': (55.9500, -3.3725, 'Edinburgh Airport', 'Edinburgh'),
    'WAW': (52.1657, 20.9671, 'Warsaw Chopin Airport', 'Warsaw'),
    'PRG': (50.1008, 14.2632, 'Vaclav Havel Airport Prague', 'Prague'),
    'BUD': (47.4298, 19.2611, 'Budapest Ferenc Liszt International Airport', 'Budapest'),

    # Middle East & Asia
    'DXB': (25.2532, 55.3657, 'Dubai International Airport', 'Dubai'),
    'DOH': (25.2731, 51.6080, 'Hamad International Airport', 'Doha'),
    'AUH': (24.4330, 54.6511, 'Abu Dhabi International Airport', 'Abu Dhabi'),
    'TLV': (32.0114, 34.8867, 'Ben Gurion Airport', 'Tel Aviv'),
    'HND': (35.5494, 139.7798, 'Tokyo Haneda Airport', 'Tokyo'),
    'NRT': (35.7720, 140.3929, 'Tokyo Narita International Airport', 'Tokyo'),
    'PEK': (40.0799, 116.6031, 'Beijing Capital International Airport', 'Beijing'),
    'HKG': (22.3080, 113.9185, 'Hong Kong International Airport', 'Hong Kong'),
    'SIN': (1.3644, 103.9915, 'Singapore Changi Airport', 'Singapore'),
    'ICN': (37.4602, 126.4407, 'Incheon International Airport', 'Seoul'),
    'BKK': (13.6900, 100.7501, 'Suvarnabhumi Airport', 'Bangkok'),
    'DEL': (28.5562, 77.1000, 'Indira Gandhi International Airport', 'New Delhi'),

    # Canada
    'YYZ': (43.6777, -79.6248, 'Toronto Pearson International Airport', 'Toronto'),
    'YVR': (49.1967, -123.1815, 'Vancouver International Airport', 'Vancouver'),
    'YUL': (45.4657, -73.7456, 'Montreal-Pierre Elliott Trudeau International Airport', 'Montreal'),

    # Southern hemisphere
    'SYD': (-33.9399, 151.1753, 'Sydney Kingsford Smith Airport', 'Sydney'),
    'MEL': (-37.6690, 144.8410, 'Melbourne Airport', 'Melbourne'),
    'AKL': (-37.0082, 174.7850, 'Auckland Airport', 'Auckland'),
    'GRU': (-23.4356, -46.4731, 'Sao Paulo-Guarulhos International Airport', 'Sao Paulo'),
    'EZE': (-34.8222, -58.5358, 'Ministro Pistarini International Airport', 'Buenos Aires'),
    'JNB': (-26.1367, 28.2411, 'O. R. Tambo International Airport', 'Johannesburg'),
    'CPT': (-33.9715, 18.6021, 'Cape Town International Airport', 'Cape Town'),
}


# Airports without coordinates in the table above, city names only
AIRPORT_CITIES: Dict[str, str] = {
    'MMX': 'Malmo',
    'VBY': 'Visby',
    'LLA': 'Lulea',
    'UME': 'Umea',
    'ORB': 'Orebro',
    'NYO': 'Stockholm',
    'VST': 'Vasteras',
    'LPI': 'Linkoping',
    'KSD': 'Karlstad',
    'BGO': 'Bergen',
    'TRD': 'Trondheim',
    'AAL': 'Aalborg',
    'BLL': 'Billund',
    'TLL': 'Tallinn',
    'RIX': 'Riga',
    'VNO': 'Vilnius',
    'STN': 'London',
    'LTN': 'London',
    'ORY': 'Paris',
    'DUS': 'Dusseldorf',
    'HAM': 'Hamburg',
    'TXL': 'Berlin',
    'BER': 'Berlin',
    'NCE': 'Nice',
    'AGP': 'Malaga',
    'PMI': 'Palma de Mallorca',
    'LCA': 'Larnaca',
}


# IATA airline code -> display name
AIRLINE_NAMES: Dict[str, str] = {
    'SK': 'SAS',
    'AY': 'Finnair',
    'DY': 'Norwegian',
    'D8': 'Norwegian',
    'FR': 'Ryanair',
    'BA': 'British Airways',
    'LH': 'Lufthansa',
    'AF': 'Air France',
    'KL': 'KLM',
    'IB': 'Iberia',
    'AZ': 'ITA Airways',
    'LX': 'SWISS',
    'OS': 'Austrian',
    'SN': 'Brussels Airlines',
    'EI': 'Aer Lingus',
    'TP': 'TAP Portugal',
    'TK': 'Turkish Airlines',
    'EK': 'Emirates',
    'QR': 'Qatar Airways',
    'EY': 'Etihad',
    'AA': 'American Airlines',
    'UA': 'United Airlines',
    'DL': 'Delta Air Lines',
    'WN': 'Southwest',
    'AS': 'Alaska Airlines',
    'AC': 'Air Canada',
    'QF': 'Qantas',
    'NZ': 'Air New Zealand',
    'SQ': 'Singapore Airlines',
    'CX': 'Cathay Pacific',
    'JL': 'Japan Airlines',
    'NH': 'ANA',
    'KE': 'Korean Air',
    'CA': 'Air China',
    'W6': 'Wizz Air',
    'U2': 'easyJet',
    'VY': 'Vueling',
}


# ICAO aircraft type designator -> display name
AIRCRAFT_TYPES: Dict[str, str] = {
    'A20N': 'Airbus A320neo',
    'A21N': 'Airbus A321neo',
    'A319': 'Airbus A319',
    'A320': 'Airbus A320',
    'A321': 'Airbus A321',
    'A332': 'Airbus A330-200',
    'A333': 'Airbus A330-300',
    'A339': 'Airbus A330-900neo',
    'A359': 'Airbus A350-900',
    'A35K': 'Airbus A350-1000',
    'A388': 'Airbus A380-800',
    'B737': 'Boeing 737',
    'B738': 'Boeing 737-800',
    'B739': 'Boeing 737-900',
    'B38M': 'Boeing 737 MAX 8',
    'B39M': 'Boeing 737 MAX 9',
    'B744': 'Boeing 747-400',
    'B748': 'Boeing 747-8',
    'B752': 'Boeing 757-200',
    'B763': 'Boeing 767-300',
    'B772': 'Boeing 777-200',
    'B773': 'Boeing 777-300',
    'B77W': 'Boeing 777-300ER',
    'B788': 'Boeing 787-8',
    'B789': 'Boeing 787-9',
    'B78X': 'Boeing 787-10',
    'BCS1': 'Airbus A220-100',
    'BCS3': 'Airbus A220-300',
    'CRJ7': 'Bombardier CRJ-700',
    'CRJ9': 'Bombardier CRJ-900',
    'E170': 'Embraer E170',
    'E175': 'Embraer E175',
    'E190': 'Embraer E190',
    'E195': 'Embraer E195',
    'E290': 'Embraer E190-E2',
    'E295': 'Embraer E195-E2',
    'DH8D': 'Dash 8-400',
    'AT72': 'ATR 72-200',
    'AT76': 'ATR 72-600',
}

_FLIGHT_NUMBER_PREFIX = re.compile(r'^([A-Z]{2,3})\d+')


def lookup_local_airport(code: Optional[str]) -> Optional[AirportInfo]:
    """Airport from the bundled coordinate table, or None."""
    if is_placeholder(code):
        return None
    code = normalize_identifier_field(code)

    entry = AIRPORT_COORDINATES.get(code)
    if entry is None:
        return None

    lat, lon, name, city = entry
    # The bundled table carries no country
    return AirportInfo(iata=code, name=name, city=city, country='', lat=lat, lon=lon)


def airport_city(code: Optional[str]) -> Optional[str]:
    """City name for an airport code from the static tables."""
    if is_placeholder(code):
        return None
    code = normalize_identifier_field(code)

    entry = AIRPORT_COORDINATES.get(code)
    if entry:
        return entry[3]
    return AIRPORT_CITIES.get(code)


def airline_code_from_flight_number(flight_number: Optional[str]) -> Optional[str]:
    """Extract the airline prefix, e.g. 'SK1420' -> 'SK'."""
    match = _FLIGHT_NUMBER_PREFIX.match(normalize_identifier_field(flight_number))
    return match.group(1) if match else None


def airline_name(code: Optional[str]) -> Optional[str]:
    """Airline display name, falling back to the code itself."""
    if not code:
        return None
    code = code.upper()
    return AIRLINE_NAMES.get(code, code)


def aircraft_type_name(code: Optional[str]) -> Optional[str]:
    """Full aircraft name from type code, falling back to the code itself."""
    if not code:
        return None
    code = code.upper()
    return AIRCRAFT_TYPES.get(code, code)
