"""
Terminal flight tracker.

Polls a SkyWatch server for flights around the user's location and prints
one line per flight with its route progress.

Usage:
    python -m skywatch.client
    python -m skywatch.client --lat 59.65 --lon 17.92 --once
"""

import argparse
import logging
import time

from skywatch.client.proxy import ProxyClient
from skywatch.client.session import FlightView, TrackerSession
from skywatch.config import config

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def format_view(view: FlightView) -> str:
    flight = view.flight
    progress = f'{view.progress_percent:3d}%' + ('*' if view.progress_estimated else ' ')
    altitude = f'{view.altitude_m} m' if view.altitude_m is not None else '-'
    speed = f'{view.ground_speed_kmh} km/h' if view.ground_speed_kmh is not None else '-'
    return (
        f'{flight.identifier:<9} {view.origin_city} -> {view.dest_city:<20} '
        f'{progress} {altitude:>8} {speed:>10}  {view.airline_name or ""}'
    )


def render(session: TrackerSession) -> None:
    print(f'\n{session.location_name} ({session.location[0]:.4f}, {session.location[1]:.4f})')
    status = session.status_message()
    if status:
        print(status)
    for view in session.describe_all():
        print(format_view(view))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Show live flights near a location')
    parser.add_argument('--server', default=config.client.server_url, help='SkyWatch server URL')
    parser.add_argument('--lat', type=float, help='Latitude (detected when omitted)')
    parser.add_argument('--lon', type=float, help='Longitude (detected when omitted)')
    parser.add_argument('--interval', type=float, default=config.client.poll_interval_seconds,
                        help='Seconds between refreshes')
    parser.add_argument('--once', action='store_true', help='Print one snapshot and exit')
    args = parser.parse_args(argv)

    session = TrackerSession(proxy=ProxyClient(base_url=args.server))
    try:
        session.update_location(args.lat, args.lon)
        render(session)

        if args.once:
            return 0

        logger.info(f'Polling every {args.interval}s (Ctrl+C to stop)')
        while True:
            time.sleep(args.interval)
            session.refresh()
            render(session)
    except KeyboardInterrupt:
        logger.info('Tracker stopped')
    finally:
        session.close()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
