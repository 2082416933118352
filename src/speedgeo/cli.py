"""
Command line front end for the speedgeo geometry package.

usage:
    speedgeo encode 52.3765 4.908            # u173zwvghxq0
    speedgeo encode 52.3765 4.908 --bits 15  # u173zw
    speedgeo decode u173zw
    speedgeo distance 52.3765 4.908 48.861 2.335
    speedgeo travel-time 0 0 0 0.01 --round-to 10
    speedgeo pixelate 10 170 20 -170
"""

from __future__ import annotations

import argparse
import logging
import sys

from speedgeo.geometry.area import Rectangle
from speedgeo.geometry.conversions import distance_in_meters, estimated_min_travel_time
from speedgeo.geometry.geohash import bounds, decode, encode
from speedgeo.geometry.primitives import Point
from speedgeo.geometry.utils import safe_log_exception

log = logging.getLogger(__name__)


def _cmd_encode(args: argparse.Namespace) -> int:
    print(encode(args.lat, args.lon, bits_per_axis=args.bits))
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    p = decode(args.hash)
    sw, ne = bounds(args.hash)
    print(f"{p.lat:.9f} {p.lon:.9f}")
    log.debug("cell sw=(%s, %s) ne=(%s, %s)", sw.lat, sw.lon, ne.lat, ne.lon)
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    d = distance_in_meters(Point(args.lat1, args.lon1), Point(args.lat2, args.lon2))
    print(f"{d:.3f}")
    return 0


def _cmd_travel_time(args: argparse.Namespace) -> int:
    t = estimated_min_travel_time(
        Point(args.lat1, args.lon1),
        Point(args.lat2, args.lon2),
        round_to_meters=args.round_to)
    print(int(t.total_seconds()))
    return 0


def _cmd_pixelate(args: argparse.Namespace) -> int:
    rect = Rectangle(Point(args.sw_lat, args.sw_lon), Point(args.ne_lat, args.ne_lon))
    for pixel in rect.pixelate():
        sw, ne = pixel.south_west, pixel.north_east
        print(f"{sw.lat} {sw.lon} {ne.lat} {ne.lon}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='speedgeo', description='Geohash and area utilities')
    parser.add_argument('--verbose', dest='verbose', action='store_true', help='Enable verbose logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('encode', help='Encode a point as a geohash')
    p.add_argument('lat', type=float)
    p.add_argument('lon', type=float)
    p.add_argument('--bits', type=int, default=30, help='Bits per axis, a multiple of 5')
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser('decode', help='Decode a geohash to the center of its cell')
    p.add_argument('hash')
    p.set_defaults(func=_cmd_decode)

    for name, func, help_text in (
            ('distance', _cmd_distance, 'Distance in meters between two points'),
            ('travel-time', _cmd_travel_time, 'Estimated minimum travel time in seconds')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('lat1', type=float)
        p.add_argument('lon1', type=float)
        p.add_argument('lat2', type=float)
        p.add_argument('lon2', type=float)
        if name == 'travel-time':
            p.add_argument('--round-to', dest='round_to', type=int, default=1, help='Round distance to meters')
        p.set_defaults(func=func)

    p = sub.add_parser('pixelate', help='Split a rectangle at the antimeridian')
    p.add_argument('sw_lat', type=float)
    p.add_argument('sw_lon', type=float)
    p.add_argument('ne_lat', type=float)
    p.add_argument('ne_lon', type=float)
    p.set_defaults(func=_cmd_pixelate)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s'
    )

    try:
        return args.func(args)
    except ValueError as e:
        safe_log_exception('speedgeo command failed', e, command=args.command)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
