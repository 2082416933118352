import logging

import pytest

from speedgeo.geometry import geohash as gh
from speedgeo.geometry.geohash import GeoHash
from speedgeo.geometry.primitives import Point
from speedgeo.geometry.tests.fixtures import AMSTERDAM, LONDON, PARIS

HASH_AMSTERDAM = 'u173zwvghxq0'
HASH_LONDON = 'gcpmnbmu5wr3'
HASH_PARIS = 'u09tvnu7cqw4'


@pytest.mark.parametrize('point, expected', [
    (Point(0.0, 0.0), 's00000000000'),
    (Point(1.0, 0.0), 's00j8n012j80'),
    (Point(0.0, 1.0), 's008nb00j8n0'),
    (AMSTERDAM, HASH_AMSTERDAM),
    (LONDON, HASH_LONDON),
    (PARIS, HASH_PARIS),
])
def test_encode(point, expected):
    assert GeoHash.from_point(point).hash == expected
    assert gh.encode(point.lat, point.lon) == expected


@pytest.mark.parametrize('hash, point', [
    (HASH_AMSTERDAM, AMSTERDAM),
    (HASH_LONDON, LONDON),
    (HASH_PARIS, PARIS),
])
def test_decode(hash, point):
    decoded = GeoHash.from_hash(hash).point
    assert decoded.lat == pytest.approx(point.lat, abs=1e-6)
    assert decoded.lon == pytest.approx(point.lon, abs=1e-6)
    assert decoded.elevation is None


def test_from_point_keeps_point():
    assert GeoHash.from_point(AMSTERDAM).point == AMSTERDAM


def test_lower_resolution():
    assert gh.encode(0.0, 0.0, bits_per_axis=5) == 's0'
    assert gh.encode(AMSTERDAM.lat, AMSTERDAM.lon, bits_per_axis=15) == 'u173zw'


@pytest.mark.parametrize('bits', [0, -5, 7, 31])
def test_invalid_bits_per_axis(bits):
    with pytest.raises(ValueError):
        gh.encode(0.0, 0.0, bits_per_axis=bits)


@pytest.mark.parametrize('hash', ['frikandel', '', 'U173', 'u17 3'])
def test_invalid_hash(hash):
    assert not gh.is_valid(hash)
    with pytest.raises(ValueError):
        GeoHash.from_hash(hash)
    with pytest.raises(ValueError):
        GeoHash(hash, Point(0.0, 0.0))


def test_is_valid():
    assert gh.is_valid(HASH_PARIS)
    assert not gh.is_valid(None)


def test_lookup():
    assert len(gh.LOOKUP) == 32
    assert gh.LOOKUP['0'] == 0
    assert gh.LOOKUP['s'] == 24
    assert gh.LOOKUP['z'] == 31
    with pytest.raises(TypeError):
        gh.LOOKUP['a'] = 1


def test_contains_and_decrease_resolution():
    paris = GeoHash.from_point(PARIS)
    assert paris.decrease_resolution().contains(GeoHash.from_point(PARIS))
    assert not GeoHash.from_point(PARIS).contains(paris.decrease_resolution())
    assert paris.decrease_resolution(len(paris) - 1).contains(GeoHash.from_point(AMSTERDAM))
    assert paris.decrease_resolution(0).hash == HASH_PARIS
    assert paris.decrease_resolution(len(paris)) is None
    assert paris.decrease_resolution(100) is None
    with pytest.raises(ValueError):
        paris.decrease_resolution(-1)


def test_set_resolution(caplog):
    amsterdam = GeoHash.from_point(AMSTERDAM)
    short = amsterdam.set_resolution(4)
    assert short.hash == 'u173'
    assert len(short) == 4
    assert str(short) == 'u173'
    assert short.point == gh.decode('u173')
    with caplog.at_level(logging.DEBUG, logger='speedgeo.geometry.geohash'):
        assert amsterdam.set_resolution(20).hash == HASH_AMSTERDAM
    assert 'resolution kept' in caplog.text
    with pytest.raises(ValueError):
        amsterdam.set_resolution(0)


def test_use_resolution_and_move_to():
    amsterdam = GeoHash.from_point(AMSTERDAM).set_resolution(4)
    paris = GeoHash.from_point(PARIS)
    assert paris.use_resolution(amsterdam).hash == 'u09t'
    assert amsterdam.move_to(PARIS).hash == 'u09t'


def test_bounds():
    sw, ne = gh.bounds('s')
    assert sw == Point(0.0, 0.0)
    assert ne == Point(45.0, 45.0)
    assert gh.decode('s') == Point(22.5, 22.5)


def test_bounds_hold_the_point():
    sw, ne = gh.bounds(HASH_LONDON[:6])
    assert sw.lat <= LONDON.lat <= ne.lat
    assert sw.lon <= LONDON.lon <= ne.lon


def test_bounds_stop_short_of_antimeridian():
    _, ne = gh.bounds('z')
    assert ne.lon < 180.0
    with pytest.raises(ValueError):
        gh.bounds('')
