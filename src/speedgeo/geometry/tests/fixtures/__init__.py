from speedgeo.geometry.area import Rectangle
from speedgeo.geometry.primitives import Point

AMSTERDAM = Point(52.3765, 4.908)
LONDON = Point(51.506, -0.75)
PARIS = Point(48.861, 2.335)


def rect(sw_lat, sw_lon, ne_lat, ne_lon):
    """Rectangle from four numbers, south-west corner first."""
    return Rectangle(Point(sw_lat, sw_lon), Point(ne_lat, ne_lon))
