"""
GPX track parsing

Reads track points (trk/trkseg/trkpt), route points (rte/rtept) and
waypoints (wpt) from a GPX 1.0/1.1 document. Namespaces are ignored so
files exported by different devices parse the same way.
"""
import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000


class GpxParseError(ValueError):
    """Raised when a document is not well-formed GPX"""


@dataclass(frozen=True)
class GpxPoint:
    lat: float
    lon: float
    elevation: Optional[float] = None


@dataclass
class GpxParseResult:
    track_points: List[GpxPoint] = field(default_factory=list)
    route_points: List[GpxPoint] = field(default_factory=list)
    waypoints: List[GpxPoint] = field(default_factory=list)
    track_count: int = 0
    route_count: int = 0

    @property
    def points(self) -> List[GpxPoint]:
        return self.track_points + self.route_points + self.waypoints

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def distance_m(self) -> float:
        """Length of the track, or of the route when the file has no track"""
        path = self.track_points or self.route_points
        return sum(haversine_m(a, b) for a, b in zip(path, path[1:]))


def haversine_m(a: GpxPoint, b: GpxPoint) -> float:
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterable[ET.Element]:
    return (child for child in element if _local(child.tag) == name)


def _parse_point(element: ET.Element) -> Optional[GpxPoint]:
    try:
        lat = float(element.get("lat", ""))
        lon = float(element.get("lon", ""))
    except ValueError:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None

    elevation = None
    for ele in _children(element, "ele"):
        try:
            elevation = float((ele.text or "").strip())
        except ValueError:
            elevation = None
        break
    return GpxPoint(lat=lat, lon=lon, elevation=elevation)


def _collect(elements: Iterable[ET.Element]) -> List[GpxPoint]:
    points = []
    for element in elements:
        point = _parse_point(element)
        if point is not None:
            points.append(point)
    return points


def parse_gpx(content: str) -> GpxParseResult:
    """
    Parse a GPX document.

    Points with missing or out-of-range coordinates are skipped.

    Raises:
        GpxParseError: the content is blank, not XML, or not a <gpx> document
    """
    if not content or not content.strip():
        raise GpxParseError("GPX content is empty")

    try:
        root = ET.fromstring(content.strip())
    except ET.ParseError as e:
        raise GpxParseError(f"GPX is not well-formed XML: {e}") from e

    if _local(root.tag) != "gpx":
        raise GpxParseError(f"Unexpected root element <{_local(root.tag)}>")

    result = GpxParseResult()

    for track in _children(root, "trk"):
        result.track_count += 1
        for segment in _children(track, "trkseg"):
            result.track_points.extend(_collect(_children(segment, "trkpt")))

    for route in _children(root, "rte"):
        result.route_count += 1
        result.route_points.extend(_collect(_children(route, "rtept")))

    result.waypoints.extend(_collect(_children(root, "wpt")))

    logger.debug(
        "Parsed GPX document",
        extra={
            "track_points": len(result.track_points),
            "route_points": len(result.route_points),
            "waypoints": len(result.waypoints),
        },
    )
    return result
