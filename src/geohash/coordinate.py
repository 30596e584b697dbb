from dataclasses import dataclass

import pyarrow as pa
import pyarrow.compute as pc


def to180(longitude: float) -> float:
    """Normalize a longitude to (-180, 180]

    Values already in range come back untouched so that normalizing is
    exact and idempotent.

    Example:
        >>> to180(190)
        -170.0
        >>> to180(-180)
        180.0
    """
    if -180.0 < longitude <= 180.0:
        return longitude
    result = longitude % 360.0
    if result > 180.0:
        result -= 360.0
    return result


def to180_array(longitudes: pa.Array) -> pa.Array:
    """Vectorized to180 over a float64 Arrow array (nulls propagate)"""
    in_range = pc.and_(
        pc.greater(longitudes, -180.0),
        pc.less_equal(longitudes, 180.0)
    )
    # lon - 360 * floor((lon + 180) / 360) lands in [-180, 180)
    turns = pc.floor(pc.divide(pc.add(longitudes, 180.0), 360.0))
    wrapped = pc.subtract(longitudes, pc.multiply(turns, 360.0))
    wrapped = pc.if_else(pc.equal(wrapped, -180.0), 180.0, wrapped)
    return pc.if_else(in_range, longitudes, wrapped)


def longitude_diff(a: float, b: float) -> float:
    """Eastward distance in degrees from longitude b to longitude a, in [0, 360)

    Example:
        >>> longitude_diff(-175, 175)
        10.0
        >>> longitude_diff(175, -175)
        350.0
    """
    diff = to180(a) - to180(b)
    if diff < 0:
        diff += 360.0
        # a tiny negative difference rounds up to a full turn
        if diff >= 360.0:
            return 0.0
    return diff


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) point, longitude kept in (-180, 180]"""
    lat: float
    lon: float

    def __post_init__(self):
        object.__setattr__(self, 'lon', to180(self.lon))

    def add(self, d_lat: float, d_lon: float) -> 'Coordinate':
        """Offset the point, re-normalizing longitude"""
        return Coordinate(self.lat + d_lat, self.lon + d_lon)


@dataclass(frozen=True)
class BoundingBox:
    """Box between two parallels and two meridians.

    A box whose west bound is greater than its east bound spans the
    antimeridian.

    Attributes:
        south (float): Southern latitude bound.
        west (float): Western longitude bound.
        north (float): Northern latitude bound.
        east (float): Eastern longitude bound.
        full_width (bool): The box goes all the way around the globe, which
            the normalized bounds alone cannot express.
    """
    south: float
    west: float
    north: float
    east: float
    full_width: bool = False

    @classmethod
    def from_corners(cls, lat1: float, lon1: float, lat2: float, lon2: float) -> 'BoundingBox':
        """Build a box from two corners; lon1 is taken as the west bound"""
        return cls(
            south=min(lat1, lat2),
            west=to180(lon1),
            north=max(lat1, lat2),
            east=to180(lon2),
            full_width=lon2 - lon1 >= 360.0
        )

    @property
    def width(self) -> float:
        if self.full_width:
            return 360.0
        return longitude_diff(self.east, self.west)

    @property
    def height(self) -> float:
        return self.north - self.south
