from dataclasses import dataclass

import pyarrow as pa
import pyarrow.compute as pc

from src.geohash.coordinate import Coordinate

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)

DECODED_FIELDS = ['lat', 'lon', 'lat_err', 'lon_err']


@dataclass(frozen=True)
class DecodedCell:
    """Center of a geohash cell with its half-height and half-width.

    Attributes:
        lat (float): Center latitude.
        lon (float): Center longitude.
        lat_err (float): Half the cell height in degrees.
        lon_err (float): Half the cell width in degrees.
    """
    lat: float
    lon: float
    lat_err: float
    lon_err: float

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.lat, self.lon)

    @property
    def south(self) -> float:
        return self.lat - self.lat_err

    @property
    def north(self) -> float:
        return self.lat + self.lat_err

    @property
    def west(self) -> float:
        return self.lon - self.lon_err

    @property
    def east(self) -> float:
        return self.lon + self.lon_err


def encode_bits(lat: float, lon: float, number_of_bits: int) -> list:
    """Interleave lat/lon into a bitstream, longitude on even bit indexes

    Each bit halves the active range: 1 keeps the upper half, 0 the lower.
    Any prefix of the result encodes the same point at lower precision.
    """
    lat_range, lon_range = list(LAT_RANGE), list(LON_RANGE)
    bits = []
    for i in range(number_of_bits):
        if i % 2:  # Latitude bits
            value, rng = lat, lat_range
        else:  # Longitude bits
            value, rng = lon, lon_range
        mid = (rng[0] + rng[1]) / 2
        if value > mid:
            bits.append(1)
            rng[0] = mid
        else:
            bits.append(0)
            rng[1] = mid
    return bits


def decode_bits(bits) -> DecodedCell:
    """Replay the halving of encode_bits to recover the cell"""
    lat_range, lon_range = list(LAT_RANGE), list(LON_RANGE)
    for i, bit in enumerate(bits):
        rng = lat_range if i % 2 else lon_range
        mid = (rng[0] + rng[1]) / 2
        if bit:
            rng[0] = mid
        else:
            rng[1] = mid
    return DecodedCell(
        lat=(lat_range[0] + lat_range[1]) / 2,
        lon=(lon_range[0] + lon_range[1]) / 2,
        lat_err=(lat_range[1] - lat_range[0]) / 2,
        lon_err=(lon_range[1] - lon_range[0]) / 2
    )


def _full_ranges(n: int) -> dict:
    """Starting [lo, hi] columns keyed by bit parity (0: lon, 1: lat)"""
    return {
        0: [pa.array([LON_RANGE[0]] * n, pa.float64()), pa.array([LON_RANGE[1]] * n, pa.float64())],
        1: [pa.array([LAT_RANGE[0]] * n, pa.float64()), pa.array([LAT_RANGE[1]] * n, pa.float64())]
    }


def interleave_arrays(lats: pa.Array, lons: pa.Array, number_of_bits: int) -> list:
    """Columnar encode_bits
    Args:
    lats, lons: float64 arrays of equal length
    Returns:
    One BooleanArray per bit position; null coordinates give null bits
    """
    ranges = _full_ranges(len(lats))
    values = {0: lons, 1: lats}
    columns = []
    for i in range(number_of_bits):
        parity = i % 2
        lo, hi = ranges[parity]
        mid = pc.divide(pc.add(lo, hi), 2.0)
        bit = pc.greater(values[parity], mid)
        ranges[parity] = [pc.if_else(bit, mid, lo), pc.if_else(bit, hi, mid)]
        columns.append(bit)
    return columns


def deinterleave_arrays(bit_columns, length: int = 0, mask: pa.BooleanArray = None) -> pa.StructArray:
    """Columnar decode_bits
    Args:
    bit_columns: BooleanArrays per bit position; a null bit is absent and
    leaves its row's range as it is, so rows of different lengths decode together
    length: row count, used when bit_columns is empty
    mask: rows to emit as null
    Returns:
    Struct with fields: lat, lon, lat_err, lon_err
    """
    ranges = _full_ranges(len(bit_columns[0]) if bit_columns else length)
    for i, bit in enumerate(bit_columns):
        parity = i % 2
        lo, hi = ranges[parity]
        mid = pc.divide(pc.add(lo, hi), 2.0)
        upper = pc.fill_null(bit, False)
        lower = pc.fill_null(pc.invert(bit), False)
        ranges[parity] = [pc.if_else(upper, mid, lo), pc.if_else(lower, mid, hi)]

    (lon_lo, lon_hi), (lat_lo, lat_hi) = ranges[0], ranges[1]
    return pa.StructArray.from_arrays(
        [
            pc.divide(pc.add(lat_lo, lat_hi), 2.0),
            pc.divide(pc.add(lon_lo, lon_hi), 2.0),
            pc.divide(pc.subtract(lat_hi, lat_lo), 2.0),
            pc.divide(pc.subtract(lon_hi, lon_lo), 2.0)
        ],
        names=DECODED_FIELDS,
        mask=mask
    )
