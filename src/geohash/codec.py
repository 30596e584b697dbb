import math

from src.geohash.base32 import BITS_PER_SYMBOL, bits_symbol, symbol_bits
from src.geohash.coordinate import Coordinate, to180
from src.geohash.errors import InvalidHashLengthError
from src.geohash.interleave import DecodedCell, decode_bits, encode_bits

DEFAULT_HASH_LENGTH = 12
MAX_HASH_LENGTH = 12


def check_length(length: int):
    if length <= 0:
        raise InvalidHashLengthError(length)


def encode_hash(lat: float, lon: float, length: int = DEFAULT_HASH_LENGTH) -> str:
    """Encode coordinates to a geohash of the given length

    Example:
        >>> encode_hash(-25.382708, -49.265506, 6)
        '6gkzwg'
    """
    check_length(length)
    bits = encode_bits(lat, to180(lon), length * BITS_PER_SYMBOL)
    return ''.join(
        bits_symbol(bits[i:i + BITS_PER_SYMBOL])
        for i in range(0, len(bits), BITS_PER_SYMBOL)
    )


def encode_coordinate(point: Coordinate, length: int = DEFAULT_HASH_LENGTH) -> str:
    return encode_hash(point.lat, point.lon, length)


def decode_cell(geohash: str) -> DecodedCell:
    """Decode geohash to its cell center with error margins"""
    bits = []
    for symbol in geohash:
        bits.extend(symbol_bits(symbol))
    return decode_bits(bits)


def decode_hash(geohash: str) -> Coordinate:
    """Decode geohash to the center of its cell; '' decodes to (0, 0)"""
    return decode_cell(geohash).center


def width_degrees(length: int) -> float:
    """Longitude span of a cell; longitude takes the odd bit of odd bit counts"""
    return 360.0 / 2 ** math.ceil(length * BITS_PER_SYMBOL / 2)


def height_degrees(length: int) -> float:
    """Latitude span used for cell count estimates, half of width_degrees.

    Exact for even lengths; for odd lengths the true cell is twice as tall
    (see decode_cell for exact bounds).
    """
    return width_degrees(length) / 2


def cell_size(length: int) -> tuple:
    """Exact (height, width) in degrees of every cell of the given length"""
    lat_bits = length * BITS_PER_SYMBOL // 2
    lon_bits = length * BITS_PER_SYMBOL - lat_bits
    return 180.0 / (1 << lat_bits), 360.0 / (1 << lon_bits)
