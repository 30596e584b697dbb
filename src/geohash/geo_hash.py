import pyarrow as pa
import pyarrow.compute as pc

from src.geohash.adjacency import Direction, adjacent_hash, neighbours
from src.geohash.base32 import BASE32_ARRAY, BITS_PER_SYMBOL
from src.geohash.codec import (
    DEFAULT_HASH_LENGTH, check_length, decode_cell, decode_hash, encode_hash
)
from src.geohash.coordinate import Coordinate, to180_array
from src.geohash.coverage import hashes_to_cover_bounding_box
from src.geohash.errors import InvalidCharacterError
from src.geohash.interleave import DecodedCell, deinterleave_arrays, interleave_arrays


def _as_float_array(values) -> pa.Array:
    if isinstance(values, pa.ChunkedArray):
        values = values.combine_chunks()
    if isinstance(values, pa.Array):
        return values.cast(pa.float64())
    return pa.array(values, type=pa.float64())


def _as_string_array(values) -> pa.Array:
    if isinstance(values, pa.ChunkedArray):
        values = values.combine_chunks()
    if isinstance(values, pa.Array):
        return values.cast(pa.string())
    return pa.array(values, type=pa.string())


class GeoHasher:
    """Geohash encoder/decoder with PyArrow batch operations.

    This class bundles the geohash operations around a default hash
    length and adds columnar variants of encode and decode that work
    on whole Arrow arrays at once through pyarrow.compute kernels.

    Geohashes are short alphanumeric strings that represent rectangular
    areas on the Earth's surface. They are commonly used for spatial
    indexing, proximity searches, and data visualization. Truncating a
    geohash yields the hash of the enclosing, coarser cell.

    Batch results are identical to the scalar functions, row for row;
    nulls in the input come out as nulls.

    Attributes:
        precision (int): The default length of produced geohashes.
        bits (int): Number of interleaved bits per geohash.

    Example:
        >>> geohasher = GeoHasher(precision=10)
        >>> geohash = geohasher.encode(37.7749, -122.4194)  # Encode coordinates
        >>> point = geohasher.decode(geohash)  # Decode geohash
        >>> around = geohasher.neighbours(geohash)  # Get neighbouring geohashes
        >>> hashes = geohasher.encode_batch([37.7749, 40.7128], [-122.4194, -74.0060])

    """
    BASE32 = BASE32_ARRAY

    def __init__(self, precision: int = DEFAULT_HASH_LENGTH):
        check_length(precision)
        self.precision = precision
        self.bits = self.precision * BITS_PER_SYMBOL

    def encode(self, lat: float, lon: float, precision: int = None) -> str:
        return encode_hash(lat, lon, self.precision if precision is None else precision)

    def decode(self, geohash: str) -> Coordinate:
        return decode_hash(geohash)

    def decode_cell(self, geohash: str) -> DecodedCell:
        return decode_cell(geohash)

    def adjacent(self, geohash: str, direction: Direction) -> str:
        return adjacent_hash(geohash, direction)

    def neighbours(self, geohash: str) -> set:
        return neighbours(geohash)

    def cover(self, lat1: float, lon1: float, lat2: float, lon2: float, min_hashes: int = 1) -> set:
        """Hashes covering the box, see hashes_to_cover_bounding_box"""
        return hashes_to_cover_bounding_box(lat1, lon1, lat2, lon2, min_hashes)

    def encode_batch(self, lats, lons, precision: int = None) -> pa.StringArray:
        """Encode arrays of coordinates to geohashes
        Args:
        lats, lons: equal length sequences or Arrow arrays
        precision: hash length, defaults to the instance precision
        Returns:
        StringArray of geohashes, null where either coordinate is null
        """
        if precision is None:
            number_of_bits = self.bits
        else:
            check_length(precision)
            number_of_bits = precision * BITS_PER_SYMBOL
        lats = _as_float_array(lats)
        lons = to180_array(_as_float_array(lons))
        if len(lats) != len(lons):
            raise ValueError(f"got {len(lats)} latitudes but {len(lons)} longitudes")

        bit_columns = interleave_arrays(lats, lons, number_of_bits)
        symbols = []
        for i in range(0, len(bit_columns), BITS_PER_SYMBOL):
            codes = pa.array([0] * len(lats), pa.int64())
            for bit in bit_columns[i:i + BITS_PER_SYMBOL]:
                codes = pc.add(pc.multiply(codes, 2), pc.cast(bit, pa.int64()))
            symbols.append(self.BASE32.take(codes))
        return pc.binary_join_element_wise(*symbols, '')

    def decode_batch(self, geohashes) -> pa.StructArray:
        """Decode an array of geohashes, lengths may differ
        Returns:
        Struct with fields: lat, lon, lat_err, lon_err; null for null hashes
        """
        geohashes = _as_string_array(geohashes)
        lengths = pc.utf8_length(geohashes)
        longest = pc.max(lengths).as_py() or 0

        bit_columns = []
        for i in range(longest):
            symbol = pc.utf8_slice_codeunits(geohashes, start=i, stop=i + 1)
            codes = pc.cast(pc.index_in(symbol, value_set=self.BASE32), pa.int64())
            present = pc.greater(lengths, i)
            invalid = pc.and_(present, pc.is_null(codes))
            if pc.any(invalid).as_py():
                bad = symbol.filter(pc.fill_null(invalid, False))[0].as_py()
                raise InvalidCharacterError(bad)
            for j in range(BITS_PER_SYMBOL):
                mask = pa.scalar(1 << (BITS_PER_SYMBOL - 1 - j), pa.int64())
                bit_columns.append(pc.not_equal(pc.bit_wise_and(codes, mask), 0))

        return deinterleave_arrays(
            bit_columns,
            length=len(geohashes),
            mask=pc.is_null(geohashes) if geohashes.null_count else None
        )
