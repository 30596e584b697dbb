import logging
import math

from src.geohash.adjacency import right, top
from src.geohash.codec import MAX_HASH_LENGTH, cell_size, decode_cell, encode_hash
from src.geohash.coordinate import BoundingBox, longitude_diff
from src.geohash.errors import InvalidMinHashesError

logger = logging.getLogger(__name__)


def hash_length_to_cover(box: BoundingBox, min_hashes: int) -> int:
    """Shortest hash length at which min_hashes whole cells fit inside box

    Shorter hashes mean fewer, larger cells, so lengths are tried from 1 up
    and only cells that fit entirely within the box are counted. A box too
    small to hold even one length 12 cell gets length 12.
    """
    for length in range(1, MAX_HASH_LENGTH + 1):
        height, width = cell_size(length)
        columns = math.floor(box.width / width)
        rows = math.floor(box.height / height)
        if columns * rows >= min_hashes:
            return length
    return MAX_HASH_LENGTH


def hashes_to_cover_bounding_box(lat1: float, lon1: float, lat2: float, lon2: float,
                                 min_hashes: int) -> set:
    """Same-length hashes whose cells together cover the box

    The box runs east from lon1 to lon2 and between the two latitudes.
    The grid is walked from the south-west cell, row by row, stepping
    right along a row and up between rows, up to the cells holding the
    east and north bounds.

    Args:
        lat1, lon1: first corner, lon1 is the west bound
        lat2, lon2: opposite corner, lon2 is the east bound
        min_hashes: lower bound on the number of cells to use

    Raises:
        InvalidMinHashesError: min_hashes is not positive.

    Example:
        >>> hashes = hashes_to_cover_bounding_box(42.819581, -73.950691, 41.842967, -72.727175, 1)
        >>> len(hashes), {len(h) for h in hashes}
        (30, {4})
    """
    if min_hashes <= 0:
        raise InvalidMinHashesError(min_hashes)
    box = BoundingBox.from_corners(lat1, lon1, lat2, lon2)
    length = hash_length_to_cover(box, min_hashes)
    cell_height, cell_width = cell_size(length)
    world_columns = round(360.0 / cell_width)

    start = encode_hash(box.south, box.west, length)
    south_west = decode_cell(start)
    south_east = decode_cell(encode_hash(box.south, box.east, length))
    north_west = decode_cell(encode_hash(box.north, box.west, length))

    if longitude_diff(box.west, south_west.west) + box.width >= 360.0:
        columns = world_columns
    else:
        steps = round(longitude_diff(south_east.west, south_west.west) / cell_width)
        columns = min(steps + 1, world_columns)
    rows = round((north_west.south - south_west.south) / cell_height) + 1
    logger.debug(
        "covering %s with length %d hashes, %d columns x %d rows",
        box, length, columns, rows
    )

    hashes = set()
    row_start = start
    for _ in range(rows):
        geohash = row_start
        for _ in range(columns):
            hashes.add(geohash)
            geohash = right(geohash)
        above = top(row_start)
        if above == row_start:
            break
        row_start = above
    return hashes
