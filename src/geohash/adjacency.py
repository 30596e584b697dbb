import logging
from enum import Enum

from src.geohash.base32 import BASE32, BASE32_MAP
from src.geohash.errors import InvalidCharacterError

logger = logging.getLogger(__name__)


class Direction(Enum):
    TOP = 'top'
    BOTTOM = 'bottom'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Tables for hashes of even length, where the last symbol lays out as
# 4 columns x 8 rows. Position k of a neighbour string holds the symbol whose
# neighbour is BASE32[k].
_EVEN_NEIGHBOURS = {
    Direction.RIGHT: 'bc01fg45238967deuvhjyznpkmstqrwx',
    Direction.LEFT: '238967debc01fg45kmstqrwxuvhjyznp',
    Direction.TOP: 'p0r21436x8zb9dcf5h7kjnmqesgutwvy',
    Direction.BOTTOM: '14365h7k9dcfesgujnmqp0r2twvyx8zb',
}
_EVEN_BORDERS = {
    Direction.RIGHT: 'bcfguvyz',
    Direction.LEFT: '0145hjnp',
    Direction.TOP: 'prxz',
    Direction.BOTTOM: '028b',
}
# Odd lengths (8 columns x 4 rows) are the even layout transposed
_TRANSPOSED = {
    Direction.RIGHT: Direction.TOP,
    Direction.LEFT: Direction.BOTTOM,
    Direction.TOP: Direction.RIGHT,
    Direction.BOTTOM: Direction.LEFT,
}

# NEIGHBOURS[direction][parity][symbol] -> neighbouring symbol, parity = len(hash) % 2
NEIGHBOURS = {
    direction: (
        {symbol: BASE32[k] for k, symbol in enumerate(_EVEN_NEIGHBOURS[direction])},
        {symbol: BASE32[k] for k, symbol in enumerate(_EVEN_NEIGHBOURS[_TRANSPOSED[direction]])},
    )
    for direction in Direction
}
BORDERS = {
    direction: (
        frozenset(_EVEN_BORDERS[direction]),
        frozenset(_EVEN_BORDERS[_TRANSPOSED[direction]]),
    )
    for direction in Direction
}


def adjacent_hash(geohash: str, direction: Direction) -> str:
    """Hash of the same length for the cell next to geohash in direction

    Works on the symbols alone: trailing symbols on the border of their
    parent cell are replaced and the step carries over to the parent,
    like a carry in positional arithmetic.

    Past the outermost cell, LEFT and RIGHT wrap around the antimeridian
    while TOP and BOTTOM stop at the pole and return geohash unchanged.

    Example:
        >>> adjacent_hash('u1pb', Direction.RIGHT)
        'u300'
    """
    for symbol in geohash:
        if symbol not in BASE32_MAP:
            raise InvalidCharacterError(symbol)

    replaced = []
    for i in range(len(geohash) - 1, -1, -1):
        symbol = geohash[i]
        parity = (i + 1) % 2
        replaced.append(NEIGHBOURS[direction][parity][symbol])
        if symbol not in BORDERS[direction][parity]:
            return geohash[:i] + ''.join(reversed(replaced))

    if direction in (Direction.TOP, Direction.BOTTOM):
        logger.debug("%r is on the pole edge, no %s neighbour", geohash, direction.value)
        return geohash
    return ''.join(reversed(replaced))


def top(geohash: str) -> str:
    return adjacent_hash(geohash, Direction.TOP)


def bottom(geohash: str) -> str:
    return adjacent_hash(geohash, Direction.BOTTOM)


def left(geohash: str) -> str:
    return adjacent_hash(geohash, Direction.LEFT)


def right(geohash: str) -> str:
    return adjacent_hash(geohash, Direction.RIGHT)


def neighbours(geohash: str) -> set:
    """The 8 hashes around geohash; fewer distinct ones at the poles"""
    up, down = top(geohash), bottom(geohash)
    return {
        up, down, left(geohash), right(geohash),
        left(up), right(up), left(down), right(down)
    }
