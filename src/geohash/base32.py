import pyarrow as pa

from src.geohash.errors import InvalidCharacterError

BITS_PER_SYMBOL = 5
BASE32 = '0123456789bcdefghjkmnpqrstuvwxyz'
BASE32_MAP = {c: i for i, c in enumerate(BASE32)}
# Arrow copy of the table, used by take() / index_in() in the columnar codec
BASE32_ARRAY = pa.array(list(BASE32), type=pa.string())


def symbol_value(symbol: str) -> int:
    """Return the 5-bit value of a base32 symbol"""
    try:
        return BASE32_MAP[symbol]
    except KeyError:
        raise InvalidCharacterError(symbol) from None


def value_symbol(value: int) -> str:
    """Return the base32 symbol for a 5-bit value"""
    return BASE32[value]


def symbol_bits(symbol: str) -> list:
    """Unpack a symbol into its 5 bits, most significant first"""
    value = symbol_value(symbol)
    return [(value >> (BITS_PER_SYMBOL - 1 - j)) & 1 for j in range(BITS_PER_SYMBOL)]


def bits_symbol(bits) -> str:
    """Pack up to 5 bits, most significant first, into a symbol"""
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value_symbol(value)
