class GeoHashError(Exception):
    """Base exception for geohash operations."""


class InvalidHashLengthError(GeoHashError, ValueError):
    """Raised when a hash length (precision) is not a positive integer."""

    def __init__(self, length):
        self.length = length
        super().__init__(f"hash length must be greater than zero, got {length}")


class InvalidMinHashesError(GeoHashError, ValueError):
    """Raised when a bounding box cover is asked for fewer than one hash."""

    def __init__(self, min_hashes):
        self.min_hashes = min_hashes
        super().__init__(f"min_hashes must be greater than zero, got {min_hashes}")


class InvalidCharacterError(GeoHashError, ValueError):
    """Raised when a geohash contains a symbol outside the base32 alphabet."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(
            f"invalid geohash character {character!r}, "
            "use 0-9, b-h, j, k, m, n, p-z"
        )
