import pytest
from hypothesis import given, settings, strategies as st

from src.geohash.codec import decode_cell, encode_hash
from src.geohash.coordinate import BoundingBox
from src.geohash.coverage import hash_length_to_cover, hashes_to_cover_bounding_box
from src.geohash.errors import InvalidMinHashesError
from src.geohash.geo_hash import GeoHasher

HARTFORD_LON = -72.727175
HARTFORD_LAT = 41.842967
SCHENECTADY_LON = -73.950691
SCHENECTADY_LAT = 42.819581

# Reference cells around Boston that lie inside the box, at length 4
BOSTON_CELLS = {
    "dr7q", "dr7w", "dr7y", "drkn", "drkq",
    "dre2", "dre6", "dre7", "dre8", "dred",
    "dreb", "dref", "drs0", "drs4",
}


class TestCoverBoundingBox:
    def test_min_hashes_must_be_positive(self):
        with pytest.raises(InvalidMinHashesError):
            hashes_to_cover_bounding_box(0, 135, 10, 145, 0)
        with pytest.raises(ValueError):
            hashes_to_cover_bounding_box(0, 135, 10, 145, -3)

    @pytest.mark.parametrize("min_hashes", [1, 3])
    def test_cover_around_boston(self, min_hashes):
        assert encode_hash(SCHENECTADY_LAT, SCHENECTADY_LON, 4) == "dre7"
        assert encode_hash(HARTFORD_LAT, HARTFORD_LON, 4) == "drkq"

        hashes = hashes_to_cover_bounding_box(
            SCHENECTADY_LAT, SCHENECTADY_LON, HARTFORD_LAT, HARTFORD_LON, min_hashes
        )
        assert {len(h) for h in hashes} == {4}
        # 5 columns x 6 rows of 0.3515625 x 0.17578125 degree cells
        assert len(hashes) == 30
        assert BOSTON_CELLS <= hashes

    def test_cover_stops_at_north_bound(self):
        hashes = hashes_to_cover_bounding_box(
            SCHENECTADY_LAT, SCHENECTADY_LON, HARTFORD_LAT, HARTFORD_LON, 1
        )
        # south edge of this row is above the box
        assert decode_cell("drek").south > SCHENECTADY_LAT
        assert not {"drek", "dreq", "drsh", "drsn"} & hashes

    def test_hash_length_to_cover(self):
        box = BoundingBox.from_corners(
            SCHENECTADY_LAT, SCHENECTADY_LON, HARTFORD_LAT, HARTFORD_LON
        )
        assert hash_length_to_cover(box, 1) == 4
        assert hash_length_to_cover(box, 15) == 4
        assert hash_length_to_cover(box, 16) == 5
        assert hash_length_to_cover(box, 10 ** 15) == 12

    def test_point_box_gets_longest_hashes(self):
        box = BoundingBox.from_corners(10, 10, 10, 10)
        assert hash_length_to_cover(box, 1) == 12
        assert hashes_to_cover_bounding_box(10, 10, 10, 10, 1) == {encode_hash(10, 10)}

    def test_across_antimeridian(self):
        hashes = hashes_to_cover_bounding_box(-10, 170, 10, -170, 3)
        assert encode_hash(0, 180, 2) in hashes
        assert encode_hash(0, -175, 2) in hashes
        assert encode_hash(0, 175, 2) in hashes
        assert all(len(h) == 2 for h in hashes)

    def test_full_width_box(self):
        hashes = hashes_to_cover_bounding_box(-10, -180, 10, 180, 4)
        assert encode_hash(0, 0, 2) == "7z"
        assert "7z" in hashes
        # 32 columns x 4 rows of 11.25 x 5.625 degree cells
        assert len(hashes) == 128

    def test_whole_world_does_not_repeat(self):
        assert len(hashes_to_cover_bounding_box(-90, -180, 90, 180, 32)) == 32
        assert len(hashes_to_cover_bounding_box(-90, -180, 90, 179.999, 28)) == 32

    def test_geohasher_cover(self):
        hasher = GeoHasher()
        assert hasher.cover(
            SCHENECTADY_LAT, SCHENECTADY_LON, HARTFORD_LAT, HARTFORD_LON
        ) == hashes_to_cover_bounding_box(
            SCHENECTADY_LAT, SCHENECTADY_LON, HARTFORD_LAT, HARTFORD_LON, 1
        )

    @settings(deadline=None)
    @given(
        st.floats(-80, 79),
        st.floats(-170, 169),
        st.floats(0.01, 1),
        st.floats(0.01, 1),
        st.integers(1, 20)
    )
    def test_cover_contains_corners(self, south, west, height, width, min_hashes):
        north, east = south + height, west + width
        hashes = hashes_to_cover_bounding_box(south, west, north, east, min_hashes)
        assert len(hashes) >= min_hashes
        length = len(next(iter(hashes)))
        assert all(len(h) == length for h in hashes)
        for lat in (south, north, (south + north) / 2):
            for lon in (west, east, (west + east) / 2):
                assert encode_hash(lat, lon, length) in hashes

    @settings(deadline=None)
    @given(
        st.floats(-80, 79),
        st.floats(-170, 169),
        st.floats(0.01, 1),
        st.floats(0.01, 1)
    )
    def test_cover_cells_touch_box(self, south, west, height, width):
        north, east = south + height, west + width
        for gh in hashes_to_cover_bounding_box(south, west, north, east, 4):
            cell = decode_cell(gh)
            assert cell.south <= north and cell.north >= south
            assert cell.west <= east and cell.east >= west

# --------------------------
# Running Tests
# --------------------------
#if __name__ == "__main__":
#    pytest.main([
#        "-v",
#        "--hypothesis-show-statistics",
#        "--cov=src.geohash.coverage",
#        "--cov-report=html:coverage"
#    ])
# --------------------------
