"""
Unit Tests for the Lattice (LtHash16) Multiset Hash
"""

import os
from unittest.mock import patch

import pytest

from homhash import config
from homhash.errors import SizeMismatchError
from homhash.lthash import HASH_SIZE, SUM_SIZE, LtHash16, lanes_from_bytes, lanes_to_bytes
from homhash.primitives import shake256


class TestLaneCodec:
    """Test little-endian lane conversion."""

    def test_little_endian(self):
        assert lanes_from_bytes(b"\x01\x00\x00\x01") == [1, 256]
        assert lanes_to_bytes([1, 256]) == b"\x01\x00\x00\x01"

    def test_odd_length(self):
        with pytest.raises(ValueError, match="must be even"):
            lanes_from_bytes(b"\x01\x02\x03")


class TestLtHash16:
    """Test LtHash16 accumulator operations."""

    def test_default_shape(self):
        hash_ = LtHash16.default()
        assert hash_.lanes == SUM_SIZE
        assert hash_.digest() == bytes(HASH_SIZE)
        assert hash_.is_empty()

    def test_basic(self, fruits):
        apple, banana, kiwi = fruits
        hash_ = LtHash16.default().insert(apple).insert(banana).insert(kiwi).remove(banana)
        hash_bis = LtHash16.default().insert(apple).insert(kiwi)

        assert hash_.equals(hash_bis)
        assert hash_.digest() == hash_bis.digest()
        assert len(hash_.digest()) == 1024 * 2

    def test_union(self):
        left = LtHash16.default().insert(b"hello")
        right = LtHash16.default().insert(b"world", b"lucas")

        assert left.union(right).equals(LtHash16.default().insert(b"hello", b"world", b"lucas"))
        assert not left.union(right).equals(LtHash16.default().insert(b"world", b"lucas"))

    def test_difference(self):
        left = LtHash16.default().insert(b"hello", b"world", b"lucas")
        right = LtHash16.default().insert(b"world", b"lucas")

        assert left.difference(right).equals(LtHash16.default().insert(b"hello"))
        assert not left.difference(right).equals(
            LtHash16.default().insert(b"hello", b"world", b"lucas")
        )

    def test_lanes_wrap_independently(self):
        """0xFFFF + 1 wraps to 0 without carrying into the next lane."""
        full = LtHash16([0xFFFF, 0xFFFF, 0, 0])
        ones = LtHash16([1, 0, 1, 0])
        assert full.union(ones).accumulator == [0, 0xFFFF, 1, 0]

    def test_lanes_borrow_independently(self):
        zero = LtHash16([0, 5, 0, 0])
        ones = LtHash16([1, 0, 0, 0])
        assert zero.difference(ones).accumulator == [0xFFFF, 5, 0, 0]

    def test_item_lanes_come_from_xof(self):
        hash_ = LtHash16(lanes=8).insert(b"item")
        assert hash_.accumulator == lanes_from_bytes(hash_.xof(b"item", 16))

    def test_immutable(self):
        left = LtHash16.default().insert(b"hello")
        before = left.digest()
        left.insert(b"world")
        left.remove(b"hello")
        left.union(LtHash16.default().insert(b"lucas"))
        assert left.digest() == before

    def test_clone_does_not_share_lanes(self):
        original = LtHash16.default().insert(b"hello")
        cloned = original.clone()
        cloned._add_one([1] * cloned.lanes)
        assert not cloned.equals(original)

    def test_injected_xof(self):
        default = LtHash16.default().insert(b"hello")
        custom = LtHash16(xof=shake256).insert(b"hello")
        assert default.lanes == custom.lanes
        assert not default.equals(custom)

    def test_short_xof_output_rejected(self):
        hash_ = LtHash16(xof=lambda data, length: bytes(length - 2))
        with pytest.raises(SizeMismatchError, match="XOF output length"):
            hash_.insert(b"item")

    def test_union_lane_mismatch(self):
        with pytest.raises(SizeMismatchError, match="lane count"):
            LtHash16(lanes=16).union(LtHash16.default())

    def test_difference_lane_mismatch(self):
        with pytest.raises(SizeMismatchError):
            LtHash16.default().difference(LtHash16(lanes=16))

    def test_invalid_lane_count(self):
        with pytest.raises(ValueError, match="lanes must be positive"):
            LtHash16(lanes=0)

    def test_equals_lane_mismatch(self):
        with pytest.raises(SizeMismatchError, match="lane count"):
            LtHash16(lanes=4).equals(LtHash16(lanes=8))

    def test_dunder_eq_with_different_lanes(self):
        """`==` answers False instead of raising."""
        assert LtHash16(lanes=4) != LtHash16(lanes=8)
        assert LtHash16(lanes=4) == LtHash16(lanes=4)

    @patch.dict(os.environ, {"HOMHASH_LTHASH_LANES": "32", "HOMHASH_LTHASH_XOF": "shake256"})
    def test_default_honours_settings(self):
        with patch.object(config, "settings", config.HomHashSettings()):
            hash_ = LtHash16.default()
        assert hash_.lanes == 32
        assert hash_.xof is shake256
        assert len(hash_.insert(b"x").digest()) == 64


class TestLtHashSerialization:
    """Test to_bytes / from_bytes."""

    def test_round_trip(self):
        hash_ = LtHash16.default().insert(b"hello", b"world")
        restored = LtHash16.from_bytes(hash_.to_bytes())
        assert restored.equals(hash_)
        assert restored.insert(b"x").equals(hash_.insert(b"x"))

    @pytest.mark.parametrize("data", [b"", b"\x00\x01\x02"])
    def test_malformed(self, data):
        with pytest.raises(SizeMismatchError):
            LtHash16.from_bytes(data)
