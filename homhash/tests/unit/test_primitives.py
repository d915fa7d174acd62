"""
Unit Tests for Primitive Collaborators

Tests input coercion, digest sizes, XOF lookup, the ChaCha20 keystream and
the ristretto255 group wrapper.
"""

import pytest

from homhash.primitives import (
    RISTRETTO255,
    as_bytes,
    chacha20_keystream,
    hash256,
    hash512,
    resolve_xof,
    shake128,
    shake256,
)


class TestAsBytes:
    """Test item coercion."""

    def test_bytes_pass_through(self):
        assert as_bytes(b"hello") == b"hello"

    def test_bytearray_and_memoryview(self):
        assert as_bytes(bytearray(b"hello")) == b"hello"
        assert as_bytes(memoryview(b"hello")) == b"hello"

    def test_str_is_utf8(self):
        assert as_bytes("héllo") == "héllo".encode("utf-8")

    @pytest.mark.parametrize("bad", [123, None, 1.5, ["a"]])
    def test_rejects_other_types(self, bad):
        with pytest.raises(TypeError, match="items must be bytes-like or str"):
            as_bytes(bad)


class TestDigests:
    """Test digest and XOF output sizes."""

    def test_hash_sizes(self):
        assert len(hash256(b"")) == 32
        assert len(hash512(b"")) == 64

    def test_sha256_known_value(self):
        assert hash256(b"abc").hex() == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_xof_lengths(self):
        assert len(shake128(b"item", 2048)) == 2048
        assert len(shake256(b"item", 10)) == 10

    def test_xof_prefix_property(self):
        assert shake128(b"item", 64)[:32] == shake128(b"item", 32)

    def test_resolve_xof(self):
        assert resolve_xof("shake128") is shake128
        assert resolve_xof("shake256") is shake256

    def test_resolve_unknown_xof(self):
        with pytest.raises(ValueError, match="Unknown XOF"):
            resolve_xof("md5")


class TestChaCha20:
    """Keystream vectors with a zero nonce.

    From https://tools.ietf.org/html/draft-agl-tls-chacha20poly1305-04#section-7
    """

    def test_zero_key(self):
        observed = chacha20_keystream(bytes(32), 384)[:64]
        expected = bytes.fromhex(
            "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
            "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
        )
        assert observed == expected

    def test_key_ending_in_one(self):
        key = bytes(31) + b"\x01"
        observed = chacha20_keystream(key, 384)[:64]
        expected = bytes.fromhex(
            "4540f05a9f1fb296d7736e7b208e3c96eb4fe1834688d2604f450952ed432d41"
            "bbe2a0b6ea7566d2a5d1e7e20d42af2c53d792b1c43fea817e9ad275ae546963"
        )
        assert observed == expected

    def test_length(self):
        assert len(chacha20_keystream(bytes(32), 384)) == 384

    def test_bad_key_size(self):
        with pytest.raises(ValueError, match="key must be 32 bytes"):
            chacha20_keystream(bytes(16), 64)

    def test_bad_nonce_size(self):
        with pytest.raises(ValueError, match="nonce must be 12 bytes"):
            chacha20_keystream(bytes(32), 64, nonce=bytes(8))


class TestRistrettoGroup:
    """Test the ristretto255 group wrapper."""

    def test_identity_is_neutral(self):
        p = RISTRETTO255.hash_to_point(hash512(b"point"))
        assert RISTRETTO255.add(RISTRETTO255.IDENTITY, p) == p
        assert RISTRETTO255.add(p, RISTRETTO255.IDENTITY) == p

    def test_subtract_self_gives_identity(self):
        p = RISTRETTO255.hash_to_point(hash512(b"point"))
        assert RISTRETTO255.subtract(p, p) == RISTRETTO255.IDENTITY

    def test_addition_commutes(self):
        p = RISTRETTO255.hash_to_point(hash512(b"p"))
        q = RISTRETTO255.hash_to_point(hash512(b"q"))
        assert RISTRETTO255.add(p, q) == RISTRETTO255.add(q, p)

    def test_validity(self):
        p = RISTRETTO255.hash_to_point(hash512(b"point"))
        assert RISTRETTO255.is_valid(p)
        assert RISTRETTO255.is_valid(RISTRETTO255.IDENTITY)
        assert not RISTRETTO255.is_valid(b"\xff" * 32)
        assert not RISTRETTO255.is_valid(p[:31])

    def test_hash_to_point_requires_64_bytes(self):
        with pytest.raises(ValueError, match="hash-to-group input must be 64 bytes"):
            RISTRETTO255.hash_to_point(hash256(b"point"))
