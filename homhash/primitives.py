"""
Cryptographic Primitives

Black-box collaborators consumed by the homomorphic hash constructions:
fixed-size digests, extendable-output functions, the ChaCha20 stream cipher
and the ristretto255 prime-order group. Each construction takes these as
injectable callables so they can be swapped without subclassing.
"""

import hashlib
from typing import Callable, Union

import pysodium
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

Input = Union[bytes, bytearray, memoryview, str]
HashFunction = Callable[[bytes], bytes]
XofFunction = Callable[[bytes, int], bytes]
StreamCipher = Callable[[bytes, int], bytes]

CHACHA20_KEY_SIZE = 32
CHACHA20_NONCE_SIZE = 12


def as_bytes(item: Input) -> bytes:
    """
    Coerce an item to bytes.

    Strings are encoded as UTF-8; bytes-like objects are copied.

    Raises:
        TypeError: If item is neither bytes-like nor str
    """
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    raise TypeError(f"items must be bytes-like or str, not {type(item).__name__}")


def hash256(data: bytes) -> bytes:
    """SHA-256 digest (32 bytes)."""
    return hashlib.sha256(data).digest()


def hash512(data: bytes) -> bytes:
    """SHA-512 digest (64 bytes)."""
    return hashlib.sha512(data).digest()


def shake128(data: bytes, length: int) -> bytes:
    """SHAKE128 output of the requested length."""
    return hashlib.shake_128(data).digest(length)


def shake256(data: bytes, length: int) -> bytes:
    """SHAKE256 output of the requested length."""
    return hashlib.shake_256(data).digest(length)


XOFS = {
    "shake128": shake128,
    "shake256": shake256,
}


def resolve_xof(name: str) -> XofFunction:
    """
    Look up an extendable-output function by name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return XOFS[name]
    except KeyError:
        raise ValueError(f"Unknown XOF {name!r}; expected one of {sorted(XOFS)}") from None


def chacha20_keystream(key: bytes, length: int, nonce: bytes = bytes(CHACHA20_NONCE_SIZE)) -> bytes:
    """
    Generate `length` bytes of ChaCha20 keystream starting at block 0.

    Equivalent to encrypting an all-zero buffer.

    Args:
        key: 32-byte key
        length: Number of keystream bytes
        nonce: 12-byte nonce (default: all zeros)

    Returns:
        bytes: The keystream
    """
    if len(key) != CHACHA20_KEY_SIZE:
        raise ValueError(f"ChaCha20 key must be {CHACHA20_KEY_SIZE} bytes")
    if len(nonce) != CHACHA20_NONCE_SIZE:
        raise ValueError(f"ChaCha20 nonce must be {CHACHA20_NONCE_SIZE} bytes")

    # cryptography takes a 32-bit little-endian block counter followed by the nonce
    full_nonce = (0).to_bytes(4, "little") + nonce
    encryptor = Cipher(algorithms.ChaCha20(key, full_nonce), mode=None).encryptor()
    return encryptor.update(bytes(length)) + encryptor.finalize()


class RistrettoGroup:
    """
    The ristretto255 prime-order group backed by libsodium.

    Points are handled in their canonical 32-byte encoding; the all-zero
    encoding is the identity.
    """

    POINT_SIZE = pysodium.crypto_core_ristretto255_BYTES
    HASH_SIZE = 64
    IDENTITY = bytes(POINT_SIZE)

    def hash_to_point(self, uniform: bytes) -> bytes:
        """
        Map uniformly random bytes onto the group (the ristretto255 one-way map).

        Args:
            uniform: 64 bytes, typically a SHA-512 digest

        Returns:
            bytes: Canonical encoding of the resulting point

        Raises:
            ValueError: If uniform is not HASH_SIZE bytes
        """
        if len(uniform) != self.HASH_SIZE:
            raise ValueError(f"hash-to-group input must be {self.HASH_SIZE} bytes")
        return pysodium.crypto_core_ristretto255_from_hash(uniform)

    def add(self, p: bytes, q: bytes) -> bytes:
        """
        Group addition of two encoded points.

        Raises:
            ValueError: If either input is not a valid point encoding
                (libsodium rejects the decoding)
        """
        return pysodium.crypto_core_ristretto255_add(p, q)

    def subtract(self, p: bytes, q: bytes) -> bytes:
        """
        Group subtraction p - q of two encoded points.

        Raises:
            ValueError: If either input is not a valid point encoding
        """
        return pysodium.crypto_core_ristretto255_sub(p, q)

    def is_valid(self, p: bytes) -> bool:
        """
        Check that p is a canonical point encoding.

        Never raises: wrong lengths and non-canonical or off-group
        encodings return False. `from_bytes` relies on this to reject
        state before any arithmetic touches it.
        """
        if len(p) != self.POINT_SIZE:
            return False
        if p == self.IDENTITY:
            return True
        return bool(pysodium.crypto_core_ristretto255_is_valid_point(p))


RISTRETTO255 = RistrettoGroup()
