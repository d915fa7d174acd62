"""
Multiplicative Multiset Hash (MuHash3072)

Items are hashed with SHA-256 and expanded with ChaCha20 into 3072-bit
integers that are multiplied together modulo the safe prime
2^3072 - 1103717. Removal multiplies a separate denominator so that no
modular inverse is needed until the value is normalized or digested.
"""

import logging
from typing import Optional, Tuple

from .errors import NonInvertibleError, SizeMismatchError
from .interface import ensure_same_kind
from .primitives import HashFunction, Input, StreamCipher, as_bytes, chacha20_keystream, hash256

logger = logging.getLogger(__name__)

PRIME_DIFF = 1103717
# 2^3072 - 1103717, the largest 3072-bit safe prime
PRIME = (1 << 3072) - PRIME_DIFF
BYTE_SIZE = 3072 // 8


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Computes gcd(a, b) and coefficients x, y such that ax + by = gcd(a, b).
    Iterative, so it is safe for 3072-bit operands.

    Example:
        >>> gcd, x, y = extended_gcd(35, 15)
        >>> assert gcd == 5
        >>> assert 35 * x + 15 * y == 5
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    return old_r, old_x, old_y


def mod_inverse(a: int, n: int) -> int:
    """
    Compute the modular inverse of `a` modulo `n`.

    Args:
        a: Number to invert
        n: Positive modulus

    Returns:
        int: x in [0, n) with (a * x) % n == 1

    Raises:
        ValueError: If n is not positive
        NonInvertibleError: If gcd(a, n) != 1 (including a ≡ 0 mod n)

    Example:
        >>> inv = mod_inverse(3, 7)
        >>> assert (3 * inv) % 7 == 1
    """
    if n <= 0:
        raise ValueError("Modulus must be positive")

    gcd, x, _ = extended_gcd(a % n, n)
    if gcd != 1:
        raise NonInvertibleError(a, n)

    return x % n


def bytes_to_num3072(data: bytes) -> int:
    """Interpret up to 384 bytes as a little-endian integer."""
    return int.from_bytes(data, "little")


def num3072_to_bytes(value: int) -> bytes:
    """Serialize an integer in [0, 2^3072) as 384 little-endian bytes."""
    return value.to_bytes(BYTE_SIZE, "little")


def data_to_num3072(data: bytes, item_hash: HashFunction = hash256, stream: StreamCipher = chacha20_keystream) -> int:
    """
    Map an item to a 3072-bit integer.

    The SHA-256 digest of the item keys ChaCha20 (zero nonce), and six
    blocks of keystream are read as a little-endian number.
    """
    return bytes_to_num3072(stream(item_hash(data), BYTE_SIZE))


class MuHash:
    """
    Multiset hash in the multiplicative group modulo a 3072-bit safe prime.

    The accumulator is the fraction numerator / denominator. Two accumulators
    representing the same multiset may hold different fractions; compare
    `normalized()` values (or digests) for semantic equality.
    """

    def __init__(
        self,
        numerator: int = 1,
        denominator: int = 1,
        *,
        item_hash: HashFunction = hash256,
        stream: StreamCipher = chacha20_keystream,
    ):
        self.numerator = numerator % PRIME
        self.denominator = denominator % PRIME
        self.item_hash = item_hash
        self.stream = stream

    @classmethod
    def default(cls) -> "MuHash":
        """Accumulator for the empty multiset."""
        return cls()

    def _derive(self, numerator: int, denominator: int = 1) -> "MuHash":
        return type(self)(numerator, denominator, item_hash=self.item_hash, stream=self.stream)

    def _element(self, item: Input) -> int:
        return data_to_num3072(as_bytes(item), self.item_hash, self.stream)

    def insert(self, *items: Input) -> "MuHash":
        numerator = self.numerator
        for item in items:
            numerator = (numerator * self._element(item)) % PRIME
        return self._derive(numerator, self.denominator)

    def remove(self, *items: Input) -> "MuHash":
        denominator = self.denominator
        for item in items:
            denominator = (denominator * self._element(item)) % PRIME
        return self._derive(self.numerator, denominator)

    def union(self, other: "MuHash") -> "MuHash":
        ensure_same_kind(self, other)
        return self._derive(
            (self.numerator * other.numerator) % PRIME,
            (self.denominator * other.denominator) % PRIME,
        )

    def difference(self, other: "MuHash") -> "MuHash":
        """
        Divide by `other`: multiply by the flipped fraction.

        No inverse is taken here; a zero component in `other` only surfaces
        as NonInvertibleError once the result is normalized or digested.
        """
        ensure_same_kind(self, other)
        return self._derive(
            (self.numerator * other.denominator) % PRIME,
            (self.denominator * other.numerator) % PRIME,
        )

    def value(self) -> int:
        """numerator * denominator^-1 mod PRIME."""
        if self.denominator == 1:
            return self.numerator
        return (self.numerator * mod_inverse(self.denominator, PRIME)) % PRIME

    def normalized(self) -> "MuHash":
        """Equivalent accumulator with denominator 1."""
        logger.debug("Normalizing MuHash accumulator")
        return self._derive(self.value())

    def is_normalized(self) -> bool:
        return self.denominator == 1

    def digest(self) -> bytes:
        """SHA-256 of the normalized value as 384 little-endian bytes."""
        return hash256(num3072_to_bytes(self.value()))

    def hexdigest(self) -> str:
        return self.digest().hex()

    def equals(self, other: "MuHash") -> bool:
        """
        Structural comparison of the fractions.

        Un-normalized accumulators for the same multiset compare unequal;
        normalize both sides first for semantic equality.
        """
        ensure_same_kind(self, other)
        if self.denominator == 1 and other.denominator == 1:
            return self.numerator == other.numerator
        return self.numerator == other.numerator and self.denominator == other.denominator

    def clone(self) -> "MuHash":
        return self._derive(self.numerator, self.denominator)

    copy = clone
    __copy__ = clone

    def to_bytes(self) -> bytes:
        """numerator || denominator, 384 little-endian bytes each."""
        return num3072_to_bytes(self.numerator) + num3072_to_bytes(self.denominator)

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "MuHash":
        """
        Restore an accumulator from numerator || denominator.

        Raises:
            SizeMismatchError: If data is not 768 bytes
            ValueError: If a component is not reduced modulo PRIME
        """
        data = bytes(data)
        if len(data) != 2 * BYTE_SIZE:
            raise SizeMismatchError("MuHash state length", 2 * BYTE_SIZE, len(data))
        numerator = bytes_to_num3072(data[:BYTE_SIZE])
        denominator = bytes_to_num3072(data[BYTE_SIZE:])
        if numerator >= PRIME or denominator >= PRIME:
            raise ValueError("MuHash components must be reduced modulo the prime")
        return cls(numerator, denominator, **kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MuHash):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        state = "normalized" if self.is_normalized() else "fraction"
        return f"MuHash({state}, numerator=0x{self.numerator.to_bytes(BYTE_SIZE, 'big').hex()[:16]}...)"
