"""
Error Types for Homomorphic Hashing

All failures are deterministic and surfaced immediately to the caller.
"""


class HomomorphicHashError(Exception):
    """Base class for errors raised by homhash."""


class NonInvertibleError(HomomorphicHashError, ValueError):
    """
    Raised when a modular inverse does not exist.

    For MuHash this means the denominator shares a factor with the prime
    modulus, which only happens when the denominator is congruent to zero.
    """

    def __init__(self, value: int, modulus: int):
        self.value = value
        self.modulus = modulus
        super().__init__(
            f"value is not invertible modulo a {modulus.bit_length()}-bit modulus"
        )


class SizeMismatchError(HomomorphicHashError, ValueError):
    """Raised when fixed-size accumulators or buffers have incompatible sizes."""

    def __init__(self, what: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} mismatch: expected {expected}, got {actual}")
