"""
Shared Contract for Homomorphic Hashers

An "incremental" (set homomorphic) hash function based on the
randomize-then-combine paradigm of Bellare and Micciancio
(https://cseweb.ucsd.edu/~mihir/papers/inc-hash.pdf).

Every operation returns a new accumulator and leaves its inputs untouched.
"""

from typing import Protocol, TypeVar, runtime_checkable

from .primitives import Input

H = TypeVar("H", bound="HomomorphicHasher")


@runtime_checkable
class HomomorphicHasher(Protocol):
    """Operations shared by the multiset hash constructions."""

    def insert(self: H, *items: Input) -> H:
        """Hash each item and add it to a copy of the accumulator."""
        ...

    def remove(self: H, *items: Input) -> H:
        """Hash each item and remove it from a copy of the accumulator."""
        ...

    def union(self: H, other: H) -> H:
        """Combine two accumulators of the same construction."""
        ...

    def difference(self: H, other: H) -> H:
        """Remove everything accumulated in `other`."""
        ...

    def digest(self) -> bytes:
        """Finalized fixed-size fingerprint."""
        ...

    def equals(self: H, other: H) -> bool:
        ...

    def clone(self: H) -> H:
        ...


def ensure_same_kind(left: object, right: object) -> None:
    """
    Reject combining accumulators of different constructions.

    Raises:
        TypeError: If `right` is not an instance of `left`'s class
    """
    if not isinstance(right, type(left)):
        raise TypeError(
            f"cannot combine {type(left).__name__} with {type(right).__name__}"
        )
