"""
Elliptic-Curve Multiset Hash

Accumulates items as points of the ristretto255 group: each item is hashed
with SHA-512, mapped onto the group, and added to (or subtracted from) a
running point. The digest is SHA-256 of the point's canonical encoding.
"""

import logging
from typing import Optional

from .errors import SizeMismatchError
from .interface import ensure_same_kind
from .primitives import RISTRETTO255, HashFunction, Input, RistrettoGroup, as_bytes, hash256, hash512

logger = logging.getLogger(__name__)

DIGEST_SIZE = 32


class RistrettoMultisetHash:
    """
    Multiset hash over the ristretto255 group.

    Insertion and removal are group addition and subtraction, so they are
    mutual inverses and the result is independent of insertion order.
    """

    def __init__(
        self,
        accumulator: Optional[bytes] = None,
        *,
        group: RistrettoGroup = RISTRETTO255,
        item_hash: HashFunction = hash512,
        final_hash: HashFunction = hash256,
    ):
        self.group = group
        self.item_hash = item_hash
        self.final_hash = final_hash
        self.accumulator = group.IDENTITY if accumulator is None else bytes(accumulator)

    @classmethod
    def default(cls) -> "RistrettoMultisetHash":
        """Accumulator for the empty multiset."""
        return cls()

    def _derive(self, accumulator: bytes) -> "RistrettoMultisetHash":
        return type(self)(
            accumulator,
            group=self.group,
            item_hash=self.item_hash,
            final_hash=self.final_hash,
        )

    def _point(self, item: Input) -> bytes:
        return self.group.hash_to_point(self.item_hash(as_bytes(item)))

    def insert(self, *items: Input) -> "RistrettoMultisetHash":
        accumulator = self.accumulator
        for item in items:
            accumulator = self.group.add(accumulator, self._point(item))
        return self._derive(accumulator)

    def remove(self, *items: Input) -> "RistrettoMultisetHash":
        accumulator = self.accumulator
        for item in items:
            accumulator = self.group.subtract(accumulator, self._point(item))
        return self._derive(accumulator)

    def union(self, other: "RistrettoMultisetHash") -> "RistrettoMultisetHash":
        ensure_same_kind(self, other)
        return self._derive(self.group.add(self.accumulator, other.accumulator))

    def difference(self, other: "RistrettoMultisetHash") -> "RistrettoMultisetHash":
        ensure_same_kind(self, other)
        return self._derive(self.group.subtract(self.accumulator, other.accumulator))

    def digest(self) -> bytes:
        """SHA-256 of the canonical point encoding (32 bytes)."""
        return self.final_hash(self.accumulator)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def equals(self, other: "RistrettoMultisetHash") -> bool:
        # Canonical encodings are unique, so byte equality is point equality
        ensure_same_kind(self, other)
        return self.accumulator == other.accumulator

    def is_empty(self) -> bool:
        return self.accumulator == self.group.IDENTITY

    def clone(self) -> "RistrettoMultisetHash":
        return self._derive(self.accumulator)

    copy = clone
    __copy__ = clone

    def to_bytes(self) -> bytes:
        """The canonical 32-byte point encoding."""
        return self.accumulator

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "RistrettoMultisetHash":
        """
        Restore an accumulator from its point encoding.

        Raises:
            SizeMismatchError: If data is not a point-sized buffer
            ValueError: If data is not a valid ristretto255 encoding
        """
        group = kwargs.get("group", RISTRETTO255)
        data = bytes(data)
        if len(data) != group.POINT_SIZE:
            raise SizeMismatchError("point encoding length", group.POINT_SIZE, len(data))
        if not group.is_valid(data):
            raise ValueError("data is not a valid ristretto255 point encoding")
        logger.debug("Restored ristretto accumulator from %d bytes", len(data))
        return cls(data, **kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RistrettoMultisetHash):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        return f"RistrettoMultisetHash(digest={self.hexdigest()[:16]}...)"
