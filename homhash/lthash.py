"""
Lattice Multiset Hash (LtHash16)

Each item is expanded with an extendable-output function into N
little-endian 16-bit values that are added lane-wise into the accumulator.
Every lane is an independent ring Z/65536Z: no carry or borrow ever crosses
lanes. The digest is the raw lane array (2*N bytes), which trades output
size for needing no algebraic group.
"""

import logging
import struct
from typing import List, Optional, Sequence

from .config import get_settings
from .errors import SizeMismatchError
from .interface import ensure_same_kind
from .primitives import Input, XofFunction, as_bytes, resolve_xof, shake128

logger = logging.getLogger(__name__)

# 1024 lanes of 16 bits give a 2 KiB state; anything smaller isn't secure enough
SUM_SIZE = 1024
HASH_SIZE = SUM_SIZE * 2
LANE_MASK = 0xFFFF


def lanes_from_bytes(data: bytes) -> List[int]:
    """Interpret data as little-endian 16-bit lanes."""
    if len(data) % 2:
        raise ValueError("lane buffer length must be even")
    return list(struct.unpack(f"<{len(data) // 2}H", data))


def lanes_to_bytes(lanes: Sequence[int]) -> bytes:
    return struct.pack(f"<{len(lanes)}H", *lanes)


class LtHash16:
    """
    Lattice-based multiset hash with 16-bit lanes.

    Args:
        accumulator: Initial lane values (defaults to all zeros)
        xof: Extendable-output function expanding items (defaults to SHAKE128)
        lanes: Lane count, used only when accumulator is not given
    """

    def __init__(
        self,
        accumulator: Optional[Sequence[int]] = None,
        xof: XofFunction = shake128,
        *,
        lanes: int = SUM_SIZE,
    ):
        if accumulator is None:
            if lanes <= 0:
                raise ValueError("lanes must be positive")
            accumulator = [0] * lanes
        self.accumulator = [value & LANE_MASK for value in accumulator]
        self.xof = xof

    @classmethod
    def default(cls) -> "LtHash16":
        """Empty accumulator using the configured lane count and XOF."""
        settings = get_settings()
        return cls(xof=resolve_xof(settings.lthash_xof), lanes=settings.lthash_lanes)

    @property
    def lanes(self) -> int:
        return len(self.accumulator)

    @property
    def hash_size(self) -> int:
        """Bytes of XOF output consumed per item."""
        return self.lanes * 2

    def _expand(self, item: Input) -> List[int]:
        expanded = self.xof(as_bytes(item), self.hash_size)
        if len(expanded) != self.hash_size:
            raise SizeMismatchError("XOF output length", self.hash_size, len(expanded))
        return lanes_from_bytes(expanded)

    def _add_one(self, values: Sequence[int]) -> None:
        acc = self.accumulator
        for i, y in enumerate(values):
            acc[i] = (acc[i] + y) & LANE_MASK

    def _remove_one(self, values: Sequence[int]) -> None:
        acc = self.accumulator
        for i, y in enumerate(values):
            acc[i] = (acc[i] - y) & LANE_MASK

    def _check_lanes(self, other: "LtHash16") -> None:
        ensure_same_kind(self, other)
        if other.lanes != self.lanes:
            logger.warning("Rejected LtHash16 combination: %d lanes vs %d", self.lanes, other.lanes)
            raise SizeMismatchError("lane count", self.lanes, other.lanes)

    def insert(self, *items: Input) -> "LtHash16":
        out = self.clone()
        for item in items:
            out._add_one(self._expand(item))
        return out

    def remove(self, *items: Input) -> "LtHash16":
        out = self.clone()
        for item in items:
            out._remove_one(self._expand(item))
        return out

    def union(self, other: "LtHash16") -> "LtHash16":
        self._check_lanes(other)
        out = self.clone()
        out._add_one(other.accumulator)
        return out

    def difference(self, other: "LtHash16") -> "LtHash16":
        self._check_lanes(other)
        out = self.clone()
        out._remove_one(other.accumulator)
        return out

    def digest(self) -> bytes:
        """Little-endian serialization of every lane (2 * lanes bytes)."""
        return lanes_to_bytes(self.accumulator)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def equals(self, other: "LtHash16") -> bool:
        """
        Byte comparison of the lane arrays.

        Raises:
            SizeMismatchError: If the lane counts differ
        """
        # Not secret-dependent, a plain comparison is fine
        self._check_lanes(other)
        return self.digest() == other.digest()

    def is_empty(self) -> bool:
        return not any(self.accumulator)

    def clone(self) -> "LtHash16":
        return type(self)(list(self.accumulator), self.xof)

    copy = clone
    __copy__ = clone

    def to_bytes(self) -> bytes:
        return self.digest()

    @classmethod
    def from_bytes(cls, data: bytes, xof: XofFunction = shake128) -> "LtHash16":
        """
        Restore an accumulator from its lane array.

        Raises:
            SizeMismatchError: If data is empty or of odd length
        """
        data = bytes(data)
        if not data or len(data) % 2:
            raise SizeMismatchError("lane buffer length", HASH_SIZE, len(data))
        logger.debug("Restored LtHash16 accumulator with %d lanes", len(data) // 2)
        return cls(lanes_from_bytes(data), xof)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LtHash16):
            return NotImplemented
        return self.lanes == other.lanes and self.equals(other)

    def __repr__(self) -> str:
        return f"LtHash16(lanes={self.lanes}, digest={self.hexdigest()[:16]}...)"
