"""
Matrix (Positional) Hash

An order-sensitive commitment built from products of upper-triangular
matrices over Z/256Z. Each item is hashed with SHA-256 and the 32 digest
bytes fill the strictly upper part of a 9x9 matrix whose diagonal is all
ones except for a zero in the middle slot. The accumulator is the running
product of these matrices, so `concat(left, right)` commits to the
sequence `left` followed by `right`.

Matrices are stored in compressed column-major order: entry (i, j) with
i <= j lives at index j * (j + 1) / 2 + i.

Because the product is not commutative and the item matrices are singular,
there is no `remove`, `union` or `difference`.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .errors import SizeMismatchError
from .interface import ensure_same_kind
from .primitives import HashFunction, Input, as_bytes, hash256

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 32
MODULUS = 256


def size(u: int, diagonal: bool = True) -> int:
    """
    Smallest matrix order n able to hold u compressed entries.

    With the diagonal: n(n + 1) / 2 >= u. Without: n(n - 1) / 2 >= u.
    """
    if u < 0:
        raise ValueError("entry count must be non-negative")
    offset = 1 if diagonal else -1
    n = 0
    while n * (n + offset) // 2 < u:
        n += 1
    return n


def _index(i: int, j: int) -> int:
    return j * (j + 1) // 2 + i


def multiply(a: Sequence[int], b: Sequence[int], modulus: int = MODULUS) -> List[int]:
    """
    Product of two compressed upper-triangular matrices, entries mod `modulus`.

    Raises:
        SizeMismatchError: If the matrices have different orders
    """
    if len(a) != len(b):
        raise SizeMismatchError("compressed matrix length", len(a), len(b))
    n = size(len(a), True)
    result = [0] * len(a)
    for j in range(n):
        for i in range(j + 1):
            total = 0
            for k in range(i, j + 1):
                total += a[_index(i, k)] * b[_index(k, j)]
            result[_index(i, j)] = total % modulus
    return result


def to_upper_triangular(values: Sequence[int], singular: bool = True) -> List[int]:
    """
    Build a compressed upper-triangular matrix from off-diagonal values.

    Values fill the strictly upper part column by column; leftover slots are
    zero. Diagonal entries are one, except the middle one (n // 2) which is
    zero when `singular` is set.
    """
    n = size(len(values), False)
    middle = n // 2
    remaining = iter(values)
    output = []
    for j in range(n):
        for i in range(j + 1):
            if i == j:
                output.append(0 if singular and i == middle else 1)
            else:
                output.append(next(remaining, 0))
    return output


def from_upper_triangular(matrix: Sequence[int]) -> List[int]:
    """Off-diagonal entries of a compressed matrix, in storage order."""
    n = size(len(matrix), True)
    return [matrix[_index(i, j)] for j in range(n) for i in range(j)]


def identity(entries: int = DEFAULT_SIZE) -> List[int]:
    """Compressed identity matrix with room for `entries` off-diagonal values."""
    return to_upper_triangular([0] * entries, singular=False)


class MatrixHash:
    """
    Ordered hash over products of triangular matrices mod 256.

    Args:
        accumulator: Compressed matrix (defaults to the identity)
        item_hash: Hash producing DEFAULT_SIZE bytes per item
    """

    def __init__(self, accumulator: Optional[Sequence[int]] = None, item_hash: HashFunction = hash256):
        if accumulator is None:
            accumulator = identity(DEFAULT_SIZE)
        self.accumulator = [value % MODULUS for value in accumulator]
        self.item_hash = item_hash

    @classmethod
    def default(cls) -> "MatrixHash":
        """Accumulator for the empty sequence (the identity matrix)."""
        return cls()

    @property
    def order(self) -> int:
        return size(len(self.accumulator), True)

    def _item_matrix(self, item: Input) -> List[int]:
        return to_upper_triangular(self.item_hash(as_bytes(item)))

    def insert(self, *items: Input) -> "MatrixHash":
        """Right-multiply by each item's matrix, in argument order."""
        accumulator = self.accumulator
        for item in items:
            accumulator = multiply(accumulator, self._item_matrix(item))
        return type(self)(accumulator, self.item_hash)

    def concat(self, other: "MatrixHash") -> "MatrixHash":
        """
        Commit to this sequence followed by `other`'s.

        Not commutative: a.concat(b) and b.concat(a) generally differ.

        Raises:
            SizeMismatchError: If the matrix orders differ
        """
        ensure_same_kind(self, other)
        if len(other.accumulator) != len(self.accumulator):
            logger.warning("Rejected matrix concat: order %d vs %d", self.order, other.order)
            raise SizeMismatchError("matrix order", self.order, other.order)
        return type(self)(multiply(self.accumulator, other.accumulator), self.item_hash)

    def digest(self) -> bytes:
        """First DEFAULT_SIZE off-diagonal entries as bytes."""
        return bytes(from_upper_triangular(self.accumulator)[:DEFAULT_SIZE])

    def hexdigest(self) -> str:
        return self.digest().hex()

    def equals(self, other: "MatrixHash") -> bool:
        ensure_same_kind(self, other)
        return self.accumulator == other.accumulator

    def clone(self) -> "MatrixHash":
        return type(self)(list(self.accumulator), self.item_hash)

    copy = clone
    __copy__ = clone

    def to_bytes(self) -> bytes:
        """The compressed matrix, one byte per entry (diagonal included)."""
        return bytes(self.accumulator)

    @classmethod
    def from_bytes(cls, data: bytes, item_hash: HashFunction = hash256) -> "MatrixHash":
        """
        Restore an accumulator from its compressed matrix.

        Raises:
            SizeMismatchError: If the length is not a triangular number
        """
        data = bytes(data)
        n = size(len(data), True)
        if not data or n * (n + 1) // 2 != len(data):
            raise SizeMismatchError("compressed matrix length", n * (n + 1) // 2, len(data))
        return cls(list(data), item_hash)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixHash):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        return f"MatrixHash(order={self.order}, digest={self.hexdigest()[:16]}...)"


@dataclass
class MatrixWitness:
    """
    Evidence that `item` sits between two known segments of a sequence.

    `left` accumulates everything before the item and `right` everything
    after it. Anyone holding the committed root can check the claim.
    """

    left: MatrixHash
    item: bytes
    right: MatrixHash

    def prove(self) -> MatrixHash:
        """Rebuild the full accumulator as left * item * right."""
        return self.left.insert(self.item).concat(self.right)

    def verify(self, root: Union[MatrixHash, bytes]) -> bool:
        """Check the rebuilt accumulator against a committed root or its digest."""
        expected = root.digest() if isinstance(root, MatrixHash) else bytes(root)
        return hmac.compare_digest(self.prove().digest(), expected)
