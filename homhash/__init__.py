"""
Homomorphic (Incremental) Multiset Hashing

This package provides fixed-size fingerprints of multisets of byte strings
that can be updated one element at a time and combined without rehashing:

- RistrettoMultisetHash: point accumulation on the ristretto255 group
- LtHash16: lane-wise sums of 16-bit values (lattice construction)
- MuHash: multiplicative group modulo a 3072-bit safe prime
- MatrixHash: order-sensitive products of triangular matrices mod 256
"""

from .config import HomHashSettings, get_settings
from .errors import HomomorphicHashError, NonInvertibleError, SizeMismatchError
from .interface import HomomorphicHasher
from .logging_config import get_logger, setup_logging
from .lthash import LtHash16
from .matrix import MatrixHash, MatrixWitness
from .muhash import MuHash, mod_inverse
from .ristretto import RistrettoMultisetHash

__version__ = "0.1.0"
__all__ = [
    "HomHashSettings",
    "get_settings",
    "HomomorphicHashError",
    "NonInvertibleError",
    "SizeMismatchError",
    "HomomorphicHasher",
    "get_logger",
    "setup_logging",
    "LtHash16",
    "MatrixHash",
    "MatrixWitness",
    "MuHash",
    "mod_inverse",
    "RistrettoMultisetHash",
]
