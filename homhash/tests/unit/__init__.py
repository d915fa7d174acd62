"""
Unit tests for homhash components

- test_primitives.py: hashes, XOFs, ChaCha20 keystream, ristretto255 group
- test_ristretto.py: elliptic-curve multiset hash
- test_lthash.py: lattice lane-sum hash
- test_muhash.py: multiplicative hash and modular inverse
- test_matrix.py: triangular matrix hash and positional witnesses
- test_config.py / test_logging_config.py: ambient configuration
"""
