"""
Tests package for homhash

- Unit tests: each construction and its collaborators in isolation
- Integration tests: fixed interoperability vectors and algebraic laws
  checked across constructions
"""
