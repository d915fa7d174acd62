"""
Shared Test Fixtures
"""

import logging
from pathlib import Path
from typing import List

import pytest


@pytest.fixture(scope="session")
def vectors_dir() -> Path:
    """Directory holding fixed interoperability vectors."""
    return Path(__file__).parent / "vectors"


@pytest.fixture
def fruits() -> List[bytes]:
    return [b"apple", b"banana", b"kiwi"]


@pytest.fixture
def restore_root_logger():
    """Drop handlers installed by the test and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(level)
