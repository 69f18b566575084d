import sys, os

# Ensure src and the repo root are on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

import numpy as np
import pytest

from tests.helpers import rigged_game, shape_piece, sparse_board

__all__ = [
    "rigged_game",
    "shape_piece",
    "sparse_board",
]


@pytest.fixture
def empty():
    return np.zeros((8, 8), dtype=np.int8)
