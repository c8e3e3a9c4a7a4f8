# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "flowshapes" and "backend" import without installing.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flowshapes.puzzle import Puzzle  # noqa: E402

# Flow Free "Regular Pack" level 1.
CLASSIC_5X5 = """\
# name: classic 5x5
R.G.Y
..B.O
.....
.G.Y.
.RBO.
"""


@pytest.fixture
def classic_text() -> str:
    return CLASSIC_5X5


@pytest.fixture
def classic_puzzle() -> Puzzle:
    return Puzzle.from_flow_text(CLASSIC_5X5)


@pytest.fixture
def grid():
    """Build a square puzzle from compact rows, e.g. grid("A.A")."""

    def build(*rows: str) -> Puzzle:
        return Puzzle.from_grid_tokens([list(r) for r in rows])

    return build
