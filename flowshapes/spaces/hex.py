from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from ..graph import CellSpec, Color
from .square import check_rows, token_color


def _neighbors_xy(x: int, y: int) -> List[Tuple[int, int]]:
    # odd-r offset neighbors
    if y % 2 == 0:
        return [
            (x + 1, y),  # E
            (x - 1, y),  # W
            (x, y - 1),  # NE
            (x - 1, y - 1),  # NW
            (x, y + 1),  # SE
            (x - 1, y + 1),  # SW
        ]
    return [
        (x + 1, y),  # E
        (x - 1, y),  # W
        (x + 1, y - 1),  # NE
        (x, y - 1),  # NW
        (x + 1, y + 1),  # SE
        (x, y + 1),  # SW
    ]


def build_hex_space_from_tokens(token_rows: Sequence[Sequence[str]]) -> List[CellSpec]:
    """Build hex-grid cell descriptors from a 2D token grid.

    We interpret the provided rectangular grid as an **odd-r offset** hex layout:
    - rows are offset horizontally by 0.5 for odd y
    - each cell has up to 6 neighbors

    Tokens are the same as for square grids.
    """

    width, height = check_rows(token_rows)
    y_step = math.sqrt(3) / 2.0

    present: Dict[Tuple[int, int], int] = {}
    colors: List[Optional[Color]] = []
    coords: List[Tuple[int, int]] = []
    for y in range(height):
        for x in range(width):
            tok = str(token_rows[y][x])
            if tok == "#":
                continue
            present[(x, y)] = len(coords)
            coords.append((x, y))
            colors.append(token_color(tok))

    specs: List[CellSpec] = []
    for i, (x, y) in enumerate(coords):
        nbs = tuple(present[p] for p in _neighbors_xy(x, y) if p in present)
        # Odd-r offset positioning (nice for plotting).
        pos = (float(x) + (0.5 if (y % 2) else 0.0), float(-y) * y_step)
        specs.append(CellSpec(color=colors[i], pos=pos, neighbors=nbs))

    if not any(s.color is not None for s in specs):
        raise ValueError("No terminals found (need at least one A-Z pair)")
    return specs
