from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ..graph import CellSpec, Color

# Neighbor order tried by the search: E, S, W, N.
_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))


def token_color(tok: str) -> Optional[Color]:
    if tok == "+":
        raise ValueError("Bridge tiles ('+') are not supported")
    if len(tok) == 1 and tok.isalpha() and tok.upper() == tok:
        return tok
    return None


def check_rows(token_rows: Sequence[Sequence[str]]) -> Tuple[int, int]:
    height = len(token_rows)
    if height == 0:
        raise ValueError("token_rows is empty")
    width = len(token_rows[0])
    if any(len(r) != width for r in token_rows):
        raise ValueError("All rows must have equal width")
    return width, height


def build_square_space_from_tokens(token_rows: Sequence[Sequence[str]]) -> List[CellSpec]:
    """Build square-grid cell descriptors from a 2D token grid.

    Supported tokens:
    - '.' empty cell
    - '#' hole (no cell)
    - 'A'-'Z' terminals

    Cells are numbered row-major. Positions use a y-up coordinate system.
    """

    width, height = check_rows(token_rows)

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
        nbs = tuple(
            present[(x + dx, y + dy)] for dx, dy in _DIRECTIONS if (x + dx, y + dy) in present
        )
        specs.append(CellSpec(color=colors[i], pos=(float(x), float(-y)), neighbors=nbs))

    if not any(s.color is not None for s in specs):
        raise ValueError("No terminals found (need at least one A-Z pair)")
    return specs
