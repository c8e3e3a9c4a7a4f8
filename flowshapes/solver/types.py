from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..graph import CellId, Color


@dataclass
class SolveStats:
    steps: int = 0
    backtracks: int = 0
    elapsed_ms: float = 0.0


@dataclass
class SolveResult:
    solved: bool
    cell_color: Dict[CellId, Optional[Color]]  # None => neutral
    paths: Dict[Color, List[CellId]]  # ordered cell ids from source->sink
    reason: Optional[str] = None
    stats: SolveStats = field(default_factory=SolveStats)
