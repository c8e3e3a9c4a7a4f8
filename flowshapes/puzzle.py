from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .graph import CellGraph, CellId, CellSpec, Color
from .spaces.hex import build_hex_space_from_tokens
from .spaces.square import build_square_space_from_tokens

_BUILDERS = {
    "square": build_square_space_from_tokens,
    "hex": build_hex_space_from_tokens,
}


@dataclass
class Puzzle:
    """A Flow puzzle defined on a cell graph.

    - `graph` holds the cells (in search order), their adjacency and, once
      solved, the links of the solution.
    - `meta` carries free-form directives from the source file.
    """

    graph: CellGraph
    meta: Dict[str, Any] = field(default_factory=dict)

    def all_colors(self) -> List[Color]:
        return self.graph.colors()

    def terminal_cells(self) -> Dict[CellId, Color]:
        return self.graph.terminal_cells()

    @staticmethod
    def from_specs(specs: Sequence[CellSpec], *, meta: Optional[Dict[str, Any]] = None) -> "Puzzle":
        return Puzzle(graph=CellGraph.from_specs(specs), meta=meta or {})

    @staticmethod
    def from_file(path: str | Path) -> "Puzzle":
        path = Path(path)
        if path.suffix.lower() == ".json":
            return Puzzle.from_json(path.read_text(encoding="utf-8"))
        return Puzzle.from_flow_text(path.read_text(encoding="utf-8"), source_name=str(path))

    @staticmethod
    def from_text(text: str, *, name: str = "puzzle.flow") -> "Puzzle":
        if name.lower().endswith(".json"):
            return Puzzle.from_json(text)
        return Puzzle.from_flow_text(text, source_name=name)

    @staticmethod
    def from_json(text: str) -> "Puzzle":
        obj = json.loads(text)
        meta = dict(obj.get("meta", {}))

        if "cells" in obj:
            specs: List[CellSpec] = []
            for i, cd in enumerate(obj["cells"]):
                pos = cd.get("pos", [0.0, 0.0])
                if len(pos) < 2:
                    raise ValueError(f"Cell {i} needs a 2-D position")
                color = cd.get("color")
                specs.append(
                    CellSpec(
                        color=None if color is None else str(color),
                        pos=(float(pos[0]), float(pos[1])),
                        neighbors=tuple(cd.get("neighbors", [])),
                    )
                )
            return Puzzle.from_specs(specs, meta=meta)

        space = obj.get("space", {})
        kind = space.get("type")
        if kind in _BUILDERS:
            return Puzzle.from_grid_tokens(space["grid"], kind=kind, meta=meta)

        raise ValueError(f"Unsupported puzzle JSON (need 'cells' or a square/hex 'space'), got type {kind!r}")

    @staticmethod
    def from_flow_text(text: str, *, source_name: str = "<text>") -> "Puzzle":
        grid_lines: List[str] = []
        meta: Dict[str, Any] = {"source": source_name}
        board_type = "square"

        for ln in text.splitlines():
            raw = ln.strip()
            if not raw:
                continue
            # `#` is also a grid token meaning "hole":
            # - "# key: value" lines are directives/metadata.
            # - "# " (hash + whitespace) without ":" is a comment.
            # - "#" not followed by whitespace starts a grid row ("#B#").
            if raw.startswith("#"):
                hdr = raw[1:].strip()
                if ":" in hdr:
                    k, v = [x.strip() for x in hdr.split(":", 1)]
                    if k.lower() == "type":
                        board_type = v.lower()
                    else:
                        meta[k] = v
                    continue
                if len(raw) >= 2 and raw[1].isspace():
                    continue
            grid_lines.append(raw)

        # Whitespace-separated tokens if a row contains spaces, else one token per character.
        token_rows: List[List[str]] = []
        for row in grid_lines:
            toks = row.split() if " " in row else list(row)
            if toks:
                token_rows.append(toks)

        if not token_rows:
            raise ValueError("No grid found in .flow file")

        width = max(len(r) for r in token_rows)
        for r in token_rows:
            if len(r) != width:
                raise ValueError("All grid rows must have the same width in .flow")

        if board_type not in _BUILDERS:
            raise ValueError(f"Unsupported '# type: {board_type}' in .flow (supported: square, hex)")
        return Puzzle.from_grid_tokens(token_rows, kind=board_type, meta=meta)

    @staticmethod
    def from_grid_tokens(
        token_rows: Sequence[Sequence[str]],
        *,
        kind: str = "square",
        meta: Optional[Dict[str, Any]] = None,
    ) -> "Puzzle":
        specs = _BUILDERS[kind](token_rows)
        meta = dict(meta or {})
        meta.setdefault("type", kind)
        return Puzzle.from_specs(specs, meta=meta)
