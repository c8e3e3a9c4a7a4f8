from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from flowshapes.playback import drag_plan
from flowshapes.puzzle import Puzzle
from flowshapes.solver import solve_puzzle

MAX_TIMEOUT_MS = 1_000_000

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("backend")


def _graph_payload(puzzle: Puzzle) -> Dict[str, Any]:
    graph = puzzle.graph
    return {
        "cells": [
            {
                "id": c.index,
                "pos": list(c.pos),
                "color": c.color,
                "terminal": c.is_terminal,
                "sink": c.is_sink,
                "next": c.next,
            }
            for c in graph
        ],
        "edges": [list(e) for e in graph.edges()],
    }


class ParseRequest(BaseModel):
    name: str = Field(default="puzzle.flow")
    text: str


class SolveRequest(ParseRequest):
    timeout_ms: Optional[int] = Field(default=30_000, ge=1, le=MAX_TIMEOUT_MS)
    max_steps: Optional[int] = Field(default=None, ge=1)
    origin_x: float = 0.0
    origin_y: float = 0.0


app = FastAPI(title="Flow Shapes API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/parse")
def parse_puzzle(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = Puzzle.from_text(req.text, name=req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    terminals: Dict[str, list] = {}
    for cell_id, color in puzzle.terminal_cells().items():
        terminals.setdefault(color, []).append(cell_id)
    return {
        "counts": {
            "cells": len(puzzle.graph),
            "edges": sum(1 for _ in puzzle.graph.edges()),
            "colors": len(puzzle.all_colors()),
        },
        "meta": {k: str(v) for k, v in puzzle.meta.items()},
        "terminals": terminals,
    }


@app.post("/graph")
def build_graph(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = Puzzle.from_text(req.text, name=req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"graph": _graph_payload(puzzle)}


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    try:
        puzzle = Puzzle.from_text(req.text, name=req.name)
        res = solve_puzzle(puzzle, timeout_ms=req.timeout_ms, max_steps=req.max_steps)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info("Solved %s: %s (%d steps)", req.name, res.solved, res.stats.steps)
    strokes = drag_plan(puzzle.graph, origin=(req.origin_x, req.origin_y)) if res.solved else []
    return {
        "solved": res.solved,
        "reason": res.reason,
        "cell_color": {str(k): v for k, v in res.cell_color.items()},
        "paths": res.paths,
        "strokes": [
            {"color": s.color, "events": [[e.action, e.x, e.y] for e in s.events()]} for s in strokes
        ],
        "stats": {
            "steps": res.stats.steps,
            "backtracks": res.stats.backtracks,
            "elapsed_ms": res.stats.elapsed_ms,
        },
        "graph": _graph_payload(puzzle),
    }

