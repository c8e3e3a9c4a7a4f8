from flowshapes.playback import DragStroke, PointerEvent, drag_plan, extract_paths
from flowshapes.solver import solve_puzzle


def test_extract_paths_before_solving_is_empty(grid):
    assert extract_paths(grid("A.A").graph) == {}


def test_drag_plan_follows_each_path(grid):
    puzzle = grid("AB", "AB")
    assert solve_puzzle(puzzle).solved
    strokes = drag_plan(puzzle.graph, origin=(100.0, 50.0))
    assert [s.color for s in strokes] == ["A", "B"]
    a = strokes[0]
    assert a.points[0] == (100.0, 50.0)
    assert a.points[-1] == (100.0, 49.0)


def test_stroke_events_press_drag_release():
    stroke = DragStroke(color="R", points=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])
    assert list(stroke.events()) == [
        PointerEvent("move", 0.0, 0.0),
        PointerEvent("down", 0.0, 0.0),
        PointerEvent("move", 1.0, 0.0),
        PointerEvent("move", 1.0, 1.0),
        PointerEvent("up", 1.0, 1.0),
    ]
    assert list(DragStroke(color="R", points=[]).events()) == []
