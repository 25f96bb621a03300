import pytest

from match3.exceptions import GeneratorExhaustedError
from match3.systems.board_ops import (GravityMove, apply_gravity_moves, clear_positions,
                                      compute_gravity_moves, next_tile, populate_board, refill_inactive_tiles,
                                      snapshot_rows)
from match3.world import create_world
from tests.helpers import ScriptedGenerator


def world_from(layout, generator=None):
    world = create_world(rows=len(layout), cols=len(layout[0]))
    populate_board(world, generator or ScriptedGenerator([v for row in layout for v in row]))
    return world


def test_gravity_slides_tiles_down_preserving_order():
    world = world_from([
        ["a", "x"],
        ["b", "y"],
        ["c", "z"],
        ["d", "w"],
    ])
    clear_positions(world, [(1, 0), (3, 0)])
    moves = compute_gravity_moves(world)
    assert moves == [
        GravityMove(source=(2, 0), target=(3, 0), value="c"),
        GravityMove(source=(0, 0), target=(2, 0), value="a"),
    ]
    apply_gravity_moves(world, moves)
    assert snapshot_rows(world) == [
        [None, "x"],
        [None, "y"],
        ["a", "z"],
        ["c", "w"],
    ]


def test_gravity_leaves_no_empty_cell_below_a_tile():
    world = world_from([
        ["a", "b", "c"],
        ["d", "e", "f"],
        ["g", "h", "i"],
        ["j", "k", "l"],
    ])
    clear_positions(world, [(3, 0), (2, 0), (1, 1), (3, 1), (0, 2)])
    apply_gravity_moves(world, compute_gravity_moves(world))
    rows = snapshot_rows(world)
    for col in range(3):
        column = [rows[r][col] for r in range(4)]
        seen_tile = False
        for value in column:
            if value is not None:
                seen_tile = True
            else:
                assert not seen_tile, column
    assert [rows[r][0] for r in range(4)] == [None, None, "a", "d"]
    assert [rows[r][1] for r in range(4)] == [None, None, "b", "h"]
    assert [rows[r][2] for r in range(4)] == [None, "f", "i", "l"]


def test_no_moves_when_gaps_are_already_on_top():
    world = world_from([["a", "b"], ["c", "d"]])
    clear_positions(world, [(0, 0), (0, 1)])
    assert compute_gravity_moves(world) == []


def test_refill_fills_top_down_per_column():
    generator = ScriptedGenerator(["a", "b", "c", "d", "e", "f"])
    world = world_from([["a", "b"], ["c", "d"], ["e", "f"]], generator)
    clear_positions(world, [(0, 0), (1, 0), (0, 1)])
    spawned = refill_inactive_tiles(world, generator)
    assert spawned == [(0, 0), (1, 0), (0, 1)]
    assert snapshot_rows(world) == [
        ["fresh6", "fresh8"],
        ["fresh7", "d"],
        ["e", "f"],
    ]


def test_refill_from_exhausted_iterator_writes_nothing():
    source = iter(["a", "b", "c", "d", "z"])
    world = world_from([["a", "b"], ["c", "d"]], source)
    clear_positions(world, [(0, 0), (0, 1)])
    with pytest.raises(GeneratorExhaustedError) as excinfo:
        refill_inactive_tiles(world, source)
    assert excinfo.value.needed == 1
    assert excinfo.value.details["empty_cells"] == [(0, 0), (0, 1)]
    assert snapshot_rows(world) == [
        [None, None],
        ["c", "d"],
    ]


def test_next_tile_reports_exhausted_iterator():
    with pytest.raises(GeneratorExhaustedError):
        next_tile(iter([]))
