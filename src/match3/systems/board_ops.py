from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from esper import World

from match3.components.active_switch import ActiveSwitch
from match3.components.board import BoardGrid
from match3.components.board_position import BoardPosition
from match3.components.tile import Tile
from match3.constants import MIN_MATCH_LENGTH
from match3.exceptions import GeneratorExhaustedError
from match3.types import GeneratorLike, Match, Position
from match3.utils.grid import create_grid, is_between


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    value: Any


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, grid in world.get_component(BoardGrid):
        return grid.rows, grid.cols
    return None


def in_bounds(world: World, row: int, col: int) -> bool:
    dims = board_dimensions(world)
    if not dims:
        return False
    rows, cols = dims
    return is_between(row, 0, rows - 1) and is_between(col, 0, cols - 1)


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def position_entity_map(world: World) -> Dict[Position, int]:
    return {
        Position(pos.row, pos.col): entity
        for entity, pos in world.get_component(BoardPosition)
    }


def next_tile(generator: GeneratorLike) -> Any:
    """Ask a tile generator for one value.

    Accepts objects exposing ``next()``, plain iterators, and zero-argument callables.
    """
    produce = getattr(generator, "next", None)
    if callable(produce):
        return produce()
    if hasattr(generator, "__next__"):
        try:
            return next(generator)
        except StopIteration:
            raise GeneratorExhaustedError(1) from None
    return generator()


def populate_board(world: World, generator: GeneratorLike) -> List[Position]:
    """Create one cell entity per position, filled row-major from the generator."""
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    layout = create_grid(cols, rows, lambda: next_tile(generator))
    created: List[Position] = []
    for row in range(rows):
        for col in range(cols):
            world.create_entity(
                BoardPosition(row=row, col=col),
                Tile(value=layout[row][col]),
                ActiveSwitch(active=True),
            )
            created.append(Position(row, col))
    return created


def active_tile_value_map(world: World) -> Dict[Position, Any]:
    """Return mapping of occupied positions to their tile values."""
    mapping: Dict[Position, Any] = {}
    for entity, position in world.get_component(BoardPosition):
        try:
            switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
            if not switch.active:
                continue
            tile: Tile = world.component_for_entity(entity, Tile)
        except KeyError:
            continue
        mapping[Position(position.row, position.col)] = tile.value
    return mapping


def tile_value_at(world: World, row: int, col: int) -> Any:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    if not world.component_for_entity(entity, ActiveSwitch).active:
        return None
    return world.component_for_entity(entity, Tile).value


def swap_tile_values(world: World, src: Position, dst: Position) -> bool:
    """Swap the Tile values of two occupied cells."""
    src_entity = get_entity_at(world, src[0], src[1])
    dst_entity = get_entity_at(world, dst[0], dst[1])
    if src_entity is None or dst_entity is None:
        return False
    try:
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
        if not (src_switch.active and dst_switch.active):
            return False
        src_tile: Tile = world.component_for_entity(src_entity, Tile)
        dst_tile: Tile = world.component_for_entity(dst_entity, Tile)
    except KeyError:
        return False
    src_tile.value, dst_tile.value = dst_tile.value, src_tile.value
    return True


def _scan_line(line: Sequence[Position], values: Dict[Position, Any], *, maximal: bool) -> List[Match]:
    runs: List[Match] = []
    run_value: Any = None
    count = 0
    for index, pos in enumerate(line):
        occupied = pos in values
        if occupied and count and values[pos] == run_value:
            count += 1
        else:
            if maximal and count >= MIN_MATCH_LENGTH:
                runs.append(Match(run_value, tuple(line[index - count:index])))
            run_value = values.get(pos)
            # Empty cells break a run and never start one.
            count = 1 if occupied else 0
        if not maximal and count >= MIN_MATCH_LENGTH:
            runs.append(Match(run_value, tuple(line[index - count + 1:index + 1])))
    if maximal and count >= MIN_MATCH_LENGTH:
        runs.append(Match(run_value, tuple(line[len(line) - count:])))
    return runs


def scan_runs(values: Dict[Position, Any], rows: int, cols: int, *, maximal: bool = True) -> List[Match]:
    """Detect horizontal then vertical runs of at least MIN_MATCH_LENGTH equal tiles.

    Rows are scanned top-to-bottom (each left-to-right), then columns
    left-to-right (each top-to-bottom). With ``maximal`` each contiguous group
    is reported once at full length. Without it every extension is recorded as
    the scan walks on, so a run of five yields runs of length 3, 4 and 5.
    Runs crossing at a shared cell are reported separately per axis.
    """
    runs: List[Match] = []
    for r in range(rows):
        runs.extend(_scan_line([Position(r, c) for c in range(cols)], values, maximal=maximal))
    for c in range(cols):
        runs.extend(_scan_line([Position(r, c) for r in range(rows)], values, maximal=maximal))
    return runs


def find_all_matches(world: World, *, maximal: bool = True) -> List[Match]:
    dims = board_dimensions(world)
    values = active_tile_value_map(world)
    if not dims or not values:
        return []
    rows, cols = dims
    return scan_runs(values, rows, cols, maximal=maximal)


def predict_swap_creates_match(
    world: World, src: Position, dst: Position, *, values: Dict[Position, Any] | None = None
) -> bool:
    """Return True if exchanging src/dst would leave at least one run anywhere on the board.

    The exchange happens on a copy of the value map; the world is not touched.
    """
    dims = board_dimensions(world)
    tile_map = values if values is not None else active_tile_value_map(world)
    if not dims or src not in tile_map or dst not in tile_map:
        return False
    swapped = tile_map.copy()
    swapped[src], swapped[dst] = swapped[dst], swapped[src]
    rows, cols = dims
    return bool(scan_runs(swapped, rows, cols))


def clear_positions(world: World, positions: Iterable[Position]) -> List[Position]:
    """Mark the cells at positions empty; returns the cells that were occupied."""
    entities = position_entity_map(world)
    cleared: List[Position] = []
    for pos in positions:
        entity = entities.get(Position(*pos))
        if entity is None:
            continue
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not tile_switch.active:
            continue
        tile_switch.active = False
        cleared.append(Position(*pos))
    return cleared


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Plan the downward slide that closes every gap, column by column.

    Moves within a column are ordered bottom-first so they can be applied in sequence.
    """
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    values = active_tile_value_map(world)
    moves: List[GravityMove] = []
    for col in range(cols):
        filled_rows = [row for row in range(rows) if (row, col) in values]
        first_target = rows - len(filled_rows)
        column_moves: List[GravityMove] = []
        for offset, original_row in enumerate(filled_rows):
            target_row = first_target + offset
            if original_row == target_row:
                continue
            column_moves.append(
                GravityMove(
                    source=Position(original_row, col),
                    target=Position(target_row, col),
                    value=values[Position(original_row, col)],
                )
            )
        moves.extend(reversed(column_moves))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    entities = position_entity_map(world)
    for move in moves:
        src_entity = entities.get(move.source)
        dst_entity = entities.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
        if not src_switch.active:
            continue
        src_tile: Tile = world.component_for_entity(src_entity, Tile)
        dst_tile: Tile = world.component_for_entity(dst_entity, Tile)
        dst_tile.value = src_tile.value
        dst_switch.active = True
        src_switch.active = False


def refill_inactive_tiles(world: World, generator: GeneratorLike) -> List[Position]:
    """Fill every empty cell from the generator, column by column, top to bottom.

    All values are drawn before any cell is written; if the generator runs
    dry the board is left exactly as it was.
    """
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    entities = position_entity_map(world)
    empty: List[Tuple[Position, int]] = []
    for col in range(cols):
        for row in range(rows):
            entity = entities.get(Position(row, col))
            if entity is None:
                continue
            if not world.component_for_entity(entity, ActiveSwitch).active:
                empty.append((Position(row, col), entity))
    drawn: List[Any] = []
    try:
        for _ in empty:
            drawn.append(next_tile(generator))
    except GeneratorExhaustedError as exc:
        raise GeneratorExhaustedError(
            len(empty) - len(drawn), details={"empty_cells": [pos for pos, _ in empty]}
        ) from exc
    for (pos, entity), value in zip(empty, drawn):
        world.component_for_entity(entity, Tile).value = value
        world.component_for_entity(entity, ActiveSwitch).active = True
    return [pos for pos, _ in empty]


def snapshot_rows(world: World) -> List[List[Any]]:
    """Return the grid as a list of rows; empty cells read as None."""
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    values = active_tile_value_map(world)
    return [[values.get(Position(r, c)) for c in range(cols)] for r in range(rows)]
