import pytest

from match3 import Board, BoardConfigurationError, create_board
from match3.components.board import BoardGrid
from match3.constants import DEFAULT_COLS, DEFAULT_ROWS
from match3.events.bus import EVENT_MATCH_FOUND
from tests.helpers import EventRecorder, ScriptedGenerator, scripted_board


def test_board_fills_every_cell_row_major():
    generator = ScriptedGenerator(list("abcdef"))
    board = Board(generator, 3, 2)
    assert generator.calls == 6
    assert board.width == 3 and board.height == 2
    assert board.rows() == [["a", "b", "c"], ["d", "e", "f"]]


def test_board_component_exists():
    board, _ = scripted_board([["a", "b"], ["c", "d"], ["e", "f"]])
    grids = list(board.world.get_component(BoardGrid))
    assert grids, 'BoardGrid component missing'
    _, comp = grids[0]
    assert comp.rows == 3 and comp.cols == 2


def test_initial_runs_are_left_in_place():
    board, generator = scripted_board([
        ["A", "A", "A"],
        ["B", "C", "D"],
    ])
    recorder = EventRecorder()
    board.add_listener(recorder)
    found = []
    board.event_bus.subscribe(EVENT_MATCH_FOUND, lambda s, **k: found.append(k))
    assert board.rows()[0] == ["A", "A", "A"]
    assert len(board.find_matches()) == 1
    assert generator.calls == 6
    assert recorder.events == []
    assert found == []


def test_callable_and_iterator_generators_are_accepted():
    board = Board(lambda: "x", 2, 2)
    assert board.rows() == [["x", "x"], ["x", "x"]]
    board = Board(iter("wxyz"), 2, 2)
    assert board.rows() == [["w", "x"], ["y", "z"]]


def test_rejects_non_positive_or_non_integer_dimensions():
    generator = ScriptedGenerator()
    for width, height in ((0, 3), (3, 0), (-1, 2), (2.5, 2), (True, 2), ("3", 3)):
        with pytest.raises(BoardConfigurationError):
            Board(generator, width, height)
    assert generator.calls == 0


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError) as excinfo:
        Board(ScriptedGenerator(), 4, 0)
    assert excinfo.value.parameter == "height"
    assert excinfo.value.details["value"] == 0


def test_rejects_generator_without_next():
    with pytest.raises(BoardConfigurationError):
        Board(42, 3, 3)


def test_create_board_uses_default_dimensions():
    board = create_board(ScriptedGenerator())
    assert board.height == DEFAULT_ROWS
    assert board.width == DEFAULT_COLS
    assert len(board.positions()) == DEFAULT_ROWS * DEFAULT_COLS
    board = create_board(ScriptedGenerator(), rows=2, cols=5)
    assert (board.height, board.width) == (2, 5)
