"""Tests for the BoardState module."""

import json

import pytest

from ouroboros.board import BoardState, DeathCause, Died, Grew, Moved
from ouroboros.errors import BoardFullError, InvalidConfigError
from ouroboros.grid import CellType
from ouroboros.random_source import RandomSource
from ouroboros.vector import Direction, Vector


def _board(size: int = 5, seed: int = 0) -> BoardState:
    return BoardState(size, RandomSource(seed))


def _serpentine(size: int) -> list[Vector]:
    """Every cell of the grid as one connected path, row by row."""
    cells = []
    for y in range(size):
        xs = range(size) if y % 2 == 0 else range(size - 1, -1, -1)
        cells.extend(Vector(x, y) for x in xs)
    return cells


class TestBoardInit:
    @pytest.mark.parametrize("size", [4, 6, 3, 1, 0, -5])
    def test_invalid_sizes_rejected(self, size):
        with pytest.raises(InvalidConfigError):
            BoardState(size)

    def test_non_integer_size_rejected(self):
        with pytest.raises(InvalidConfigError, match="integer"):
            BoardState(7.0)  # type: ignore[arg-type]

    @pytest.mark.parametrize("size", [5, 7, 9, 35])
    @pytest.mark.parametrize("seed", range(5))
    def test_fresh_body(self, size, seed):
        board = _board(size, seed)
        body = list(board.body)
        assert len(body) == 3
        assert len(set(body)) == 3
        assert all(board.grid.in_bounds(cell) for cell in body)
        assert board.grid.in_bounds(board.target)
        assert board.target not in body

    def test_body_straddles_center_along_heading(self):
        board = _board(7, seed=1)
        center = Vector(3, 3)
        step = board.heading.vector
        assert list(board.body) == [center - step, center, center + step]
        assert board.head == center + step
        assert board.heading.is_movement

    def test_headings_are_randomized(self):
        headings = {_board(5, seed).heading for seed in range(40)}
        assert headings == set(Direction.movements())

    def test_grid_mirrors_body_and_target(self):
        board = _board(9, seed=2)
        assert board.grid.count(CellType.BODY) == 3
        assert board.grid.get(board.target) == CellType.TARGET

    def test_reinitialize_resets_round(self):
        board = _board(7, seed=4)
        board.set_state(
            [Vector(0, 0), Vector(1, 0), Vector(2, 0), Vector(3, 0)],
            Direction.RIGHT, Vector(6, 6),
        )
        board.initialize()
        assert len(board) == 3
        assert board.ticks == 0
        assert board.grid.count(CellType.BODY) == 3

    def test_initialize_with_new_size(self):
        board = _board(5)
        board.initialize(9)
        assert board.grid_size == 9
        assert board.center == Vector(4, 4)
        with pytest.raises(InvalidConfigError):
            board.initialize(8)


class TestSetState:
    def test_rejects_duplicate_cells(self):
        board = _board()
        with pytest.raises(ValueError, match="distinct"):
            board.set_state([Vector(1, 1), Vector(1, 1)], Direction.UP, Vector(0, 0))

    def test_rejects_target_on_body(self):
        board = _board()
        with pytest.raises(ValueError, match="target"):
            board.set_state([Vector(1, 1), Vector(2, 1)], Direction.RIGHT, Vector(2, 1))

    def test_rejects_out_of_bounds(self):
        board = _board()
        with pytest.raises(ValueError, match="outside"):
            board.set_state([Vector(1, 1), Vector(5, 1)], Direction.RIGHT, Vector(0, 0))

    def test_rejects_none_heading(self):
        board = _board()
        with pytest.raises(ValueError, match="heading"):
            board.set_state([Vector(1, 1)], Direction.NONE, Vector(0, 0))


class TestSetHeading:
    @pytest.mark.parametrize("heading", Direction.movements())
    def test_reversal_ignored(self, heading):
        board = _board()
        board.heading = heading
        inverse = next(d for d in Direction.movements() if d.is_inverse(heading))
        assert board.set_heading(inverse) is False
        assert board.heading == heading

    @pytest.mark.parametrize("heading", Direction.movements())
    def test_other_turns_accepted(self, heading):
        for new in Direction.movements():
            if new.is_inverse(heading):
                continue
            board = _board()
            board.heading = heading
            assert board.set_heading(new) is True
            assert board.heading == new

    def test_none_is_a_no_op(self):
        board = _board()
        before = board.heading
        assert board.set_heading(Direction.NONE) is False
        assert board.heading == before

    def test_reversal_of_older_heading_allowed(self):
        board = _board()
        board.heading = Direction.RIGHT
        board.set_heading(Direction.UP)
        assert board.set_heading(Direction.LEFT) is True
        assert board.heading == Direction.LEFT


class TestAdvance:
    def test_grows_onto_target(self):
        board = _board(5)
        board.set_state(
            [Vector(1, 2), Vector(2, 2), Vector(3, 2)], Direction.RIGHT, Vector(4, 2),
        )
        result = board.advance()
        assert isinstance(result, Grew)
        assert result.head == Vector(4, 2)
        assert list(board.body) == [Vector(1, 2), Vector(2, 2), Vector(3, 2), Vector(4, 2)]
        assert result.target == board.target
        assert board.target not in board.body
        assert board.grid.get(board.target) == CellType.TARGET

    def test_moves_without_target(self):
        board = _board(7)
        board.set_state(
            [Vector(1, 3), Vector(2, 3), Vector(3, 3)], Direction.DOWN, Vector(0, 0),
        )
        result = board.advance()
        assert isinstance(result, Moved)
        assert result.head == Vector(3, 4)
        assert result.tail == Vector(1, 3)
        assert list(board.body) == [Vector(2, 3), Vector(3, 3), Vector(3, 4)]
        assert board.grid.get(Vector(1, 3)) == CellType.EMPTY
        assert board.grid.get(Vector(3, 4)) == CellType.BODY
        assert board.ticks == 1

    def test_dies_leaving_the_grid(self):
        board = _board(5)
        body = [Vector(2, 2), Vector(1, 2), Vector(0, 2)]
        board.set_state(body, Direction.LEFT, Vector(4, 4))
        result = board.advance()
        assert result == Died(Vector(-1, 2), DeathCause.WALL)
        assert list(board.body) == body

    def test_dies_turning_into_own_body(self):
        board = _board(5)
        body = [Vector(0, 2), Vector(1, 2), Vector(2, 2)]
        board.set_state(body, Direction.LEFT, Vector(4, 4))
        result = board.advance()
        assert isinstance(result, Died)
        assert result.cause is DeathCause.SELF
        assert list(board.body) == body

    def test_tail_cell_still_counts_as_body(self):
        board = _board(5)
        body = [Vector(1, 1), Vector(2, 1), Vector(2, 2), Vector(1, 2)]
        board.set_state(body, Direction.UP, Vector(4, 4))
        result = board.advance()
        assert result == Died(Vector(1, 1), DeathCause.SELF)

    @pytest.mark.parametrize(
        ("heading", "head", "expected_moves"),
        [
            (Direction.RIGHT, Vector(4, 3), 2),
            (Direction.LEFT, Vector(2, 3), 2),
            (Direction.UP, Vector(3, 2), 2),
            (Direction.DOWN, Vector(3, 4), 2),
        ],
    )
    def test_straight_line_runs_to_the_edge(self, heading, head, expected_moves):
        board = _board(7)
        step = heading.vector
        board.set_state([head - step - step, head - step, head], heading, Vector(0, 0))
        moves = 0
        while True:
            result = board.advance()
            if isinstance(result, Died):
                break
            assert isinstance(result, Moved)
            moves += 1
        assert moves == expected_moves
        assert result.cause is DeathCause.WALL
        last = board.head
        assert last.x in (0, 6) or last.y in (0, 6)


class TestPlaceTarget:
    def test_target_never_on_body(self):
        board = _board(5, seed=9)
        for _ in range(50):
            target = board.place_target()
            assert target not in board.body
            assert board.grid.count(CellType.TARGET) == 1

    def test_last_free_cell_found(self):
        board = _board(5)
        path = _serpentine(5)
        board.set_state(path[:-1], Direction.RIGHT, path[-1])
        assert board.place_target() == path[-1]

    def test_full_board_raises(self):
        board = _board(5)
        path = _serpentine(5)
        board.set_state(path[:-1], Direction.RIGHT, path[-1])
        with pytest.raises(BoardFullError):
            board.advance()
        assert len(board) == 25


class TestSnapshot:
    def test_snapshot_is_json_serializable(self):
        board = _board(7, seed=3)
        board.advance()
        state = board.snapshot()
        assert isinstance(json.dumps(state), str)
        assert state["grid_size"] == 7
        assert state["length"] == len(board)
        assert state["body"][-1] == list(board.head.to_tuple())
        assert state["heading"] == board.heading.name

    def test_snapshot_includes_grid(self):
        board = _board(5)
        board.set_state(
            [Vector(1, 2), Vector(2, 2), Vector(3, 2)], Direction.RIGHT, Vector(0, 0),
        )
        grid = board.snapshot()["grid"]
        assert grid["size"] == 5
        assert grid["cells"][2] == [0, 1, 1, 1, 0]
        assert grid["cells"][0][0] == CellType.TARGET
        assert sum(row.count(CellType.BODY) for row in grid["cells"]) == 3


class TestDeterminism:
    def test_same_seed_same_round(self):
        a, b = _board(9, seed=123), _board(9, seed=123)
        for _ in range(3):
            assert a.snapshot() == b.snapshot()
            a.advance()
            b.advance()
