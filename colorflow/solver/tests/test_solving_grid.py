"""Unit tests for SolvingGrid apply/undo bookkeeping."""

import numpy as np
import pytest

from colorflow.board.grid import Grid
from colorflow.core.constants import EMPTY, Direction
from colorflow.core.errors import MalformedBoardError
from colorflow.generator.level import random_level
from colorflow.solver.backtracking import move_options
from colorflow.solver.solving_grid import SolveStatus, SolvingGrid


def test_initial_state():
    """Test that the search starts on the first color's start node."""
    state = SolvingGrid([[1, -1, 0], [0, -1, 1]])
    assert state.colors == (1, 0)
    assert state.start_nodes == ((0, 0), (0, 2))
    assert state.end_nodes == ((1, 2), (1, 0))
    assert len(state.paths) == 1
    assert state.active_path.first_point == (0, 0)
    assert state.active_target == (1, 2)
    assert state.status is SolveStatus.SOLVING
    assert state.empty_count == 2


def test_accepts_grid():
    """Test building the state from a Grid ignores installed paths."""
    grid = Grid([[0, -1, 0]])
    state = SolvingGrid(grid)
    assert state.endpoints == grid.endpoints
    assert state.flatten().tolist() == [[0, EMPTY, 0]]


def test_board_without_colors():
    """Test that a board with nothing to connect is rejected."""
    with pytest.raises(MalformedBoardError, match="no colors"):
        SolvingGrid(np.full((2, 2), EMPTY))


def test_reaching_end_node_opens_next_color():
    """Test the transition to the next color and final success."""
    state = SolvingGrid([[0, 0], [1, 1]])
    state.add_direction_to_current_path(Direction.RIGHT)
    assert state.status is SolveStatus.SOLVING
    assert [path.color for path in state.paths] == [0, 1]
    assert len(state.active_path) == 0

    state.add_direction_to_current_path(Direction.RIGHT)
    assert state.status is SolveStatus.SUCCESS
    assert state.to_grid().is_solved()


def test_all_routed_with_empty_cells_fails():
    """Test that routing every color while cells remain empty fails."""
    state = SolvingGrid([[0, 0, -1]])
    state.add_direction_to_current_path(Direction.RIGHT)
    assert state.status is SolveStatus.FAILED
    with pytest.raises(AssertionError):
        state.add_direction_to_current_path(Direction.RIGHT)


def test_undo_across_color_boundary():
    """Test that undo pops an empty path and rewinds the previous one."""
    state = SolvingGrid([[0, 0], [1, 1]])
    initial = state.snapshot()
    state.add_direction_to_current_path(Direction.RIGHT)
    state.add_direction_to_current_path(Direction.RIGHT)

    state.remove_last_action()
    assert state.status is SolveStatus.SOLVING
    assert len(state.paths) == 2
    assert len(state.active_path) == 0
    # Endpoint cells keep their color after undo
    assert state.occupancy[1][1] == 1

    state.remove_last_action()
    assert state.snapshot() == initial
    with pytest.raises(AssertionError, match="Nothing to undo"):
        state.remove_last_action()


def test_undo_restores_empty_cells():
    """Test that occupancy and the empty counter follow undo."""
    state = SolvingGrid([[0, -1, -1], [-1, -1, 0]])
    state.add_direction_to_current_path(Direction.DOWN)
    state.add_direction_to_current_path(Direction.RIGHT)
    assert state.empty_count == 2
    assert state.flatten().tolist() == [[0, -1, -1], [0, 0, 0]]
    assert state.occupancy == state.flatten().tolist()

    state.remove_last_action()
    assert state.empty_count == 3
    assert state.occupancy == state.flatten().tolist()
    assert state.active_path.last_point == (1, 0)


def _fingerprint(state):
    return state.snapshot(), [row[:] for row in state.occupancy], state.empty_count


def test_add_then_undo_round_trips_on_random_walks():
    """Test that undo restores paths, status, occupancy and the empty count."""
    rng = np.random.default_rng(7)
    for _ in range(200):
        width = int(rng.integers(2, 6))
        height = int(rng.integers(2, 6))
        pipes = int(rng.integers(1, min(4, (width * height) // 2) + 1))
        state = SolvingGrid(random_level(width, height, 8, pipe_count=pipes, rng=rng))

        while state.status is SolveStatus.SOLVING:
            options = move_options(state)
            if not options:
                break
            move = options[int(rng.integers(len(options)))]
            before = _fingerprint(state)
            state.add_direction_to_current_path(move)
            state.remove_last_action()
            assert _fingerprint(state) == before
            state.add_direction_to_current_path(move)
            assert state.occupancy == state.flatten().tolist()
