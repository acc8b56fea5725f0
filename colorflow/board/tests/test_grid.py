"""Unit tests for Grid and Puzzle."""

import numpy as np
import pytest

from colorflow.board.grid import ColorEndpoints, Grid, neighbors
from colorflow.board.path import Path
from colorflow.board.puzzle import Puzzle
from colorflow.core.constants import EMPTY, Direction
from colorflow.core.errors import InvalidDimensionsError, MalformedBoardError


@pytest.fixture
def two_color_grid():
    """Two colors on a 2x3 board.

    0 - 0
    1 - 1
    """
    return Grid([[0, -1, 0], [1, -1, 1]])


def _straight(origin, color, steps, width=3):
    return Path(origin, color, height=2, width=width, directions=steps)


def test_endpoints_in_scan_order():
    """Test that colors are keyed by first row-major occurrence."""
    grid = Grid([[1, -1, 0], [0, -1, 1]])
    assert grid.colors == (1, 0)
    assert grid.endpoints[1] == ColorEndpoints(start=(0, 0), end=(1, 2))
    assert grid.endpoints[0] == ColorEndpoints(start=(0, 2), end=(1, 0))


def test_color_count_must_be_two():
    """Test that every color must appear exactly twice."""
    with pytest.raises(MalformedBoardError, match="exactly twice"):
        Grid([[0, 0, 0]])
    with pytest.raises(MalformedBoardError, match="exactly twice"):
        Grid([[0, -1], [-1, -1]])


def test_degenerate_dimensions():
    """Test that single-cell and empty boards are rejected."""
    with pytest.raises(InvalidDimensionsError):
        Grid([[0]])
    with pytest.raises(InvalidDimensionsError):
        Grid(np.zeros((0, 3), dtype=int))
    # InvalidDimensionsError is a kind of MalformedBoardError
    with pytest.raises(MalformedBoardError):
        Grid([[-1]])


def test_malformed_matrix():
    """Test ragged, non-2D and out-of-range inputs."""
    with pytest.raises(MalformedBoardError):
        Grid([[0, 0], [-1]])
    with pytest.raises(MalformedBoardError, match="two-dimensional"):
        Grid(np.full((2, 2, 2), -1))
    with pytest.raises(MalformedBoardError, match="color id"):
        Grid([[0, 0, -2]])


def test_cells_are_read_only(two_color_grid):
    """Test that the endpoint matrix cannot be mutated in place."""
    with pytest.raises(ValueError):
        two_color_grid.cells[0, 1] = 0


def test_flatten_overlays_paths(two_color_grid):
    """Test that flatten overlays endpoints and installed paths."""
    two_color_grid.edit_path(_straight((0, 0), 0, [Direction.RIGHT, Direction.RIGHT]))
    flat = two_color_grid.flatten()
    assert flat.tolist() == [[0, 0, 0], [1, EMPTY, 1]]

    excluded = two_color_grid.flatten(exclude_color=0)
    assert excluded.tolist() == [[EMPTY, EMPTY, EMPTY], [1, EMPTY, 1]]


def test_is_solved(two_color_grid):
    """Test solved detection once every cell is covered."""
    assert not two_color_grid.is_solved()
    two_color_grid.edit_path(_straight((0, 0), 0, [Direction.RIGHT, Direction.RIGHT]))
    assert not two_color_grid.is_solved()
    # Paths may start from either endpoint
    two_color_grid.edit_path(_straight((1, 2), 1, [Direction.LEFT, Direction.LEFT]))
    assert two_color_grid.is_solved()


def test_is_solved_requires_matching_ends(two_color_grid):
    """Test that a full board with a path stopping short is not solved."""
    two_color_grid.edit_path(_straight((0, 0), 0, [Direction.RIGHT]))
    two_color_grid.edit_path(_straight((1, 0), 1, [Direction.RIGHT, Direction.RIGHT]))
    assert not (two_color_grid.flatten() == EMPTY).any()
    assert not two_color_grid.is_solved()


def test_edit_path_replaces_and_copies(two_color_grid):
    """Test that edit_path replaces the color's path with a private copy."""
    first = _straight((0, 0), 0, [Direction.RIGHT])
    two_color_grid.edit_path(first)
    first.append(Direction.RIGHT)
    assert two_color_grid.path_of(0).directions == (Direction.RIGHT,)

    two_color_grid.edit_path(first)
    assert two_color_grid.path_of(0).directions == (Direction.RIGHT, Direction.RIGHT)
    assert len(two_color_grid.paths) == 1

    two_color_grid.clear_path(0)
    assert two_color_grid.paths == []


def test_edit_path_validation(two_color_grid):
    """Test structural checks on installed paths."""
    with pytest.raises(MalformedBoardError, match="not on this board"):
        two_color_grid.edit_path(_straight((0, 0), 7, []))
    with pytest.raises(MalformedBoardError, match="endpoints"):
        two_color_grid.edit_path(_straight((0, 1), 0, []))
    with pytest.raises(MalformedBoardError, match="do not match"):
        two_color_grid.edit_path(_straight((0, 0), 0, [], width=4))


def test_paths_follow_color_order():
    """Test that installed paths are listed in color scan order."""
    grid = Grid([[1, -1, 1], [0, -1, 0]])
    grid.edit_path(_straight((1, 0), 0, [Direction.RIGHT, Direction.RIGHT]))
    grid.edit_path(_straight((0, 0), 1, [Direction.RIGHT, Direction.RIGHT]))
    assert [path.color for path in grid.paths] == [1, 0]


def test_blank_drops_paths(two_color_grid):
    """Test that blank keeps the endpoints only."""
    two_color_grid.edit_path(_straight((0, 0), 0, [Direction.RIGHT, Direction.RIGHT]))
    blank = two_color_grid.blank()
    assert blank.paths == []
    assert np.array_equal(blank.cells, two_color_grid.cells)


def test_to_rows(two_color_grid):
    """Test the text rendering of a board."""
    assert two_color_grid.to_rows() == ["0 - 0", "1 - 1"]


def test_neighbors_canonical_order():
    """Test neighbour enumeration follows Up, Down, Left, Right."""
    assert neighbors((1, 1), 3, 3) == [(0, 1), (2, 1), (1, 0), (1, 2)]
    assert neighbors((0, 0), 2, 2) == [(1, 0), (0, 1)]
    assert neighbors((0, 2), 1, 3) == [(0, 1)]


def test_puzzle_properties(two_color_grid):
    """Test Puzzle convenience accessors."""
    solution = two_color_grid.blank()
    solution.edit_path(_straight((0, 0), 0, [Direction.RIGHT, Direction.RIGHT]))
    solution.edit_path(_straight((1, 0), 1, [Direction.RIGHT, Direction.RIGHT]))
    puzzle = Puzzle(blank=two_color_grid, solution=solution)
    assert (puzzle.width, puzzle.height, puzzle.color_count) == (3, 2, 2)
    assert puzzle.solution.is_solved()


def test_is_solved_requires_every_color_routed():
    """Test that a board covered by endpoints alone is not solved."""
    grid = Grid([[0, 0], [1, 1]])
    assert not (grid.flatten() == EMPTY).any()
    assert not grid.is_solved()

    grid.edit_path(Path((0, 0), 0, height=2, width=2, directions=[Direction.RIGHT]))
    assert not grid.is_solved()
    grid.edit_path(Path((1, 1), 1, height=2, width=2, directions=[Direction.LEFT]))
    assert grid.is_solved()
