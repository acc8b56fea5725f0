"""Dead-end detection for the backtracking search.

Every check here is a necessary condition for the state to still be
completable. A state failing one holds no solution below it, so skipping it
never changes which solution the search reaches first.

Terminology: the *source* of an unfinished color is the head of the active
path, or the start node of a color not routed yet; its *target* is its end
node. Sources and targets are the only non-empty cells a future path step
can touch.
"""

from __future__ import annotations

from colorflow.core.constants import EMPTY, Coord
from colorflow.solver.solving_grid import SolvingGrid


def live_terminals(state: SolvingGrid) -> tuple[dict[int, Coord], dict[int, Coord]]:
    """Return (sources, targets) keyed by unfinished color."""
    sources: dict[int, Coord] = {}
    targets: dict[int, Coord] = {}
    for color in state.unfinished_colors():
        ends = state.endpoints[color]
        sources[color] = ends.start
        targets[color] = ends.end
    head = state.active_path
    sources[head.color] = head.last_point
    return sources, targets


def has_stranded_cell(state: SolvingGrid) -> bool:
    """Whether some empty cell has fewer than two neighbours a path could use.

    Every empty cell must end up inside a path, entered from one neighbour and
    left through another.
    """
    sources, targets = live_terminals(state)
    live = set(sources.values()) | set(targets.values())
    occupancy = state.occupancy
    for r in range(state.height):
        row = occupancy[r]
        for c in range(state.width):
            if row[c] != EMPTY:
                continue
            open_count = 0
            for nr, nc in state.adjacency[(r, c)]:
                if occupancy[nr][nc] == EMPTY or (nr, nc) in live:
                    open_count += 1
            if open_count < 2:
                return True
    return False


def _empty_regions(state: SolvingGrid) -> list[tuple[set[Coord], set[Coord]]]:
    """Connected components of empty cells with the non-empty cells bordering each."""
    occupancy = state.occupancy
    seen = [[False] * state.width for _ in range(state.height)]
    regions: list[tuple[set[Coord], set[Coord]]] = []

    for r in range(state.height):
        for c in range(state.width):
            if occupancy[r][c] != EMPTY or seen[r][c]:
                continue
            cells: set[Coord] = set()
            border: set[Coord] = set()
            stack = [(r, c)]
            seen[r][c] = True
            while stack:
                node = stack.pop()
                cells.add(node)
                for nr, nc in state.adjacency[node]:
                    if occupancy[nr][nc] != EMPTY:
                        border.add((nr, nc))
                    elif not seen[nr][nc]:
                        seen[nr][nc] = True
                        stack.append((nr, nc))
            regions.append((cells, border))
    return regions


def _pocket_without_color(sources, targets, regions) -> bool:
    for _, border in regions:
        if not any(sources[color] in border and targets[color] in border for color in sources):
            return True
    return False


def _color_without_route(sources, targets, regions) -> bool:
    for color, source in sources.items():
        target = targets[color]
        if abs(source[0] - target[0]) + abs(source[1] - target[1]) == 1:
            continue
        if not any(source in border and target in border for _, border in regions):
            return True
    return False


def has_dead_pocket(state: SolvingGrid) -> bool:
    """Whether some empty region cannot be threaded by any unfinished color.

    A path entering a region of empty cells can only leave it into its own
    target, so the region needs a color whose source and target both border it.
    """
    sources, targets = live_terminals(state)
    return _pocket_without_color(sources, targets, _empty_regions(state))


def has_disconnect(state: SolvingGrid) -> bool:
    """Whether some unfinished color can no longer reach its target."""
    sources, targets = live_terminals(state)
    return _color_without_route(sources, targets, _empty_regions(state))


def is_dead_end(state: SolvingGrid) -> bool:
    """Run every check, the cheap per-cell test first."""
    if has_stranded_cell(state):
        return True
    sources, targets = live_terminals(state)
    regions = _empty_regions(state)
    return _pocket_without_color(sources, targets, regions) or _color_without_route(
        sources, targets, regions
    )


__all__ = [
    "live_terminals",
    "has_stranded_cell",
    "has_dead_pocket",
    "has_disconnect",
    "is_dead_end",
]
