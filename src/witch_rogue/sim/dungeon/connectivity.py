"""Flood fill and connectivity repair.

Noise can cut carved rooms and corridors into islands.  ``repair`` joins
every island back to the seed by carving straight bridges until a single
4-connected floor region remains.
"""

from __future__ import annotations

from collections import deque

from witch_rogue.sim.core.grid import GridModel, Position


def flood_fill(grid: GridModel, seed: Position) -> set[Position]:
    """Return every floor cell 4-connected to *seed* (including it).

    An out-of-bounds or wall seed reaches nothing.
    """
    if not grid.is_floor(seed):
        return set()

    visited = {seed}
    queue = deque([seed])
    while queue:
        current = queue.popleft()
        for nxt in grid.neighbours(current):
            if nxt not in visited and grid.is_floor(nxt):
                visited.add(nxt)
                queue.append(nxt)
    return visited


def unreached_components(
    grid: GridModel, reached: set[Position],
) -> list[list[Position]]:
    """Group floor cells outside *reached* into 4-connected components.

    Components are ordered by their first cell in row-major order.
    """
    seen: set[Position] = set()
    components: list[list[Position]] = []
    for cell in grid.floor_cells():
        if cell in reached or cell in seen:
            continue
        component = sorted(
            flood_fill(grid, cell), key=lambda p: (p.y, p.x),
        )
        seen.update(component)
        components.append(component)
    return components


def repair(grid: GridModel, seed: Position) -> int:
    """Make every floor cell reachable from *seed*.

    The seed itself is reopened if it was walled.  Each pass bridges one
    unreached component to the nearest reached cell, then floods again.
    Returns the number of bridges carved.
    """
    grid.carve(seed)
    reached = flood_fill(grid, seed)
    bridges = 0

    while True:
        components = unreached_components(grid, reached)
        if not components:
            return bridges

        anchor = _anchor_cell(components[0])
        target = _nearest(anchor, reached)
        _carve_bridge(grid, anchor, target)
        bridges += 1
        reached = flood_fill(grid, seed)


def _anchor_cell(component: list[Position]) -> Position:
    """The component cell closest to the component's centroid."""
    cx = sum(p.x for p in component) / len(component)
    cy = sum(p.y for p in component) / len(component)
    return min(component, key=lambda p: (abs(p.x - cx) + abs(p.y - cy), p.y, p.x))


def _nearest(origin: Position, cells: set[Position]) -> Position:
    return min(cells, key=lambda p: (origin.manhattan(p), p.y, p.x))


def _carve_bridge(grid: GridModel, start: Position, end: Position) -> None:
    """Horizontal run along ``start``'s row, then vertical to ``end``."""
    grid.carve_horizontal(start.x, end.x, start.y)
    grid.carve_vertical(start.y, end.y, end.x)
