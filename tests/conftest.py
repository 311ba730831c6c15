import heapq
from typing import Dict, List, Optional, Tuple

import numpy as np
import pytest

from grid_planner.common.constants import BLOCKED
from grid_planner.core.grid_builder import GridBuilder
from grid_planner.core.heuristics import Connectivity
from grid_planner.core.path_finder import PathFinder
from grid_planner.core.types import OccupancyGrid


@pytest.fixture
def builder() -> GridBuilder:
    return GridBuilder()


@pytest.fixture
def finder() -> PathFinder:
    return PathFinder()


@pytest.fixture
def free_grid() -> OccupancyGrid:
    return OccupancyGrid(np.zeros((5, 5), dtype=np.uint8))


@pytest.fixture
def wall_grid() -> OccupancyGrid:
    # row 2 blocked except column 3
    cells = np.zeros((5, 5), dtype=np.uint8)
    cells[2, :] = BLOCKED
    cells[2, 3] = 0
    return OccupancyGrid(cells)


def reference_cost(grid: OccupancyGrid, source: Tuple[int, int], destination: Tuple[int, int],
                   connectivity: Connectivity) -> Optional[int]:
    """Plain Dijkstra over a dict, independent of the planner internals."""
    rows, cols = grid.shape
    best: Dict[Tuple[int, int], int] = {source: 0}
    frontier: List[Tuple[int, Tuple[int, int]]] = [(0, source)]
    while frontier:
        cost, (r, c) = heapq.heappop(frontier)
        if (r, c) == destination:
            return cost
        if cost > best[(r, c)]:
            continue
        for dr, dc, step in connectivity.offsets:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < rows and 0 <= nc < cols) or grid.cells[nr, nc] == BLOCKED:
                continue
            new_cost = cost + step
            if new_cost < best.get((nr, nc), new_cost + 1):
                best[(nr, nc)] = new_cost
                heapq.heappush(frontier, (new_cost, (nr, nc)))
    return None


def blank_image(height: int, width: int, value: int = 255) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)
