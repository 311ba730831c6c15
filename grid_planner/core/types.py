#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划核心数据类型：坐标、栅格地图、路径与规划结果
"""

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Sequence, Tuple

import numpy as np

from grid_planner.common.constants import BLOCKED, FREE


class Coord(NamedTuple):
    """栅格坐标 (row, col)"""
    row: int
    col: int

    def __add__(self, other: Tuple[int, int]) -> 'Coord':  # type: ignore[override]
        return Coord(self.row + other[0], self.col + other[1])

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def as_coord(value: Tuple[int, int]) -> Coord:
    """把 (row, col) 元组转换为 Coord"""
    if isinstance(value, Coord):
        return value
    row, col = value
    return Coord(int(row), int(col))


@dataclass(frozen=True)
class OccupancyGrid:
    """
    二值占据栅格

    cells[r, c] 为 FREE(0) 或 BLOCKED(1)。构造后数组只读，
    可在多个并发搜索之间共享。
    """
    cells: np.ndarray

    def __post_init__(self) -> None:
        cells = np.array(self.cells, dtype=np.uint8, copy=True)
        if cells.ndim != 2:
            if cells.size == 0:
                cells = cells.reshape(0, 0)
            else:
                raise ValueError(f"栅格必须是二维数组: shape={cells.shape}")
        if np.any((cells != FREE) & (cells != BLOCKED)):
            raise ValueError("栅格取值只能是 FREE(0) 或 BLOCKED(1)")
        cells.flags.writeable = False
        object.__setattr__(self, 'cells', cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'OccupancyGrid':
        """由嵌套列表构建，例如 [[0, 1], [0, 0]]"""
        return cls(np.array(rows, dtype=np.uint8))

    @property
    def num_rows(self) -> int:
        return self.cells.shape[0]

    @property
    def num_cols(self) -> int:
        return self.cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape[0], self.cells.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.cells.size == 0

    def in_range(self, coord: Tuple[int, int]) -> bool:
        row, col = coord
        return 0 <= row < self.num_rows and 0 <= col < self.num_cols

    def is_blocked(self, coord: Tuple[int, int]) -> bool:
        return self.cells[coord[0], coord[1]] == BLOCKED

    def blocked_count(self) -> int:
        return int(np.count_nonzero(self.cells == BLOCKED))

    def to_image(self, cell_size: int) -> np.ndarray:
        """
        重建可视化亮度图：FREE 栅格为 255，BLOCKED 栅格为 0

        Args:
            cell_size: 每个栅格展开的像素边长

        Returns:
            (rows*cell_size, cols*cell_size) 的 uint8 图像
        """
        free = np.where(self.cells == BLOCKED, 0, 255).astype(np.uint8)
        block = np.ones((cell_size, cell_size), dtype=np.uint8)
        return np.kron(free, block).astype(np.uint8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))


@dataclass(frozen=True)
class GridPath:
    """从起点到终点（含两端）的有序栅格路径"""
    coords: Tuple[Coord, ...]
    cost: int
    nodes_explored: int = 0

    @property
    def source(self) -> Coord:
        return self.coords[0]

    @property
    def destination(self) -> Coord:
        return self.coords[-1]

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.coords)

    def __getitem__(self, index: int) -> Coord:
        return self.coords[index]

    def to_list(self) -> List[Tuple[int, int]]:
        return [(c.row, c.col) for c in self.coords]


@dataclass
class PlanResult:
    """规划结果（不抛异常的返回形式）"""
    ok: bool
    path: List[Coord] = field(default_factory=list)
    cost: int = 0
    reason: str = ""
