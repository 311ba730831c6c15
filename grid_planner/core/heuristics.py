#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
启发函数模块

提供三种栅格距离估计及其对应的移动模型：
- 曼哈顿距离：四邻域
- 欧氏距离：八邻域
- 八角距离：八邻域（对角感知距离的整数近似）
"""

import math
from enum import Enum
from typing import Callable, Tuple

from grid_planner.common.constants import CARDINAL_COST, DIAGONAL_COST
from grid_planner.common.exceptions import UnsupportedAlgorithmError, UnsupportedHeuristicError


Coord = Tuple[int, int]  # (row, col)


def _delta(a: Coord, b: Coord) -> Tuple[int, int]:
    return abs(a[0] - b[0]), abs(a[1] - b[1])


def manhattan(a: Coord, b: Coord) -> int:
    """曼哈顿距离 |dr| + |dc|，仅在四邻域下可采纳"""
    dr, dc = _delta(a, b)
    return dr + dc


def euclidean(a: Coord, b: Coord) -> float:
    """欧氏距离 sqrt(dr^2 + dc^2)"""
    dr, dc = _delta(a, b)
    return math.sqrt(dr * dr + dc * dc)


def octagonal(a: Coord, b: Coord) -> int:
    """八角距离 (|dr| + |dc|) - min(|dr|, |dc|)"""
    dr, dc = _delta(a, b)
    return (dr + dc) - min(dr, dc)


def zero(a: Coord, b: Coord) -> int:
    """零启发，A* 退化为 Dijkstra"""
    return 0


class Connectivity(Enum):
    """移动模型"""
    FOUR = 4
    EIGHT = 8

    @property
    def offsets(self) -> Tuple[Tuple[int, int, int], ...]:
        """(dr, dc, step_cost) 列表，直行在前，顺序固定以保证结果可复现"""
        cardinal = (
            (0, 1, CARDINAL_COST),   # 右
            (1, 0, CARDINAL_COST),   # 下
            (0, -1, CARDINAL_COST),  # 左
            (-1, 0, CARDINAL_COST),  # 上
        )
        if self is Connectivity.FOUR:
            return cardinal
        return cardinal + (
            (-1, -1, DIAGONAL_COST),  # 左上
            (1, 1, DIAGONAL_COST),    # 右下
            (-1, 1, DIAGONAL_COST),   # 右上
            (1, -1, DIAGONAL_COST),   # 左下
        )

    def step_cost(self, dr: int, dc: int) -> int:
        """单步代价；不是合法偏移时抛出 ValueError"""
        for odr, odc, cost in self.offsets:
            if (odr, odc) == (dr, dc):
                return cost
        raise ValueError(f"非法移动偏移: ({dr},{dc}) 不属于{self.value}邻域")


class Heuristic(Enum):
    """启发函数选择器，同时决定移动模型"""
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    OCTAGONAL = "octagonal"

    @classmethod
    def from_name(cls, name: str) -> 'Heuristic':
        """由名称（大小写不敏感）得到启发函数"""
        try:
            return cls(name.strip().lower())
        except (ValueError, AttributeError) as e:
            raise UnsupportedHeuristicError(f"不支持的启发函数: {name}") from e

    @property
    def connectivity(self) -> Connectivity:
        if self is Heuristic.MANHATTAN:
            return Connectivity.FOUR
        return Connectivity.EIGHT

    @property
    def function(self) -> Callable[[Coord, Coord], float]:
        return _FUNCTIONS[self]

    def estimate(self, a: Coord, b: Coord) -> float:
        """
        代价单位下的剩余代价估计

        曼哈顿与八角距离按直行代价缩放。欧氏距离按 斜行代价/sqrt(2) 缩放，
        纯对角方向恰好等于每步 14，其余方向不超过 10:14 模型下的真实代价。
        """
        if self is Heuristic.EUCLIDEAN:
            dr, dc = _delta(a, b)
            return DIAGONAL_COST * math.sqrt((dr * dr + dc * dc) / 2)
        return self.function(a, b) * CARDINAL_COST


_FUNCTIONS = {
    Heuristic.MANHATTAN: manhattan,
    Heuristic.EUCLIDEAN: euclidean,
    Heuristic.OCTAGONAL: octagonal,
}


class SearchAlgorithm(Enum):
    """搜索算法选择器"""
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"

    @classmethod
    def from_name(cls, name: str) -> 'SearchAlgorithm':
        try:
            return cls(name.strip().lower().replace("*", "star").replace("-", ""))
        except (ValueError, AttributeError) as e:
            raise UnsupportedAlgorithmError(f"不支持的搜索算法: {name}") from e
