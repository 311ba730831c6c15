#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块：在占据栅格上实现 A* 搜索
"""

# 标准库导入
from itertools import count
from typing import Callable, List, Sequence, Tuple, Union
import heapq

# 第三方库导入
import numpy as np
from loguru import logger

# 本地导入
from grid_planner.common.constants import BLOCKED
from grid_planner.common.exceptions import (
    BlockedCellError,
    EmptyGridError,
    NoPathFoundError,
    OutOfRangeError,
    PlanError,
)
from grid_planner.core.heuristics import Connectivity, Heuristic, SearchAlgorithm, zero
from grid_planner.core.types import Coord, GridPath, OccupancyGrid, PlanResult, as_coord


HeuristicLike = Union[Heuristic, str]


def _resolve_heuristic(heuristic: HeuristicLike) -> Heuristic:
    if isinstance(heuristic, Heuristic):
        return heuristic
    return Heuristic.from_name(heuristic)


def path_cost(path: Sequence[Tuple[int, int]], connectivity: Connectivity) -> int:
    """
    按 10:14 代价模型计算路径总代价

    Args:
        path: 坐标序列
        connectivity: 移动模型

    Returns:
        总代价

    Raises:
        ValueError: 相邻两点之间不是合法的单步移动
    """
    total = 0
    for prev, curr in zip(path, path[1:]):
        total += connectivity.step_cost(curr[0] - prev[0], curr[1] - prev[1])
    return total


class PathFinder:
    """
    A* 栅格路径规划器

    实例本身不保存任何搜索状态，每次调用 find_path 都会分配独立的临时数据，
    因此同一个实例和同一张栅格可以在多个线程中并发使用。

    示例:
        ```python
        finder = PathFinder()
        path = finder.find_path(grid, (0, 0), (4, 4), Heuristic.EUCLIDEAN)
        ```
    """

    def __init__(self, algorithm: SearchAlgorithm = SearchAlgorithm.ASTAR):
        """
        初始化规划器

        Args:
            algorithm: 搜索算法，DIJKSTRA 等价于使用零启发的 A*
        """
        if not isinstance(algorithm, SearchAlgorithm):
            algorithm = SearchAlgorithm.from_name(algorithm)
        self.algorithm_ = algorithm

    @property
    def algorithm(self) -> SearchAlgorithm:
        return self.algorithm_

    def find_path(
        self,
        grid: OccupancyGrid,
        source: Tuple[int, int],
        destination: Tuple[int, int],
        heuristic: HeuristicLike,
    ) -> GridPath:
        """
        计算从起点到终点的最小代价路径

        Args:
            grid: 占据栅格（只读）
            source: 起点 (row, col)
            destination: 终点 (row, col)
            heuristic: 启发函数，同时决定四邻域或八邻域

        Returns:
            GridPath，包含起点和终点

        Raises:
            EmptyGridError: 栅格为空
            OutOfRangeError: 起点或终点越界
            BlockedCellError: 起点或终点为障碍
            NoPathFoundError: 不存在可行路径
        """
        heuristic = _resolve_heuristic(heuristic)
        source = as_coord(source)
        destination = as_coord(destination)

        if grid.is_empty:
            raise EmptyGridError("栅格地图为空")
        if not grid.in_range(source):
            raise OutOfRangeError(f"起点超出地图范围: source={source}, grid_size={grid.shape}")
        if not grid.in_range(destination):
            raise OutOfRangeError(f"终点超出地图范围: destination={destination}, grid_size={grid.shape}")
        if grid.is_blocked(source):
            raise BlockedCellError(f"起点位于障碍上: {source}")
        if grid.is_blocked(destination):
            raise BlockedCellError(f"终点位于障碍上: {destination}")

        if source == destination:
            logger.debug("[A*] 起点和终点相同，返回单点路径")
            return GridPath((source,), 0, 0)

        return self._search(grid, source, destination, heuristic)

    def plan(
        self,
        grid: OccupancyGrid,
        source: Tuple[int, int],
        destination: Tuple[int, int],
        heuristic: HeuristicLike,
    ) -> PlanResult:
        """find_path 的不抛异常版本，失败原因写入 reason"""
        try:
            path = self.find_path(grid, source, destination, heuristic)
        except PlanError as e:
            logger.warning(f"路径规划失败: {e}")
            return PlanResult(ok=False, path=[], cost=0, reason=str(e))
        return PlanResult(ok=True, path=list(path.coords), cost=path.cost, reason="ok")

    def _search(
        self,
        grid: OccupancyGrid,
        source: Coord,
        destination: Coord,
        heuristic: Heuristic,
    ) -> GridPath:
        rows, cols = grid.shape
        cells = grid.cells
        offsets = heuristic.connectivity.offsets

        estimate: Callable[[Coord, Coord], float] = heuristic.estimate
        if self.algorithm_ is SearchAlgorithm.DIJKSTRA:
            estimate = zero

        logger.debug(
            f"[A*] 开始路径规划: grid_size=({rows}, {cols}), source={source}, "
            f"destination={destination}, heuristic={heuristic.value}, algorithm={self.algorithm_.value}"
        )

        # 按行优先索引的临时记录
        num_cells = rows * cols
        g_cost = np.full(num_cells, np.inf, dtype=np.float64)
        h_cost = np.zeros(num_cells, dtype=np.float64)
        parent = np.full(num_cells, -1, dtype=np.int64)
        closed = np.zeros(num_cells, dtype=bool)

        src = source.row * cols + source.col
        dst = destination.row * cols + destination.col
        g_cost[src] = 0.0
        h_cost[src] = estimate(source, destination)
        parent[src] = src

        # 优先队列：(f_cost, 插入序号, 索引)，序号保证同 f 时先入先出
        sequence = count()
        open_heap: List[Tuple[float, int, int]] = [(g_cost[src] + h_cost[src], next(sequence), src)]
        nodes_explored = 0

        while open_heap:
            f_cost, _, current = heapq.heappop(open_heap)

            # 过期条目或已关闭
            if closed[current] or f_cost != g_cost[current] + h_cost[current]:
                continue

            if current == dst:
                return self._reconstruct(parent, g_cost, source, dst, cols, nodes_explored)

            closed[current] = True
            nodes_explored += 1
            row, col = divmod(current, cols)

            for dr, dc, step in offsets:
                nr, nc = row + dr, col + dc

                # 检查边界
                if nr < 0 or nr >= rows or nc < 0 or nc >= cols:
                    continue

                # 检查障碍物
                if cells[nr, nc] == BLOCKED:
                    continue

                neighbor = nr * cols + nc
                if closed[neighbor]:
                    continue

                tentative_g = g_cost[current] + step

                # 当前代价已达到下界时可直接结束
                if neighbor == dst and tentative_g <= f_cost:
                    g_cost[neighbor] = tentative_g
                    parent[neighbor] = current
                    return self._reconstruct(parent, g_cost, source, dst, cols, nodes_explored)

                if tentative_g < g_cost[neighbor]:
                    if np.isinf(g_cost[neighbor]):
                        h_cost[neighbor] = estimate(Coord(nr, nc), destination)
                    g_cost[neighbor] = tentative_g
                    parent[neighbor] = current
                    heapq.heappush(
                        open_heap,
                        (tentative_g + h_cost[neighbor], next(sequence), neighbor),
                    )

        error_msg = (
            f"无法找到从起点到终点的路径: source={source}, destination={destination}, "
            f"探索节点数={nodes_explored}"
        )
        logger.warning(error_msg)
        raise NoPathFoundError(error_msg)

    @staticmethod
    def _reconstruct(
        parent: np.ndarray,
        g_cost: np.ndarray,
        source: Coord,
        dst: int,
        cols: int,
        nodes_explored: int,
    ) -> GridPath:
        """沿父指针从终点回溯到起点，再反转"""
        coords: List[Coord] = []
        index = dst
        while parent[index] != index:
            row, col = divmod(int(index), cols)
            coords.append(Coord(row, col))
            index = int(parent[index])
        coords.append(source)
        coords.reverse()

        cost = int(g_cost[dst])
        logger.debug(f"[A*] 路径规划成功: 路径长度={len(coords)}, 代价={cost}, 探索节点数={nodes_explored}")
        return GridPath(tuple(coords), cost, nodes_explored)
