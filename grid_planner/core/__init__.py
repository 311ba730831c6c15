#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划核心：栅格构建、启发函数与 A* 搜索
"""

from .types import Coord, GridPath, OccupancyGrid, PlanResult
from .heuristics import Connectivity, Heuristic, SearchAlgorithm
from .grid_builder import GridBuilder, MapLayers, classify_cells
from .path_finder import PathFinder, path_cost

__all__ = [
    'Connectivity',
    'Coord',
    'GridBuilder',
    'GridPath',
    'Heuristic',
    'MapLayers',
    'OccupancyGrid',
    'PathFinder',
    'PlanResult',
    'SearchAlgorithm',
    'classify_cells',
    'path_cost',
]
