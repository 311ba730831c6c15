#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格路径规划

把位图转换为粗粒度占据栅格，并在栅格上用 A* 计算最小代价路径。
"""

from loguru import logger

from .common.exceptions import (
    BlockedCellError,
    BuildError,
    ConfigurationError,
    EmptyGridError,
    EmptyInputError,
    GridPlannerError,
    ImageLoadError,
    InvalidGeometryError,
    NoPathFoundError,
    OutOfRangeError,
    PlanError,
    UnsupportedAlgorithmError,
    UnsupportedHeuristicError,
)
from .config import MapConfig, load_config, load_map_config
from .core import (
    Connectivity,
    Coord,
    GridBuilder,
    GridPath,
    Heuristic,
    OccupancyGrid,
    PathFinder,
    PlanResult,
    SearchAlgorithm,
)

# 作为库使用时默认不输出日志，应用侧通过 utils.logger.setup_logger 开启
logger.disable("grid_planner")

__version__ = "0.1.0"

__all__ = [
    'BlockedCellError',
    'BuildError',
    'ConfigurationError',
    'Connectivity',
    'Coord',
    'EmptyGridError',
    'EmptyInputError',
    'GridBuilder',
    'GridPath',
    'GridPlannerError',
    'Heuristic',
    'ImageLoadError',
    'InvalidGeometryError',
    'MapConfig',
    'NoPathFoundError',
    'OccupancyGrid',
    'OutOfRangeError',
    'PathFinder',
    'PlanError',
    'PlanResult',
    'SearchAlgorithm',
    'UnsupportedAlgorithmError',
    'UnsupportedHeuristicError',
    'load_config',
    'load_map_config',
]
