#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
可视化工具：绘制障碍图、栅格线和规划路径

所有函数都返回新图像，不修改输入，也不打开窗口。
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from grid_planner.common.constants import BLOCKED, MASK_OBSTACLE
from grid_planner.core.types import OccupancyGrid

# BGR 颜色
BLUE = (255, 0, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (0, 0, 255)
GREEN = (0, 255, 0)


def render_obstacle_map(dilated_mask: np.ndarray) -> np.ndarray:
    """膨胀障碍掩码 -> BGR 障碍图（障碍蓝色，可通行白色）"""
    h, w = dilated_mask.shape[:2]
    obstacle_map = np.full((h, w, 3), WHITE, dtype=np.uint8)
    obstacle_map[dilated_mask == MASK_OBSTACLE] = BLUE
    return obstacle_map


def draw_grid(image: np.ndarray, cell_size: int, color: Tuple[int, int, int] = BLACK) -> np.ndarray:
    """按栅格尺寸画网格线"""
    canvas = _as_bgr(image)
    h, w = canvas.shape[:2]
    for x in range(0, w, cell_size):
        cv2.line(canvas, (x, 0), (x, h - 1), color, 1)
    for y in range(0, h, cell_size):
        cv2.line(canvas, (0, y), (w - 1, y), color, 1)
    return canvas


def trace_path(
    image: np.ndarray,
    path: Sequence[Tuple[int, int]],
    cell_size: int,
    color: Tuple[int, int, int] = RED,
    radius: int = 2,
) -> np.ndarray:
    """
    在图像上绘制路径

    Args:
        image: 底图（灰度或 BGR）
        path: (row, col) 栅格坐标序列
        cell_size: 栅格边长（像素）
        color: 路径颜色
        radius: 路径点半径

    Returns:
        绘制了路径的新图像，起点绿色，其余红色
    """
    canvas = _as_bgr(image)
    prev: Optional[Tuple[int, int]] = None
    for row, col in path:
        center = (col * cell_size + cell_size // 2, row * cell_size + cell_size // 2)
        if prev is not None:
            cv2.line(canvas, prev, center, color, 1)
        cv2.circle(canvas, center, radius, color, 1)
        prev = center

    if len(path) > 0:
        row, col = path[0]
        cv2.circle(canvas, (col * cell_size + cell_size // 2, row * cell_size + cell_size // 2),
                   radius + 2, GREEN, -1)
    return canvas


def format_path(path: Sequence[Tuple[int, int]]) -> str:
    """控制台路径文本，例如 ->(0,0)->(1,1)"""
    return "".join(f"->({row},{col})" for row, col in path)


def format_grid(grid: OccupancyGrid, path: Sequence[Tuple[int, int]] = ()) -> str:
    """
    栅格文本：'.' 可通行, '#' 障碍, '*' 路径, 'S' 起点, 'G' 终点
    """
    vis = np.where(grid.cells == BLOCKED, '#', '.').astype('<U1')
    for row, col in path:
        vis[row, col] = '*'
    if len(path) > 0:
        vis[path[0][0], path[0][1]] = 'S'
        vis[path[-1][0], path[-1][1]] = 'G'
    return "\n".join("".join(line) for line in vis)


def _as_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()
