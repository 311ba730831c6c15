#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格构建模块：把解码后的图像转换为二值占据栅格

流程：缩放 -> 灰度 -> 阈值二值化 -> 障碍膨胀 -> 按栅格求平均 -> 分类
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

import cv2
import numpy as np
from loguru import logger
from pydantic import AliasChoices

from grid_planner.common.constants import BLOCKED, FREE, FREE_CELL_THRESHOLD, MASK_OBSTACLE
from grid_planner.common.exceptions import EmptyInputError
from grid_planner.config.models import MapConfig, make_map_config
from grid_planner.core.grid_preprocess import binarize, dilate_obstacles, to_gray, to_uint8
from grid_planner.core.types import OccupancyGrid


@dataclass(frozen=True)
class MapLayers:
    """构建过程中的各层数据"""
    normalized: np.ndarray      # 缩放后的输入图像
    obstacle_mask: np.ndarray   # 0/255 障碍掩码（未膨胀）
    dilated_mask: np.ndarray    # 0/255 障碍掩码（已膨胀）
    grid: OccupancyGrid         # 占据栅格


def classify_cells(free_intensity: np.ndarray, cell_size: int, shape: Tuple[int, int]) -> np.ndarray:
    """
    按栅格求整数平均亮度并分类

    Args:
        free_intensity: HxW 亮度图，可通行为 255，障碍为 0
        cell_size: 栅格边长（像素）
        shape: 栅格尺寸 (rows, cols)

    Returns:
        (rows, cols) uint8 数组，平均亮度低于 FREE_CELL_THRESHOLD 的栅格为 BLOCKED
    """
    rows, cols = shape
    crop = free_intensity[:rows * cell_size, :cols * cell_size].astype(np.int64)
    if crop.shape != (rows * cell_size, cols * cell_size):
        raise ValueError(
            f"图像尺寸 {free_intensity.shape} 不足以划分 {rows}x{cols} 个 {cell_size}px 栅格"
        )
    sums = crop.reshape(rows, cell_size, cols, cell_size).sum(axis=(1, 3))
    means = sums // (cell_size * cell_size)
    return np.where(means < FREE_CELL_THRESHOLD, BLOCKED, FREE).astype(np.uint8)


def _overridden(field_name: str, overrides: Mapping[str, Any]) -> bool:
    """覆盖项是否以字段名或任一旧键名命中该字段"""
    alias = MapConfig.model_fields[field_name].validation_alias
    names = alias.choices if isinstance(alias, AliasChoices) else [field_name]
    return any(name in overrides for name in names)


class GridBuilder:
    """
    栅格构建器

    纯计算、无 I/O，相同输入得到完全相同的栅格。

    示例:
        ```python
        builder = GridBuilder()
        config = builder.configure(width=640, height=480, cell_size=10, dilation_radius=2)
        grid = builder.build(image, config)
        ```
    """

    def configure(
        self,
        params: Union[MapConfig, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> MapConfig:
        """
        校验几何参数并生成配置

        Args:
            params: 已有的 MapConfig 或配置字典，None 表示使用默认值
            **overrides: 逐项覆盖的字段（新旧键名均可）

        Returns:
            验证后的 MapConfig

        Raises:
            InvalidGeometryError: 宽、高、栅格尺寸或膨胀半径不为正
            TypeError: params 既不是 MapConfig 也不是映射
        """
        if isinstance(params, MapConfig):
            if not overrides:
                return params
            merged = {
                name: value for name, value in params.model_dump().items()
                if not _overridden(name, overrides)
            }
            merged.update(overrides)
        elif params is None or isinstance(params, Mapping):
            merged = {**(params or {}), **overrides}
        else:
            raise TypeError(f"不支持的配置类型: {type(params).__name__}")

        config = make_map_config(merged)
        logger.debug(f"地图配置: {config.describe()}")
        return config

    def build(self, image: np.ndarray, config: MapConfig) -> OccupancyGrid:
        """
        构建占据栅格

        Args:
            image: 解码后的图像 (HxW / HxWxC)
            config: 地图配置

        Returns:
            num_cells_h x num_cells_w 的 OccupancyGrid

        Raises:
            EmptyInputError: 图像没有像素
        """
        return self.build_layers(image, config).grid

    def build_layers(self, image: np.ndarray, config: MapConfig) -> MapLayers:
        """构建占据栅格，同时返回中间各层用于可视化"""
        if image is None or np.asarray(image).size == 0:
            raise EmptyInputError("输入图像没有像素")

        # 1) 缩放到配置尺寸
        normalized = cv2.resize(to_uint8(image), (config.width, config.height))

        # 2) 灰度 + 二值化
        gray = to_gray(normalized)
        obstacle_mask = binarize(gray, config.min_threshold, config.max_threshold)

        # 3) 膨胀障碍
        dilated = dilate_obstacles(obstacle_mask, config.dilation_radius)

        # 4) 按栅格分类
        free_intensity = np.where(dilated == MASK_OBSTACLE, 0, 255).astype(np.uint8)
        cells = classify_cells(free_intensity, config.cell_size,
                               (config.num_cells_h, config.num_cells_w))
        grid = OccupancyGrid(cells)

        logger.debug(
            f"栅格构建完成: 尺寸={grid.shape}, 障碍栅格={grid.blocked_count()}/{cells.size}"
        )

        return MapLayers(
            normalized=normalized,
            obstacle_mask=obstacle_mask,
            dilated_mask=dilated,
            grid=grid,
        )
