#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划配置模型

使用Pydantic定义类型安全的配置模型。字段名兼容原始 map.yml 的键名
（map_width、window_size 等）。
"""

from typing import Any, Dict

from loguru import logger
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from grid_planner.common import constants
from grid_planner.common.exceptions import (
    InvalidGeometryError,
    UnsupportedAlgorithmError,
    UnsupportedHeuristicError,
)


class MapConfig(BaseModel):
    """地图几何与阈值配置"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    width: int = Field(
        constants.DEFAULT_MAP_WIDTH,
        description="归一化后的图像宽度（像素）",
        validation_alias=AliasChoices("width", "map_width"),
    )
    height: int = Field(
        constants.DEFAULT_MAP_HEIGHT,
        description="归一化后的图像高度（像素）",
        validation_alias=AliasChoices("height", "map_height"),
    )
    dilation_radius: int = Field(
        constants.DEFAULT_DILATION_RADIUS,
        description="障碍膨胀半径（像素）",
        validation_alias=AliasChoices("dilation_radius", "map_dilation", "dilation"),
    )
    cell_size: int = Field(
        constants.DEFAULT_CELL_SIZE,
        description="单个栅格边长（像素）",
        validation_alias=AliasChoices("cell_size", "window_size"),
    )
    min_threshold: int = Field(
        constants.DEFAULT_MIN_THRESHOLD,
        description="可通行像素的最小灰度",
        validation_alias=AliasChoices("min_threshold", "min_thresh"),
    )
    max_threshold: int = Field(
        constants.DEFAULT_MAX_THRESHOLD,
        description="可通行像素的最大灰度",
        validation_alias=AliasChoices("max_threshold", "max_thresh"),
    )

    @field_validator('width', 'height', 'cell_size', 'dilation_radius')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """验证几何参数为正"""
        if v <= 0:
            raise ValueError(f"值必须大于0: {v}")
        return v

    @field_validator('min_threshold', 'max_threshold')
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        """验证灰度阈值范围"""
        if not 0 <= v <= 255:
            raise ValueError(f"灰度阈值必须在0-255之间: {v}")
        return v

    @model_validator(mode='after')
    def validate_threshold_order(self) -> 'MapConfig':
        if self.min_threshold > self.max_threshold:
            raise ValueError(
                f"min_threshold 不能大于 max_threshold: {self.min_threshold} > {self.max_threshold}"
            )
        return self

    @property
    def num_cells_w(self) -> int:
        return self.width // self.cell_size

    @property
    def num_cells_h(self) -> int:
        return self.height // self.cell_size

    def describe(self) -> str:
        """单行配置摘要，用于日志"""
        return (
            f"width={self.width}, height={self.height}, dilation={self.dilation_radius}, "
            f"cell_size={self.cell_size}, thresholds=[{self.min_threshold}, {self.max_threshold}], "
            f"cells={self.num_cells_h}x{self.num_cells_w}"
        )


class PlannerConfig(BaseModel):
    """搜索配置"""
    model_config = ConfigDict(frozen=True)

    heuristic: str = Field("euclidean", description="启发函数: manhattan / euclidean / octagonal")
    search: str = Field("astar", description="搜索算法: astar / dijkstra")

    @field_validator('heuristic')
    @classmethod
    def validate_heuristic(cls, v: str) -> str:
        """验证启发函数名称，并规范为枚举值"""
        # core 依赖本模块，延迟导入避免循环
        from grid_planner.core.heuristics import Heuristic

        try:
            return Heuristic.from_name(v).value
        except UnsupportedHeuristicError as e:
            raise ValueError(str(e)) from e

    @field_validator('search')
    @classmethod
    def validate_search(cls, v: str) -> str:
        """验证搜索算法名称，并规范为枚举值"""
        from grid_planner.core.heuristics import SearchAlgorithm

        try:
            return SearchAlgorithm.from_name(v).value
        except UnsupportedAlgorithmError as e:
            raise ValueError(str(e)) from e


class PlanningConfig(BaseModel):
    """完整规划配置"""
    map: MapConfig = Field(default_factory=MapConfig, description="地图配置")
    planner: PlannerConfig = Field(default_factory=PlannerConfig, description="搜索配置")


def make_map_config(params: Dict[str, Any]) -> MapConfig:
    """
    校验并构建 MapConfig

    Args:
        params: 配置字典，键名可用新旧两套命名

    Returns:
        验证后的 MapConfig

    Raises:
        InvalidGeometryError: 任一字段无效
    """
    try:
        return MapConfig(**params)
    except ValidationError as e:
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise InvalidGeometryError(f"地图配置无效: {params}") from e
