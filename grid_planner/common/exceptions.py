#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义栅格规划模块的专用异常
"""


class GridPlannerError(Exception):
    """栅格规划模块基础异常类"""
    pass


class ConfigurationError(GridPlannerError):
    """配置错误异常"""
    pass


class InvalidGeometryError(ConfigurationError):
    """地图几何参数无效（宽、高、栅格尺寸、膨胀半径必须为正）"""
    pass


class BuildError(GridPlannerError):
    """栅格地图构建失败异常"""
    pass


class EmptyInputError(BuildError):
    """输入图像没有像素"""
    pass


class PlanError(GridPlannerError):
    """路径规划失败异常"""
    pass


class EmptyGridError(PlanError):
    """栅格地图为空"""
    pass


class OutOfRangeError(PlanError):
    """起点或终点超出栅格范围"""
    pass


class BlockedCellError(PlanError):
    """起点或终点位于障碍栅格上"""
    pass


class NoPathFoundError(PlanError):
    """开放列表耗尽仍未到达终点"""
    pass


class UnsupportedHeuristicError(PlanError):
    """不支持的启发函数名称"""
    pass


class UnsupportedAlgorithmError(PlanError):
    """不支持的搜索算法名称"""
    pass


class ImageLoadError(GridPlannerError):
    """图像读取失败异常"""
    pass
