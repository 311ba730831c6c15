#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划配置模块

提供类型安全的配置管理和验证。
"""

from .models import (
    MapConfig,
    PlannerConfig,
    PlanningConfig,
    make_map_config,
)
from .loader import load_config, load_map_config

__all__ = [
    'MapConfig',
    'PlannerConfig',
    'PlanningConfig',
    'make_map_config',
    'load_config',
    'load_map_config',
]
