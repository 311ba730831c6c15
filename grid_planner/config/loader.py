#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从YAML文件加载配置并使用Pydantic验证。支持两种文件格式：
原始的扁平 map.yml（map_width、window_size ...），以及带 map / planner
两个小节的嵌套格式。
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger
from pydantic import ValidationError

from grid_planner.common.exceptions import ConfigurationError
from grid_planner.config.models import MapConfig, PlannerConfig, PlanningConfig, make_map_config


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    if raw_config is None:
        error_msg = f"配置文件为空: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    if not isinstance(raw_config, dict):
        error_msg = f"配置文件顶层必须是映射: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    return raw_config


def load_config(config_path: Path) -> PlanningConfig:
    """
    从YAML文件加载完整规划配置

    Args:
        config_path: 配置文件路径

    Returns:
        验证后的PlanningConfig对象

    Raises:
        ConfigurationError: 文件不存在、为空、格式错误或小节不是映射
        InvalidGeometryError: 地图几何参数无效
    """
    config_path = Path(config_path)
    raw_config = _read_yaml(config_path)

    if 'map' in raw_config or 'planner' in raw_config:
        map_section = raw_config.get('map') or {}
        planner_section = raw_config.get('planner') or {}
    else:
        # 扁平格式：除 heuristic / search 外均为地图字段
        planner_section = {
            key: raw_config[key] for key in ('heuristic', 'search') if key in raw_config
        }
        map_section = {
            key: value for key, value in raw_config.items() if key not in planner_section
        }

    for name, section in (('map', map_section), ('planner', planner_section)):
        if not isinstance(section, dict):
            error_msg = f"配置小节 {name} 必须是映射: {section!r}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

    map_config = make_map_config(map_section)

    try:
        planner_config = PlannerConfig(**planner_section)
    except ValidationError as e:
        error_msg = f"配置验证失败:\n{e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    logger.info(f"配置加载成功: {config_path}")
    return PlanningConfig(map=map_config, planner=planner_config)


def load_map_config(config_path: Path) -> MapConfig:
    """只加载地图配置"""
    return load_config(config_path).map
