#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：栅格取值、阈值与移动代价
"""

# 栅格取值
FREE = 0
BLOCKED = 1

# 栅格平均亮度低于该值即视为障碍
FREE_CELL_THRESHOLD = 225

# 障碍膨胀迭代次数
DILATION_ITERATIONS = 3

# 二值掩码取值
MASK_OBSTACLE = 255
MASK_FREE = 0

# 移动代价（直行:斜行 = 10:14，近似 1:sqrt(2)）
CARDINAL_COST = 10
DIAGONAL_COST = 14

# 默认地图配置（与原始 map.yml 一致）
DEFAULT_MAP_WIDTH = 640
DEFAULT_MAP_HEIGHT = 480
DEFAULT_DILATION_RADIUS = 2
DEFAULT_CELL_SIZE = 10
DEFAULT_MIN_THRESHOLD = 200
DEFAULT_MAX_THRESHOLD = 255
