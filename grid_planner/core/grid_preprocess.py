#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格预处理模块：灰度化、二值化和障碍膨胀

功能：
- 将输入图像统一成 uint8 灰度图
- 按灰度阈值提取障碍掩码
- 对障碍进行膨胀，为车辆预留安全距离
"""

import cv2
import numpy as np
from loguru import logger

from grid_planner.common.constants import DILATION_ITERATIONS, MASK_FREE, MASK_OBSTACLE


def to_uint8(image: np.ndarray) -> np.ndarray:
    """非 uint8 输入截断到 [0, 255] 后转换"""
    image = np.asarray(image)
    if image.dtype == np.uint8:
        return image
    return np.clip(image.astype(np.float64), 0, 255).astype(np.uint8)


def to_gray(image: np.ndarray) -> np.ndarray:
    """
    转灰度图

    Args:
        image: HxW、HxWx1、HxWx3(BGR) 或 HxWx4(BGRA) 图像

    Returns:
        HxW uint8 灰度图
    """
    image = to_uint8(image)
    if image.ndim == 2:
        return image
    if image.ndim == 3:
        channels = image.shape[2]
        if channels == 1:
            return image[:, :, 0]
        if channels == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        if channels == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"不支持的图像形状: {image.shape}")


def binarize(gray: np.ndarray, min_threshold: int, max_threshold: int) -> np.ndarray:
    """
    灰度落在 [min_threshold, max_threshold] 之外的像素视为障碍

    Args:
        gray: HxW uint8 灰度图
        min_threshold: 可通行最小灰度
        max_threshold: 可通行最大灰度

    Returns:
        障碍掩码, 255 表示障碍, 0 表示可通行
    """
    obstacle = (gray < min_threshold) | (gray > max_threshold)
    return np.where(obstacle, MASK_OBSTACLE, MASK_FREE).astype(np.uint8)


def dilate_obstacles(
    obstacle_mask: np.ndarray,
    radius_px: int,
    iterations: int = DILATION_ITERATIONS,
) -> np.ndarray:
    """
    用圆盘结构元素膨胀障碍

    Args:
        obstacle_mask: 0/255 障碍掩码
        radius_px: 结构元素半径（像素）
        iterations: 膨胀次数

    Returns:
        膨胀后的 0/255 障碍掩码
    """
    k = 2 * radius_px + 1
    kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (k, k))
    dilated = cv2.dilate(obstacle_mask, kernel, iterations=iterations)

    logger.debug(f"障碍膨胀完成: 膨胀半径={radius_px}px, 核大小={k}x{k}, 迭代={iterations}")

    return dilated
