#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
图像读写：兼容中文路径的 cv2 读写封装
"""

from pathlib import Path

import cv2
import numpy as np
from loguru import logger

from grid_planner.common.exceptions import ImageLoadError


def load_image(path: Path) -> np.ndarray:
    """
    读取彩色图像 (BGR)

    Args:
        path: 图像路径

    Returns:
        HxWx3 uint8 图像

    Raises:
        ImageLoadError: 文件不存在或无法解码
    """
    path = Path(path)
    if not path.exists():
        raise ImageLoadError(f"文件不存在: {path}")

    data = np.fromfile(str(path), dtype=np.uint8)
    img = cv2.imdecode(data, cv2.IMREAD_COLOR)
    if img is None:
        raise ImageLoadError(f"无法读取图像文件: {path}")

    logger.info(f"加载地图图像: {path}, 尺寸={img.shape[1]}x{img.shape[0]}")
    return img


def save_image(path: Path, image: np.ndarray) -> Path:
    """按扩展名编码并写入图像"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ext = path.suffix or ".png"
    ok, buffer = cv2.imencode(ext, image)
    if not ok:
        raise ImageLoadError(f"无法编码图像: {path}")
    buffer.tofile(str(path))
    logger.info(f"图像已保存: {path}")
    return path
