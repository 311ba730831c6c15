#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志配置：控制台彩色输出，可选按天滚动的文件输出
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: str = "INFO", log_dir: Optional[Union[str, Path]] = None):
    """
    重新配置 loguru 输出，并开启本包的日志

    Args:
        level: 日志级别
        log_dir: 日志文件目录，None 时只输出到控制台

    Returns:
        配置好的 logger
    """
    logger.enable("grid_planner")
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "grid_planner_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="7 days",
            level=level,
            encoding="utf-8",
            format=FILE_FORMAT,
        )
        logger.debug(f"日志文件目录: {log_path.resolve()}")

    return logger
