#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
命令行入口：读取地图 -> 构建栅格 -> 规划路径 -> 输出结果

用法:
    grid-planner --map-path maps/map1.png --map-config configs/map.yaml \
        --heuristic euclidean --source 2 4 --destination 24 32 --output out.png
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from grid_planner.common.exceptions import GridPlannerError
from grid_planner.config import MapConfig, PlannerConfig, PlanningConfig, load_config
from grid_planner.core.grid_builder import GridBuilder
from grid_planner.core.heuristics import Heuristic, SearchAlgorithm
from grid_planner.core.path_finder import PathFinder
from grid_planner.utils.image_io import load_image, save_image
from grid_planner.utils.logger import setup_logger
from grid_planner.utils.render import draw_grid, format_path, render_obstacle_map, trace_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="栅格地图 A* 路径规划")
    parser.add_argument("--map-path", type=Path, required=True, help="输入地图图像路径")
    parser.add_argument("--map-config", type=Path, default=None, help="地图配置 YAML 路径")
    parser.add_argument("--heuristic", type=str, default=None,
                        help="启发函数: manhattan / euclidean / octagonal（默认取配置文件，否则 euclidean）")
    parser.add_argument("--search", type=str, default=None,
                        help="搜索算法: astar / dijkstra（默认取配置文件，否则 astar）")
    parser.add_argument("--source", type=int, nargs=2, metavar=("ROW", "COL"), required=True,
                        help="起点栅格坐标")
    parser.add_argument("--destination", type=int, nargs=2, metavar=("ROW", "COL"), required=True,
                        help="终点栅格坐标")
    parser.add_argument("--output", type=Path, default=None, help="保存绘制结果的图像路径")
    parser.add_argument("--log-level", type=str, default="INFO", help="日志级别")
    return parser


def run(args: argparse.Namespace) -> int:
    """执行一次完整的规划流程，返回进程退出码"""
    try:
        if args.map_config is not None:
            config = load_config(args.map_config)
        else:
            logger.warning("未提供地图配置，使用默认配置")
            config = PlanningConfig(map=MapConfig(), planner=PlannerConfig())

        heuristic = Heuristic.from_name(args.heuristic or config.planner.heuristic)
        algorithm = SearchAlgorithm.from_name(args.search or config.planner.search)
        logger.info(f"地图配置: {config.map.describe()}")

        # 1. 构建栅格
        logger.info("开始构建栅格地图...")
        image = load_image(args.map_path)
        layers = GridBuilder().build_layers(image, config.map)
        logger.info(f"栅格构建完成: {layers.grid.num_rows}x{layers.grid.num_cols}, "
                    f"障碍栅格={layers.grid.blocked_count()}")

        # 2. 规划路径
        logger.info(f"开始路径规划: heuristic={heuristic.value}, algorithm={algorithm.value}")
        finder = PathFinder(algorithm)
        path = finder.find_path(layers.grid, tuple(args.source), tuple(args.destination), heuristic)
        logger.info(f"路径规划成功: 长度={len(path)}, 代价={path.cost}, 探索节点数={path.nodes_explored}")
        print(format_path(path.coords))

        # 3. 绘制结果
        if args.output is not None:
            canvas = draw_grid(render_obstacle_map(layers.dilated_mask), config.map.cell_size)
            canvas = trace_path(canvas, path.coords, config.map.cell_size)
            save_image(args.output, canvas)

        return 0

    except GridPlannerError as e:
        logger.error(f"规划失败: {e}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level.upper())
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
