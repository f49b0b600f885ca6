"""
日志配置模块

为应用主日志与社交互动日志分别创建独立的日志文件
"""
import os
from typing import List, Optional

from loguru import logger

from storyhub.config.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"

# 已注册的 sink ID（避免重复添加）
_sink_ids: List[int] = []


def setup_logging(log_dir: Optional[str] = None, level: Optional[str] = None) -> List[int]:
    """
    配置 loguru 文件日志

    - storyhub.log: 应用全部日志
    - interaction.log: 点赞/收藏/评论等互动日志（channel=interaction）

    Args:
        log_dir: 日志目录（默认取配置 LOG_DIR）
        level: 日志级别（默认取配置 LOG_LEVEL）

    Returns:
        新添加的 sink ID 列表
    """
    log_dir = log_dir or settings.LOG_DIR
    level = level or settings.LOG_LEVEL
    os.makedirs(log_dir, exist_ok=True)

    reset_logging()

    _sink_ids.append(logger.add(
        os.path.join(log_dir, "storyhub.log"),
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        compression="zip",
        format=LOG_FORMAT,
        level=level,
    ))
    _sink_ids.append(logger.add(
        os.path.join(log_dir, "interaction.log"),
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        compression="zip",
        format=LOG_FORMAT,
        level="DEBUG",
        filter=lambda record: record["extra"].get("channel") == "interaction",
    ))

    return list(_sink_ids)


def reset_logging():
    """移除由 setup_logging 添加的文件 sink"""
    while _sink_ids:
        logger.remove(_sink_ids.pop())


# 互动日志专用 logger
interaction_logger = logger.bind(channel="interaction")
