"""
Logging setup for rocketevo runs.

Loguru configuration with colored console output and a rotating log file.
"""

from datetime import datetime, timezone
import os
import sys

from loguru import logger


def setup_logger(
    log_dir: str = "logs",
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
    enable_colors: bool = True,
) -> str:
    """
    Set up console and file logging.

    Args:
        log_dir: Directory for log files
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation policy (e.g., "50 MB", "1 day")
        retention: Log retention policy (e.g., "30 days", "1 month")
        enable_colors: Whether to enable colored console output

    Returns:
        Path to the log file
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"rocketevo_{timestamp}.log")

    # drop loguru's default stderr handler so records are not duplicated
    logger.remove()

    colorize = enable_colors and sys.stdout.isatty()
    if colorize:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<blue>{function}</blue>:<yellow>{line}</yellow> | "
            "<level>{message}</level>"
        )
    else:
        console_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )

    logger.add(
        sys.stdout,
        level=level,
        format=console_format,
        colorize=colorize,
        backtrace=True,
        diagnose=False,
    )

    logger.add(
        log_file,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation=rotation,
        retention=retention,
        compression="zip",
        encoding="utf-8",
        backtrace=True,
        diagnose=False,
    )

    logger.debug("Log level: {}, colors: {}, file: {}", level, colorize, log_file)
    return log_file
