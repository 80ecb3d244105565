"""
Logging output using Loguru.
Library modules log through `loguru.logger`; only the CLI configures sinks.
"""

import sys
from pathlib import Path
from typing import Union

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_loguru(
    log_file: Union[str, Path],
    level: str = "INFO",
    console_output: bool = False,
) -> None:
    """
    Configure loguru to append to a log file, optionally mirroring to stderr.

    Args:
        log_file: Path to log file (created if missing, appended otherwise)
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Also log to stderr
    """
    # Remove default handler
    logger.remove()

    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level.upper(),
        format=LOG_FORMAT,
        mode="a",
        enqueue=False,  # Synchronous writes
    )

    if console_output:
        logger.add(sys.stderr, level=level.upper(), format="{level}: {message}")

    logger.debug(f"Loguru initialized: {log_path} (level={level})")
