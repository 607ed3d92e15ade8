"""
Utility functions for daily sheet processing
"""

import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "sheet_config.yaml"


def ensure_directory(dir_path: str) -> str:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Absolute path to directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


def format_processing_time(milliseconds: int) -> str:
    """
    Format processing time in human-readable format

    Args:
        milliseconds: Time in milliseconds

    Returns:
        Formatted string (e.g., "1.23s", "456ms")
    """
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    else:
        seconds = milliseconds / 1000
        return f"{seconds:.2f}s"


# Logging setup helper
def setup_logging(log_file: Optional[str] = "logs/daily_sheet.log", level: str = "INFO"):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file (None for console only)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # Add file handler
    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
        )

    logger.info("Logging initialized")


def setup_logging_from_config(config_path: Optional[str] = None):
    """Read the `logging` section of the YAML config and apply it."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    settings = {}
    if os.path.exists(config_path):
        with open(config_path, 'r', encoding='utf-8') as f:
            settings = (yaml.safe_load(f) or {}).get('logging', {})
    else:
        logger.warning(f"Config file not found: {config_path}, using logging defaults")

    setup_logging(
        log_file=settings.get('file', "logs/daily_sheet.log"),
        level=settings.get('level', "INFO"),
    )
