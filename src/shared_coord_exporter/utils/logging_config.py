# File: src/shared_coord_exporter/utils/logging_config.py
"""
Logging configuration for the shared-coordinate exporter.

Sets up a timestamped log file plus console output. Inside the BIM host the
console format is kept short because it ends up in the host's script output
window.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional


class ExporterLogger:
    """
    Configures logging for the exporter commands.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - File and console output with different formats and levels
    - Module-specific logger levels
    """

    LOG_FILE_PREFIX = "shared_coord_exporter"

    @staticmethod
    def configure(debug_mode: bool = False, log_dir: str = "logs", host_mode: bool = True) -> str:
        """
        Configure the logging system for the whole package.

        Args:
            debug_mode: If True, sets DEBUG level for all loggers
            log_dir: Directory to store log files
            host_mode: If True, uses the terse console format for the host

        Returns:
            Path to the created log file
        """
        os.makedirs(log_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(
            log_dir, f"{ExporterLogger.LOG_FILE_PREFIX}_{timestamp}.log"
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

        # Commands can run many times in one host session
        if root_logger.handlers:
            for handler in list(root_logger.handlers):
                handler.close()
            root_logger.handlers.clear()

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        file_handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
        root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        if host_mode:
            console_formatter = logging.Formatter('%(levelname)s: %(message)s')
        else:
            console_formatter = logging.Formatter('%(name)s - %(levelname)s: %(message)s')
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(logging.INFO)
        root_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger

        Returns:
            A configured logger
        """
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger


def configure_logging(debug_mode: bool = False, log_dir: str = "logs", host_mode: bool = True) -> str:
    """Convenience wrapper around ExporterLogger.configure."""
    return ExporterLogger.configure(debug_mode=debug_mode, log_dir=log_dir, host_mode=host_mode)


def get_logger(name: str, level: Optional[int] = None):
    """
    Get a logger for a specific module.

    Args:
        name: Logger name, typically __name__
        level: Optional specific level for this logger

    Returns:
        A configured logger
    """
    return ExporterLogger.get_logger(name, level)
