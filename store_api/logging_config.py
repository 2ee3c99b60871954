"""Настройка логирования для HTTP и MCP процессов."""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Настраивает корневой логгер один раз на процесс.

    MCP-серверу нужно передавать stream=sys.stderr: stdout занят протоколом.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=stream or sys.stdout,
    )
