# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""structlog setup: one console line per event on stdout, JSON lines in a rotating file."""

from collections.abc import Mapping
from datetime import datetime
import inspect
import logging
import logging.handlers
import os
from pathlib import Path
import sys
import tempfile
from types import TracebackType
from typing import Any

import structlog

from ihmc_bridge.constants import IHMC_BRIDGE_LOG_DIR, IHMC_BRIDGE_PROJECT_ROOT

_LOG_FILE_PATH: Path | None = None
_CONSOLE_PATH_WIDTH = 30


def _get_log_file_path() -> Path:
    log_dir = IHMC_BRIDGE_LOG_DIR
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path(tempfile.gettempdir()) / "ihmc_bridge" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_dir / f"ihmc_bridge_{timestamp}_{os.getpid()}.jsonl"


def _configure_structlog() -> Path:
    global _LOG_FILE_PATH

    if _LOG_FILE_PATH:
        return _LOG_FILE_PATH

    _LOG_FILE_PATH = _get_log_file_path()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return _LOG_FILE_PATH


def _compact_console_processor(logger: Any, method_name: str, event_dict: Mapping[str, Any]) -> str:
    """Format log lines as: HH:MM:SS.mmm [lvl][module.py            ] Event key=value ..."""
    event_dict = dict(event_dict)
    for key in ("_record", "_from_structlog", "exception"):
        event_dict.pop(key, None)

    # ISO timestamp, keep the time of day down to milliseconds
    time_str = str(event_dict.pop("timestamp", ""))[11:23]
    level_short = event_dict.pop("level", "???")[:3].lower()

    # Fixed width, truncated from the left
    file_path = event_dict.pop("logger", "")[-_CONSOLE_PATH_WIDTH:]
    event = event_dict.pop("event", "")

    line = f"{time_str} [{level_short}][{file_path:<{_CONSOLE_PATH_WIDTH}s}] {event}"
    if event_dict:
        line += " " + " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()))
    return line


def setup_logger(*, level: int | None = None) -> Any:
    """Set up a structured logger named after the calling module.

    Args:
        level: The logging level. Defaults to ``IHMC_BRIDGE_LOG_LEVEL`` or INFO.

    Returns:
        A configured structlog logger instance.
    """

    name = inspect.stack()[1].filename
    try:
        name = str(Path(name).relative_to(IHMC_BRIDGE_PROJECT_ROOT))
    except ValueError:
        pass

    log_file_path = _configure_structlog()

    if level is None:
        level_name = os.getenv("IHMC_BRIDGE_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    stdlib_logger = logging.getLogger(name)
    stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_compact_console_processor)
    )
    stdlib_logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        mode="a",
        maxBytes=10 * 1024 * 1024,  # 10MiB
        backupCount=20,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    stdlib_logger.addHandler(file_handler)

    return structlog.get_logger(name)


def set_log_level(level: int) -> None:
    """Apply ``level`` to every logger created through setup_logger()."""
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and "ihmc_bridge" in name:
            logger.setLevel(level)


def setup_exception_handler() -> None:
    def handle_exception(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            setup_logger().error(
                "Uncaught exception occurred", exc_info=(exc_type, exc_value, exc_traceback)
            )
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    sys.excepthook = handle_exception
