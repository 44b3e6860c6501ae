"""Console logging utilities for octacore.

A small level-filtered console logger used by the frame driver to report
faults and per-frame summaries. The default level comes from the
``OCTACORE_LOG_LEVEL`` environment variable (``WARNING`` when unset).
"""

import os
import sys
import time
from typing import Dict, Optional

LOG_LEVEL_ENV = "OCTACORE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


class ConsoleLogger:
    """Console logger with level filtering, colors and elapsed-time stamps."""

    level_order = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3,
        "CRITICAL": 4,
    }

    def __init__(
        self,
        name: str = "Octacore",
        log_level: Optional[str] = None,
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.stream = stream if stream is not None else sys.stdout
        self.log_level = (log_level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{self.log_level}'. Available: {list(self.level_order)}"
            )
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def set_level(self, log_level: str):
        level = log_level.upper()
        if level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )
        self.log_level = level

    def is_enabled_for(self, level: str) -> bool:
        return self._should_log(level)

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "Octacore", **kwargs) -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name, **kwargs)
    return _loggers[name]
