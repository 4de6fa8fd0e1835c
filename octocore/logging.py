"""Console logging utilities for octocore.

This module provides a small console logger with level filtering and ANSI
colours, plus a callback system that lets hosts observe interpreter
diagnostics (absorbed invalid opcodes, faults) without parsing log output.
"""

import os
import sys
import time
from typing import List


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "octocore",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
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

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        self.log_level = log_level.upper()

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

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

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

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


logger = ConsoleLogger(log_level=os.environ.get("OCTOCORE_LOG_LEVEL", "WARNING"))


class DiagnosticsCallback:
    """Base class for interpreter diagnostics callbacks."""

    def on_invalid_opcode(self, address: int, opcode: int):
        """Called when an unknown opcode was executed as a no-op."""
        pass

    def on_fault(self, error: Exception):
        """Called when clock() raised a fatal interpreter error."""
        pass


class RecordingCallback(DiagnosticsCallback):
    """Callback that keeps every reported event, for inspection by hosts."""

    def __init__(self):
        self.invalid_opcodes: List[tuple[int, int]] = []
        self.faults: List[Exception] = []

    def on_invalid_opcode(self, address: int, opcode: int):
        self.invalid_opcodes.append((address, opcode))

    def on_fault(self, error: Exception):
        self.faults.append(error)
