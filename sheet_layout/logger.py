# sheet_layout/logger.py
# Lightweight logging utilities for the layout engine.
# Allows you to turn on/off capacity probe diagnostics without polluting stdout.

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[LAYOUT]"

    def info(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def debug(self, msg: str) -> None:
        if self.enabled and self.verbose:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def warn(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} WARNING: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        print(f"{self.prefix} ERROR: {msg}", file=sys.stderr)


# Global default logger (quiet unless a caller opts in)
LOGGER = Logger(enabled=False)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger() -> Logger:
    return LOGGER
