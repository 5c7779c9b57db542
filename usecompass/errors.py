"""Exception types raised by usecompass."""

from __future__ import annotations

from typing import Optional


class UsecompassError(RuntimeError):
    """Base class for usecompass failures."""


class ConfigError(UsecompassError):
    """Raised when usecompass.yml cannot be parsed."""


class ParseError(UsecompassError):
    """Raised when a Ruby source file cannot be turned into a syntax tree."""

    def __init__(self, path: str, message: str, line: Optional[int] = None) -> None:
        self.path = path
        self.message = message
        self.line = line
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"{location}: {message}")


__all__ = ["ConfigError", "ParseError", "UsecompassError"]
