"""
Log lines for individual check results.
"""
from __future__ import annotations

import sys
from typing import List, Optional, TextIO, Tuple

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"

OK = "ok"
ERROR = "error"


class Reporter:
    """Writes one line per check result to a stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None, color: Optional[bool] = None):
        self.stream = stream or sys.stderr
        if color is None:
            color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.color = color

    def ok(self, message: str) -> None:
        self._write("✓", GREEN, message)

    def error(self, message: str) -> None:
        self._write("✗", RED, message)

    def _write(self, mark: str, color: str, message: str) -> None:
        if self.color:
            mark = f"{color}{mark}{RESET}"
        self.stream.write(f"  {mark} {message}\n")
        self.stream.flush()


class RecordingReporter(Reporter):
    """Keeps (severity, message) pairs instead of writing them."""

    def __init__(self) -> None:
        self.lines: List[Tuple[str, str]] = []

    def ok(self, message: str) -> None:
        self.lines.append((OK, message))

    def error(self, message: str) -> None:
        self.lines.append((ERROR, message))

    @property
    def errors(self) -> List[str]:
        return [message for severity, message in self.lines if severity == ERROR]

    @property
    def oks(self) -> List[str]:
        return [message for severity, message in self.lines if severity == OK]
