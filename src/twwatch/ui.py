"""Terminal output with style classes.

The kernel decides which Style applies to a line; Console maps styles to
ANSI escapes (or to nothing when colour is off) and writes to a stream.
"""

import sys
from typing import Dict, Optional, TextIO

from twwatch.codes import Style


RESET = "\033[0m"

_ANSI: Dict[Style, str] = {
    Style.SUCCESS: "\033[32m",
    Style.FAILURE: "\033[31m",
    Style.WARNING: "\033[33m",
    Style.INFO: "\033[96m",
    Style.DIMMED: "\033[37m",
}


class Console:
    """Writes plain and styled text to a stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self._stream = stream
        self.color = color

    @classmethod
    def from_settings(cls, stream: Optional[TextIO] = None) -> "Console":
        from twwatch.config.settings import get_settings

        return cls(stream=stream, color=get_settings().color)

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def styled(self, text: str, style: Style = Style.PLAIN) -> str:
        code = _ANSI.get(style)
        if not self.color or code is None:
            return text
        return f"{code}{text}{RESET}"

    def write(self, text: str) -> None:
        """Write text verbatim, without a trailing newline."""
        self.stream.write(text)
        self.stream.flush()

    def print(self, text: str = "", style: Style = Style.PLAIN) -> None:
        self.write(self.styled(text, style) + "\n")

    def nl(self) -> None:
        self.write("\n")

    def info(self, message: str, detail: str = "") -> None:
        line = self.styled(message, Style.DIMMED)
        if detail:
            line += " " + self.styled(detail, Style.INFO)
        self.write(line + "\n")

    def success(self, message: str) -> None:
        self.print(message, Style.SUCCESS)

    def warn(self, message: str) -> None:
        self.print(message, Style.WARNING)

    def error(self, message: str) -> None:
        self.print(message, Style.FAILURE)

    def shell_command(self, title: str, command: str) -> None:
        self.print(title, Style.DIMMED)
        self.print("$ " + command, Style.INFO)
