"""Render live log chunks that are already attributed to the active step."""

from dataclasses import dataclass

from twwatch.ui import Console
from .timestamps import strip_timestamp, timestamp_prefix_length


@dataclass
class LogSession:
    """Printer state for one watched execution.

    ``line_beginning`` survives chunk boundaries, so a line split across two
    chunks still loses exactly one timestamp. ``pending`` holds the start of a
    line whose timestamp prefix cannot be measured yet.
    """
    line_beginning: bool = True
    pending: str = ""

    def start_section(self) -> None:
        """Mark that the next chunk starts on a fresh line."""
        self.line_beginning = True

    def feed(self, console: Console, logs: str) -> None:
        """Print one chunk with the timestamp of every new line removed."""
        logs = self.pending + logs
        self.pending = ""
        while logs:
            if self.line_beginning:
                prefix = timestamp_prefix_length(logs)
                if prefix is None:
                    self.pending = logs
                    return
                logs = logs[prefix:]
                self.line_beginning = False

            newline = logs.find("\n")
            if newline == -1:
                console.write(logs)
                break
            console.write(logs[:newline + 1])
            logs = logs[newline + 1:]
            self.line_beginning = True

    def flush(self, console: Console) -> None:
        """Print a buffered partial line, if any."""
        if not self.pending:
            return
        pending, self.pending = self.pending, ""
        console.write(strip_timestamp(pending))
        self.line_beginning = False
