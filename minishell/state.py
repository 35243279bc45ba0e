"""State shared by every part of a running shell."""

import enum
from dataclasses import dataclass, field

from minishell.environment import Environment


class PipeFlag(enum.IntFlag):
    """Where a command in a pipeline is connected to a pipe."""

    NONE = 0
    NEXT = 1
    PREV = 2


@dataclass
class ShellState:
    """Environment, arguments and last exit status of a shell session."""

    env: Environment = field(default_factory=Environment)
    argv: list = field(default_factory=list)
    exit_status: int = 0
    signal: int = 0
    tty_path: str = ""

    def positional(self, index):
        """Return positional argument ``index``, or an empty string past the end."""
        if 0 <= index < len(self.argv):
            return self.argv[index]
        return ""

    def status_text(self):
        """Return the text of ``$?``, folding in a pending signal first."""
        if self.signal:
            self.exit_status = 128 + self.signal
        return str(abs(self.exit_status))