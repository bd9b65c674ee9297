"""
Command results.

A CommandResult is the only thing a builtin hands back to the executor.
PendingResult covers the one operation that completes later; the
executor resolves it before anything reaches the caller.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

CLEAR_SCREEN = 'clearScreen'
MATRIX = 'matrix'


@dataclass(frozen=True)
class CommandResult:
    """
    Output of a command.

    Attributes:
        output: Text to display (may be empty or span several lines)
        success: Whether the command succeeded
        exit_code: 0 on success, nonzero on failure
        markers: Side-effect tags for the display layer, e.g. 'clearScreen'
    """
    output: str = ''
    success: bool = True
    exit_code: int = 0
    markers: Tuple[str, ...] = ()

    @classmethod
    def ok(cls, output: str = '', *markers: str) -> 'CommandResult':
        return cls(output=output, success=True, exit_code=0, markers=tuple(markers))

    @classmethod
    def error(cls, message: str, exit_code: int = 1) -> 'CommandResult':
        return cls(output=message, success=False, exit_code=exit_code)

    def has_marker(self, marker: str) -> bool:
        return marker in self.markers

    def resolve(self) -> 'CommandResult':
        return self

    def __str__(self) -> str:
        return self.output


class PendingResult:
    """A result computed on demand by resolve()."""

    def __init__(self, compute: Callable[[], CommandResult]):
        self._compute = compute
        self._result: Optional[CommandResult] = None

    @property
    def ready(self) -> bool:
        return self._result is not None

    def resolve(self) -> CommandResult:
        if self._result is None:
            self._result = self._compute()
        return self._result
