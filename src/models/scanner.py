"""
Scanner state models

The directive scanner is a finite-state machine over the lines of one
document. Each state is a small frozen dataclass; ScanState is the union
the scanner loop dispatches on.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union


@dataclass(frozen=True)
class ScanningText:
    """Plain Markdown text: echo the current line, then dispatch the next"""


@dataclass(frozen=True)
class ScanningDirective:
    """Current line is an embed directive that must be executed"""


@dataclass(frozen=True)
class ScanningFence:
    """
    Inside a fenced code block

    Attributes:
        suppress_output: True when the block is the stale output of the
                         directive just executed and must be dropped;
                         False for unrelated blocks, echoed verbatim
    """
    suppress_output: bool = False


ScanState = Union[ScanningText, ScanningDirective, ScanningFence]


class LineReader:
    """
    Line source with 1-based line counting

    Wraps any iterable of lines (a list from str.splitlines(keepends=True),
    an open text file, ...). The counter is only bumped when a line is
    actually read, so after the input is exhausted ``line`` still names the
    last line seen, which is what error messages report.

    Attributes:
        line: Number of the current line (0 before the first read)
        current: Text of the current line including its terminator
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self.line: int = 0
        self.current: Optional[str] = None

    def advance(self) -> bool:
        """Read the next line; False once the input is exhausted"""
        try:
            self.current = next(self._lines)
        except StopIteration:
            self.current = None
            return False
        self.line += 1
        return True
