"""
Directive scanner for Markdown documents

Single-pass, line-oriented rewrite engine. The scanner walks a document
and copies it to the output, with three kinds of lines handled specially:

1. Directive lines ([embedmd]:# (...)): echoed unchanged, followed by a
   freshly rendered fenced block with the embedded content
2. A fenced block right after a directive: the stale output of a previous
   run, dropped so it is replaced rather than duplicated
3. Any other fenced block: echoed verbatim, and directive-looking lines
   inside it are never executed

States (see models.scanner):

    ScanningText ──directive──▶ ScanningDirective ──fence──▶ ScanningFence(suppress)
         │  ▲                          │                             │
         │  └──────────other───────────┘                             │
         └──fence──▶ ScanningFence(echo) ──close──▶ dispatch ◀───────┘

Running the scanner on its own output is a no-op: the block it wrote sits
directly under the directive, so the next run swaps it for an identical one.

Example:
    >>> scanner = Scanner("# Doc\\n[embedmd]:# (a.go)\\n", lambda cmd: "```go\\nx\\n```\\n")
    >>> scanner.process()
    '# Doc\\n[embedmd]:# (a.go)\\n```go\\nx\\n```\\n'
"""

from io import StringIO
from typing import Callable, List, Optional

from ..config import AppSettings, appsettings
from ..models.command import Command
from ..models.scanner import (
    LineReader,
    ScanningDirective,
    ScanningFence,
    ScanningText,
    ScanState,
)
from .command import command_parse
from .embedder import Embedder
from .errors import EmbedError, UnbalancedCodeSection
from .fetch import Fetcher
from .log import LOG


CommandRunner = Callable[[Command], str]


def lines_split(source: str) -> List[str]:
    """
    Split on "\\n" only, keeping terminators

    Unlike str.splitlines() this leaves form feeds, lone "\\r" and other
    Unicode separators inside their line, so "".join() gives back source.
    """
    parts = source.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


class Scanner:
    """
    State machine that rewrites the directives of one document

    Args:
        source: Full Markdown document
        runner: Callable returning the fenced block for a Command
        settings: AppSettings providing the directive marker and fence token

    Attributes:
        reader: Line source with the current line and its number
        out: Output buffer, owned by this scanner for one document
    """

    def __init__(
        self,
        source: str,
        runner: CommandRunner,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.source = source
        self.runner = runner
        self.settings = settings or appsettings
        self.reader = LineReader(lines_split(source))
        self.out: StringIO = StringIO()

    def process(self) -> str:
        """
        Run the state machine to completion

        Returns:
            Rewritten document

        Raises:
            EmbedError: First failure, with the line number attached.
                        Nothing of the partial output is returned.
        """
        state = self.line_dispatch()
        while state is not None:
            try:
                state = self.transition(state)
            except EmbedError as exc:
                raise exc.at_line(self.reader.line)
        return self.out.getvalue()

    def transition(self, state: ScanState) -> Optional[ScanState]:
        """Execute one state and return the next (None at end of input)"""
        LOG(f"line {self.reader.line}: {state}", level=3)
        if isinstance(state, ScanningText):
            return self.text_scan()
        if isinstance(state, ScanningDirective):
            return self.directive_scan()
        if isinstance(state, ScanningFence):
            return self.fence_scan(state.suppress_output)
        raise TypeError(f"unknown scanner state {state!r}")

    def line_classify(self, line: str) -> ScanState:
        """State that handles ``line`` when it arrives in text context"""
        if self.settings.directive_is(line):
            return ScanningDirective()
        if self.settings.fence_is(line):
            return ScanningFence(suppress_output=False)
        return ScanningText()

    def line_dispatch(self) -> Optional[ScanState]:
        """Read the next line and pick its state"""
        if not self.reader.advance():
            return None
        return self.line_classify(self.reader.current)

    def text_scan(self) -> Optional[ScanState]:
        self.out.write(self.reader.current)
        return self.line_dispatch()

    def directive_scan(self) -> Optional[ScanState]:
        """
        Echo the directive, write its fenced block, swallow the old one

        The directive line is the anchor for future runs and is never
        altered, except that a missing line terminator is added so the
        block starts on a line of its own.
        """
        line = self.reader.current
        self.out.write(line if line.endswith("\n") else line + "\n")

        cmd = command_parse(self.settings.directiveArgs_extract(line))
        LOG(f"line {self.reader.line}: embedding {cmd.path}", level=2)
        self.out.write(self.runner(cmd))

        if not self.reader.advance():
            return None
        if self.settings.fence_is(self.reader.current):
            return ScanningFence(suppress_output=True)
        return self.line_classify(self.reader.current)

    def fence_scan(self, suppress_output: bool) -> Optional[ScanState]:
        """
        Consume a fenced block through its closing fence

        Raises:
            UnbalancedCodeSection: Input ends before the block is closed
        """
        echo = not suppress_output
        if echo:
            self.out.write(self.reader.current)

        while True:
            if not self.reader.advance():
                raise UnbalancedCodeSection(line=self.reader.line)
            if echo:
                self.out.write(self.reader.current)
            if self.settings.fence_is(self.reader.current):
                break

        return self.line_dispatch()


def document_process(
    source: str,
    fetcher: Optional[Fetcher] = None,
    base_dir: str = "",
    settings: Optional[AppSettings] = None,
) -> str:
    """
    Rewrite every directive of a Markdown document

    Args:
        source: Markdown text
        fetcher: Content source (defaults to local files + HTTP)
        base_dir: Directory relative paths are resolved against
        settings: Optional AppSettings override

    Returns:
        Document with fresh fenced blocks under each directive

    Raises:
        EmbedError: Composed as "<line>: <message>"
    """
    embedder = Embedder(fetcher=fetcher, base_dir=base_dir, settings=settings)
    return Scanner(source, embedder.command_run, settings=settings).process()
