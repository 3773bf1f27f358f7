#!/usr/bin/env python3
"""
embedmd - Embed code snippets into Markdown documents

Scans Markdown files for embed directives and writes, right below each one,
a fenced code block with content taken from a local file or a URL. A block
already sitting under a directive is replaced, so embedmd can be re-run at
any time to bring documentation back in sync with the code it quotes.

Directive syntax (invisible when the Markdown is rendered):

    [embedmd]:# (pathOrURL [language] [/startRegex/ [/endRegex/ | $]])

    (code.go)                    whole file, language "go" from the extension
    (code.go /func main/)        only the text matched by /func main/
    (code.go /func main/ /^}/)   from the start match through the end match
    (code.go /func main/ $)      from the start match through end of file
    (Makefile make)              explicit language for files without extension

Usage:
    embedmd [-w | -d] [-v...] [files...]

Examples:
    # Print the rewritten document
    embedmd README.md

    # Rewrite documents in place
    embedmd -w README.md docs/*.md

    # Show what would change (exit status 2 when anything would)
    embedmd -d README.md

    # Filter standard input
    cat README.md | embedmd
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from typing import List, Optional, Tuple

from .config import appsettings
from .lib import document_process, __version__, LOG, state_connectToLogger
from .lib.diff import diff_colorize, diff_make
from .lib.errors import EmbedError, NotMarkdownFile, UsageConflict
from .models import DocumentResult, ProgramState, pipeline, TEXT_ENCODING, TEXT_ERRORS


STDIN_NAME = "<stdin>"

# Define CLI arguments
parser = ArgumentParser(
    prog="embedmd",
    description="embedmd - embed code snippets into Markdown documents",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "files", nargs="*", help="Markdown files to process (standard input if none given)"
)

parser.add_argument(
    "-w", "--write", action="store_true", help="Write result to the (Markdown) file instead of stdout"
)

parser.add_argument(
    "-d", "--diff", action="store_true", help="Display diffs instead of rewriting files"
)

parser.add_argument(
    "--color",
    default="auto",
    choices=["auto", "always", "never"],
    help="Colorize diff output",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Increase logging verbosity on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def options_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the combination of command line options.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with optionsOK set, or usageError on a conflict
    """
    state = inputstate.copy()

    try:
        if state.write and state.diff:
            raise UsageConflict("cannot use -w and -d simultaneously")
        if state.write and not state.files:
            raise UsageConflict("cannot use -w with standard input")
    except UsageConflict as e:
        print(f"error: {e}", file=sys.stderr)
        state.usageError = str(e)
        state.optionsOK = False
        return state

    state.optionsOK = True
    return state


def stdin_read() -> str:
    """Read standard input with its raw bytes and line endings kept"""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin.read()
    return buffer.read().decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def stdout_write(text: str) -> None:
    """Write text to standard output, restoring any escaped raw bytes"""
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(text)
        return
    sys.stdout.flush()
    buffer.write(text.encode(TEXT_ENCODING, errors=TEXT_ERRORS))
    buffer.flush()


def document_embed(path: Path) -> Tuple[str, str]:
    """
    Read one Markdown file and rewrite its directives.

    Args:
        path: Markdown file; local sources resolve against its directory

    Returns:
        (original, updated) document text

    Raises:
        EmbedError: Wrong suffix, unreadable file, or any processing error
    """
    if path.suffix != appsettings.markdown_suffix:
        raise NotMarkdownFile()

    try:
        with path.open(encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
            original = f.read()
    except OSError as e:
        raise EmbedError(f"could not open: {(e.strerror or str(e)).lower()}") from e

    LOG(f"Processing {path}", level=1)
    updated = document_process(original, base_dir=str(path.parent))
    return original, updated


def result_emit(state: ProgramState, result: DocumentResult, original: str, updated: str) -> None:
    """Write the outcome of one successful document: diff, file or stdout"""
    if state.diff:
        result.diff = diff_make(original, updated, result.path)
        if result.diff:
            colorize = state.color == "always" or (
                state.color == "auto" and appsettings.color_diff and sys.stdout.isatty()
            )
            stdout_write(diff_colorize(result.diff) if colorize else result.diff)
        return

    if state.write:
        if result.changed:
            with Path(result.path).open(
                "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline=""
            ) as f:
                f.write(updated)
            LOG(f"Rewrote {result.path}", level=1)
        else:
            LOG(f"{result.path} is up to date", level=1)
        return

    stdout_write(updated)


def documents_process(inputstate: ProgramState) -> ProgramState:
    """
    Process every document named on the command line (or stdin).

    Documents are independent: a failure is reported on stderr and the
    next document is still attempted.

    Args:
        inputstate: Program state with validated options

    Returns:
        ProgramState with added fields:
            - results: One DocumentResult per document
            - diffFound: True if any document would change (diff mode)
    """
    state = inputstate.copy()
    if not state.optionsOK:
        return state

    sources: List[Optional[str]] = list(state.files) or [None]

    for name in sources:
        result = DocumentResult(path=name or STDIN_NAME)
        try:
            if name is None:
                original = stdin_read()
                updated = document_process(original)
            else:
                original, updated = document_embed(Path(name))
        except EmbedError as e:
            result.ok = False
            result.error = str(e)
            print(f"{name}: {e}" if name else str(e), file=sys.stderr)
            state.results.append(result)
            continue

        result.changed = original != updated
        result_emit(state, result, original, updated)
        state.diffFound = state.diffFound or bool(result.diff)
        state.results.append(result)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run and decide the exit status.

    Exit status is 2 on a usage error, when any document failed, or in
    diff mode when any document would change.

    Args:
        inputstate: Program state with results populated

    Returns:
        ProgramState with exitCode set (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    failed = [r for r in state.results if not r.ok]
    changed = [r for r in state.results if r.ok and r.changed]

    LOG(
        f"{len(state.results)} document(s): {len(changed)} changed, {len(failed)} failed",
        level=1,
    )

    if state.usageError or failed or (state.diff and state.diffFound):
        state.exitCode = 2
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - embed snippets into the given Markdown documents.

    Orchestrates the pipeline:
        1. options_check: Reject conflicting flags
        2. documents_process: Rewrite each document, emit output
        3. results_report: Summarize and compute the exit status

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    options = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    final = pipeline(state, options_check, documents_process, results_report)
    return final.exitCode


if __name__ == "__main__":
    sys.exit(main())
