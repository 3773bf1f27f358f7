"""
Unified diffs between a document and its rewritten form

Colouring goes through Pygments: DiffLexer tokens rendered by the
TerminalFormatter.
"""

import difflib

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer


def diff_make(original: str, updated: str, path: str) -> str:
    """
    Build a unified diff of original against updated

    Args:
        original: Document as read
        updated: Document after embedding
        path: Name used in the ---/+++ headers

    Returns:
        Diff text, empty when both documents are identical
    """
    if original == updated:
        return ""
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    # Lines without a terminator (last line of a file) would run together
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


def diff_colorize(diff: str) -> str:
    """Return diff with ANSI colours for terminal display"""
    if not diff:
        return diff
    return highlight(diff, DiffLexer(), TerminalFormatter())
