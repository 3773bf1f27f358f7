"""
embedmd - Embed code snippets into Markdown documents

Keeps code samples in Markdown in sync with their sources: every

    [embedmd]:# (path/or/url [language] [/start/ [/end/ | $]])

directive is followed by a fenced block extracted from the referenced file.
"""

__version__ = "1.0.0"

from .lib import (
    command_parse,
    content_extract,
    ContentFetcher,
    Embedder,
    Scanner,
    document_process,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "command_parse",
    "content_extract",
    "ContentFetcher",
    "Embedder",
    "Scanner",
    "document_process",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
