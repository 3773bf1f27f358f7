"""
embedmd - Embed code snippets into Markdown documents

Core library: command parser, extractor, fetcher and directive scanner.
"""

__version__ = "1.0.0"
__author__ = "embedmd contributors"

from .command import command_parse
from .extract import content_extract
from .fetch import ContentFetcher, Fetcher
from .embedder import Embedder
from .scanner import Scanner, document_process
from .log import LOG, state_connectToLogger

__all__ = [
    "command_parse",
    "content_extract",
    "ContentFetcher",
    "Fetcher",
    "Embedder",
    "Scanner",
    "document_process",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
