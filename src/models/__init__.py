"""
Models package for embedmd

Contains data structures and type definitions for the embedding pipeline.
"""

from .state import ProgramState, DocumentResult, pipeline
from .command import Command, Snippet, TEXT_ENCODING, TEXT_ERRORS
from .scanner import ScanningText, ScanningDirective, ScanningFence, ScanState, LineReader

__all__ = [
    "ProgramState",
    "DocumentResult",
    "pipeline",
    "Command",
    "Snippet",
    "TEXT_ENCODING",
    "TEXT_ERRORS",
    "ScanningText",
    "ScanningDirective",
    "ScanningFence",
    "ScanState",
    "LineReader",
]
