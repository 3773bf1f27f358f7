"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring the state to be passed down into the
scanner, extractor or fetcher.

Library code only ever logs through LOG(); when no state is connected (for
example when embedmd is used as a library or under pytest) nothing is
emitted.

Usage:
    from embedmd.lib.log import LOG, state_connectToLogger

    # At start of the CLI pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Processing README.md", level=1)
    LOG("line 12: embedding code.go", level=2)
    LOG("line 12: ScanningFence(suppress_output=True)", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Log to stderr so stdout stays reserved for documents and diffs
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <9}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels (0, the default, logs nothing):
        1 = Per-document progress (-v)
        2 = Directive execution (-vv)
        3 = Scanner transitions and fetches (-vvv)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
