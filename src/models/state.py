"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing CLI stages.
"""

from argparse import Namespace
from typing import List, Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class DocumentResult:
    """
    Outcome of processing one Markdown document

    Attributes:
        path: Document path, or "<stdin>"
        ok: Processing finished without error
        changed: Rewritten content differs from the input
        error: Error message when ok is False
        diff: Unified diff text (only computed in diff mode)
    """
    path: str
    ok: bool = True
    changed: bool = False
    error: str = ""
    diff: str = ""


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: files, write, diff, verbosity, color
        - options_check: optionsOK, usageError
        - documents_process: results, diffFound
        - results_report: exitCode

    Attributes:
        files: Markdown files named on the command line (empty means stdin)
        write: Rewrite files in place
        diff: Print unified diffs instead of rewritten documents
        verbosity: Logging verbosity level (0-3)
        color: Diff coloring mode ("auto", "always" or "never")
        optionsOK: Option combination is valid
        results: One DocumentResult per processed document
        diffFound: At least one document would change (diff mode)
        usageError: Message of a rejected option combination
        exitCode: Process exit status
    """

    # CLI arguments
    files: List[str] = field(default_factory=list)
    write: bool = field(default=False)
    diff: bool = field(default=False)
    verbosity: int = field(default=0)
    color: str = field(default="auto")

    # Pipeline state
    optionsOK: bool = field(default=False)
    results: List[DocumentResult] = field(default_factory=list)
    diffFound: bool = field(default=False)
    exitCode: int = field(default=0)
    usageError: Optional[str] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments (files, write, diff, ...)

        Returns:
            ProgramState instance with all known CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Unknown options (e.g. argparse internals) are dropped
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        The results list is copied so stages never mutate a previous state.

        Returns:
            A new ProgramState instance.
        """
        fields_copy = dict(self.__dict__)
        fields_copy["results"] = list(self.results)
        return type(self)(**fields_copy)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            options_check,
            documents_process,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
