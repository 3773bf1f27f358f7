"""
Error taxonomy for embedmd

Every expected failure (bad directive, missing file, unmatched pattern, ...)
is an EmbedError. Errors pick up context as they propagate: the embedder
prefixes the offending path, the scanner attaches the 1-based line number.
str(err) renders the composed message, e.g.

    2: could not read code.go: file does not exist
"""

from typing import Optional


class EmbedError(Exception):
    """
    Base class for all user-facing embedmd errors

    Attributes:
        message: Message including any prefixes added by annotate()
        line: Source line where the error surfaced, if known
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def annotate(self, prefix: str) -> "EmbedError":
        """Prepend ``prefix: `` to the message and return self"""
        self.message = f"{prefix}: {self.message}"
        self.args = (self.message,)
        return self

    def at_line(self, line: int) -> "EmbedError":
        """Record the line number unless an inner scope already did"""
        if self.line is None:
            self.line = line
        return self

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.line}: {self.message}"


# Command parser

class CommandError(EmbedError):
    """Directive argument list could not be parsed"""


class MalformedArgumentList(CommandError):
    def __init__(self) -> None:
        super().__init__("argument list should be in parenthesis")


class UnbalancedSlash(CommandError):
    def __init__(self) -> None:
        super().__init__("unbalanced /")


class MissingFileName(CommandError):
    def __init__(self) -> None:
        super().__init__("missing file name")


class LanguageRequired(CommandError):
    def __init__(self) -> None:
        super().__init__("language is required when file has no extension")


class TooManyArguments(CommandError):
    def __init__(self) -> None:
        super().__init__("too many arguments")


# Extractor

class ExtractError(EmbedError):
    """Boundary patterns could not be applied to the source"""


class MissingSlashDelimiters(ExtractError):
    def __init__(self, token: str) -> None:
        super().__init__(f'missing slashes (/) around "{token}"')
        self.token = token


class InvalidRegex(ExtractError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"error parsing regexp: {detail}")


class NoMatch(ExtractError):
    def __init__(self, token: str) -> None:
        super().__init__(f'could not match "{token}"')
        self.token = token


# Content fetch

class FetchError(EmbedError):
    """Source content could not be retrieved"""


class FileNotFound(FetchError):
    def __init__(self) -> None:
        super().__init__("file does not exist")


class StatusError(FetchError):
    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"status {status_code} {reason}".rstrip())
        self.status_code = status_code


class InvalidURL(FetchError):
    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"parse {url}: {detail}")


# Scanner and CLI

class UnbalancedCodeSection(EmbedError):
    def __init__(self, line: Optional[int] = None) -> None:
        super().__init__("unbalanced code section", line=line)


class NotMarkdownFile(EmbedError):
    def __init__(self) -> None:
        super().__init__("not a markdown file")


class UsageConflict(EmbedError):
    """Mutually exclusive command line options were combined"""
