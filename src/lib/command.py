"""
Command parser for embed directives

Turns the argument text of a directive such as

    [embedmd]:# (code.go go /func main/ /^}/)

into a Command. Arguments are separated by whitespace, except inside a
/.../ boundary expression which is kept as a single field (escaped
slashes included). Boundary expressions are stored verbatim: compiling
them needs the file content and happens later in the extractor.

Example:
    >>> command_parse("(code.go /start/ $)")
    Command(path='code.go', lang='go', start='/start/', end='$')
"""

import posixpath
import re
from typing import List

from ..models.command import Command
from .errors import (
    LanguageRequired,
    MalformedArgumentList,
    MissingFileName,
    TooManyArguments,
    UnbalancedSlash,
)


_WHITESPACE = re.compile(r"\s")


def slash_findNext(text: str) -> int:
    r"""
    Find the next slash that is not escaped with a backslash

    Args:
        text: Text following an opening slash

    Returns:
        Index of the closing slash in text, or -1 if there is none

    Example:
        >>> slash_findNext(r"\/\*/ rest")
        4
    """
    pos = 0
    while True:
        index = text.find("/", pos)
        if index < 0:
            return -1
        if index == 0 or text[index - 1] != "\\":
            return index
        pos = index + 1


def fields_split(text: str) -> List[str]:
    """
    Split an argument list into fields

    Whitespace separates fields. A field that starts with "/" extends to
    the matching unescaped "/" and may contain whitespace.

    Args:
        text: Content between the directive's parentheses

    Returns:
        List of fields, slashes preserved on boundary expressions

    Raises:
        UnbalancedSlash: A /.../ expression is never closed

    Example:
        >>> fields_split("code.go /func main() {/ $")
        ['code.go', '/func main() {/', '$']
    """
    fields: List[str] = []
    text = text.strip()

    while text:
        if text[0] == "/":
            sep = slash_findNext(text[1:])
            if sep < 0:
                raise UnbalancedSlash()
            # sep is relative to text[1:]; keep both slashes
            fields.append(text[:sep + 2])
            text = text[sep + 2:]
        else:
            match = _WHITESPACE.search(text)
            if not match:
                fields.append(text)
                break
            fields.append(text[:match.start()])
            text = text[match.start():]
        text = text.strip()

    return fields


def language_fromPath(path: str) -> str:
    """
    Derive a language tag from the extension of a path or URL

    Only the last "/"-separated segment is considered and a leading dot
    does not start an extension.

    Args:
        path: File path or URL named in the directive

    Returns:
        Extension without the dot

    Raises:
        LanguageRequired: The path carries no usable extension

    Example:
        >>> language_fromPath("http://golang.org/sample.go")
        'go'
    """
    segment = path.rsplit("/", 1)[-1]
    _, ext = posixpath.splitext(segment)
    lang = ext[1:]
    if not lang:
        raise LanguageRequired()
    return lang


def command_parse(arg_text: str) -> Command:
    """
    Parse a directive's argument list into a Command

    The argument list must be wrapped in parentheses. Field 0 is the path,
    field 1 is the language unless it starts with "/", and the remaining
    zero, one or two fields are the start and end boundaries.

    Args:
        arg_text: Text after the directive marker

    Returns:
        Parsed Command

    Raises:
        MalformedArgumentList: Missing opening or closing parenthesis
        UnbalancedSlash: Unterminated /.../ expression
        MissingFileName: Empty argument list
        LanguageRequired: No language given and no extension to derive one
        TooManyArguments: More than two boundary expressions

    Example:
        >>> command_parse("(test.md markdown)")
        Command(path='test.md', lang='markdown', start=None, end=None)
    """
    text = arg_text.strip()
    if len(text) < 2 or text[0] != "(" or text[-1] != ")":
        raise MalformedArgumentList()

    args = fields_split(text[1:-1])
    if not args:
        raise MissingFileName()

    path, args = args[0], args[1:]

    if args and not args[0].startswith("/"):
        lang, args = args[0], args[1:]
    else:
        lang = language_fromPath(path)

    if len(args) > 2:
        raise TooManyArguments()

    start = args[0] if len(args) >= 1 else None
    end = args[1] if len(args) == 2 else None

    return Command(path=path, lang=lang, start=start, end=end)
