"""
Snippet extraction

Applies a command's start/end boundaries to raw source bytes. Boundaries
are /regex/ tokens compiled with re.MULTILINE (so ^ and $ anchor at line
boundaries); the end token may also be the literal "$" meaning "through
the end of the source".

    start   end       result
    -----   -------   ----------------------------------------------
    None    None      whole source
    /re/    None      the start match only
    /re/    /re2/     start of /re/ match .. end of first /re2/ match after it
    /re/    $         start of /re/ match .. end of source
    ""      /re2/     beginning of source .. end of first /re2/ match
    //      /re2/     same as "", the empty pattern matches at offset 0
"""

import re
from typing import Optional, Pattern, Tuple

from ..models.command import TEXT_ENCODING, TEXT_ERRORS
from .errors import InvalidRegex, MissingSlashDelimiters, NoMatch


END_OF_INPUT = "$"


def pattern_compile(token: str) -> Pattern[bytes]:
    """
    Compile a /regex/ boundary token

    Args:
        token: Boundary exactly as written in the directive

    Returns:
        Compiled bytes pattern

    Raises:
        MissingSlashDelimiters: token is not of the form /regex/
        InvalidRegex: inner pattern does not compile
    """
    if len(token) < 2 or token[0] != "/" or token[-1] != "/":
        raise MissingSlashDelimiters(token)
    try:
        return re.compile(token[1:-1].encode(TEXT_ENCODING, TEXT_ERRORS), re.MULTILINE)
    except re.error as exc:
        raise InvalidRegex(str(exc)) from exc


def match_find(source: bytes, token: str) -> Tuple[int, int]:
    """Return the (start, end) span of the first match of token in source"""
    match = pattern_compile(token).search(source)
    if match is None:
        raise NoMatch(token)
    return match.span()


def content_extract(
    source: bytes, start: Optional[str] = None, end: Optional[str] = None
) -> bytes:
    """
    Extract the region of source delimited by start and end

    Args:
        source: Raw content of the referenced file or URL
        start: Start boundary token, "" for "from the beginning", None if absent
        end: End boundary token ("/regex/" or "$"), None if absent

    Returns:
        Extracted bytes, unmodified (no newline normalization)

    Raises:
        MissingSlashDelimiters: A boundary is neither /regex/ nor (for end) "$"
        InvalidRegex: A boundary pattern does not compile
        NoMatch: A boundary pattern does not match

    Example:
        >>> content_extract(b"a\\nfunc main() {\\n}\\n", "/func main.*\\n/")
        b'func main() {\\n'
    """
    if start is None and end is None:
        return source

    if start:
        begin, finish = match_find(source, start)
        if end is None:
            return source[begin:finish]
        source = source[begin:]

    if end is None or end == END_OF_INPUT:
        return source

    _, finish = match_find(source, end)
    return source[:finish]
