"""Heuristic deciding whether a literal match can be replaced without review."""

from __future__ import annotations

from typing import Optional, Union

from batch_replace.matcher import LiteralMatcher, Matcher
from batch_replace.placeholders import MaskedText


def is_safe_to_replace(
    masked: Union[MaskedText, str],
    search: str,
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
    matcher: Optional[Matcher] = None,
) -> bool:
    """Return True when at least one occurrence of ``search`` is not part of a longer word.

    An occurrence glued to letters on either side ("course" in "courses") is
    only acceptable when ``prefix`` immediately precedes it or ``suffix``
    immediately follows it. Regex searches are hand-written and always safe.
    """
    if matcher is None:
        matcher = LiteralMatcher(search)
    if matcher.regex:
        return True
    if isinstance(masked, str):
        masked = MaskedText(masked, {})

    text = masked.text
    for match in matcher.spans(masked):
        start, end = match.span()
        found = match.group(0)
        glued_left = start > 0 and text[start - 1].isalpha() and found[0].isalpha()
        glued_right = end < len(text) and text[end].isalpha() and found[-1].isalpha()
        if not glued_left and not glued_right:
            return True
        if prefix and text.endswith(prefix, 0, start):
            return True
        if suffix and text.startswith(suffix, end):
            return True
    return False
