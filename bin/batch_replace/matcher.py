"""Literal and regex matching strategies, selected once per session."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from batch_replace.exceptions import ConfigurationError
from batch_replace.placeholders import MaskedText


class Matcher:
    """Finds the search term in raw and masked strings.

    Matches never touch placeholder tokens: the pattern is run over each
    prose segment separately and stops at the next token.
    """

    regex = False

    def __init__(self, search: str, pattern: re.Pattern[str]):
        self.search = search
        self.pattern = pattern

    def matches_raw(self, text: Optional[str]) -> bool:
        """Unmasked test, used by the store to prefilter records."""
        return text is not None and self.pattern.search(text) is not None

    def spans(self, masked: MaskedText) -> List[re.Match[str]]:
        """Non-empty, non-overlapping matches, each inside a single prose segment."""
        found: List[re.Match[str]] = []
        for seg_start, seg_end in masked.prose_spans():
            pos = seg_start
            while pos <= seg_end:
                # endpos stops the pattern at the next token, so greedy matches end in prose
                match = self.pattern.search(masked.text, pos, seg_end)
                if match is None:
                    break
                start, end = match.span()
                if start == end:
                    pos = end + 1
                    continue
                found.append(match)
                pos = end
        return found

    def matches(self, masked: MaskedText) -> bool:
        return bool(self.spans(masked))

    def check_replacement(self, replace: str) -> None:
        """Reject a replacement that could only fail once a match is found."""

    def substitute(self, match: re.Match[str], replace: str) -> str:
        raise NotImplementedError


class LiteralMatcher(Matcher):
    """Plain substring search; case-sensitive unless ``ignore_case`` is set."""

    def __init__(self, search: str, ignore_case: bool = False):
        flags = re.IGNORECASE if ignore_case else 0
        super().__init__(search, re.compile(re.escape(search), flags))
        self.ignore_case = ignore_case

    def substitute(self, match: re.Match[str], replace: str) -> str:
        if not self.ignore_case or not replace:
            return replace
        found = match.group(0)
        # Carry the capitalisation of the matched text over to the replacement
        if len(found) > 1 and found.isupper():
            return replace.upper()
        if found[0].isupper():
            return replace[0].upper() + replace[1:]
        return replace


class RegexMatcher(Matcher):
    """Python ``re`` pattern, unanchored; replacements may use group references."""

    regex = True

    def __init__(self, search: str, ignore_case: bool = False):
        flags = re.IGNORECASE if ignore_case else 0
        try:
            pattern = re.compile(search, flags)
        except re.error as e:
            raise ConfigurationError(f"Invalid regular expression {search!r}: {e}") from e
        super().__init__(search, pattern)

    def check_replacement(self, replace: str) -> None:
        # sub() parses the template before scanning, even when nothing matches
        try:
            self.pattern.sub(replace, "")
        except (re.error, IndexError) as e:
            raise ConfigurationError(f"Invalid replacement {replace!r} for {self.search!r}: {e}") from e

    def substitute(self, match: re.Match[str], replace: str) -> str:
        try:
            return match.expand(replace)
        except (re.error, IndexError) as e:
            raise ConfigurationError(f"Invalid replacement {replace!r} for {self.search!r}: {e}") from e


def build_matcher(search: str, regex: bool = False, ignore_case: bool = False) -> Matcher:
    if regex:
        return RegexMatcher(search, ignore_case=ignore_case)
    return LiteralMatcher(search, ignore_case=ignore_case)


def split_on_matches(
    masked: MaskedText,
    matcher: Matcher,
    render: Callable[[re.Match[str]], str],
) -> List[Tuple[str, bool]]:
    """Cut ``masked`` into (text, is_match) pieces with the prose unmasked.

    Each match is replaced by ``render(match)``; its output is never unmasked,
    so nothing the operator typed can be mistaken for a placeholder token.
    """
    pieces: List[Tuple[str, bool]] = []
    pos = 0
    for match in matcher.spans(masked):
        if match.start() > pos:
            pieces.append((masked.unmask(masked.text[pos:match.start()]), False))
        pieces.append((render(match), True))
        pos = match.end()
    if pos < len(masked.text):
        pieces.append((masked.unmask(masked.text[pos:]), False))
    return pieces
