"""Placeholder masking for markup fragments embedded in language strings.

Markup (placeholders such as ``{$a->name}``, printf specifiers, HTML tags,
entities and URLs) is swapped for opaque ``\\x00PH<n>\\x00`` tokens before any
search or replace runs, and restored afterwards. A literal NUL in the input
is itself masked, so a token can never collide with existing content.
"""

from __future__ import annotations

import re
from typing import Dict, List, NamedTuple, Optional, Tuple

_FRAGMENT_RE = re.compile(
    r"\x00"                                              # raw NUL, reserved for tokens
    r"|<!--.*?-->"                                       # HTML comment
    r"|</?[A-Za-z][^<>]*>"                               # HTML tag
    r"|&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);"  # entity
    r"|\{\$a(?:->[A-Za-z0-9_]+)*\}"                      # {$a}, {$a->name}
    r"|\{\{\{?[^{}]*\}\}\}?"                             # {{mustache}}
    r"|\{[A-Za-z0-9_]*\}"                                # {0}, {name}
    r"|%\([A-Za-z0-9_]+\)[-+0#]*[0-9]*(?:\.[0-9]+)?[bcdeEfFgGiosuxX]"  # %(name)s
    r"|%(?:[0-9]+\$)?[-+0#]*[0-9]*(?:\.[0-9]+)?[bcdeEfFgGiosuxX]"     # %s, %1$d
    r"|https?://[^\s<>\"']+",                            # URL
    re.DOTALL,
)
_TOKEN_RE = re.compile(r"\x00PH(\d+)\x00")


class MaskedText(NamedTuple):
    """Masked string plus the token -> fragment map needed to restore it."""

    text: str
    fragments: Dict[str, str]

    def token_spans(self) -> List[Tuple[int, int]]:
        return [m.span() for m in _TOKEN_RE.finditer(self.text) if m.group(0) in self.fragments]

    def prose_spans(self) -> List[Tuple[int, int]]:
        """The (possibly empty) stretches of text between placeholder tokens."""
        spans: List[Tuple[int, int]] = []
        pos = 0
        for token_start, token_end in self.token_spans():
            spans.append((pos, token_start))
            pos = token_end
        spans.append((pos, len(self.text)))
        return spans

    def unmask(self, text: Optional[str] = None) -> str:
        return unmask(self.text if text is None else text, self.fragments)


def mask(text: str) -> MaskedText:
    """Replace every markup fragment in ``text`` with a unique token."""
    fragments: Dict[str, str] = {}

    def _stash(match: re.Match[str]) -> str:
        token = f"\x00PH{len(fragments)}\x00"
        fragments[token] = match.group(0)
        return token

    return MaskedText(_FRAGMENT_RE.sub(_stash, text), fragments)


def unmask(text: str, fragments: Dict[str, str]) -> str:
    """Inverse of :func:`mask`; unknown tokens are left untouched."""
    if not fragments:
        return text

    def _restore(match: re.Match[str]) -> str:
        return fragments.get(match.group(0), match.group(0))

    return _TOKEN_RE.sub(_restore, text)
