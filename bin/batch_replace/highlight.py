"""Operator-facing rendering of a match before and after replacement."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from batch_replace.matcher import Matcher, split_on_matches
from batch_replace.placeholders import MaskedText


@dataclass(frozen=True)
class Markers:
    """Style of the highlighted span and of the text around it."""

    style: str
    context: str = ""


REPORT = Markers("black on white")
SEARCH = Markers("white on red", "red")
REPLACE = Markers("white on green", "green")
DANGER = Markers("black on yellow", "yellow")


def _assemble(pieces, markers: Markers) -> Text:
    text = Text(style=markers.context)
    for piece, is_match in pieces:
        text.append(piece, style=markers.style if is_match else None)
    return text


def render_search(masked: MaskedText, matcher: Matcher, markers: Markers = SEARCH) -> Text:
    """Unmasked subject with every match highlighted as found."""
    return _assemble(split_on_matches(masked, matcher, lambda m: m.group(0)), markers)


def render_replace(
    masked: MaskedText,
    matcher: Matcher,
    replace: str,
    markers: Markers = REPLACE,
) -> Text:
    """Unmasked subject as it would read after replacement, new text highlighted.

    Every match is shown in regex mode too, not only the first, so the preview
    is exactly the value that gets written.
    """
    return _assemble(
        split_on_matches(masked, matcher, lambda m: matcher.substitute(m, replace)),
        markers,
    )
