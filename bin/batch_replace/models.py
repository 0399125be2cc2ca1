"""Record and per-record classification types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from batch_replace.placeholders import MaskedText

# Candidate fields in match priority order
SUBJECT_FIELDS = ('local', 'master', 'original')


@dataclass
class TranslatableString:
    """One stored string for a (lang, component, stringid) key."""

    lang: str
    component: str
    stringid: str
    original: Optional[str] = None
    master: Optional[str] = None
    local: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.lang, self.component, self.stringid)


@dataclass(frozen=True)
class Classification:
    """Which field matched a record, its masked form and its safety verdict."""

    key: Tuple[str, str, str]
    field: str
    subject: str
    masked: MaskedText
    safe: bool
