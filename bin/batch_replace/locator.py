"""Locate the matching field of each record and split records into safe and dangerous sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from batch_replace.matcher import Matcher
from batch_replace.models import SUBJECT_FIELDS, Classification, TranslatableString
from batch_replace.placeholders import mask
from batch_replace.safety import is_safe_to_replace

logger = logging.getLogger(__name__)

Entry = Tuple[TranslatableString, Classification]


@dataclass
class Partition:
    safe: List[Entry] = field(default_factory=list)
    dangerous: List[Entry] = field(default_factory=list)
    dropped: int = 0

    @property
    def total(self) -> int:
        return len(self.safe) + len(self.dangerous)


def locate(record: TranslatableString, matcher: Matcher) -> Optional[str]:
    """Return the first of local, master, original whose prose matches, or None."""
    for name in SUBJECT_FIELDS:
        value = getattr(record, name)
        if value and matcher.matches(mask(value)):
            return name
    return None


def partition_matches(
    records: Iterable[TranslatableString],
    matcher: Matcher,
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
) -> Partition:
    """Classify every record once, before any prompt or write happens."""
    result = Partition()
    for record in records:
        name = locate(record, matcher)
        if name is None:
            # Matched only inside markup, or not at all
            logger.debug(f"No prose match in {record.component}/{record.stringid}, dropped")
            result.dropped += 1
            continue

        subject = getattr(record, name)
        masked = mask(subject)
        safe = is_safe_to_replace(masked, matcher.search, prefix, suffix, matcher=matcher)
        entry = (record, Classification(record.key, name, subject, masked, safe))
        if safe:
            result.safe.append(entry)
        else:
            result.dangerous.append(entry)
        logger.debug(
            f"{record.component}/{record.stringid}: matched {name}, {'safe' if safe else 'dangerous'}"
        )
    return result
