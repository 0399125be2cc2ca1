"""Write an accepted replacement to the record's local value."""

from __future__ import annotations

import logging

from batch_replace.matcher import Matcher, split_on_matches
from batch_replace.models import Classification, TranslatableString
from batch_replace.store import StringStore

logger = logging.getLogger(__name__)


def replaced_value(classification: Classification, matcher: Matcher, replace: str) -> str:
    """Replace every prose match of the matched field; markup stays byte-identical."""
    pieces = split_on_matches(
        classification.masked, matcher, lambda m: matcher.substitute(m, replace)
    )
    return "".join(piece for piece, _ in pieces)


def apply_replacement(
    record: TranslatableString,
    classification: Classification,
    matcher: Matcher,
    replace: str,
    store: StringStore,
) -> TranslatableString:
    """Set ``record.local`` from the replaced subject and persist it.

    Only ``local`` is written, even when the match was found in master or
    original. Store failures propagate to the caller.
    """
    record.local = replaced_value(classification, matcher, replace)
    store.persist_local(record)
    logger.info(f"Updated {record.lang}/{record.component}/{record.stringid}")
    return record
