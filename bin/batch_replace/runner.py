"""End-to-end batch replace run: checkout, classify, decide, check in."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from batch_replace.config import Config
from batch_replace.console import OperatorConsole
from batch_replace.exceptions import ConfigurationError, NoMatchesError
from batch_replace.locator import partition_matches
from batch_replace.matcher import build_matcher
from batch_replace.session import DecisionSession, SessionResult
from batch_replace.store import StringStore

logger = logging.getLogger(__name__)


def run_batch_replace(
    config: Config,
    store: StringStore,
    console: OperatorConsole,
    search: Optional[str],
    replace: Optional[str],
    lang: Optional[str] = None,
    components: Optional[Iterable[str]] = None,
) -> SessionResult:
    """Search and replace ``search`` in the local strings of one language.

    Raises:
        ConfigurationError: invalid options, unknown language, unsupported regex
        NoMatchesError: nothing to replace
        StoreError: a read or write failed; the session is not checked in
    """
    config.validate(search, replace)
    lang = lang or config.default_lang
    if lang not in store.list_languages():
        raise ConfigurationError(f"Language '{lang}' not found")
    if config.regex and not store.regex_supported:
        raise ConfigurationError("The string store does not support regular expressions")
    matcher = build_matcher(search, regex=config.regex, ignore_case=config.ignore_case)
    matcher.check_replacement(replace)

    console.print_line("Checking out strings...")
    store.checkout(lang)
    console.print_line("Checkout done")

    components = list(components or [])
    components_label = ", ".join(components) if components else "all"
    if not components:
        components = store.list_components(lang)

    records = store.fetch_matching_strings(lang, components, matcher)
    partition = partition_matches(records, matcher, config.prefix, config.suffix)
    logger.debug(f"{len(records)} candidates, {partition.dropped} dropped, {len(partition.dangerous)} dangerous")
    if partition.total == 0:
        raise NoMatchesError("No strings found")

    console.print_line(
        f"Found {partition.total} matches in components '{components_label}' for language '{lang}'"
    )

    session = DecisionSession(config, store, console, matcher, replace)
    result = session.run(partition)

    if not session.confirm_commit():
        console.print_line("Nothing checked in, the replaced strings remain checked out")
        return result

    console.print_line("Checking in strings...")
    store.checkin(lang)
    result.committed = True
    console.print_line(f"Replaced {result.applied} strings, check in done")
    return result
