"""Interactive decision session over the safe and dangerous match sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from rich.text import Text

from batch_replace.applier import apply_replacement
from batch_replace.config import Config
from batch_replace.console import OperatorConsole
from batch_replace.decision import (
    DANGER_PHASE,
    GATE_ANSWERS,
    SAFE_PHASE,
    Action,
    Phase,
    State,
    parse_answer,
    transition,
)
from batch_replace.exceptions import InvalidAnswerError
from batch_replace.highlight import DANGER, REPLACE, REPORT, SEARCH, render_replace, render_search
from batch_replace.locator import Entry, Partition
from batch_replace.matcher import Matcher
from batch_replace.store import StringStore

logger = logging.getLogger(__name__)

GATE_QUESTION = "Check in all accepted replacements? [y,n]: "
GATE_HELP = (
    "y - check in the replaced strings\n"
    "n - quit without check in, replaced strings stay checked out"
)


@dataclass
class SessionResult:
    total: int = 0
    applied: int = 0
    skipped: int = 0
    dangerous: int = 0
    stopped_phases: List[str] = field(default_factory=list)
    committed: bool = False


class DecisionSession:
    """Runs the safe phase, then the dangerous phase, then the commit gate."""

    def __init__(
        self,
        config: Config,
        store: StringStore,
        console: OperatorConsole,
        matcher: Matcher,
        replace: str,
    ):
        self.config = config
        self.store = store
        self.console = console
        self.matcher = matcher
        self.replace = replace
        self.match_number = 1
        self.result = SessionResult()

    def run(self, partition: Partition) -> SessionResult:
        self.result.total = partition.total
        self.result.dangerous = len(partition.dangerous)

        self._run_phase(SAFE_PHASE, partition.safe)
        if partition.dangerous:
            self.console.print_line(Text(
                f"{len(partition.dangerous)} matches may be part of a longer word "
                f"and need to be reviewed one by one",
                style="bold yellow",
            ))
        self._run_phase(DANGER_PHASE, partition.dangerous)
        return self.result

    def confirm_commit(self) -> bool:
        """Final yes/no gate deciding whether the session is checked in."""
        if self.config.assume_yes:
            return True
        if self.config.assume_no:
            return False
        while True:
            answer = self.console.prompt_line(GATE_QUESTION).lower()
            try:
                return parse_answer(answer, GATE_ANSWERS) == "y"
            except InvalidAnswerError:
                self.console.print_line(GATE_HELP)

    def _run_phase(self, phase: Phase, entries: List[Entry]) -> None:
        state = State.ACCEPT_ALL if self.config.assume_yes else State.AWAITING_ANSWER
        replace_markers = DANGER if phase is DANGER_PHASE else REPLACE

        for record, classification in entries:
            header = self._header(record)
            if self.config.assume_no:
                before = render_search(classification.masked, self.matcher, REPORT)
                self.console.print_line(Text.assemble(header, " (not replaced)\n  ", before))
                self.result.skipped += 1
                self.match_number += 1
                continue

            before = render_search(classification.masked, self.matcher, SEARCH)
            after = render_replace(classification.masked, self.matcher, self.replace, replace_markers)
            stage = Text.assemble(header, "\n  - ", before, "\n  + ", after, "\n")

            if state is State.ACCEPT_ALL:
                self.console.print_line(stage)
                action = Action.APPLY
            else:
                state, action = self._ask(phase, state, stage)

            if action is Action.STOP:
                logger.debug(f"Phase {phase.name} stopped at match {self.match_number}")
                self.result.stopped_phases.append(phase.name)
                break
            if action is Action.APPLY:
                apply_replacement(record, classification, self.matcher, self.replace, self.store)
                self.result.applied += 1
            else:
                self.result.skipped += 1
            self.match_number += 1

    def _ask(self, phase: Phase, state: State, stage: Text) -> Tuple[State, Action]:
        prompt = Text.assemble(stage, phase.question)
        while True:
            answer = self.console.prompt_line(prompt)
            next_state, action = transition(state, answer, phase)
            if action is not Action.REPROMPT:
                logger.debug(f"{phase.name}: {state.value} --{answer}--> {next_state.value} ({action.value})")
                return next_state, action
            self.console.print_line(phase.help)

    def _header(self, record) -> str:
        return (
            f"[{self.match_number}/{self.result.total}] "
            f"{record.lang} | {record.component} | {record.stringid}"
        )
