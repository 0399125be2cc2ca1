"""Answer state machine for the two confirmation phases.

``transition`` is a pure function so every answer sequence can be checked
without a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from batch_replace.exceptions import InvalidAnswerError


class State(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    ACCEPT_ALL = "accept_all"
    STOPPED = "stopped"


class Action(Enum):
    APPLY = "apply"
    SKIP = "skip"
    REPROMPT = "reprompt"
    STOP = "stop"


@dataclass(frozen=True)
class Phase:
    name: str
    answers: Tuple[str, ...]
    question: str
    help: str


SAFE_PHASE = Phase(
    name="safe",
    answers=("y", "n", "a", "N"),
    question="Replace this match? [y,n,a,N]: ",
    help=(
        "y - replace this match\n"
        "n - do not replace this match\n"
        "a - replace this match and all remaining safe matches\n"
        "N - do not replace this match or any remaining safe match"
    ),
)

DANGER_PHASE = Phase(
    name="dangerous",
    answers=("y", "n", "N"),
    question="This match may be part of a longer word, replace anyway? [y,n,N]: ",
    help=(
        "y - replace this match\n"
        "n - do not replace this match\n"
        "N - do not replace this match or any remaining dangerous match"
    ),
)

GATE_ANSWERS = ("y", "n")


def parse_answer(answer: Optional[str], accepted: Iterable[str]) -> str:
    """Return the trimmed answer, or raise InvalidAnswerError."""
    accepted = tuple(accepted)
    value = (answer or "").strip()
    if value not in accepted:
        raise InvalidAnswerError(value, accepted)
    return value


def transition(state: State, answer: Optional[str], phase: Phase) -> Tuple[State, Action]:
    """Map (state, answer) to the next state and what to do with the current match."""
    if state is State.STOPPED:
        return State.STOPPED, Action.STOP
    if state is State.ACCEPT_ALL:
        return State.ACCEPT_ALL, Action.APPLY

    try:
        value = parse_answer(answer, phase.answers)
    except InvalidAnswerError:
        return State.AWAITING_ANSWER, Action.REPROMPT

    if value == "y":
        return State.AWAITING_ANSWER, Action.APPLY
    if value == "a":
        return State.ACCEPT_ALL, Action.APPLY
    if value == "N":
        return State.STOPPED, Action.STOP
    return State.AWAITING_ANSWER, Action.SKIP
