"""Interactive pick-and-commit loop over generated candidates.

The loop is a small state machine::

    SELECTING --pick--> COMMITTING --ok--> DONE
        |                   |
        |                   +--git commit failed--> SELECTING
        +--cancel--> CANCELLED

``DONE`` and ``CANCELLED`` are both successful outcomes.
"""

import logging
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional, Sequence

import click
import questionary

from commitgpt.errors import GitCommitError, SelectionInconsistencyError
from commitgpt.logger import commitgpt_logger
from commitgpt.utils import labels

PickFn = Callable[[Sequence[str]], Optional[int]]
CommitFn = Callable[[str], None]

SELECT_PROMPT = "Pick commit message"


class SelectionState(str, Enum):
    SELECTING = "selecting"
    COMMITTING = "committing"
    DONE = "done"
    CANCELLED = "cancelled"


TRANSITIONS: Dict[SelectionState, FrozenSet[SelectionState]] = {
    SelectionState.SELECTING: frozenset({SelectionState.COMMITTING, SelectionState.CANCELLED}),
    SelectionState.COMMITTING: frozenset({SelectionState.DONE, SelectionState.SELECTING}),
    SelectionState.DONE: frozenset(),
    SelectionState.CANCELLED: frozenset(),
}

TERMINAL_STATES: FrozenSet[SelectionState] = frozenset(
    state for state, targets in TRANSITIONS.items() if not targets
)


def questionary_pick(choice_labels: Sequence[str]) -> Optional[int]:
    """Show *choice_labels* as a single-choice list; ``None`` when cancelled."""

    choices = [
        questionary.Choice(title=text, value=index)
        for index, text in enumerate(choice_labels)
    ]
    return questionary.select(SELECT_PROMPT, choices=choices).ask()


class SelectionController:
    """Drive the pick/commit cycle until a commit succeeds or the user cancels."""

    def __init__(
        self,
        candidates: Sequence[str],
        commit: CommitFn,
        pick: PickFn = questionary_pick,
        echo_err: Optional[Callable[[str], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or commitgpt_logger(__name__)
        self._commit = commit
        self._pick = pick
        self._echo_err = echo_err or (lambda message: click.echo(message, err=True))

        self.candidates = tuple(candidates)
        self.labels = labels(self.candidates)
        self.state = SelectionState.SELECTING
        self.chosen: Optional[int] = None
        self.commit_attempts = 0

    # --- Public API ---
    def run(self) -> SelectionState:
        """Step until a terminal state is reached and return it."""

        while self.state not in TERMINAL_STATES:
            self.step()
        self._logger.debug("Selection finished in state %s", self.state.value)
        return self.state

    def step(self) -> SelectionState:
        """Perform exactly one transition and return the new state."""

        if self.state is SelectionState.SELECTING:
            self._select()
        elif self.state is SelectionState.COMMITTING:
            self._commit_chosen()
        return self.state

    # --- State handlers ---
    def _select(self) -> None:
        self._logger.debug("Presenting %d candidate(s)", len(self.labels))
        index = self._pick(self.labels)

        if index is None:
            self._logger.debug("Selection cancelled by user")
            self.chosen = None
            self._transition(SelectionState.CANCELLED)
            return

        if not 0 <= index < len(self.candidates):
            raise SelectionInconsistencyError("couldn't find a suitable selection")

        self.chosen = index
        self._transition(SelectionState.COMMITTING)

    def _commit_chosen(self) -> None:
        if self.chosen is None:
            raise SelectionInconsistencyError("couldn't find a suitable selection")

        self.commit_attempts += 1
        try:
            self._commit(self.candidates[self.chosen])
        except GitCommitError as exc:
            self._logger.warning("Commit attempt %d failed: %s", self.commit_attempts, exc)
            self._echo_err(f"❌ {exc}. Pick a message again or cancel.")
            self._transition(SelectionState.SELECTING)
            return

        self._transition(SelectionState.DONE)

    def _transition(self, target: SelectionState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise SelectionInconsistencyError(
                f"illegal selection transition {self.state.value} -> {target.value}"
            )
        self._logger.debug("Selection state %s -> %s", self.state.value, target.value)
        self.state = target
