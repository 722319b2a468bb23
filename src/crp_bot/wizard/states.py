"""Wizard states and the transitions between them.

Slack models a multi-step flow as a stack of modals: a submission can push a
new modal, update the current one in place, or annotate fields with errors.
The wizard returns those moves as explicit Transition values so the flow can
be tested without Slack.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class WizardState(Enum):
    """Named wizard states. Each value is the modal's callback_id."""

    AWAITING_CLIENT_AND_NAME = "crp_pick_client_test"
    AWAITING_CHOICE = "crp_update_or_create"
    AWAITING_VARIATION_COUNT = "crp_collect_variation_count"
    AWAITING_CREATE_SNIPPETS = "crp_create_commit"
    AWAITING_UPDATE_SNIPPETS = "crp_update_commit"
    TERMINAL = "noop"

    @property
    def callback_id(self) -> str:
        return self.value


class DialogAction(Enum):
    """How a transition is applied to Slack's modal stack."""

    OPEN = "open"
    PUSH = "push"
    UPDATE = "update"
    ERRORS = "errors"


class Outcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Transition:
    """Result of handling one wizard step.

    Attributes:
        action: How to apply the transition to the modal stack
        state: State the user lands in (unchanged for ERRORS)
        view: Modal payload to show, None for ERRORS
        errors: block_id -> message annotations, only for ERRORS
        outcome: SUCCESS or FAILURE for terminal transitions, None otherwise
    """

    action: DialogAction
    state: WizardState
    view: dict[str, Any] | None
    errors: dict[str, str] | None
    outcome: Outcome | None

    def ack_payload(self) -> dict[str, Any]:
        """Response body for acknowledging a view_submission.

        Raises:
            ValueError: For OPEN transitions, which are not a submission response
        """
        if self.action == DialogAction.ERRORS:
            return {"response_action": "errors", "errors": dict(self.errors or {})}
        if self.action in (DialogAction.PUSH, DialogAction.UPDATE):
            return {"response_action": self.action.value, "view": self.view}
        raise ValueError(f"{self.action.value} transitions cannot be sent as a view_submission ack")


def validation_errors(state: WizardState, errors: dict[str, str]) -> Transition:
    return Transition(
        action=DialogAction.ERRORS,
        state=state,
        view=None,
        errors=errors,
        outcome=None,
    )


def terminal(view: dict[str, Any], outcome: Outcome) -> Transition:
    return Transition(
        action=DialogAction.UPDATE,
        state=WizardState.TERMINAL,
        view=view,
        errors=None,
        outcome=outcome,
    )
