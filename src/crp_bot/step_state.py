"""Step state threaded through the wizard's dialogs.

Slack hands each modal's `private_metadata` back on submission, so the
accumulated selections travel with the dialog rather than living on the
server. The token is a small versioned JSON document; anything that does not
decode cleanly raises StepStateError instead of being guessed at.
"""

import json

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

STEP_STATE_VERSION = 1

# Slack rejects private_metadata longer than this.
MAX_TOKEN_LENGTH = 3000


class StepStateError(Exception):
    """Raised when a step state token cannot be decoded."""


class StepState(BaseModel):
    """Selections accumulated across wizard steps.

    Required fields:
        client_key: Identifier of the selected client
        test_name: Name of the test directory
        exists: Whether something already exists at the test directory

    Optional fields:
        count: Number of variations, set once the count step is submitted
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_key: str
    test_name: str
    exists: bool
    count: int | None = None

    @field_validator("client_key", "test_name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    def with_count(self, count: int) -> "StepState":
        return self.model_copy(update={"count": count})


def encode_step_state(state: StepState) -> str:
    """Serialize step state into a private_metadata token."""
    payload = {"v": STEP_STATE_VERSION, **state.model_dump()}
    token = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    if len(token) > MAX_TOKEN_LENGTH:
        raise StepStateError(f"Step state exceeds {MAX_TOKEN_LENGTH} characters")
    return token


def decode_step_state(token: str | None) -> StepState:
    """Parse a private_metadata token back into step state.

    Raises:
        StepStateError: If the token is missing, not JSON, carries an unknown
            version, or has invalid fields
    """
    if not token:
        raise StepStateError("Missing step state")

    try:
        payload = json.loads(token)
    except json.JSONDecodeError as e:
        raise StepStateError(f"Step state is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise StepStateError("Step state must be a JSON object")

    version = payload.pop("v", None)
    if version != STEP_STATE_VERSION:
        raise StepStateError(f"Unsupported step state version: {version!r}")

    try:
        return StepState.model_validate(payload)
    except ValidationError as e:
        raise StepStateError(f"Invalid step state: {e}") from e
