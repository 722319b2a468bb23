"""Tests for the step state token."""

import json

import pytest

from crp_bot.step_state import (
    StepState,
    StepStateError,
    decode_step_state,
    encode_step_state,
)


class TestStepStateToken:
    """Tests for encode_step_state() / decode_step_state()."""

    def test_round_trip_preserves_every_field(self) -> None:
        state = StepState(client_key="acme", test_name="hero-cta", exists=True, count=3)

        assert decode_step_state(encode_step_state(state)) == state

    def test_round_trip_without_count(self) -> None:
        state = StepState(client_key="acme", test_name="héro cta", exists=False)

        decoded = decode_step_state(encode_step_state(state))

        assert decoded.count is None
        assert decoded.test_name == "héro cta"

    def test_token_is_versioned(self) -> None:
        token = encode_step_state(StepState(client_key="acme", test_name="t", exists=False))

        assert json.loads(token)["v"] == 1

    def test_with_count_returns_new_state(self) -> None:
        state = StepState(client_key="acme", test_name="t", exists=False)

        updated = state.with_count(4)

        assert updated.count == 4
        assert state.count is None

    def test_state_is_frozen(self) -> None:
        state = StepState(client_key="acme", test_name="t", exists=False)

        with pytest.raises(ValueError):
            state.count = 2  # type: ignore[misc]

    @pytest.mark.parametrize("token", [None, "", "not json", "[1, 2]"])
    def test_rejects_malformed_tokens(self, token: str | None) -> None:
        with pytest.raises(StepStateError):
            decode_step_state(token)

    def test_rejects_unknown_version(self) -> None:
        token = json.dumps({"v": 2, "client_key": "acme", "test_name": "t", "exists": False})

        with pytest.raises(StepStateError, match="version"):
            decode_step_state(token)

    def test_rejects_unversioned_legacy_payload(self) -> None:
        """Free-form metadata without a version is not guessed at."""
        token = json.dumps({"clientKey": "acme", "testName": "t", "exists": False})

        with pytest.raises(StepStateError):
            decode_step_state(token)

    def test_rejects_empty_client(self) -> None:
        token = json.dumps({"v": 1, "client_key": "", "test_name": "t", "exists": False})

        with pytest.raises(StepStateError, match="Invalid step state"):
            decode_step_state(token)

    def test_rejects_unknown_fields(self) -> None:
        token = json.dumps(
            {"v": 1, "client_key": "acme", "test_name": "t", "exists": False, "extra": 1}
        )

        with pytest.raises(StepStateError):
            decode_step_state(token)

    def test_rejects_oversized_state(self) -> None:
        state = StepState(client_key="acme", test_name="x" * 3100, exists=False)

        with pytest.raises(StepStateError, match="exceeds"):
            encode_step_state(state)
