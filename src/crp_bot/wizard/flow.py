"""CrpWizard - the create/update variation dialog flow.

States, in order:

    AWAITING_CLIENT_AND_NAME -> AWAITING_CHOICE
        -> AWAITING_VARIATION_COUNT -> AWAITING_CREATE_SNIPPETS -> TERMINAL
        -> AWAITING_UPDATE_SNIPPETS -> TERMINAL

Every method takes what Slack hands back for the current modal (submitted
values and/or private_metadata) and returns a Transition. Remote failures are
never retried; they end the flow in a terminal error dialog.
"""

import logging
from dataclasses import dataclass
from typing import Any

from crp_bot.github.abc import ContentsStore
from crp_bot.github.types import RemoteStoreError
from crp_bot.step_state import StepState, StepStateError, decode_step_state, encode_step_state
from crp_bot.types import ClientConfig, FileWrite
from crp_bot.wizard.forms import (
    MIN_VARIATIONS,
    parse_variation_count,
    parse_variation_index,
    read_value,
)
from crp_bot.wizard.states import (
    DialogAction,
    Outcome,
    Transition,
    WizardState,
    terminal,
    validation_errors,
)
from crp_bot.wizard.upsert import UpsertReport, upsert_files
from crp_bot.wizard.views import (
    CLIENT_ACTION,
    CLIENT_BLOCK,
    MAX_TEST_NAME_LENGTH,
    SNIPPET_ACTION,
    TEST_NAME_ACTION,
    TEST_NAME_BLOCK,
    UPDATE_CSS_BLOCK,
    UPDATE_JS_BLOCK,
    VARIATION_COUNT_ACTION,
    VARIATION_COUNT_BLOCK,
    VARIATION_INDEX_BLOCK,
    build_choice_view,
    build_create_snippets_view,
    build_error_view,
    build_pick_client_view,
    build_result_view,
    build_update_view,
    build_variation_count_view,
    css_block_id,
    js_block_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ResolvedStep:
    state: StepState
    client: ClientConfig


class CrpWizard:
    """Drives the variation wizard against a contents store.

    Holds no per-user state: everything a later step needs is carried in the
    modal's private_metadata, so one instance serves every concurrent dialog.
    """

    def __init__(
        self,
        clients: dict[str, ClientConfig],
        store: ContentsStore,
        branch: str,
    ) -> None:
        """Initialize the wizard with its collaborators.

        Args:
            clients: Client directory keyed by client identifier
            store: Contents gateway used for existence checks and writes
            branch: Branch every lookup and write targets
        """
        self._clients = clients
        self._store = store
        self._branch = branch

    def start(self) -> Transition:
        """Entry point for the slash command. No remote calls."""
        return Transition(
            action=DialogAction.OPEN,
            state=WizardState.AWAITING_CLIENT_AND_NAME,
            view=build_pick_client_view(sorted(self._clients)),
            errors=None,
            outcome=None,
        )

    def submit_client_and_name(self, state_values: dict[str, Any]) -> Transition:
        """Validate the first dialog, check whether the test exists, push the choice dialog."""
        client_key = read_value(state_values, CLIENT_BLOCK, CLIENT_ACTION)
        test_name = (read_value(state_values, TEST_NAME_BLOCK, TEST_NAME_ACTION) or "").strip()

        errors: dict[str, str] = {}
        if not client_key:
            errors[CLIENT_BLOCK] = "Please select a client."
        if not test_name:
            errors[TEST_NAME_BLOCK] = "Please enter a test name."
        elif len(test_name) > MAX_TEST_NAME_LENGTH:
            errors[TEST_NAME_BLOCK] = (
                f"Test name must be at most {MAX_TEST_NAME_LENGTH} characters."
            )
        if errors:
            return validation_errors(WizardState.AWAITING_CLIENT_AND_NAME, errors)

        assert client_key is not None
        client = self._clients.get(client_key)
        if client is None:
            return validation_errors(
                WizardState.AWAITING_CLIENT_AND_NAME,
                {CLIENT_BLOCK: "Unknown client in configuration."},
            )

        test_dir = client.test_dir(test_name)
        try:
            marker = self._store.get_revision_marker(
                client.owner, client.repo, test_dir, self._branch
            )
        except RemoteStoreError as e:
            logger.warning(
                "Existence check for %s failed (%s): %s", test_dir, e.error_type, e.message
            )
            return terminal(
                build_error_view(headline="GitHub check failed", message=e.message),
                Outcome.FAILURE,
            )

        # A directory counts as existing, same as a file at that path.
        exists = marker is not None
        logger.info("Test %s for %s: exists=%s", test_name, client_key, exists)

        step = StepState(client_key=client_key, test_name=test_name, exists=exists)
        return Transition(
            action=DialogAction.PUSH,
            state=WizardState.AWAITING_CHOICE,
            view=build_choice_view(
                test_dir=test_dir,
                exists=exists,
                private_metadata=encode_step_state(step),
            ),
            errors=None,
            outcome=None,
        )

    def choose_create(self, private_metadata: str | None) -> Transition:
        """Handle the Create New button: ask how many variations to create."""
        resolved = self._resolve(private_metadata)
        if isinstance(resolved, Transition):
            return resolved

        return Transition(
            action=DialogAction.UPDATE,
            state=WizardState.AWAITING_VARIATION_COUNT,
            view=build_variation_count_view(private_metadata=encode_step_state(resolved.state)),
            errors=None,
            outcome=None,
        )

    def submit_variation_count(
        self, private_metadata: str | None, state_values: dict[str, Any]
    ) -> Transition:
        """Clamp the requested count and render that many JS/CSS field pairs."""
        resolved = self._resolve(private_metadata)
        if isinstance(resolved, Transition):
            return resolved

        raw = read_value(state_values, VARIATION_COUNT_BLOCK, VARIATION_COUNT_ACTION)
        count = parse_variation_count(raw)
        step = resolved.state.with_count(count)

        return Transition(
            action=DialogAction.UPDATE,
            state=WizardState.AWAITING_CREATE_SNIPPETS,
            view=build_create_snippets_view(count=count, private_metadata=encode_step_state(step)),
            errors=None,
            outcome=None,
        )

    def submit_create_snippets(
        self, private_metadata: str | None, state_values: dict[str, Any]
    ) -> Transition:
        """Write var-<i>.js and var-<i>.css for every variation."""
        resolved = self._resolve(private_metadata)
        if isinstance(resolved, Transition):
            return resolved

        step, client = resolved.state, resolved.client
        if step.count is None:
            return _step_state_failure(StepStateError("Step state is missing the variation count"))

        test_dir = client.test_dir(step.test_name)
        writes: list[FileWrite] = []
        for index in range(1, step.count + 1):
            js = read_value(state_values, js_block_id(index), SNIPPET_ACTION) or ""
            css = read_value(state_values, css_block_id(index), SNIPPET_ACTION) or ""
            for path, content in (
                (f"{test_dir}/var-{index}.js", js),
                (f"{test_dir}/var-{index}.css", css),
            ):
                writes.append(
                    FileWrite(
                        path=path,
                        content=content,
                        message=f"CRP: create {step.test_name} ({step.client_key}) -> {path}",
                    )
                )

        report = upsert_files(self._store, client, writes, branch=self._branch)
        if not report.success:
            return _upsert_failure("GitHub error creating files", report)

        logger.info(
            "Created %s for %s with %d variation(s)", step.test_name, step.client_key, step.count
        )
        return terminal(
            build_result_view(
                title="Created ✅",
                text=(
                    f"Created *{step.test_name}* for *{step.client_key}* "
                    f"with {step.count} variation(s)."
                ),
            ),
            Outcome.SUCCESS,
        )

    def choose_update(self, private_metadata: str | None) -> Transition:
        """Handle the Update Existing button: ask for the variation number and snippets."""
        resolved = self._resolve(private_metadata)
        if isinstance(resolved, Transition):
            return resolved

        return Transition(
            action=DialogAction.UPDATE,
            state=WizardState.AWAITING_UPDATE_SNIPPETS,
            view=build_update_view(
                test_dir=resolved.client.test_dir(resolved.state.test_name),
                private_metadata=encode_step_state(resolved.state),
            ),
            errors=None,
            outcome=None,
        )

    def submit_update_snippets(
        self, private_metadata: str | None, state_values: dict[str, Any]
    ) -> Transition:
        """Overwrite one variation's JS then CSS file."""
        resolved = self._resolve(private_metadata)
        if isinstance(resolved, Transition):
            return resolved

        step, client = resolved.state, resolved.client
        index = parse_variation_index(
            read_value(state_values, VARIATION_INDEX_BLOCK, SNIPPET_ACTION)
        )
        if index < MIN_VARIATIONS:
            return validation_errors(
                WizardState.AWAITING_UPDATE_SNIPPETS,
                {VARIATION_INDEX_BLOCK: "Variation number must be 1 or greater."},
            )
        js = read_value(state_values, UPDATE_JS_BLOCK, SNIPPET_ACTION) or ""
        css = read_value(state_values, UPDATE_CSS_BLOCK, SNIPPET_ACTION) or ""

        test_dir = client.test_dir(step.test_name)
        writes = [
            FileWrite(
                path=f"{test_dir}/var-{index}.js",
                content=js,
                message=f"CRP: update {step.test_name} var-{index}.js",
            ),
            FileWrite(
                path=f"{test_dir}/var-{index}.css",
                content=css,
                message=f"CRP: update {step.test_name} var-{index}.css",
            ),
        ]

        report = upsert_files(self._store, client, writes, branch=self._branch)
        if not report.success:
            return _upsert_failure("GitHub update failed", report)

        logger.info("Updated %s variation %d for %s", step.test_name, index, step.client_key)
        return terminal(
            build_result_view(
                title="Updated ✅",
                text=(
                    f"Updated *{step.test_name}* variation *{index}* "
                    f"for *{step.client_key}*."
                ),
            ),
            Outcome.SUCCESS,
        )

    def _resolve(self, private_metadata: str | None) -> _ResolvedStep | Transition:
        """Decode step state and look up its client, or return a terminal error."""
        try:
            step = decode_step_state(private_metadata)
        except StepStateError as e:
            return _step_state_failure(e)

        client = self._clients.get(step.client_key)
        if client is None:
            logger.warning("Client %s is no longer configured", step.client_key)
            return terminal(
                build_error_view(
                    headline="Configuration changed",
                    message=f"Unknown client in configuration: {step.client_key}",
                ),
                Outcome.FAILURE,
            )
        return _ResolvedStep(state=step, client=client)


def _step_state_failure(error: StepStateError) -> Transition:
    logger.warning("Rejected dialog with bad step state: %s", error)
    return terminal(
        build_error_view(headline="This dialog has expired", message=str(error)),
        Outcome.FAILURE,
    )


def _upsert_failure(headline: str, report: UpsertReport) -> Transition:
    assert report.error is not None
    return terminal(
        build_error_view(headline=headline, message=report.error.message, written=report.written),
        Outcome.FAILURE,
    )
