"""Slack Bolt listeners wiring Slack events to the wizard.

View submissions answer through `ack(...)` (push/update/errors in the
acknowledgement itself). Button actions cannot do that, so they acknowledge
first and then replace the modal with `views.update`.
"""

import logging
from typing import Any

from slack_bolt import Ack, App, Say
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from crp_bot.wizard.flow import CrpWizard
from crp_bot.wizard.states import Transition, WizardState
from crp_bot.wizard.views import CHOOSE_CREATE_ACTION, CHOOSE_UPDATE_ACTION

logger = logging.getLogger(__name__)

COMMAND = "/crp"


def handle_command(
    wizard: CrpWizard, *, ack: Ack, command: dict[str, Any], client: WebClient
) -> None:
    """Open the first dialog for the slash command."""
    ack()
    transition = wizard.start()
    try:
        client.views_open(trigger_id=command["trigger_id"], view=transition.view)
    except SlackApiError:
        logger.exception("Failed to open CRP modal for user %s", command.get("user_id"))


def handle_client_and_name(wizard: CrpWizard, *, ack: Ack, view: dict[str, Any]) -> None:
    transition = wizard.submit_client_and_name(_state_values(view))
    ack(transition.ack_payload())


def handle_variation_count(wizard: CrpWizard, *, ack: Ack, view: dict[str, Any]) -> None:
    transition = wizard.submit_variation_count(view.get("private_metadata"), _state_values(view))
    ack(transition.ack_payload())


def handle_create_snippets(wizard: CrpWizard, *, ack: Ack, view: dict[str, Any]) -> None:
    transition = wizard.submit_create_snippets(view.get("private_metadata"), _state_values(view))
    ack(transition.ack_payload())


def handle_update_snippets(wizard: CrpWizard, *, ack: Ack, view: dict[str, Any]) -> None:
    transition = wizard.submit_update_snippets(view.get("private_metadata"), _state_values(view))
    ack(transition.ack_payload())


def handle_choose_create(
    wizard: CrpWizard, *, ack: Ack, body: dict[str, Any], client: WebClient
) -> None:
    ack()
    view = body.get("view", {})
    _update_view(client, view, wizard.choose_create(view.get("private_metadata")))


def handle_choose_update(
    wizard: CrpWizard, *, ack: Ack, body: dict[str, Any], client: WebClient
) -> None:
    ack()
    view = body.get("view", {})
    _update_view(client, view, wizard.choose_update(view.get("private_metadata")))


def handle_app_mention(*, event: dict[str, Any], say: Say) -> None:
    say(f"👋 Hello <@{event.get('user', '')}>, your bot is working!")


def register_handlers(app: App, wizard: CrpWizard) -> None:
    """Attach every CRP listener to a Bolt app."""

    @app.command(COMMAND)
    def on_command(ack: Ack, command: dict[str, Any], client: WebClient) -> None:
        handle_command(wizard, ack=ack, command=command, client=client)

    @app.view(WizardState.AWAITING_CLIENT_AND_NAME.callback_id)
    def on_client_and_name(ack: Ack, view: dict[str, Any]) -> None:
        handle_client_and_name(wizard, ack=ack, view=view)

    @app.action(CHOOSE_CREATE_ACTION)
    def on_choose_create(ack: Ack, body: dict[str, Any], client: WebClient) -> None:
        handle_choose_create(wizard, ack=ack, body=body, client=client)

    @app.action(CHOOSE_UPDATE_ACTION)
    def on_choose_update(ack: Ack, body: dict[str, Any], client: WebClient) -> None:
        handle_choose_update(wizard, ack=ack, body=body, client=client)

    @app.view(WizardState.AWAITING_VARIATION_COUNT.callback_id)
    def on_variation_count(ack: Ack, view: dict[str, Any]) -> None:
        handle_variation_count(wizard, ack=ack, view=view)

    @app.view(WizardState.AWAITING_CREATE_SNIPPETS.callback_id)
    def on_create_snippets(ack: Ack, view: dict[str, Any]) -> None:
        handle_create_snippets(wizard, ack=ack, view=view)

    @app.view(WizardState.AWAITING_UPDATE_SNIPPETS.callback_id)
    def on_update_snippets(ack: Ack, view: dict[str, Any]) -> None:
        handle_update_snippets(wizard, ack=ack, view=view)

    @app.event("app_mention")
    def on_app_mention(event: dict[str, Any], say: Say) -> None:
        handle_app_mention(event=event, say=say)


def _state_values(view: dict[str, Any]) -> dict[str, Any]:
    return view.get("state", {}).get("values", {})


def _update_view(client: WebClient, view: dict[str, Any], transition: Transition) -> None:
    try:
        client.views_update(view_id=view.get("id"), view=transition.view)
    except SlackApiError:
        logger.exception("Failed to update modal %s to %s", view.get("id"), transition.state.name)
