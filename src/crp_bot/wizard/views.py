"""Block Kit modal payloads for each wizard state."""

from typing import Any

from crp_bot.wizard.states import WizardState

APP_TITLE = "CRP Automation"

CLIENT_BLOCK = "client_block"
CLIENT_ACTION = "client_select"
TEST_NAME_BLOCK = "testname_block"
TEST_NAME_ACTION = "test_name"
# Keeps the step state token well under the private_metadata limit.
MAX_TEST_NAME_LENGTH = 200
CHOICE_BLOCK = "choice_block"
CHOOSE_CREATE_ACTION = "choose_create"
CHOOSE_UPDATE_ACTION = "choose_update"
VARIATION_COUNT_BLOCK = "varcount_block"
VARIATION_COUNT_ACTION = "var_count"
SNIPPET_ACTION = "val"
VARIATION_INDEX_BLOCK = "var_id"
UPDATE_JS_BLOCK = "u_js"
UPDATE_CSS_BLOCK = "u_css"


def js_block_id(index: int) -> str:
    return f"js_{index}"


def css_block_id(index: int) -> str:
    return f"css_{index}"


def _plain(text: str) -> dict[str, Any]:
    return {"type": "plain_text", "text": text}


def _mrkdwn_section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _text_input(
    *,
    block_id: str,
    label: str,
    action_id: str,
    multiline: bool,
    initial_value: str | None,
    optional: bool,
) -> dict[str, Any]:
    element: dict[str, Any] = {"type": "plain_text_input", "action_id": action_id}
    if multiline:
        element["multiline"] = True
    if initial_value is not None:
        element["initial_value"] = initial_value
    block: dict[str, Any] = {
        "type": "input",
        "block_id": block_id,
        "label": _plain(label),
        "element": element,
    }
    if optional:
        block["optional"] = True
    return block


def _modal(
    *,
    state: WizardState,
    title: str,
    blocks: list[dict[str, Any]],
    submit: str | None,
    close: str,
    private_metadata: str | None,
) -> dict[str, Any]:
    view: dict[str, Any] = {
        "type": "modal",
        "callback_id": state.callback_id,
        "title": _plain(title),
        "close": _plain(close),
        "blocks": blocks,
    }
    if submit is not None:
        view["submit"] = _plain(submit)
    if private_metadata is not None:
        view["private_metadata"] = private_metadata
    return view


def build_pick_client_view(client_keys: list[str]) -> dict[str, Any]:
    """First dialog: client picklist and test name."""
    options = [{"text": _plain(key), "value": key} for key in client_keys]
    select: dict[str, Any] = {
        "type": "static_select",
        "action_id": CLIENT_ACTION,
        "placeholder": _plain("Select a client"),
        "options": options,
    }
    return _modal(
        state=WizardState.AWAITING_CLIENT_AND_NAME,
        title=APP_TITLE,
        submit="Continue",
        close="Cancel",
        private_metadata=None,
        blocks=[
            {
                "type": "input",
                "block_id": CLIENT_BLOCK,
                "label": _plain("Choose client"),
                "element": select,
            },
            {
                "type": "input",
                "block_id": TEST_NAME_BLOCK,
                "label": _plain("Test name"),
                "element": {
                    "type": "plain_text_input",
                    "action_id": TEST_NAME_ACTION,
                    "max_length": MAX_TEST_NAME_LENGTH,
                    "placeholder": _plain("e.g. hero-banner-cta"),
                },
            },
        ],
    )


def build_choice_view(*, test_dir: str, exists: bool, private_metadata: str) -> dict[str, Any]:
    """Create-or-update dialog. "Update Existing" only appears when the test exists."""
    if exists:
        summary = f"*Test found:* `{test_dir}`\nWhat would you like to do?"
    else:
        summary = f"*No existing test* at `{test_dir}`."

    buttons: list[dict[str, Any]] = [
        {
            "type": "button",
            "text": _plain("Create New"),
            "value": "create",
            "action_id": CHOOSE_CREATE_ACTION,
        }
    ]
    if exists:
        buttons.append(
            {
                "type": "button",
                "text": _plain("Update Existing"),
                "value": "update",
                "action_id": CHOOSE_UPDATE_ACTION,
            }
        )

    return _modal(
        state=WizardState.AWAITING_CHOICE,
        title=APP_TITLE,
        submit=None,
        close="Cancel",
        private_metadata=private_metadata,
        blocks=[
            _mrkdwn_section(summary),
            {"type": "actions", "block_id": CHOICE_BLOCK, "elements": buttons},
        ],
    )


def build_variation_count_view(*, private_metadata: str) -> dict[str, Any]:
    return _modal(
        state=WizardState.AWAITING_VARIATION_COUNT,
        title="Create New Test",
        submit="Continue",
        close="Cancel",
        private_metadata=private_metadata,
        blocks=[
            _text_input(
                block_id=VARIATION_COUNT_BLOCK,
                label="Number of variations (1-5)",
                action_id=VARIATION_COUNT_ACTION,
                multiline=False,
                initial_value="1",
                optional=False,
            )
        ],
    )


def build_create_snippets_view(*, count: int, private_metadata: str) -> dict[str, Any]:
    """One header plus a JS and a CSS field per variation, 1-indexed."""
    blocks: list[dict[str, Any]] = []
    for index in range(1, count + 1):
        blocks.append({"type": "header", "text": _plain(f"Variation {index}")})
        blocks.append(
            _text_input(
                block_id=js_block_id(index),
                label=f"JS snippet {index}",
                action_id=SNIPPET_ACTION,
                multiline=True,
                initial_value=None,
                optional=True,
            )
        )
        blocks.append(
            _text_input(
                block_id=css_block_id(index),
                label=f"CSS snippet {index}",
                action_id=SNIPPET_ACTION,
                multiline=True,
                initial_value=None,
                optional=True,
            )
        )

    return _modal(
        state=WizardState.AWAITING_CREATE_SNIPPETS,
        title="New Test Snippets",
        submit="Create",
        close="Cancel",
        private_metadata=private_metadata,
        blocks=blocks,
    )


def build_update_view(*, test_dir: str, private_metadata: str) -> dict[str, Any]:
    return _modal(
        state=WizardState.AWAITING_UPDATE_SNIPPETS,
        title="Update Existing Test",
        submit="Update",
        close="Cancel",
        private_metadata=private_metadata,
        blocks=[
            _mrkdwn_section(f"Updating files under `{test_dir}` (default: var-1)"),
            _text_input(
                block_id=VARIATION_INDEX_BLOCK,
                label="Variation number",
                action_id=SNIPPET_ACTION,
                multiline=False,
                initial_value="1",
                optional=False,
            ),
            _text_input(
                block_id=UPDATE_JS_BLOCK,
                label="New JS snippet",
                action_id=SNIPPET_ACTION,
                multiline=True,
                initial_value=None,
                optional=True,
            ),
            _text_input(
                block_id=UPDATE_CSS_BLOCK,
                label="New CSS snippet",
                action_id=SNIPPET_ACTION,
                multiline=True,
                initial_value=None,
                optional=True,
            ),
        ],
    )


def build_result_view(*, title: str, text: str) -> dict[str, Any]:
    """Terminal dialog with a single message and a Close button."""
    return _modal(
        state=WizardState.TERMINAL,
        title=title,
        submit=None,
        close="Close",
        private_metadata=None,
        blocks=[_mrkdwn_section(text)],
    )


def build_error_view(
    *, headline: str, message: str, written: tuple[str, ...] = ()
) -> dict[str, Any]:
    """Terminal error dialog. `written` lists files committed before the failure."""
    text = f"❌ {headline}:\n`{message}`"
    if written:
        paths = "\n".join(f"• `{path}`" for path in written)
        text = f"{text}\n\n*Written before the failure:*\n{paths}"
    return build_result_view(title="Error", text=text)
