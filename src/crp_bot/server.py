"""Flask routes in front of the Bolt app."""

import logging

from flask import Flask, Response, request
from slack_bolt import App
from slack_bolt.adapter.flask import SlackRequestHandler

logger = logging.getLogger(__name__)


def create_flask_app(bolt_app: App) -> Flask:
    """Expose the Slack webhook endpoints and a health check.

    Routes:
        GET  /               health check, always "ok"
        POST /slack/events   URL verification handshake, then events (mentions)
        POST /slack/commands slash commands
        POST /slack/actions  view submissions and button clicks
    """
    flask_app = Flask(__name__)
    handler = SlackRequestHandler(bolt_app)

    @flask_app.get("/")
    def health() -> tuple[str, int]:
        return "ok", 200

    @flask_app.post("/slack/events")
    def slack_events() -> Response | tuple[str, int]:
        payload = request.get_json(silent=True)
        if isinstance(payload, dict) and payload.get("type") == "url_verification":
            logger.info("Answering Slack URL verification challenge")
            return str(payload.get("challenge", "")), 200
        return handler.handle(request)

    @flask_app.post("/slack/commands")
    def slack_commands() -> Response:
        return handler.handle(request)

    @flask_app.post("/slack/actions")
    def slack_actions() -> Response:
        return handler.handle(request)

    return flask_app
