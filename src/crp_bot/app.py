"""Assembles and runs the CRP bot."""

import logging

from flask import Flask
from slack_bolt import App

from crp_bot.github.abc import ContentsStore
from crp_bot.github.real import RealContentsStore
from crp_bot.handlers import register_handlers
from crp_bot.server import create_flask_app
from crp_bot.types import Settings
from crp_bot.wizard.flow import CrpWizard

logger = logging.getLogger(__name__)


def create_bolt_app(settings: Settings, store: ContentsStore) -> App:
    """Create the Bolt app with every CRP listener registered.

    Args:
        settings: Service settings
        store: Contents gateway the wizard writes through
    """
    bolt_app = App(
        token=settings.bot_token,
        signing_secret=settings.signing_secret,
        token_verification_enabled=False,
    )
    wizard = CrpWizard(clients=settings.clients, store=store, branch=settings.default_branch)
    register_handlers(bolt_app, wizard)
    return bolt_app


def create_application(settings: Settings) -> Flask:
    """Wire the real GitHub gateway, Bolt and Flask together."""
    store = RealContentsStore(token=settings.github_token, base_url=settings.github_api_url)
    return create_flask_app(create_bolt_app(settings, store))


def run_bot(settings: Settings, *, host: str) -> None:
    """Run the HTTP server until interrupted.

    Args:
        settings: Service settings, including the port to listen on
        host: Interface to bind
    """
    flask_app = create_application(settings)
    logger.info(
        "CRP bot is running on %s:%d (branch %s, %d client(s))",
        host,
        settings.port,
        settings.default_branch,
        len(settings.clients),
    )
    flask_app.run(host=host, port=settings.port)
