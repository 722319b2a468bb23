"""Standalone CLI for crp-bot."""

import dataclasses
import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv

from crp_bot.config import SettingsError, load_settings

LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


@click.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", type=int, help="Port to listen on (overrides PORT, default 3000)")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load environment variables from this file (defaults to ./.env if present)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(host: str, port: int | None, env_file: Path | None, debug: bool) -> None:
    """Start the CRP Slack bot server.

    The bot serves Slack's slash command, interactivity and event webhooks
    over HTTP and writes A/B test variation files through the GitHub
    contents API.

    Environment variables required:
        SLACK_SIGNING_SECRET: Signing secret for request verification
        SLACK_BOT_TOKEN: Bot User OAuth Token (xoxb-...)
        GITHUB_TOKEN: Token with contents read/write access

    Optional:
        GITHUB_DEFAULT_BRANCH (default "main"), PORT (default 3000),
        CLIENTS_JSON, GITHUB_API_URL
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)

    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    try:
        settings = load_settings(os.environ)
    except SettingsError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e

    if port is not None:
        settings = dataclasses.replace(settings, port=port)

    from crp_bot.app import run_bot

    click.echo(f"Starting CRP bot on port {settings.port}")
    run_bot(settings, host=host)


if __name__ == "__main__":
    main()
