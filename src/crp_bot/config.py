"""Settings and client directory loading.

Everything is read once from the environment at process start. The client
directory comes from `CLIENTS_JSON`, a JSON object mapping client identifiers
to repository coordinates:

    {
      "acme": {"owner": "acme-corp", "repo": "experiments", "testsPath": "acme-tests"}
    }
"""

import json
import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from crp_bot.types import ClientConfig, Settings

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
DEFAULT_PORT = 3000
DEFAULT_GITHUB_API_URL = "https://api.github.com"

REQUIRED_ENV_VARS = ("SLACK_SIGNING_SECRET", "SLACK_BOT_TOKEN", "GITHUB_TOKEN")


class ConfigurationError(Exception):
    """Raised when the client directory cannot be parsed."""


class SettingsError(Exception):
    """Raised when required settings are missing or invalid."""


class ClientEntry(BaseModel):
    """One entry of the CLIENTS_JSON mapping."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owner: str
    repo: str
    tests_path: str = Field(alias="testsPath")

    @field_validator("owner", "repo", "tests_path")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("tests_path")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def parse_clients(raw: str) -> dict[str, ClientConfig]:
    """Parse a CLIENTS_JSON document into a client directory.

    Args:
        raw: JSON object text mapping identifier -> {owner, repo, testsPath}

    Returns:
        Mapping from client identifier to ClientConfig

    Raises:
        ConfigurationError: If the document is not valid JSON, not an object,
            or any entry fails validation
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"CLIENTS_JSON is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("CLIENTS_JSON must be a JSON object")

    clients: dict[str, ClientConfig] = {}
    for key, value in data.items():
        if not key:
            raise ConfigurationError("CLIENTS_JSON contains an empty client identifier")
        try:
            entry = ClientEntry.model_validate(value)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid CLIENTS_JSON entry '{key}': {e}") from e
        clients[key] = ClientConfig(
            key=key,
            owner=entry.owner,
            repo=entry.repo,
            tests_path=entry.tests_path,
        )
    return clients


def load_clients(raw: str | None) -> dict[str, ClientConfig]:
    """Load the client directory, degrading to an empty mapping when malformed.

    A broken client directory is not fatal: the bot still starts, and every
    client selection is reported as unknown.
    """
    if raw is None or not raw.strip():
        return {}
    try:
        return parse_clients(raw)
    except ConfigurationError as e:
        logger.error("Invalid CLIENTS_JSON, starting with no clients: %s", e)
        return {}


def load_settings(environ: Mapping[str, str]) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Environment mapping (usually os.environ)

    Returns:
        Populated Settings

    Raises:
        SettingsError: If a required variable is missing or PORT is not an integer
    """
    missing = [name for name in REQUIRED_ENV_VARS if not environ.get(name)]
    if missing:
        raise SettingsError(f"Missing required environment variables: {', '.join(missing)}")

    port_raw = environ.get("PORT") or str(DEFAULT_PORT)
    if not port_raw.isdigit():
        raise SettingsError(f"PORT must be an integer, got: {port_raw}")

    clients = load_clients(environ.get("CLIENTS_JSON"))
    logger.info("Loaded %d client(s) from CLIENTS_JSON", len(clients))

    return Settings(
        signing_secret=environ["SLACK_SIGNING_SECRET"],
        bot_token=environ["SLACK_BOT_TOKEN"],
        github_token=environ["GITHUB_TOKEN"],
        default_branch=environ.get("GITHUB_DEFAULT_BRANCH") or DEFAULT_BRANCH,
        port=int(port_raw),
        github_api_url=(environ.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
        clients=clients,
    )
