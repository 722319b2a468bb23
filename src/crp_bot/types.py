"""Type definitions for the CRP bot.

This module contains immutable dataclasses shared by the configuration
layer, the GitHub contents gateway and the wizard.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    """Repository coordinates for one client.

    Attributes:
        key: Client identifier shown in the picklist (e.g., "acme")
        owner: GitHub repository owner (e.g., "acme-corp")
        repo: GitHub repository name (e.g., "experiments")
        tests_path: Directory holding one folder per test (e.g., "acme-tests")
    """

    key: str
    owner: str
    repo: str
    tests_path: str

    def test_dir(self, test_name: str) -> str:
        """Directory holding the variation files for a test."""
        return f"{self.tests_path}/{test_name}"


@dataclass(frozen=True)
class FileWrite:
    """A single file to create or overwrite.

    Attributes:
        path: Repository-relative target path
        content: UTF-8 text content of the file
        message: Commit message for the write
    """

    path: str
    content: str
    message: str


@dataclass(frozen=True)
class Settings:
    """Service settings read from the environment at startup.

    Attributes:
        signing_secret: Slack signing secret for request verification
        bot_token: Bot User OAuth Token (xoxb-...)
        github_token: Token used for GitHub contents API calls
        default_branch: Branch every lookup and write targets
        port: Port the HTTP server listens on
        github_api_url: Base URL of the GitHub REST API
        clients: Client directory keyed by client identifier
    """

    signing_secret: str
    bot_token: str
    github_token: str
    default_branch: str
    port: int
    github_api_url: str
    clients: dict[str, ClientConfig]
