"""Shared fixtures for crp-bot tests."""

import pytest

from crp_bot.github.fake import FakeContentsStore
from crp_bot.types import ClientConfig
from crp_bot.wizard.flow import CrpWizard


@pytest.fixture
def acme() -> ClientConfig:
    """The client used throughout the wizard scenarios."""
    return ClientConfig(key="acme", owner="acme-corp", repo="experiments", tests_path="acme-tests")


@pytest.fixture
def store() -> FakeContentsStore:
    return FakeContentsStore()


@pytest.fixture
def wizard(acme: ClientConfig, store: FakeContentsStore) -> CrpWizard:
    """Wizard over the acme client and the shared fake store, on branch main."""
    return CrpWizard(clients={"acme": acme}, store=store, branch="main")
