"""Workspace-level pytest configuration and fixtures."""

import pytest

from shorthand_codegen.configuration import (
    CONTRACT_ENV_VAR,
    OPTIONAL_PROPERTY_MODE_ENV_VAR,
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep generator environment overrides from leaking into tests.

    GeneratorConfig.from_properties falls back to environment variables, so
    a developer's shell (or a .env file) must not change test outcomes.
    """
    monkeypatch.delenv(CONTRACT_ENV_VAR, raising=False)
    monkeypatch.delenv(OPTIONAL_PROPERTY_MODE_ENV_VAR, raising=False)
    monkeypatch.delenv("SHORTHAND_CODEGEN_LOG_CONFIG", raising=False)
