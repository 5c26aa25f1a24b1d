"""
Shared pytest fixtures for the praxis test suite.

Usage in tests:
    def test_something(praxis_factory):
        praxis_factory.add_role("reviewer", {"alias": "Reviewer"}, "Body")
        compiler = praxis_factory.create_compiler()

    def test_with_data(praxis_env):
        # praxis_env comes pre-populated with a sample project
        summary = praxis_env.create_compiler().compile_all()
"""

import pytest

from tests.factories import PraxisTestFactory, ScriptedProvider


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real API keys, debug flags and user config out of every test."""
    for var in ("OPENROUTER_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY",
                "PRAXIS_LLM_PROVIDER", "PRAXIS_LLM_MODEL", "PRAXIS_DEBUG", "DEBUG",
                "PRAXIS_PROJECT_PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PRAXIS_ASCII_ONLY", "1")
    monkeypatch.setattr("praxis.config.ConfigManager.USER_CONFIG_FILE",
                        tmp_path / "home" / ".praxis" / "config.yaml")


@pytest.fixture
def praxis_factory(tmp_path):
    """An empty project with only a .git marker."""
    return PraxisTestFactory(tmp_path)


@pytest.fixture
def praxis_env(tmp_path):
    """A project pre-populated by PraxisTestFactory.create_sample_project()."""
    factory = PraxisTestFactory(tmp_path)
    factory.create_sample_project()
    return factory


@pytest.fixture
def scripted_provider():
    """Classifier double that answers 'Yes' unless told otherwise."""
    return ScriptedProvider()
