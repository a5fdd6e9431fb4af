"""
Pytest configuration and fixtures shared by all tests.

Rule tables are immutable, so one instance is built per session and injected
wherever a component needs it.
"""

import pytest

from prompt_engine import PromptEngine
from prompt_engine.config import EngineSettings
from prompt_engine.rules import RuleTables
from prompt_engine.storage import InMemoryPromptStore

# Baseline refinement of "create a login form" in the general domain
LOGIN_FORM_REFINED = (
    "Role: You are an experienced professional assistant.\n\n"
    "Task: Create a login form.\n\n"
    "Output: Deliver the complete result as structured markdown with clear headings."
)


@pytest.fixture(scope="session")
def rule_tables() -> RuleTables:
    return RuleTables.default()


@pytest.fixture
def settings() -> EngineSettings:
    """Settings independent of the environment and any .env file."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def engine(rule_tables, settings) -> PromptEngine:
    return PromptEngine(rule_tables=rule_tables, settings=settings)


@pytest.fixture
def store() -> InMemoryPromptStore:
    return InMemoryPromptStore()
