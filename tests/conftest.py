"""Shared test fixtures for chatprompts tests.

Provides a fresh template directory per test, factory functions for writing
template sources and building stores/composers from them, and a fully
populated conversation context.
"""

from pathlib import Path

import pytest

from chatprompts import log
from chatprompts.composer import ConversationComposer
from chatprompts.models import (
    ChannelInfo,
    ConversationContext,
    PostInfo,
    TeamInfo,
    UserInfo,
)
from chatprompts.store import TemplateStore

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _no_log_sinks(monkeypatch):
    """Keep the CLI from swapping loguru sinks onto captured streams."""
    monkeypatch.setattr(log, "_configured", True)


# ---------------------------------------------------------------------------
# Template fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """An empty directory to write template files into."""
    path = tmp_path / "prompts"
    path.mkdir()
    return path


@pytest.fixture
def context() -> ConversationContext:
    """A conversation context with every field populated."""
    return ConversationContext(
        bot_name="Copilot",
        time="Mon Oct 19 2026 09:30:00 UTC",
        server_name="Acme Chat",
        company_name="Acme",
        requesting_user=UserInfo(username="jdoe", first_name="Jane", last_name="Doe"),
        channel=ChannelInfo(name="town-square", display_name="Town Square"),
        team=TeamInfo(name="acme", display_name="Acme"),
        post=PostInfo(id="p1", author="jdoe", message="teh quick brwn fox"),
        prompt_parameters={
            "thread": "jdoe: shipping friday?\nasmith: yes, after QA signs off",
            "transcript": "jdoe: let's ship friday\nasmith: agreed, I'll tell QA",
            "tone": "professional",
        },
    )


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------


def write_template(directory: Path, filename: str, source: str) -> Path:
    """Write one template source file."""
    path = directory / filename
    path.write_text(source, encoding="utf-8")
    return path


def make_store(sources: dict[str, str]) -> TemplateStore:
    """Build a store straight from ``filename -> source`` pairs."""
    return TemplateStore(sources)


def make_composer(sources: dict[str, str]) -> ConversationComposer:
    """Build a composer over ``filename -> source`` pairs."""
    return ConversationComposer(make_store(sources))
