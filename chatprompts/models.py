"""Pydantic models for conversations and the context templates render against."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def current_time() -> str:
    return datetime.now(timezone.utc).strftime("%a %b %d %Y %H:%M:%S UTC")


# ── Conversation ─────────────────────────────────────────────────────────────

class PostRole(StrEnum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Post(BaseModel):
    """A single role-tagged message."""
    model_config = ConfigDict(frozen=True)

    role: PostRole
    message: str


class BotConversation(BaseModel):
    """Ordered posts plus the context that produced them."""
    posts: list[Post] = Field(default_factory=list)
    context: Any = None

    def add_post(self, role: PostRole, message: str) -> None:
        self.posts.append(Post(role=role, message=message))

    def to_messages(self) -> list[dict[str, str]]:
        """Export posts in the ``{"role", "content"}`` shape chat APIs accept."""
        return [{"role": post.role.value, "content": post.message} for post in self.posts]


# ── Context ──────────────────────────────────────────────────────────────────

class UserInfo(BaseModel):
    username: str
    first_name: str = ""
    last_name: str = ""
    locale: str = "en"

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.username


class ChannelInfo(BaseModel):
    name: str
    display_name: str = ""


class TeamInfo(BaseModel):
    name: str
    display_name: str = ""


class PostInfo(BaseModel):
    """The chat post a request was made from."""
    id: str = ""
    author: str = ""
    message: str = ""


class ConversationContext(BaseModel):
    """Situational data available to prompt templates.

    Every field is exposed as a top-level template variable. Fields left as
    ``None`` are undefined to strict templates, so a template that needs the
    requesting user fails to render when none was supplied.
    """
    bot_name: str = "AI Assistant"
    time: str = Field(default_factory=current_time)
    server_name: str = ""
    company_name: str = ""
    requesting_user: Optional[UserInfo] = None
    channel: Optional[ChannelInfo] = None
    team: Optional[TeamInfo] = None
    post: Optional[PostInfo] = None
    prompt_parameters: dict[str, str] = Field(default_factory=dict)
