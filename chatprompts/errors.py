"""Exceptions raised while loading prompt templates and composing conversations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import BotConversation


class PromptError(Exception):
    """Base class for every chatprompts error."""


class TemplateStoreError(PromptError):
    """The template store could not be built. Startup should halt."""


class TemplateRenderError(PromptError):
    """The template engine failed to execute a template."""


class ConversationError(PromptError):
    """Composition failed.

    ``conversation`` holds whatever was built before the failure (always with
    the caller's context attached). It must not be submitted to a backend.
    """

    def __init__(self, message: str, conversation: BotConversation) -> None:
        super().__init__(message)
        self.conversation = conversation


class MainTemplateNotFound(ConversationError):
    """No template unit is registered for the requested prompt name."""


class RenderFailure(ConversationError):
    """A system or user sub-template failed to render."""
