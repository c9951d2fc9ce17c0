"""Resolve named prompt templates into role-tagged conversations for AI backends."""

from .composer import ConversationComposer, load_prompts
from .engine import JinjaTemplateEngine, TemplateEngine, TemplateNode
from .errors import (
    ConversationError,
    MainTemplateNotFound,
    PromptError,
    RenderFailure,
    TemplateRenderError,
    TemplateStoreError,
)
from .models import BotConversation, ConversationContext, Post, PostRole
from .registry import PROMPTS, PromptName
from .renderer import Renderer
from .store import PromptUnit, TemplateStore, new_template_store

__all__ = [
    "PROMPTS",
    "BotConversation",
    "ConversationComposer",
    "ConversationContext",
    "ConversationError",
    "JinjaTemplateEngine",
    "MainTemplateNotFound",
    "Post",
    "PostRole",
    "PromptError",
    "PromptName",
    "PromptUnit",
    "RenderFailure",
    "Renderer",
    "TemplateEngine",
    "TemplateNode",
    "TemplateRenderError",
    "TemplateStore",
    "TemplateStoreError",
    "load_prompts",
    "new_template_store",
]
