"""Conversation composition.

Turns a prompt name plus a context into the ordered system/user posts that get
sent to the AI backend.
"""

from __future__ import annotations

from importlib.resources import files
from typing import Any

from .config import Settings, settings
from .errors import MainTemplateNotFound, RenderFailure, TemplateRenderError, TemplateStoreError
from .log import logger
from .models import BotConversation, PostRole
from .renderer import Renderer
from .store import TemplateStore

BUNDLED_PROMPTS = files("chatprompts") / "prompts"


class ConversationComposer:
    """Builds conversations from the prompt units in a :class:`TemplateStore`."""

    def __init__(self, store: TemplateStore, renderer: Renderer | None = None) -> None:
        self.store = store
        self.renderer = renderer or Renderer(store.engine)

    def chat_completion(self, name: str, context: Any) -> BotConversation:
        """Compose the conversation for prompt ``name``.

        The system post (if the prompt declares one) always precedes the user
        post. A prompt declaring neither yields an empty conversation.

        Raises:
            MainTemplateNotFound: no template is registered for ``name``.
            RenderFailure: a sub-template failed to render. The attached
                conversation keeps any posts rendered before the failure.
        """
        conversation = BotConversation(posts=[], context=context)

        unit = self.store.lookup(name)
        if unit is None:
            logger.warning("Prompt template not found | prompt={}", name)
            raise MainTemplateNotFound(
                f"main template not found: {self.store.filename_for(name)}", conversation
            )

        for role, node in ((PostRole.SYSTEM, unit.system), (PostRole.USER, unit.user)):
            if node is None:
                continue
            try:
                message = self.renderer.execute(node, context)
            except TemplateRenderError as err:
                raise RenderFailure(str(err), conversation) from err
            conversation.add_post(role, message)

        if not conversation.posts:
            logger.debug("Prompt declares no system or user template | prompt={}", name)
        logger.debug("Composed conversation | prompt={} | posts={}", name, len(conversation.posts))
        return conversation


def load_prompts(config: Settings | None = None) -> ConversationComposer:
    """Build a composer from the configured (or bundled) prompt templates.

    Every registered prompt is expected to have a template. Missing ones
    fail startup unless ``require_all_prompts`` is off, in which case they
    are only logged.
    """
    config = config or settings
    source = config.prompts_dir or BUNDLED_PROMPTS
    store = TemplateStore.from_source(source, extension=config.prompt_extension)

    missing = store.missing_prompts()
    if missing:
        listed = ", ".join(store.filename_for(name) for name in missing)
        if config.require_all_prompts:
            raise TemplateStoreError(f"missing prompt templates: {listed}")
        logger.warning("Missing prompt templates | {}", listed)

    return ConversationComposer(store)
