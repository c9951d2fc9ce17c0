"""Executes sub-templates and normalizes their output."""

from __future__ import annotations

from typing import Any

from .engine import TemplateEngine, TemplateNode
from .errors import TemplateRenderError


class Renderer:
    def __init__(self, engine: TemplateEngine) -> None:
        self._engine = engine

    def execute(self, node: TemplateNode, context: Any) -> str:
        """Render ``node`` against ``context``, trimmed of surrounding whitespace.

        Template sources carry indentation and blank lines from formatting;
        none of it belongs in the message sent downstream.
        """
        try:
            output = self._engine.execute(node, context)
        except self._engine.render_errors as err:
            raise TemplateRenderError(f"unable to execute template {node.name!r}: {err}") from err
        return output.strip()
