"""Template engines.

The rest of the package only talks to a :class:`TemplateEngine`, which has two
jobs: parse a set of named sources into one namespace, and execute a single
template node against a context. :class:`JinjaTemplateEngine` is the engine
shipped with chatprompts.

Jinja2 block names must be identifiers, so a unit file ``<name>.tmpl`` declares
``{% block system %}`` / ``{% block user %}`` and the engine publishes them
under the qualified names ``<name>.system`` / ``<name>.user``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, Template, TemplateSyntaxError
from jinja2.runtime import Context
from pydantic import BaseModel


# ── Parsed structures ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TemplateNode:
    """A named, executable piece of a parsed template."""

    name: str
    handle: Any  # engine-specific


@dataclass(frozen=True)
class ParsedTemplate:
    """One parsed source file and the nodes it declares."""

    name: str
    filename: str
    handle: Any
    nodes: Mapping[str, TemplateNode]


def template_variables(context: Any) -> dict[str, Any]:
    """Turn an opaque context into the variables a template sees.

    Mappings are used as-is. Pydantic models expose their fields, with unset
    (``None``) fields left undefined. Anything else exposes its attributes.
    """
    if context is None:
        return {}
    if isinstance(context, Mapping):
        return dict(context)
    if isinstance(context, BaseModel):
        return {key: value for key, value in context if value is not None}
    return dict(vars(context))


# ── Abstract engine ──────────────────────────────────────────────────────────


class TemplateEngine(ABC):
    """Abstract interface over a templating language."""

    #: Exceptions :meth:`parse_all` raises for malformed sources.
    parse_errors: tuple[type[Exception], ...] = ()
    #: Exceptions :meth:`execute` raises when a template can't be rendered.
    render_errors: tuple[type[Exception], ...] = ()

    @abstractmethod
    def parse_all(self, sources: Mapping[str, str]) -> dict[str, ParsedTemplate]:
        """Parse every ``filename -> source`` entry as one shared namespace."""
        ...

    @abstractmethod
    def execute(self, node: TemplateNode, context: Any) -> str:
        """Execute ``node`` against ``context`` and return the raw output."""
        ...


# ── Jinja2 ───────────────────────────────────────────────────────────────────


class JinjaTemplateEngine(TemplateEngine):
    """Jinja2-backed engine.

    Undefined variables are errors rather than empty strings, so a template
    that references a missing context field fails loudly.
    """

    parse_errors = (TemplateSyntaxError,)
    # Anything raised while a template runs (undefined names, bad arithmetic,
    # a failing context property) is a render failure.
    render_errors = (Exception,)

    def __init__(self, **environment_options: Any) -> None:
        self._options = {
            "keep_trailing_newline": True,
            "undefined": StrictUndefined,
            "autoescape": False,
            **environment_options,
        }

    def parse_all(self, sources: Mapping[str, str]) -> dict[str, ParsedTemplate]:
        # One environment per namespace so files can include/import each other
        env = Environment(loader=DictLoader(dict(sources)), **self._options)

        parsed: dict[str, ParsedTemplate] = {}
        for filename in sorted(sources):
            template = env.get_template(filename)
            name = PurePosixPath(filename).stem
            nodes = {
                f"{name}.{block}": TemplateNode(name=f"{name}.{block}", handle=(template, block))
                for block in template.blocks
            }
            parsed[filename] = ParsedTemplate(
                name=name,
                filename=filename,
                handle=template,
                nodes=MappingProxyType(nodes),
            )
        return parsed

    def execute(self, node: TemplateNode, context: Any) -> str:
        template, block = node.handle
        ctx = template.new_context(template_variables(context))
        _run_top_level(template, ctx)
        return template.environment.concat(ctx.blocks[block][0](ctx))


def _skip_block(context: Context) -> Iterator[str]:
    return iter(())


def _run_top_level(template: Template, ctx: Context) -> None:
    """Run the template body with every block stubbed out.

    Top-level {% import %} and {% set %} statements land in ``ctx.vars`` where
    the blocks can see them, without rendering any other block.
    """
    real_blocks = ctx.blocks
    ctx.blocks = {name: [_skip_block] for name in real_blocks}
    for _ in template.root_render_func(ctx):
        pass
    # {% extends %} appends parent blocks while the body runs
    ctx.blocks = {
        name: real_blocks.get(name, []) + [fn for fn in funcs if fn is not _skip_block]
        for name, funcs in ctx.blocks.items()
    }
