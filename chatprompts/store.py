"""Template store: every prompt template, parsed once and indexed by filename."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType

from .engine import JinjaTemplateEngine, ParsedTemplate, TemplateEngine, TemplateNode
from .errors import TemplateStoreError
from .log import logger
from .registry import PROMPTS, PromptName

PROMPT_EXTENSION = "tmpl"
SYSTEM_SUB_TEMPLATE_SUFFIX = ".system"
USER_SUB_TEMPLATE_SUFFIX = ".user"


@dataclass(frozen=True)
class PromptUnit:
    """A parsed prompt with its system/user sub-templates resolved."""

    name: str
    filename: str
    template: ParsedTemplate
    system: TemplateNode | None
    user: TemplateNode | None


def read_sources(root: Traversable | str, extension: str = PROMPT_EXTENSION) -> dict[str, str]:
    """Read every ``*.<extension>`` entry directly under ``root``."""
    if isinstance(root, str):
        root = Path(root)
    suffix = f".{extension}"

    sources: dict[str, str] = {}
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if entry.is_file() and entry.name.endswith(suffix):
            sources[entry.name] = entry.read_text(encoding="utf-8")
    return sources


class TemplateStore:
    """Immutable collection of parsed prompt units.

    All sources are parsed together at construction; if any of them is
    malformed the whole store fails with :class:`TemplateStoreError`. After
    that the store is read-only and can be shared freely between threads.
    """

    def __init__(
        self,
        sources: Mapping[str, str],
        *,
        extension: str = PROMPT_EXTENSION,
        engine: TemplateEngine | None = None,
    ) -> None:
        self.extension = extension
        self.engine = engine or JinjaTemplateEngine()

        suffix = f".{extension}"
        matching = {name: text for name, text in sources.items() if name.endswith(suffix)}
        try:
            parsed = self.engine.parse_all(matching)
        except self.engine.parse_errors as err:
            raise TemplateStoreError(f"unable to parse prompt templates: {err}") from err

        self._units: Mapping[str, PromptUnit] = MappingProxyType(
            {filename: self._build_unit(template) for filename, template in parsed.items()}
        )

    @classmethod
    def from_source(
        cls,
        root: Traversable | str,
        *,
        extension: str = PROMPT_EXTENSION,
        engine: TemplateEngine | None = None,
    ) -> TemplateStore:
        """Build a store from a directory or importlib resource tree."""
        try:
            sources = read_sources(root, extension)
        except (OSError, UnicodeDecodeError) as err:
            raise TemplateStoreError(f"unable to read prompt templates from {root}: {err}") from err

        store = cls(sources, extension=extension, engine=engine)
        logger.info("Loaded {} prompt templates | source={}", len(store), root)
        return store

    @staticmethod
    def _build_unit(template: ParsedTemplate) -> PromptUnit:
        return PromptUnit(
            name=template.name,
            filename=template.filename,
            template=template,
            system=template.nodes.get(template.name + SYSTEM_SUB_TEMPLATE_SUFFIX),
            user=template.nodes.get(template.name + USER_SUB_TEMPLATE_SUFFIX),
        )

    def filename_for(self, name: str) -> str:
        return f"{name}.{self.extension}"

    def lookup(self, name: str) -> PromptUnit | None:
        """Return the unit backed by ``<name>.<extension>``, or None."""
        return self._units.get(self.filename_for(name))

    def sub_lookup(self, unit: PromptUnit, sub_name: str) -> TemplateNode | None:
        """Return the template ``unit`` declares as ``sub_name``, or None."""
        return unit.template.nodes.get(sub_name)

    def names(self) -> list[str]:
        """Names of every loaded unit, sorted."""
        return sorted(unit.name for unit in self._units.values())

    def missing_prompts(self, registry: Iterable[PromptName] = PROMPTS) -> list[PromptName]:
        """Registered prompts with no backing template file."""
        return [name for name in registry if self.lookup(name) is None]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[PromptUnit]:
        return iter(self._units.values())

    def __len__(self) -> int:
        return len(self._units)


def new_template_store(source: Traversable | str, **kwargs) -> TemplateStore:
    """Parse every prompt template under ``source``."""
    return TemplateStore.from_source(source, **kwargs)
