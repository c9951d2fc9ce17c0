"""chatprompts CLI — inspect, validate and render prompt templates."""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from chatprompts.composer import ConversationComposer, load_prompts
from chatprompts.config import Settings, settings
from chatprompts.errors import ConversationError, PromptError
from chatprompts.log import logger, setup_logging
from chatprompts.models import ConversationContext
from chatprompts.registry import PROMPTS, get_prompt_info

app = typer.Typer(
    help="chatprompts - compose AI conversations from prompt templates",
    no_args_is_help=True,
)

console = Console()

PromptsDirOption = typer.Option(
    None,
    "--prompts-dir",
    "-d",
    help="Directory of *.tmpl prompt templates (default: bundled templates)",
)


def _settings(prompts_dir: Optional[Path], *, strict: bool = True) -> Settings:
    update: dict = {}
    if prompts_dir is not None:
        update["prompts_dir"] = prompts_dir
    if not strict:
        update["require_all_prompts"] = False
    return settings.model_copy(update=update)


def _load(config: Settings) -> ConversationComposer:
    setup_logging()
    try:
        return load_prompts(config)
    except PromptError as err:
        console.print(f"  [red]✗[/red] {escape(str(err))}")
        raise typer.Exit(1) from err


@app.command("list")
def list_prompts(prompts_dir: Optional[Path] = PromptsDirOption) -> None:
    """List registered prompts and whether a template backs each one."""
    composer = _load(_settings(prompts_dir, strict=False))
    store = composer.store

    for name, info in PROMPTS.items():
        unit = store.lookup(name)
        if unit is None:
            console.print(f"    [red]✗[/red] {name:<24} [dim]{info.description} (no template)[/dim]")
            continue
        roles = [role for role, node in (("system", unit.system), ("user", unit.user)) if node]
        console.print(f"    [green]✓[/green] {name:<24} {info.description} [dim]({', '.join(roles) or 'empty'})[/dim]")
        if info.parameters:
            console.print(f"      [dim]parameters: {', '.join(info.parameters)}[/dim]")

    extra = [name for name in store.names() if name not in PROMPTS]
    if extra:
        console.print(f"\n  [dim]Unregistered templates: {', '.join(extra)}[/dim]")


@app.command()
def check(prompts_dir: Optional[Path] = PromptsDirOption) -> None:
    """Parse every template and verify each registered prompt has one."""
    composer = _load(_settings(prompts_dir))
    console.print(f"  [bold green]✓[/bold green] {len(composer.store)} templates OK")


def _parse_params(params: list[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for param in params:
        key, sep, value = param.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {param!r}", param_hint="--param")
        parsed[key] = value
    return parsed


@app.command()
def render(
    name: str = typer.Argument(..., help="Prompt name, e.g. summarize_thread"),
    context_file: Optional[Path] = typer.Option(
        None,
        "--context",
        "-c",
        exists=True,
        dir_okay=False,
        help="JSON file with a ConversationContext",
    ),
    params: list[str] = typer.Option(
        [], "--param", "-p", help="Prompt parameter as KEY=VALUE (repeatable)"
    ),
    prompts_dir: Optional[Path] = PromptsDirOption,
) -> None:
    """Compose a prompt and print its messages as JSON."""
    extra_params = _parse_params(params)
    composer = _load(_settings(prompts_dir, strict=False))

    if context_file is not None:
        try:
            context = ConversationContext.model_validate_json(context_file.read_text())
        except ValidationError as err:
            console.print(f"  [red]✗[/red] invalid context file {escape(str(context_file))}: {escape(str(err))}")
            raise typer.Exit(1) from err
    else:
        context = ConversationContext()
    context.prompt_parameters.update(extra_params)

    info = get_prompt_info(name)
    missing = [key for key in info.parameters if key not in context.prompt_parameters] if info else []
    if missing:
        logger.warning("Prompt parameters not set | prompt={} | missing={}", name, ", ".join(missing))

    try:
        conversation = composer.chat_completion(name, context)
    except ConversationError as err:
        console.print(f"  [red]✗[/red] {escape(str(err))}")
        raise typer.Exit(1) from err

    typer.echo(json.dumps(conversation.to_messages(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
