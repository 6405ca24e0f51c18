#!/usr/bin/env python3
"""Idea Forge CLI - generate and enrich AI startup ideas.

Usage:
    # Targeted generation, verified and expanded in one run
    python main.py forge -e Solana -e Base -s DeFi -q 3 --degen 40 --verify --blueprint

    # Chaos mode, exported as Markdown
    python main.py forge --mode random -q 5 --export ./ideas.md

    # Work with stored batches
    python main.py batches
    python main.py show <batch-id>
    python main.py translate <batch-id> <idea-id> --lang ru
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import settings, PROMPT_LANG_MAP
from contracts import Ecosystem, ForgeConfig, ForgeMode, Idea, LogMessage, LogType, ProviderSettings, Sector
from contracts.adapters import batch_to_markdown, idea_to_markdown
from orchestrator import ForgeSession
from providers import describe_provider
from providers.errors import ForgeError, IdeaNotFound, BatchNotFound
from storage import JsonFileStore


console = Console()

LOG_STYLES = {
    LogType.INFO: "dim",
    LogType.SUCCESS: "green",
    LogType.WARNING: "yellow",
    LogType.ERROR: "red",
}


def render_log(message: LogMessage) -> None:
    style = LOG_STYLES.get(message.type, "dim")
    console.print(f"  [{style}]> {escape(message.text)}[/{style}]")


def open_session(
    storage_dir: Optional[str],
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    model: Optional[str] = None,
    best_effort_verification: bool = False,
) -> ForgeSession:
    """Session backed by the JSON store, with CLI flags as provider override."""
    override = None
    if api_key or base_url or model:
        override = ProviderSettings(api_key=api_key, base_url=base_url, model=model)
    store = JsonFileStore(Path(storage_dir) if storage_dir else settings.get_storage_path())
    return ForgeSession(
        store,
        provider_override=override,
        on_log=render_log,
        best_effort_verification=best_effort_verification,
    )


def fail(error: Exception) -> None:
    if isinstance(error, ForgeError):
        console.print(f"[red]Error [{error.code}]:[/red] {escape(error.message)}")
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


def find_by_prefix(items, item_id: str, not_found):
    matches = [item for item in items if item.id == item_id or item.id.startswith(item_id)]
    if len(matches) != 1:
        raise not_found(item_id)
    return matches[0]


def load_idea(session: ForgeSession, batch_id: str, idea_id: str) -> Idea:
    """Restore a stored batch and return one of its ideas from the working set."""
    batch = find_by_prefix(session.list_batches(), batch_id, BatchNotFound)
    session.restore_batch(batch.id)
    return find_by_prefix(session.ideas, idea_id, IdeaNotFound)


def print_idea(idea: Idea, output_path: Optional[str] = None) -> None:
    console.print(Markdown(idea_to_markdown(idea, heading_level=2)))
    console.print(f"[dim]id: {idea.id}[/dim]\n")
    if output_path:
        Path(output_path).write_text(idea_to_markdown(idea), encoding="utf-8")
        console.print(f"[bold]Output saved to:[/bold] {output_path}")


storage_option = click.option(
    "--storage-dir",
    default=None,
    help=f"Directory for persisted batches and settings (default: {settings.storage_dir})",
)


def provider_options(fn):
    fn = click.option("--model", default=None, help="Model override for this run")(fn)
    fn = click.option("--base-url", default=None, help="Base URL override for this run")(fn)
    fn = click.option("--api-key", default=None, help="API key override for this run")(fn)
    return fn


@click.group()
def main():
    """Idea Forge: AI-generated Web3 startup ideas.

    Generates idea batches from a few parameters, then verifies, expands,
    translates and drafts contracts for individual ideas.
    """


@main.command()
@click.option(
    "--mode", "-m",
    type=click.Choice(["targeted", "random"]),
    default="targeted",
    help="targeted = use ecosystems/sectors; random = chaos mode",
)
@click.option(
    "--ecosystem", "-e", "ecosystems",
    multiple=True,
    type=click.Choice([e.value for e in Ecosystem]),
    help="Target ecosystem (repeatable, default: Solana, Base)",
)
@click.option(
    "--sector", "-s", "sectors",
    multiple=True,
    type=click.Choice([s.value for s in Sector]),
    help="Target sector (repeatable, default: DeFi, Infra)",
)
@click.option("--quantity", "-q", type=int, default=3, help="Number of ideas (1-5)")
@click.option("--degen", type=int, default=20, help="Risk level 0-100")
@click.option("--context", "user_context", default=None, help="Additional free-text context")
@click.option("--lang", type=click.Choice(list(PROMPT_LANG_MAP)), default=None, help="Output language")
@click.option("--verify", "do_verify", is_flag=True, help="Verify every generated idea")
@click.option(
    "--best-effort-verify",
    is_flag=True,
    help="On verification failure record a fallback \"unique\" result instead of FAILED",
)
@click.option("--blueprint", "do_blueprint", is_flag=True, help="Build a blueprint for every idea")
@click.option("--export", "export_path", default=None, help="Write the ideas as Markdown to this path")
@storage_option
@provider_options
def forge(
    mode: str,
    ecosystems: Tuple[str, ...],
    sectors: Tuple[str, ...],
    quantity: int,
    degen: int,
    user_context: Optional[str],
    lang: Optional[str],
    do_verify: bool,
    best_effort_verify: bool,
    do_blueprint: bool,
    export_path: Optional[str],
    storage_dir: Optional[str],
    api_key: Optional[str],
    base_url: Optional[str],
    model: Optional[str],
):
    """Generate a batch of ideas."""
    session = open_session(storage_dir, api_key, base_url, model, best_effort_verification=best_effort_verify)
    if lang:
        session.set_language(lang)

    fields = {
        "mode": ForgeMode(mode.upper()),
        "quantity": quantity,
        "degen_level": degen,
        "user_context": user_context,
    }
    if ecosystems:
        fields["ecosystems"] = list(ecosystems)
    if sectors:
        fields["sectors"] = list(sectors)
    try:
        config = ForgeConfig(**fields)
    except ValidationError as e:
        fail(e)

    console.print(Panel.fit(
        "[bold green]Idea Forge[/bold green]\n"
        f"[dim]{config.mode.value} • {config.quantity} idea(s) • {session.language.value}[/dim]",
        border_style="green",
    ))

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Forging...", total=None)
            ideas = session.generate(config)
            progress.update(task, completed=True)

        for idea in ideas:
            if do_verify:
                # A failed verification marks the idea FAILED; keep going with the rest
                try:
                    session.verify(idea.id)
                except ForgeError as e:
                    console.print(f"  [red]{escape(str(e))}[/red]")
            if do_blueprint:
                session.view_blueprint(idea.id)
    except ForgeError as e:
        fail(e)

    console.print("\n" + "=" * 60)
    for idea in session.ideas:
        print_idea(idea)

    if export_path:
        document = "\n\n".join(idea_to_markdown(idea) for idea in session.ideas)
        Path(export_path).write_text(document, encoding="utf-8")
        console.print(f"[bold]Output saved to:[/bold] {export_path}")


@main.command()
@storage_option
def batches(storage_dir: Optional[str]):
    """List stored batches, newest first."""
    session = open_session(storage_dir)
    stored = session.list_batches()
    if not stored:
        console.print("[dim]No batches stored yet.[/dim]")
        return

    table = Table(title="Stored batches")
    table.add_column("ID")
    table.add_column("Label")
    table.add_column("Ideas", justify="right")
    for batch in stored:
        table.add_row(batch.id[:8], batch.label, str(len(batch.ideas)))
    console.print(table)


@main.command()
@click.argument("batch_id")
@click.option("--output", "-o", "output_path", default=None, help="Write the Markdown to this path")
@storage_option
def show(batch_id: str, output_path: Optional[str], storage_dir: Optional[str]):
    """Show a stored batch."""
    session = open_session(storage_dir)
    try:
        batch = find_by_prefix(session.list_batches(), batch_id, BatchNotFound)
    except ForgeError as e:
        fail(e)

    document = batch_to_markdown(batch)
    if output_path:
        Path(output_path).write_text(document, encoding="utf-8")
        console.print(f"[bold]Output saved to:[/bold] {output_path}")
        return
    console.print(Markdown(document))
    for idea in batch.ideas:
        console.print(f"[dim]{idea.title}: {idea.id}[/dim]")


output_option = click.option(
    "--output", "-o", "output_path",
    default=None,
    help="Write the enriched idea as Markdown to this path",
)


@main.command()
@click.argument("batch_id")
@click.argument("idea_id")
@output_option
@storage_option
@provider_options
def verify(batch_id, idea_id, output_path, storage_dir, api_key, base_url, model):
    """Verify the uniqueness of one idea.

    Stored batches are snapshots: the result is printed (and written with
    --output) but not saved back to the batch.
    """
    session = open_session(storage_dir, api_key, base_url, model)
    try:
        idea = load_idea(session, batch_id, idea_id)
        session.verify(idea.id)
    except ForgeError as e:
        fail(e)
    print_idea(session.get_idea(idea.id), output_path)


@main.command()
@click.argument("batch_id")
@click.argument("idea_id")
@output_option
@storage_option
@provider_options
def blueprint(batch_id, idea_id, output_path, storage_dir, api_key, base_url, model):
    """Build the blueprint of one idea.

    The blueprint is not saved back to the stored batch; use --output to keep it.
    Use `forge --blueprint` to build blueprints for a whole run.
    """
    session = open_session(storage_dir, api_key, base_url, model)
    try:
        idea = load_idea(session, batch_id, idea_id)
        session.view_blueprint(idea.id)
    except ForgeError as e:
        fail(e)
    print_idea(session.get_idea(idea.id), output_path)


@main.command()
@click.argument("batch_id")
@click.argument("idea_id")
@click.option("--lang", type=click.Choice(list(PROMPT_LANG_MAP)), default=None, help="Target language")
@output_option
@storage_option
@provider_options
def translate(batch_id, idea_id, lang, output_path, storage_dir, api_key, base_url, model):
    """Translate one idea (default: the stored language preference).

    The translation is not saved back to the stored batch; use --output to keep it.
    """
    session = open_session(storage_dir, api_key, base_url, model)
    try:
        idea = load_idea(session, batch_id, idea_id)
        translated = session.translate(idea.id, lang)
    except ForgeError as e:
        fail(e)
    print_idea(translated, output_path)


@main.command()
@click.argument("batch_id")
@click.argument("idea_id")
@storage_option
@provider_options
def contract(batch_id, idea_id, storage_dir, api_key, base_url, model):
    """Draft a Solidity contract skeleton for one idea."""
    session = open_session(storage_dir, api_key, base_url, model)
    try:
        idea = load_idea(session, batch_id, idea_id)
        code = session.generate_contract(idea.id)
    except ForgeError as e:
        fail(e)
    console.print(code, markup=False, highlight=False)


@main.command("settings")
@click.option("--api-key", default=None, help="Store an API key")
@click.option("--base-url", default=None, help="Store a base URL")
@click.option("--model", default=None, help="Store a model id")
@click.option("--clear", is_flag=True, help="Forget stored provider settings")
@storage_option
def settings_command(api_key, base_url, model, clear, storage_dir):
    """Store provider settings, or show the effective configuration."""
    session = open_session(storage_dir)
    if clear:
        session.save_provider_settings(ProviderSettings())
    elif api_key or base_url or model:
        current = session.provider_settings
        session.save_provider_settings(ProviderSettings(
            api_key=api_key or current.api_key,
            base_url=base_url or current.base_url,
            model=model or current.model,
        ))

    try:
        effective = describe_provider(stored=session.provider_settings)
    except ForgeError as e:
        fail(e)
    console.print("[bold]Effective provider configuration:[/bold]\n")
    for name, value in effective.items():
        console.print(f"  {name:10} {value}")
    console.print(f"  {'language':10} {session.language.value}")


@main.command()
@click.argument("language", type=click.Choice(list(PROMPT_LANG_MAP)))
@storage_option
def lang(language: str, storage_dir: Optional[str]):
    """Store the output language preference."""
    session = open_session(storage_dir)
    session.set_language(language)
    console.print(f"[green]Language set to[/green] {PROMPT_LANG_MAP[language]}")


if __name__ == "__main__":
    main()
