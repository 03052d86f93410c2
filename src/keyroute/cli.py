"""Typer CLI entrypoint for keyroute."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from keyroute.catalog import Catalog, CatalogError
from keyroute.config import KeyrouteSettings, SettingsError, load_settings
from keyroute.explain import ExplanationFormatter, Locale
from keyroute.keys import KeyValidator, configured_keys, has_provider_key
from keyroute.resolution import FallbackResolver, ModelStrategyResolver

app = typer.Typer(help="Resolve which provider, model, or free tool serves a request.")
_CONSOLE = Console()
_LOGGING_CONFIGURED = False

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        dir_okay=False,
        resolve_path=True,
        help="Settings file (YAML or JSON). Defaults to .keyroute/config.yaml.",
    ),
]
LocaleOption = Annotated[
    Locale | None,
    typer.Option("--locale", help="Explanation language."),
]


def _configure_logging(verbose: bool = False) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def _default_config_file() -> Path:
    """Return default settings path for the current directory.

    Returns:
        YAML path if present, else JSON path if present, else the YAML path.
    """
    root = Path.cwd() / ".keyroute"
    yaml_path = root / "config.yaml"
    json_path = root / "config.json"
    if not yaml_path.exists() and json_path.exists():
        return json_path
    return yaml_path


def _load(config_file: Path | None) -> tuple[KeyrouteSettings, Catalog]:
    """Load settings and the catalog they point at.

    Args:
        config_file: Explicit settings path, if any.

    Returns:
        Settings and catalog.

    Raises:
        typer.Exit: If settings or catalog are invalid.
    """
    try:
        settings = load_settings(config_file or _default_config_file())
        catalog = settings.engine.build_catalog()
    except (SettingsError, CatalogError) as exc:
        _CONSOLE.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    return settings, catalog


def _formatter(
    settings: KeyrouteSettings, catalog: Catalog, locale: Locale | None
) -> ExplanationFormatter:
    return ExplanationFormatter(catalog, locale=locale or settings.engine.locale)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
) -> None:
    """Keyroute resolution engine CLI."""
    _configure_logging(verbose)


@app.command("fallback")
def fallback_command(
    skill_id: Annotated[str, typer.Argument(help="Skill identifier.")],
    config_file: ConfigOption = None,
    locale: LocaleOption = None,
) -> None:
    """Resolve a skill through its key, paid-LLM and free tiers."""
    settings, catalog = _load(config_file)
    resolver = FallbackResolver(catalog, KeyValidator())
    resolution = resolver.resolve(skill_id)
    text = _formatter(settings, catalog, locale).explain_fallback(
        resolution, resolver.chain(skill_id)
    )
    _CONSOLE.print(Panel(text, title=f"[bold]{skill_id}[/bold]", border_style="cyan"))


@app.command("model")
def model_command(
    strategy: Annotated[
        str | None, typer.Option("--strategy", help="Override stored strategy.")
    ] = None,
    override: Annotated[
        str | None,
        typer.Option("--override", help="Pin a model as provider/model."),
    ] = None,
    config_file: ConfigOption = None,
    locale: LocaleOption = None,
) -> None:
    """Resolve the chat model for the current user settings and keys."""
    settings, catalog = _load(config_file)
    user = settings.user.model_copy(
        update={
            key: value
            for key, value in (("strategy", strategy), ("primary_override", override))
            if value is not None
        }
    )
    config = user.to_strategy_config(KeyValidator(), catalog)
    resolved = ModelStrategyResolver(catalog).resolve(config)

    table = Table(header_style="bold")
    table.add_column("Provider", style="cyan")
    table.add_column("Model")
    table.add_column("Tier")
    for selection in resolved.selected_models:
        table.add_row(selection.provider, selection.model, resolved.tier_label)
    _CONSOLE.print(table)
    _CONSOLE.print(
        _formatter(settings, catalog, locale).explain_resolved_model(resolved)
    )


@app.command("strategy")
def strategy_command(
    config_file: ConfigOption = None,
    locale: LocaleOption = None,
) -> None:
    """Summarize the stored strategy against the keys currently set."""
    settings, catalog = _load(config_file)
    config = settings.user.to_strategy_config(KeyValidator(), catalog)
    _CONSOLE.print(_formatter(settings, catalog, locale).explain_strategy(config))


@app.command("keys")
def keys_command(config_file: ConfigOption = None) -> None:
    """List every declared skill and provider key with its status."""
    _settings, catalog = _load(config_file)
    keys = KeyValidator().snapshot(catalog)

    table = Table(title="Skill keys", header_style="bold")
    table.add_column("Skill", style="cyan")
    table.add_column("Key")
    table.add_column("Status")
    for row in configured_keys(keys, catalog):
        table.add_row(row.skill, row.env_var, _status(row.configured))
    _CONSOLE.print(table)

    providers = Table(title="LLM providers", header_style="bold")
    providers.add_column("Provider", style="cyan")
    providers.add_column("Key")
    providers.add_column("Status")
    for provider in catalog.providers:
        providers.add_row(
            provider.name, provider.env_var, _status(has_provider_key(keys, provider))
        )
    _CONSOLE.print(providers)


def _status(configured: bool) -> str:
    return "[green]set[/green]" if configured else "[dim]not set[/dim]"


@app.command("setup")
def setup_command(
    skill_id: Annotated[str, typer.Argument(help="Skill identifier.")],
    config_file: ConfigOption = None,
    locale: LocaleOption = None,
) -> None:
    """Show how to register the keys a skill can use."""
    settings, catalog = _load(config_file)
    _CONSOLE.print(
        _formatter(settings, catalog, locale).key_setup_instructions(skill_id),
        markup=False,
    )


if __name__ == "__main__":
    app()
