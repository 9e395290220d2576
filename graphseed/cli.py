# -*- coding: utf-8 -*-
"""Location: ./graphseed/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

graphseed command line.

Usage:
    graphseed load fixtures/shop.yaml --root ./seeds --namespace app.models
    graphseed load shop.yaml --database-url sqlite:///shop.db --model app.db:Base --create-tables
    graphseed resolve Widget --namespace app.models
"""

# Standard
import logging
from pathlib import Path
import sys
import time
from typing import Any, List, Optional

# Third-Party
import orjson
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import typer

# First-Party
from graphseed.engine import SeedEngine
from graphseed.errors import SeedError, TypeNotFoundError
from graphseed.models import EngineConfig, KeyMode, LoadReport, MatchMode
from graphseed.persisters import CollectingPersister, SQLAlchemyPersister
from graphseed.resolver import ScopeResolver
from graphseed.settings import get_settings
from graphseed.utils import import_module, qualified_name

logger = logging.getLogger(__name__)

app = typer.Typer(help="Load declarative YAML seed documents into a data store.", no_args_is_help=True)
console = Console()


def import_object(path: str) -> Any:
    """Import an object given as ``module:attribute``.

    Args:
        path: the module path and attribute name separated by a colon.

    Returns:
        The object.

    Raises:
        typer.BadParameter: If the path is malformed or cannot be imported.

    Examples:
        >>> import_object("collections:OrderedDict").__name__
        'OrderedDict'
    """
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise typer.BadParameter(f"Expected 'module:attribute', got '{path}'")
    try:
        return getattr(import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise typer.BadParameter(f"Cannot import '{path}': {e}") from e


def entity_table(engine: SeedEngine, persisted: List[Any]) -> Table:
    """Render persisted entities as a table.

    Args:
        engine: the engine that loaded the entities.
        persisted: the entities, in persist order.

    Returns:
        The table.
    """
    keys = {id(entity): key[1] if isinstance(key, tuple) else key for key, entity in engine.cache.items()}
    table = Table(title="Persisted entities")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Value", overflow="fold")
    for index, entity in enumerate(persisted, start=1):
        table.add_row(str(index), escape(str(keys.get(id(entity), "-"))), type(entity).__name__, escape(repr(entity)))
    return table


def write_report(path: Path, report: LoadReport) -> None:
    """Write a load report as JSON.

    Args:
        path: the output file.
        report: the report.
    """
    path.write_bytes(orjson.dumps(report.model_dump(mode="json"), option=orjson.OPT_INDENT_2))


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (defaults to GRAPHSEED_LOG_LEVEL)"),
    app_dir: str = typer.Option(".", "--app-dir", help="Directory prepended to the import path so model modules resolve"),
) -> None:
    """Configure logging and the import path."""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    resolved = str(Path(app_dir).resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)


@app.command()
def load(
    locations: List[str] = typer.Argument(..., help="Document locations, loaded in order"),
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Directory document locations are resolved against"),
    package: Optional[str] = typer.Option(None, "--package", help="Python package to load documents from"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Default namespace for unqualified type names"),
    key_mode: Optional[KeyMode] = typer.Option(None, "--key-mode", help="Entity cache key mode"),
    match_mode: Optional[MatchMode] = typer.Option(None, "--match-mode", help="Processor match policy"),
    strict: bool = typer.Option(False, "--strict", help="Reject fields entities do not declare"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Persist into this database; dry run when omitted"),
    model: Optional[str] = typer.Option(None, "--model", help="Declarative base as 'module:Base', imported before loading"),
    create_tables: bool = typer.Option(False, "--create-tables", help="Create the tables of --model before persisting"),
    flush: bool = typer.Option(False, "--flush", help="Flush the session after each entity"),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON load report to this file"),
) -> None:
    """Load seed documents and persist their entities."""
    settings = get_settings()
    config = EngineConfig.from_settings(
        settings,
        resource_root=root,
        resource_package=package,
        default_namespace=namespace,
        key_mode=key_mode,
        match_mode=match_mode,
        strict_fields=strict or None,
    )
    base = import_object(model) if model else None
    if create_tables and base is None:
        raise typer.BadParameter("--create-tables requires --model")

    start = time.time()
    try:
        if database_url:
            db_engine = create_engine(database_url)
            try:
                if create_tables:
                    base.metadata.create_all(db_engine)
                with Session(db_engine) as session, session.begin():
                    seed = SeedEngine(SQLAlchemyPersister(session, flush=flush), config=config)
                    persisted = seed.load(*locations)
            finally:
                db_engine.dispose()
            console.print(f"[green]Persisted {persisted} entities to {db_engine.url.render_as_string(hide_password=True)}[/green]")
        else:
            collector = CollectingPersister()
            seed = SeedEngine(collector, config=config)
            persisted = seed.load(*locations)
            console.print(entity_table(seed, collector.persisted))
            console.print("[yellow]Dry run: nothing was written[/yellow]")
    except (SeedError, SQLAlchemyError) as e:
        logger.debug("Load failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if report is not None:
        write_report(
            report,
            LoadReport(
                locations=list(locations),
                imported=seed.imported,
                entities=len(seed.cache),
                persisted=persisted,
                dry_run=database_url is None,
                duration_seconds=round(time.time() - start, 3),
            ),
        )


@app.command()
def resolve(
    name: str = typer.Argument(..., help="Type name as written in a document"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace in effect (defaults to GRAPHSEED_DEFAULT_NAMESPACE)"),
) -> None:
    """Show which class a type name resolves to."""
    settings = get_settings()
    resolver = ScopeResolver(fallback_namespace=settings.fallback_namespace)
    scope = namespace if namespace is not None else settings.default_namespace
    try:
        cls = resolver.resolve(name, scope)
    except TypeNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print(f"Tried: {', '.join(e.attempted)}")
        raise typer.Exit(code=1)
    console.print(qualified_name(cls))


def main() -> None:
    """Run the command line."""
    app(obj={})


if __name__ == "__main__":
    main()
