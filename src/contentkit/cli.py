"""CLI interface for contentkit."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from contentkit.config import StoreBackend, load_config, merge_cli_overrides
from contentkit.content import CallerIdentity, Capability, ContentRecord
from contentkit.errors import (
    CategoryNotFoundError,
    ConflictError,
    ContentKitError,
    SchemaValidationError,
)
from contentkit.service import ContentService, create_service
from contentkit.validation import split_canonical_name

app = typer.Typer(
    name="contentkit",
    help="Manage categorized content records from the command line.",
    no_args_is_help=True,
)

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from contentkit import __version__

        console.print(f"contentkit {__version__}")
        raise typer.Exit()


def _operator() -> CallerIdentity:
    """The local operator; the shell session is the authorization boundary."""
    user_id = os.environ.get("CONTENTKIT_USER") or os.environ.get("USER") or "operator"
    return CallerIdentity(
        user_id=user_id,
        capabilities=frozenset({Capability.READ, Capability.WRITE}),
    )


def _service(ctx: typer.Context) -> ContentService:
    return ctx.obj["service"]


def _fail(exc: ContentKitError) -> typer.Exit:
    if isinstance(exc, SchemaValidationError):
        console.print(f"[red]Invalid {escape(exc.category_id)} content:[/red]")
        for violation in exc.violations:
            console.print(f"  - {escape(str(violation))}")
    elif isinstance(exc, (CategoryNotFoundError, ConflictError)):
        console.print(f"[red]{escape(str(exc))}[/red]")
    else:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _dump(records: list[ContentRecord]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in records], indent=2)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .contentkit.toml file."),
    ] = None,
    store_directory: Annotated[
        Optional[Path],
        typer.Option("--store", "-s", help="Directory holding the content store file."),
    ] = None,
    store_backend: Annotated[
        Optional[StoreBackend],
        typer.Option("--backend", help="Store backend."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log at DEBUG level."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """contentkit - store text, URLs and other categorized content."""
    config = merge_cli_overrides(
        load_config(config_path),
        store_directory=store_directory,
        store_backend=store_backend,
        log_level="DEBUG" if verbose else None,
    )
    logging.basicConfig(level=config.logging.level, format=LOG_FORMAT, stream=sys.stderr)
    ctx.obj = {"service": create_service(config), "caller": _operator()}


@app.command()
def types(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
) -> None:
    """List the registered content categories."""
    infos = _service(ctx).get_types()
    if as_json:
        typer.echo(json.dumps([i.model_dump() for i in infos], indent=2))
        return
    table = Table("ID", "Name")
    for info in infos:
        table.add_row(escape(info.id), escape(info.display_name))
    console.print(table)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    category: Annotated[
        Optional[str],
        typer.Argument(help="Category id; defaults to the first registered category."),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
) -> None:
    """List the content records of a category."""
    service = _service(ctx)
    if category is None:
        default = service.catalog.default()
        category = default.id if default is not None else ""
    records = service.get_by_category(category)
    if as_json:
        typer.echo(_dump(records))
        return
    if not records:
        console.print(f"No content in category {escape(category)!r}.")
        return
    table = Table("ID", "Name", "Content", "Created", title=f"{category} content")
    for record in records:
        _, label = split_canonical_name(record.name)
        table.add_row(
            record.id,
            escape(label),
            escape(str(record.content)),
            record.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
) -> None:
    """Show a single content record as JSON."""
    record = _service(ctx).get(record_id)
    if record is None:
        console.print(f"[red]No content with id {escape(record_id)!r}[/red]")
        raise typer.Exit(code=1)
    typer.echo(record.model_dump_json(indent=2))


@app.command()
def add(
    ctx: typer.Context,
    category: Annotated[str, typer.Argument(help="Category id, e.g. text or url.")],
    name: Annotated[str, typer.Argument(help="Short unique name, kebab-case recommended.")],
    content: Annotated[str, typer.Argument(help="The data for the content.")],
) -> None:
    """Add a content record."""
    try:
        record = _service(ctx).add(category, name, content, ctx.obj["caller"])
    except ContentKitError as exc:
        raise _fail(exc) from exc
    console.print(f"Added [bold]{escape(record.name)}[/bold] ({record.id})")


@app.command()
def delete(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
) -> None:
    """Delete a content record by id.  Unknown ids are ignored."""
    _service(ctx).delete(record_id, ctx.obj["caller"])
    console.print(f"Deleted {escape(record_id)}")


if __name__ == "__main__":
    app()
