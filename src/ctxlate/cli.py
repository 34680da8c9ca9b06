"""Command-line interface for ctxlate."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ctxlate.context import resolve_context
from ctxlate.exceptions import CatalogLoadError, CatalogValidationError
from ctxlate.loader import load_catalog
from ctxlate.translator import create_translator

app = typer.Typer(
    name="ctxlate",
    help="Inspect and exercise translation catalogs",
    add_completion=False,
)


def _parse_assignments(items: Optional[list[str]], option: str) -> dict[str, str]:
    """Parse repeated ``name=value`` options."""
    result: dict[str, str] = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            typer.echo(f"Error: {option} expects name=value, got {item!r}", err=True)
            raise typer.Exit(1)
        result[name] = value
    return result


@app.command(name="resolve")
def resolve_cmd(
    catalog_file: Annotated[Path, typer.Argument(help="Catalog file (JSON or YAML)")],
    key: Annotated[str, typer.Argument(help="Source text key to resolve")],
    count: Annotated[
        Optional[float],
        typer.Option("--count", "-n", help="Count for plural ranges and %n"),
    ] = None,
    params: Annotated[
        Optional[list[str]],
        typer.Option("--param", "-p", help="Placeholder value as name=value (repeatable)"),
    ] = None,
    context: Annotated[
        Optional[list[str]],
        typer.Option("--context", "-c", help="Context attribute as attr=value (repeatable)"),
    ] = None,
    default: Annotated[
        Optional[str],
        typer.Option("--default", "-d", help="Fallback text when the key is unresolved"),
    ] = None,
) -> None:
    """Resolve a key against a catalog file."""
    placeholders = _parse_assignments(params, "--param")
    attrs = _parse_assignments(context, "--context")

    try:
        translator = create_translator(load_catalog(catalog_file))
    except (FileNotFoundError, ValueError, CatalogLoadError, CatalogValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        translator.translate(
            key,
            count=count,
            placeholders=placeholders,
            default=default,
            context=attrs or None,
        )
    )


@app.command(name="validate")
def validate_cmd(
    catalog_files: Annotated[
        list[Path],
        typer.Argument(help="Catalog files to validate"),
    ],
) -> None:
    """Validate catalog files."""
    failed = 0
    for path in catalog_files:
        try:
            catalog = load_catalog(path)
        except CatalogValidationError as e:
            failed += 1
            typer.echo(f"INVALID: {path}")
            for error in e.errors:
                typer.echo(f"  - {error}")
            continue
        except (FileNotFoundError, ValueError, CatalogLoadError) as e:
            failed += 1
            typer.echo(f"INVALID: {path}")
            typer.echo(f"  - {e}")
            continue

        typer.echo(f"OK: {path} ({len(catalog)} keys, {len(catalog.contexts)} contexts)")

    if failed:
        typer.echo(f"{failed} of {len(catalog_files)} catalog(s) invalid", err=True)
        raise typer.Exit(1)


@app.command(name="keys")
def keys_cmd(
    catalog_file: Annotated[Path, typer.Argument(help="Catalog file (JSON or YAML)")],
    context: Annotated[
        Optional[list[str]],
        typer.Option("--context", "-c", help="List keys of the override matching attr=value"),
    ] = None,
) -> None:
    """List the keys of a catalog or of a matching context override."""
    attrs = _parse_assignments(context, "--context")

    try:
        catalog = load_catalog(catalog_file)
    except (FileNotFoundError, ValueError, CatalogLoadError, CatalogValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if context:
        values = resolve_context(catalog, attrs)
        if values is None:
            typer.echo("Error: No context override matches", err=True)
            raise typer.Exit(1)
        keys = list(values)
    else:
        keys = catalog.keys()

    for key in sorted(keys):
        typer.echo(key)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
