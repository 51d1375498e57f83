"""Command-line interface for unitmath."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Tuple

import click

from ..errors import UnitMathError
from ..observability import configure_logging
from ..registry import UnitRegistry
from ..units.equivalence import get_common
from ..units.render import UnitDisplayFormat, render, render_all


_FORMAT_CHOICES = [fmt.value for fmt in UnitDisplayFormat]


def _build_registry(definitions: Tuple[Path, ...]) -> UnitRegistry:
    registry = UnitRegistry.default()
    for path in definitions:
        registry.load_file(path)
    return registry


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level.")
@click.option(
    "--definitions",
    "definitions",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Extra unit definition file loaded after the defaults. Repeatable.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, definitions: Tuple[Path, ...]) -> None:
    """Unit tree algebra command suite."""

    configure_logging("DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["definitions"] = definitions


def _registry(ctx: click.Context) -> UnitRegistry:
    try:
        return _build_registry(ctx.obj["definitions"])
    except UnitMathError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("render")
@click.argument("expression")
@click.option(
    "-f",
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(_FORMAT_CHOICES),
    help="Display form to print. Defaults to all of them.",
)
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text.")
@click.pass_context
def render_command(
    ctx: click.Context, expression: str, formats: Tuple[str, ...], as_json: bool
) -> None:
    """Evaluate EXPRESSION (for example ``Pa/N``) and print its display forms."""

    registry = _registry(ctx)
    try:
        unit = registry.evaluate(expression)
    except UnitMathError as exc:
        raise click.ClickException(str(exc)) from exc

    rendered = render_all(unit)
    if formats:
        rendered = {name: rendered[name] for name in formats}

    if as_json:
        click.echo(json.dumps(rendered, indent=2, ensure_ascii=False))
        return
    for name, text in rendered.items():
        click.echo(f"{name}: {text}")


@cli.command("common")
@click.argument("lhs")
@click.argument("rhs")
@click.pass_context
def common_command(ctx: click.Context, lhs: str, rhs: str) -> None:
    """Print the common unit of LHS and RHS, failing when they differ in dimension."""

    registry = _registry(ctx)
    try:
        left = registry.evaluate(lhs)
        right = registry.evaluate(rhs)
    except UnitMathError as exc:
        raise click.ClickException(str(exc)) from exc

    common = get_common(left, right)
    if common is None:
        raise click.ClickException(f"No common unit for '{lhs}' and '{rhs}'")
    click.echo(render(common, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED))


@cli.command("units")
@click.pass_context
def units_command(ctx: click.Context) -> None:
    """List the registered units with their flattened form."""

    registry = _registry(ctx)
    for symbol in sorted(registry):
        if not symbol:
            continue
        flattened = render(registry[symbol], UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED)
        click.echo(f"{symbol} = {flattened}")


@cli.command("check")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check_command(path: Path) -> None:
    """Load the definition file PATH on top of the defaults and report errors."""

    registry = UnitRegistry.default()
    try:
        count = registry.load_file(path)
    except UnitMathError as exc:
        raise click.ClickException(f"{path}: {exc}") from exc
    click.echo(f"{path}: {count} definitions OK")


if __name__ == "__main__":
    cli()
