"""
CLI for tern2dts.

Generates TypeScript declarations from a Tern definition document, translates
single type expressions and checks documentation links.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from tern2dts.config import load_config
from tern2dts.errors import Tern2DtsError
from tern2dts.links import LinkChecker
from tern2dts.pipeline import DeclarationPipeline
from tern2dts.signature import SignatureTranslator
from tern2dts.utils.file_handlers import save_json, save_text
from tern2dts.utils.logging import configure_logging

console = Console()


@click.group()
def main() -> None:
    """tern2dts - Generate TypeScript declarations from Tern definitions."""


@main.command()
@click.argument("source", required=False)
@click.option(
    "-o", "--output",
    type=click.Path(),
    help="Output file path (stdout if not specified)"
)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True),
    help="JSON file overriding generator settings"
)
@click.option(
    "--lint-config",
    type=click.Path(),
    help="Also write an ESLint configuration listing the declared globals"
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def build(
    source: Optional[str],
    output: Optional[str],
    config_file: Optional[str],
    lint_config: Optional[str],
    verbose: bool,
) -> None:
    """
    Build the declaration file from SOURCE (URL or local JSON file).

    Without SOURCE the configured document is fetched from the base URL.
    """
    configure_logging(verbose)
    try:
        config = load_config(config_file)
        pipeline = DeclarationPipeline(config)
        result = pipeline.run(pipeline.load(source))
    except Tern2DtsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    if output:
        save_text(result.document, output)
        console.print(
            f"[green]Wrote {len(result.declared_names)} declarations to:[/green] {output}"
        )
    else:
        click.echo(result.document, nl=False)

    if lint_config:
        save_json(result.lint_config, lint_config)
        console.print(f"[green]Wrote lint configuration to:[/green] {lint_config}")


@main.command()
@click.argument("type_expression")
@click.option("-n", "--name", required=True, help="Member name")
@click.option("--static", "is_static", is_flag=True, help="Member is static")
@click.option(
    "--constructor", "may_be_constructor",
    is_flag=True,
    help="A function returning OWNER is a constructor"
)
@click.option("--owner", help="Name of the owning symbol")
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True),
    help="JSON file overriding generator settings"
)
def translate(
    type_expression: str,
    name: str,
    is_static: bool,
    may_be_constructor: bool,
    owner: Optional[str],
    config_file: Optional[str],
) -> None:
    """Translate a single Tern TYPE_EXPRESSION into a declaration signature."""
    try:
        config = load_config(config_file)
    except Tern2DtsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()
    translator = SignatureTranslator(
        ignore_void_return=config.ignore_void_return,
        string_return_overrides=config.string_return_overrides,
    )
    click.echo(translator.translate(
        type_expression,
        name,
        is_static=is_static,
        may_be_constructor=may_be_constructor,
        owner=owner or name,
    ))


@main.command("check-urls")
@click.argument("source", required=False)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True),
    help="JSON file overriding generator settings"
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def check_urls(source: Optional[str], config_file: Optional[str], verbose: bool) -> None:
    """Report documentation links in SOURCE whose anchor does not exist."""
    configure_logging(verbose)
    try:
        config = load_config(config_file)
        document = DeclarationPipeline(config).load(source)
        reports = LinkChecker(config.timeout).check(document)
    except Tern2DtsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    invalid = [r for r in reports if not r.is_valid]
    if not invalid:
        console.print(f"[green]All links on {len(reports)} pages resolve.[/green]")
        return

    table = Table(title="Invalid Links")
    table.add_column("Page", style="cyan")
    table.add_column("Problem")
    for report in invalid:
        if report.unreachable:
            table.add_row(report.page, "not an http(s) link")
        for anchor in report.missing_anchors:
            table.add_row(report.page, f"#{anchor} not found")
    console.print(table)
    sys.exit(1)


if __name__ == "__main__":
    main()
