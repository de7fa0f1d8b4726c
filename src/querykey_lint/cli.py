"""CLI entry point for querykey-lint."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from querykey_lint import __version__
from querykey_lint.config import ConfigError, resolve_config
from querykey_lint.rules import RULES
from querykey_lint.scanner import ScanResult, scan


def _list_rules(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for meta in RULES.values():
        click.echo(f"{meta.name} ({meta.type}): {meta.description} [{meta.message_id}]")
    ctx.exit()


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["md", "json"], case_sensitive=False),
    default="md",
    help="Output format (default: md).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "-c", "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Config file. Defaults to <path>/.querykeylint.yaml when present.",
)
@click.option("--client-name", default=None, help="Identifier of the QueryClient instance (default: queryClient).")
@click.option("--wrapper-name", default=None, help="Options-builder function exempt from reports (default: queryOptions).")
@click.option(
    "--list-rules", is_flag=True, expose_value=False, is_eager=True,
    callback=_list_rules, help="List available rules and exit.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    path: str,
    fmt: str,
    output: str | None,
    config_file: str | None,
    client_name: str | None,
    wrapper_name: str | None,
    verbose: bool,
) -> None:
    """Flag raw arrays and strings used as query keys in a JS/TS project.

    Exits with status 1 when any raw query key is found.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    project_path = Path(path)
    try:
        config = resolve_config(
            project_path,
            Path(config_file) if config_file else None,
            client_identifier_name=client_name,
            wrapper_function_name=wrapper_name,
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    result = scan(project_path, config=config)

    if fmt == "json":
        _output_json(result, output)
    else:
        _output_md(result, output)

    sys.exit(1 if result.report.finding_count else 0)


def _output_md(result: ScanResult, output: str | None) -> None:
    from querykey_lint.render.markdown import render_markdown
    md = render_markdown(result)
    if output:
        Path(output).write_text(md)
        click.echo(f"Report written to {output}")
    else:
        click.echo(md)


def _output_json(result: ScanResult, output: str | None) -> None:
    text = json.dumps(result.report.model_dump(), indent=2)
    if output:
        Path(output).write_text(text)
        click.echo(f"JSON report written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
