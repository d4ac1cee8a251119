"""CLI entry point for endpoint-docs."""

import json
from pathlib import Path

import click
import yaml

from endpoint_docs.config import load_settings
from endpoint_docs.errors import DocsError
from endpoint_docs.handler import DocumentationHandler
from endpoint_docs.logging_utils import setup_logging
from endpoint_docs.render.markdown import MarkdownRenderer
from endpoint_docs.routes.loader import load_routing_table
from endpoint_docs.schema.normalizer import describe


def _write_output(content: str, output: Path | None) -> None:
    if output is None:
        click.echo(content, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Documentation saved to {output}")


@click.group()
@click.option("--log-level", default="WARNING", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), help="Log level.")
def main(log_level: str):
    """endpoint-docs: render API documentation from a service's routing table."""
    setup_logging(log_level)


@main.command()
@click.argument("table_path", type=click.Path(exists=True, path_type=Path))
@click.option("--path", "route_path", default=None, help="Only document routes with this exact path.")
@click.option("--server", default=None, help="Only document routes of this server URI.")
@click.option("--format", "fmt", default="markdown", type=click.Choice(["markdown", "json"]), help="Output format.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout).")
def render(table_path: Path, route_path: str | None, server: str | None, fmt: str, config_path: Path | None, output: Path | None):
    """Render documentation for the routes in a routing table file."""
    try:
        settings = load_settings(config_path)
        groups = load_routing_table(table_path)
        view = DocumentationHandler(lambda: groups, settings).handle(path=route_path, server=server)
    except DocsError as e:
        raise click.ClickException(str(e)) from e

    if view is None:
        raise click.ClickException("Not Found: no documented routes match the given filters.")

    if fmt == "json":
        content = view.model_dump_json(by_alias=True, indent=2) + "\n"
    else:
        content = MarkdownRenderer().render(view)
    _write_output(content, output)


@main.command(name="describe")
@click.argument("schema_path", type=click.Path(exists=True, path_type=Path))
def describe_schema(schema_path: Path):
    """Print the normalized documentation tree of one schema descriptor."""
    try:
        descriptor = yaml.safe_load(schema_path.read_text(encoding="utf-8"))
        node = describe(descriptor)
    except (yaml.YAMLError, DocsError) as e:
        raise click.ClickException(str(e)) from e

    if node is None:
        raise click.ClickException(f"{schema_path} does not contain a schema descriptor.")
    click.echo(json.dumps(node.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
