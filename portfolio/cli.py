"""Command-line interface for the portfolio configuration.

This module defines the CLI commands using the Click framework.

Commands:
- config: Show the resolved site configuration.
- extensions: List the activated extensions.
- title: Print the <title> text for a page.
- render: Render a template from the site directory.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from . import __version__
from .environments import ALIASES, BuildEnvironment

_ENV_CHOICES = [env.value for env in BuildEnvironment] + sorted(ALIASES)


@click.group()
@click.version_option(version=__version__, prog_name="portfolio")
def cli():
    """Tosainu's portfolio site configuration."""


def _env_option(func):
    return click.option(
        "--env",
        "environment",
        type=click.Choice(_ENV_CHOICES, case_sensitive=False),
        default=None,
        help="Build environment (defaults to $PORTFOLIO_ENV, then portfolio.yaml)",
    )(func)


def _project_option(func):
    return click.option(
        "--project",
        "project",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Project root (defaults to the current directory)",
    )(func)


@cli.command()
@_env_option
@_project_option
def config(environment: str | None, project: Path | None):
    """Show the resolved site configuration as YAML."""
    site_config = _load(project, environment)
    click.echo(yaml.safe_dump(site_config.as_dict(), sort_keys=False).rstrip())


@cli.command()
@_env_option
@_project_option
def extensions(environment: str | None, project: Path | None):
    """List the activated extensions with what they do."""
    from .extensions import ExtensionRegistry

    site_config = _load(project, environment)
    for ext in ExtensionRegistry(site_config.extensions):
        click.echo(f"{ext.name:<18} {ext.description}")


@cli.command()
@click.argument("page", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def title(page: Path):
    """Print the <title> text for a page source file."""
    from .helpers import page_title
    from .pages import load_page

    click.echo(page_title(load_page(page)))


@cli.command()
@click.argument("template")
@click.option(
    "--page",
    "page_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Page source whose metadata is in context",
)
@_env_option
@_project_option
def render(
    template: str,
    page_path: Path | None,
    environment: str | None,
    project: Path | None,
):
    """Render a template from the site/ directory."""
    from jinja2 import TemplateNotFound

    from .pages import load_page
    from .templates import TemplateEngine

    project_root = project or Path.cwd()
    site_config = _load(project_root, environment)
    site_dir = project_root / "site"
    if not site_dir.exists():
        raise click.ClickException(f"Expected site directory at {site_dir}")

    engine = TemplateEngine(site_dir, site_config)
    page = load_page(page_path) if page_path else None
    try:
        click.echo(engine.render_page(template, page))
    except TemplateNotFound as exc:
        raise click.ClickException(f"Template not found: {exc}") from None


def _load(project: Path | None, environment: str | None):
    from .config import load_config
    from .errors import ConfigError

    project_root = project or Path.cwd()
    try:
        return load_config(project_root, environment)
    except ConfigError as exc:
        click.echo(click.style("Configuration error:", fg="red", bold=True), err=True)
        if exc.source_path is not None:
            rel_path = _display_path(exc.source_path, project_root)
            click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None


def _display_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
