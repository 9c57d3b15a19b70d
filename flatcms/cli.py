"""Command-line interface for flatcms.

This module defines the CLI commands using the Click framework.

Commands:
- init: Create the `.cms` file and the content directory.
- new: Create a new, empty post.
- publish: Rebuild the publish directory from the posts.
- blocks: Show the Markdown blocks of a post (diagnostic).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import init_project, load_config
from .errors import CmsError, ConfigError, DocumentError, ParseError, error_chain
from .parser import parse_file
from .post import TITLE_PATTERN, new_post_document
from .publish import ErrorPolicy, publish_project
from .renderers import default_renderer

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="cms")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """flatcms, a file-based blog CMS."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


@cli.command()
@click.option(
    "--content-dir",
    default="content",
    show_default=True,
    help="Directory holding the posts",
)
def init(content_dir: str):
    """Initialize cms in the current directory."""
    try:
        config = init_project(Path.cwd(), content_dir)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None
    except OSError as exc:
        raise click.ClickException(f"creating content directory: {exc}") from None
    click.echo(f"initialized cms at {config.content_dir}")


@cli.command()
@click.option("-n", "--name", help="Title of the new post")
def new(name: str | None):
    """Create a new, empty post."""
    config = _load_config()

    if name is None:
        name = questionary.text(
            "Post title:",
            validate=lambda x: bool(TITLE_PATTERN.fullmatch(x.strip()))
            or "Use letters, digits, '_' and '-' only",
            style=_questionary_style(),
        ).ask()
        if name is None:
            raise click.Abort()
    name = name.strip()

    if not TITLE_PATTERN.fullmatch(name):
        raise click.ClickException(
            f"invalid post name '{name}': use letters, digits, '_' and '-' only"
        )

    target_path = config.source_dir / f"{name}.md"
    if target_path.exists():
        raise click.ClickException(f"post name '{name}' already exists")

    try:
        config.source_dir.mkdir(parents=True, exist_ok=True)
        target_path.write_text(new_post_document(name), encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"creating post '{name}': {exc}") from None
    click.echo(f"created empty post at {target_path}")


@cli.command()
@click.option(
    "--skip-errors",
    is_flag=True,
    help="Skip documents that fail to publish instead of aborting",
)
def publish(skip_errors: bool):
    """Rebuild the publish directory from all posts."""
    config = _load_config()
    if skip_errors:
        config = replace(config, on_document_error=ErrorPolicy.SKIP_AND_WARN)

    try:
        summary = publish_project(config)
    except CmsError as exc:
        _report_failure(exc, config.root)
        raise SystemExit(1) from None

    for warning in summary.warnings:
        click.echo(click.style(warning, fg="yellow"))
    click.echo(f"published {summary.published} files")


@cli.command()
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def blocks(path: Path):
    """Show the Markdown blocks of a post."""
    try:
        post = parse_file(path)
    except ParseError as exc:
        raise click.ClickException(f"{path}: {exc}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"{path}: failed reading the post: {exc}") from None

    tokens = default_renderer.blocks(post.content)
    click.echo(f"title: {post.title}")
    click.echo(f"published: {post.published.isoformat()}")
    click.echo(yaml.safe_dump(tokens, sort_keys=False, allow_unicode=True), nl=False)


def _load_config():
    """Load the project configuration from the working directory."""
    try:
        return load_config(Path.cwd())
    except ConfigError as exc:
        raise click.ClickException(f"Could not get content directory: {exc}") from None


def _report_failure(exc: CmsError, project_root: Path) -> None:
    """Print a publish failure with its cause chain to stderr."""
    click.echo(click.style("Publish failed:", fg="red", bold=True), err=True)
    if isinstance(exc, DocumentError):
        source = exc.source_path
        if source.is_relative_to(project_root):
            source = source.relative_to(project_root)
        click.echo(click.style(f"  File: {source}", fg="yellow"), err=True)
    messages = error_chain(exc)
    click.echo(f"  Error: {messages[0]}", err=True)
    for cause in messages[1:]:
        click.echo(f"  Caused by: {cause}", err=True)


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
