"""
skillpath CLI

Look up which file a command resolves to and print its instructions.
"""

import sys
from typing import Optional

import click

from skillpath.config import ConfigManager
from skillpath.loader import CommandLoader, CommandLoadError
from skillpath.logging_config import setup_logging
from skillpath.registry import CommandRegistry
from skillpath.resolver import (
    CommandNotFoundError,
    CommandResolver,
    InvalidInvocationError,
)


def build_resolver(
    config_path: Optional[str] = None,
    project_root: Optional[str] = None,
    log_level: Optional[str] = None,
) -> CommandResolver:
    """Load configuration, set up logging and scan every tier."""
    config = ConfigManager(config_path).load()
    if project_root is not None:
        config = config.model_copy(update={"project_root": project_root})

    setup_logging(
        log_level=log_level or config.logging.level,
        log_file=config.logging.file,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
    )

    loader = CommandLoader(config.tier_paths())
    return CommandResolver(CommandRegistry(loader))


@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "config_path", type=click.Path(), default=None, help="Path to settings YAML")
@click.option("--project-root", type=click.Path(file_okay=False), default=None, help="Project root (default: current directory)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx, config_path: Optional[str], project_root: Optional[str], log_level: Optional[str]):
    """skillpath: resolve /commands across project, organization and built-in tiers."""
    ctx.ensure_object(dict)
    ctx.obj["options"] = (config_path, project_root, log_level)


def _resolver(ctx) -> CommandResolver:
    if "resolver" not in ctx.obj:
        ctx.obj["resolver"] = build_resolver(*ctx.obj["options"])
    return ctx.obj["resolver"]


@cli.command("list")
@click.pass_context
def list_commands(ctx):
    """List effective commands and the tiers they shadow."""
    info = _resolver(ctx).registry.get_commands_info()
    if not info:
        click.echo("No commands found.")
        return

    for item in info:
        line = f"/{item['name']:<32} {item['tier']:<12} {item['description']}"
        if item["shadowed"]:
            line += f"  (overrides: {', '.join(item['shadowed'])})"
        click.echo(line.rstrip())


@cli.command()
@click.argument("name")
@click.pass_context
def resolve(ctx, name: str):
    """Show which tier and file NAME resolves to."""
    try:
        entry = _resolver(ctx).resolve(name)
    except (CommandNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{entry.tier.label}\t{entry.path}")


@cli.command()
@click.argument("invocation", nargs=-1, required=True)
@click.pass_context
def show(ctx, invocation):
    """Print the instructions for INVOCATION, e.g. "/arc-audit src/"."""
    text = " ".join(invocation)
    if not text.startswith("/"):
        text = "/" + text

    try:
        click.echo(_resolver(ctx).invoke(text))
    except (CommandNotFoundError, InvalidInvocationError, CommandLoadError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
