from __future__ import annotations

import sys
from typing import NoReturn

import typer

from . import __version__
from .config import USAGE, ConfigError, ConfigurationMissing, resolve_config
from .dispatch import WebhookDispatcher
from .environment import Environment
from .git import GitClient, GitError
from .hook import PostReceiveHook
from .logging import setup_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _exit_with_usage(message: str | None = None) -> NoReturn:
    if message:
        typer.echo(message, err=True)
    typer.echo(USAGE, err=True)
    raise typer.Exit(code=1)


def post_receive(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose/--no-verbose",
        help="Log git commands and webhook requests.",
    ),
) -> None:
    """Notify Rocket.Chat about the refs pushed on stdin."""
    setup_logging(debug=verbose)
    env = Environment.from_environ()
    if not env.git_dir:
        _exit_with_usage()

    try:
        vcs = GitClient(env.cwd)
        config = resolve_config(vcs, env)
    except (ConfigError, GitError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e

    with WebhookDispatcher(debug=env.debug, timeout_s=config.timeout) as dispatcher:
        hook = PostReceiveHook(vcs, config, env, dispatcher)
        try:
            status = hook.run(sys.stdin)
        except ConfigurationMissing:
            _exit_with_usage("ERROR: config settings not found")
    raise typer.Exit(code=status)


def create_app() -> typer.Typer:
    app = typer.Typer(
        add_completion=False,
        help="Git post-receive hook that posts pushes to a Rocket.Chat webhook.",
    )
    app.command()(post_receive)
    return app


def main() -> None:
    app = create_app()
    app()


if __name__ == "__main__":
    main()
