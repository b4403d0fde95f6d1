"""sauth entrypoint.

Run with:
  python -m sauth serve --credentials "user,pass"
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import uvicorn

from sauth.app import create_app
from sauth.config import Settings, check_settings, load_settings
from sauth.logger import setup_logging
from sauth.middleware import AuthMiddleware
from sauth.plugin import cli_options, default_registry, from_cli
from sauth.storage import dump_middlewares, load_middlewares

_CONFIG_HELP = "YAML file with stored middleware configs"


def _settings() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _resolve(ctx: click.Context, settings: Settings, config_path: Optional[Path]) -> AuthMiddleware:
    # --credentials beats --config, which beats SAUTH_CREDENTIALS
    try:
        if ctx.params.get("credentials"):
            return from_cli(ctx)
        if config_path is not None:
            loaded = load_middlewares(config_path, default_registry())
            if loaded:
                return next(iter(loaded.values()))
        return AuthMiddleware(settings.credentials)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def cli():
    """Basic Auth gate with signed session cookies."""


@cli.command()
@click.option("--host", default=None, help="Bind address (SAUTH_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (SAUTH_PORT)")
@click.option("--log-level", default=None, help="Logging level (SAUTH_LOG_LEVEL)")
@click.option("--log-json", is_flag=True, default=False, help="Emit JSON lines logs")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help=_CONFIG_HELP)
@click.pass_context
def serve(ctx, host, port, log_level, log_json, config_path, credentials):
    """Run the demo app behind the gate."""
    settings = _settings()
    settings.host = host or settings.host
    settings.port = port or settings.port
    settings.log_level = (log_level or settings.log_level).upper()
    settings.log_json = log_json or settings.log_json
    try:
        check_settings(settings)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    setup_logging(settings.log_level, settings.log_json)

    mw = _resolve(ctx, settings, config_path)
    app = create_app(settings, middleware=mw)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@cli.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help=_CONFIG_HELP)
@click.pass_context
def describe(ctx, config_path, credentials):
    """Print the configured users with masked passwords."""
    mw = _resolve(ctx, _settings(), config_path)
    click.echo(str(mw), nl=False)


@cli.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), required=True, help=_CONFIG_HELP)
@click.option("--id", "mid", default="sauth", show_default=True, help="Middleware id in the file")
@click.pass_context
def save(ctx, config_path, mid, credentials):
    """Validate credentials and store them in a config file."""
    mw = _resolve(ctx, _settings(), None)
    registry = default_registry()
    try:
        existing = load_middlewares(config_path, registry)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    existing[mid] = mw
    dump_middlewares(config_path, existing)
    click.echo(f"OK -> {config_path}")


for _cmd in (serve, describe, save):
    _cmd.params.extend(cli_options())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
