"""Command-line interface for SecureString.

The CLI is a thin diagnostic shell around the library: computing digests
that match hashed secret values, checking candidates against a secret,
watching a secret expire, and validating configuration files.
"""

import time
from typing import Optional

import click

from securestring import __version__
from securestring.config import ConfigManager, ConfigValidator, load_config
from securestring.digest import hex_digest
from securestring.secret import SecretValue
from securestring.utils.errors import ErrorHandler, SecureStringError, format_validation_errors
from securestring.utils.logging import setup_logging


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "config_path", default=None, help="Path to a securestring.yml file")
@click.option("--log-file", help="Log to file in addition to console")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[str], log_file: Optional[str]) -> None:
    """SecureString - inspect hashed and expiring secret values."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    ctx.obj["error_handler"] = ErrorHandler(verbose=verbose)

    setup_logging(verbose=verbose, log_file=log_file)


def _load_config(ctx: click.Context):
    try:
        return load_config(ctx.obj.get("config_path"))
    except (SecureStringError, OSError) as e:
        ctx.obj["error_handler"].exit_with_error(e, context="Loading configuration")


@cli.command()
@click.argument("text")
@click.option("--encoding", default=None, help="Character encoding (default from config, utf-8)")
@click.option("--algorithm", default=None, help="Digest algorithm (default from config, sha512)")
@click.pass_context
def digest(ctx: click.Context, text: str, encoding: Optional[str], algorithm: Optional[str]) -> None:
    """Print the hex digest of TEXT, as a hashed secret renders it."""
    config = _load_config(ctx)
    try:
        click.echo(hex_digest(text, encoding or config.encoding, algorithm or config.digest_algorithm))
    except SecureStringError as e:
        ctx.obj["error_handler"].exit_with_error(e, context="Computing digest")


@cli.command()
@click.argument("text")
@click.argument("candidate")
@click.option("--plain", is_flag=True, help="Keep TEXT as plaintext instead of hashing it")
@click.option("--encoding", default=None, help="Character encoding")
@click.pass_context
def compare(ctx: click.Context, text: str, candidate: str, plain: bool, encoding: Optional[str]) -> None:
    """Compare CANDIDATE against a secret built from TEXT.

    A hashed secret matches its hex digest, not TEXT itself. Exits 1 when
    the values differ.
    """
    config = _load_config(ctx)
    try:
        with SecretValue(text, encoding=encoding, hashed=not plain, config=config) as secret:
            matched = secret.compare(candidate)
    except SecureStringError as e:
        ctx.obj["error_handler"].exit_with_error(e, context="Building secret")
        return

    click.echo("✓ match" if matched else "✗ no match")
    if not matched:
        ctx.exit(1)


@cli.command()
@click.argument("text")
@click.option("--lifetime", "lifetime_ms", type=int, required=True, help="Lifetime in milliseconds")
@click.option("--interval", "interval_ms", type=int, default=None, help="Sweep interval in milliseconds")
@click.option("--plain", is_flag=True, help="Keep TEXT as plaintext instead of hashing it")
@click.option("--timeout", type=float, default=60.0, help="Give up after this many seconds")
@click.pass_context
def watch(
    ctx: click.Context,
    text: str,
    lifetime_ms: int,
    interval_ms: Optional[int],
    plain: bool,
    timeout: float,
) -> None:
    """Build an expiring secret from TEXT and print its status until it is wiped."""
    base_config = _load_config(ctx)
    try:
        config = base_config.with_overrides(sweep_interval_ms=interval_ms, debug=ctx.obj["verbose"] or None)
        secret = SecretValue(text, lifetime_ms=lifetime_ms, hashed=not plain, config=config)
    except SecureStringError as e:
        ctx.obj["error_handler"].exit_with_error(e, context="Building secret")
        return

    poll_seconds = config.sweep_interval_ms / 1000.0
    deadline = time.monotonic() + timeout
    click.echo(f"Start     : {secret.status()}")
    while not secret.is_destroyed:
        if time.monotonic() >= deadline:
            secret.destroy()
            click.echo("✗ Timed out waiting for expiry; destroyed explicitly", err=True)
            ctx.exit(1)
        time.sleep(poll_seconds)
        click.echo(f"Polling   : {secret.status()}")

    click.echo(f"Finish    : {secret.status()}")


@cli.group()
def config() -> None:
    """Inspect SecureString configuration."""
    pass


@config.command("validate")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def validate_config(ctx: click.Context, path: str) -> None:
    """Validate the configuration file at PATH."""
    errors = ConfigValidator().validate_config_file(path)
    if errors:
        click.echo(format_validation_errors(errors), err=True)
        ctx.exit(1)
    click.echo(f"✓ {path} is valid")


@config.command("show")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the configuration in effect."""
    manager = ConfigManager()
    source = ctx.obj.get("config_path") or manager.get_config_path() or "defaults"
    settings = _load_config(ctx)

    click.echo(f"Source: {source}")
    for key, value in settings.to_dict().items():
        click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
