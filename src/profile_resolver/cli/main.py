"""Main CLI entry point for the Profile Resolver.

Resolves settings from shared configuration profiles from the command line.
"""

import asyncio
import json
import os
import sys
from typing import Any, Callable, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from profile_resolver import __version__
from profile_resolver.engine.resolver import ChainOutcome, trace_profile_chain
from profile_resolver.engine.validation_engine import ValidationEngine, ValidationResult
from profile_resolver.exceptions import ProfileResolverError
from profile_resolver.profiles.base import ProfileSet
from profile_resolver.profiles.loader import (
    ENV_CONFIG_FILE,
    ENV_CREDENTIALS_FILE,
    ProfileLoader,
    profile_set_to_yaml,
)
from profile_resolver.provider.profile_file import (
    REGION_KEY,
    ProfileFileProvider,
    ProfileFileRegionProvider,
)
from profile_resolver.shims import Env, Fs, ProviderConfig
from profile_resolver.utils.log import setup_logging

console = Console()

OUTCOME_DESCRIPTIONS = {
    ChainOutcome.FOUND: "found",
    ChainOutcome.EMPTY: "no profiles are defined",
    ChainOutcome.MISSING_PROFILE: "profile does not exist",
    ChainOutcome.KEY_ABSENT: "key not set and no source_profile to follow",
    ChainOutcome.SELF_REFERENCE: "profile uses itself as source_profile",
    ChainOutcome.CYCLE: "source_profile chain loops back",
}


def profile_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that reads the profile files."""
    func = click.option("--credentials-file", type=click.Path(dir_okay=False), help="Shared credentials file (overrides AWS_SHARED_CREDENTIALS_FILE)")(func)
    func = click.option("--config-file", type=click.Path(dir_okay=False), help="Shared config file (overrides AWS_CONFIG_FILE)")(func)
    func = click.option("--profile", "-p", "profile_name", help="Profile to start from (overrides AWS_PROFILE)")(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="profile-resolve")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this rotating file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: str | None) -> None:
    """Profile Resolver - Resolve settings from shared configuration profiles.

    Settings missing from a profile are inherited through its source_profile
    chain.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging("DEBUG" if verbose else "WARNING", log_file=log_file)


@cli.command()
@profile_options
@click.pass_context
def region(
    ctx: click.Context,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """Print the region of the active profile."""
    config = _provider_config(config_file, credentials_file)
    provider = _build(ProfileFileRegionProvider, config, profile_name)

    resolved = asyncio.run(provider.region())
    if resolved is None:
        console.print("[yellow]No region found[/yellow]")
        sys.exit(1)

    click.echo(resolved.name)


@cli.command()
@click.argument("key")
@profile_options
@click.pass_context
def get(
    ctx: click.Context,
    key: str,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """Print the value of a setting.

    KEY is the setting to resolve, e.g. region or output.
    """
    config = _provider_config(config_file, credentials_file)
    provider = _build(ProfileFileProvider, config, profile_name)

    value = asyncio.run(provider.resolve_setting(key))
    if value is None:
        console.print(f"[yellow]No value found for '{escape(key)}'[/yellow]")
        sys.exit(1)

    click.echo(value)


@cli.command()
@click.option("--key", "-k", default=REGION_KEY, show_default=True, help="Setting to resolve")
@profile_options
@click.pass_context
def chain(
    ctx: click.Context,
    key: str,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """Show the source_profile chain walked to resolve a setting."""
    profile_set = _load_or_exit(ctx, profile_name, config_file, credentials_file)
    trace = trace_profile_chain(profile_set, profile_name, key)

    table = Table(title=f"Resolution of '{escape(key)}'")
    table.add_column("Step", justify="right")
    table.add_column("Profile", style="cyan")
    table.add_column(key)
    table.add_column("source_profile")

    for step, name in enumerate(trace.visited, start=1):
        profile = profile_set.get_profile(name)
        value = profile.get(key) if profile else None
        source = profile.source_profile if profile else None
        table.add_row(
            str(step),
            escape(name),
            f"[green]{escape(value)}[/green]" if value is not None else "-",
            escape(source) if source else "-",
        )

    console.print(table)

    description = OUTCOME_DESCRIPTIONS[trace.outcome]
    if trace.found:
        console.print(f"[green]{escape(key)} = {escape(trace.value or '')}[/green] (from '{escape(trace.last_profile or '')}')")
    else:
        where = f" at '{escape(trace.last_profile)}'" if trace.last_profile else ""
        console.print(f"[yellow]Not found: {description}{where}[/yellow]")
        sys.exit(1)


@cli.command()
@profile_options
@click.pass_context
def list_profiles(
    ctx: click.Context,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """List the profiles found in the shared config files."""
    profile_set = _load_or_exit(ctx, profile_name, config_file, credentials_file)

    if profile_set.is_empty():
        console.print("[yellow]No profiles found[/yellow]")
        return

    active = profile_set.selected_profile()

    table = Table(title="Profiles")
    table.add_column("Name", style="cyan")
    table.add_column("source_profile")
    table.add_column("Settings", justify="right")
    table.add_column("Active")

    for profile in profile_set.iter_profiles():
        table.add_row(
            escape(profile.name),
            escape(profile.source_profile or "-"),
            str(len(profile.properties)),
            "[green]*[/green]" if profile.name == active else "",
        )

    console.print(table)


@cli.command()
@profile_options
@click.pass_context
def show(
    ctx: click.Context,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """Print the loaded profiles as YAML."""
    profile_set = _load_or_exit(ctx, profile_name, config_file, credentials_file)
    click.echo(profile_set_to_yaml(profile_set), nl=False)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@profile_options
@click.pass_context
def validate(
    ctx: click.Context,
    as_json: bool,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> None:
    """Check the profiles for dangling source_profile references and cycles."""
    profile_set = _load_or_exit(ctx, profile_name, config_file, credentials_file)

    result = ValidationEngine().validate_profile_set(profile_set)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_validation_result(result)

    if not result.valid:
        sys.exit(1)


def _provider_config(config_file: str | None, credentials_file: str | None) -> ProviderConfig:
    """Real file system, process environment overlaid with command line options."""
    variables = dict(os.environ)
    if config_file:
        variables[ENV_CONFIG_FILE] = config_file
    if credentials_file:
        variables[ENV_CREDENTIALS_FILE] = credentials_file
    return ProviderConfig(fs=Fs.real(), env=Env.from_mapping(variables))


def _build(
    provider_cls: type[ProfileFileProvider],
    config: ProviderConfig,
    profile_name: str | None,
) -> Any:
    builder = provider_cls.builder().configure(config)
    if profile_name is not None:
        builder = builder.profile_name(profile_name)
    return builder.build()


def _load_or_exit(
    ctx: click.Context,
    profile_name: str | None,
    config_file: str | None,
    credentials_file: str | None,
) -> ProfileSet:
    config = _provider_config(config_file, credentials_file)
    loader = ProfileLoader(config.fs, config.env)
    try:
        profile_set = asyncio.run(loader.load())
    except ProfileResolverError as e:
        _fail(ctx, e)

    if profile_name is not None:
        profile_set = profile_set.model_copy(update={"selected_profile_name": profile_name})
    return profile_set


def _fail(ctx: click.Context, error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if ctx.obj.get("verbose", False):
        import traceback
        console.print(escape(traceback.format_exc()))
    sys.exit(1)


def _print_validation_result(result: ValidationResult) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(Panel.fit(
        f"Profiles: {result.validated_count}\n"
        f"Errors: {result.error_count}\n"
        f"Warnings: {result.warning_count}",
        title=f"Validation {status}",
    ))

    for issue in result.issues:
        color = {
            "error": "red",
            "warning": "yellow",
            "info": "blue",
        }.get(issue.severity.value, "white")

        console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {escape(issue.message)}")
        if issue.path:
            console.print(f"    Path: {escape(issue.path)}")


if __name__ == "__main__":
    cli()
