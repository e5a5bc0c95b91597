"""obscli CLI: the main entry point for OBS project reconciliation."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Callable, Sequence

import click
from rich.console import Console
from rich.markup import escape

from obscli import __version__
from obscli.config import (
    DEFAULT_API_URL,
    CredentialProvider,
    EnvironmentCredentials,
    OBSCredentials,
    load_credentials,
)
from obscli.errors import ConfigError, ManifestError
from obscli.manifest import load_manifest
from obscli.sync.reconciler import Outcome, OutcomeStatus, Reconciler

console = Console(soft_wrap=True)


def _default_client_factory(credentials: OBSCredentials):
    from obscli.obs.client import OBSClient

    return OBSClient.from_credentials(credentials)


@dataclass
class CliContext:
    """Collaborators shared by all commands via ``ctx.obj``.

    Tests pass their own instance to swap the environment and the
    remote client for fakes.
    """

    credentials: CredentialProvider = field(default_factory=EnvironmentCredentials)
    client_factory: Callable[[OBSCredentials], object] = _default_client_factory


# ── Reconcile ────────────────────────────────────────────────────────


_STATUS_STYLE = {
    OutcomeStatus.UPDATED: "green",
    OutcomeStatus.UP_TO_DATE: "dim",
    OutcomeStatus.FETCH_ERROR: "red",
    OutcomeStatus.UPSERT_ERROR: "red",
}


@click.command()
@click.option(
    "--manifest",
    "-m",
    "manifest_path",
    required=True,
    help="Specify the path to read the example manifest",
)
@click.option(
    "--api-url",
    default=DEFAULT_API_URL,
    show_default=True,
    help="The base URL for the API",
)
@click.option(
    "--ignore-order",
    is_flag=True,
    help="Compare persons, repositories and architectures regardless of order",
)
@click.pass_context
def reconcile(ctx: click.Context, manifest_path: str, api_url: str, ignore_order: bool):
    """Reconcile OBS projects against a manifest.

    Each project in the manifest is fetched from OBS and updated only if
    it differs. Credentials are read from OBS_USERNAME and OBS_PASSWORD.
    """
    obj: CliContext = ctx.obj

    try:
        credentials = load_credentials(obj.credentials, api_url)
    except ConfigError as e:
        raise click.ClickException(f"Error getting OBS credentials: {e}") from e

    try:
        projects = load_manifest(manifest_path)
    except ManifestError as e:
        raise click.ClickException(str(e)) from e

    console.print(
        f"\n[bold blue]obscli[/]: reconciling {len(projects)} project(s) "
        f"against {escape(credentials.api_url)}\n"
    )

    with contextlib.closing(obj.client_factory(credentials)) as remote:
        report = Reconciler(remote, ignore_order=ignore_order).reconcile(
            projects, on_outcome=_print_outcome
        )

    console.print(f"\n{report.summary()}")

    if report.has_errors:
        ctx.exit(1)


def _print_outcome(outcome: Outcome) -> None:
    style = _STATUS_STYLE[outcome.status]
    console.print(f"  [{style}]{escape(outcome.message())}[/]")


# ── Entry point ──────────────────────────────────────────────────────


COMMANDS: tuple[click.Command, ...] = (reconcile,)


def build_cli(commands: Sequence[click.Command]) -> click.Group:
    """Build the top-level command group from an explicit command table."""

    @click.group()
    @click.version_option(version=__version__)
    @click.option(
        "--log-level",
        default="WARNING",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
        help="Diagnostic log level (written to stderr)",
    )
    @click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True),
        default=None,
        help="Also write a DEBUG-level log of the run to this file",
    )
    @click.pass_context
    def cli(ctx: click.Context, log_level: str, log_file: str | None):
        """obscli: manage Open Build Service projects declaratively.

        Reads a manifest of desired project definitions and brings the
        matching projects on an OBS instance in line with it.
        """
        from obscli.log import setup_logging

        setup_logging(log_level, log_file=log_file)
        ctx.ensure_object(CliContext)

    for command in commands:
        cli.add_command(command)

    return cli


main = build_cli(COMMANDS)


if __name__ == "__main__":
    main()
