"""
NetFoundry Linux package installer — CLI entrypoint.

Usage:
    netfoundry-install --help
    netfoundry-install                      # configure repository only
    netfoundry-install zrok openziti        # configure + install
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from nfinstall import __version__
from nfinstall.core.config.loader import build_request, load_settings
from nfinstall.core.models.install import InstallReport
from nfinstall.core.observability.logging_config import resolve_level, setup_logging
from nfinstall.core.services.repo_install.domain.errors import InstallerError
from nfinstall.core.services.repo_install.orchestration.orchestrator import run_install

_INSTALL_HINTS = {
    "redhat": "dnf install <package> or yum install <package>",
    "debian": "apt-get install <package>",
}

_ACTION_MESSAGES = {
    "created": "Added NetFoundry repository configuration",
    "updated": "Updated NetFoundry repository configuration",
    "unchanged": "NetFoundry repository configuration is up to date",
}


class InstallCommand(click.Command):
    """Command whose usage errors exit 1 like every other fatal error."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(
    "install",
    cls=InstallCommand,
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_interspersed_args": False,
    },
)
@click.version_option(version=__version__, prog_name="netfoundry-install")
@click.option("--private", is_flag=True, help="Use the private (subscriber) channel.")
@click.option("--username", default=None, help="Private channel username.")
@click.option("--password", default=None, help="Private channel password.")
@click.option(
    "--post-exec",
    "post_exec",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Executable to run after a successful install.",
)
@click.option("--test", "test_track", is_flag=True, help="Use the test track instead of stable.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (default: $NFINSTALL_CONFIG or built-in).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.argument("packages", nargs=-1)
def cli(
    private: bool,
    username: str | None,
    password: str | None,
    post_exec: Path | None,
    test_track: bool,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
    packages: tuple[str, ...],
) -> None:
    """NetFoundry Linux Package Installer.

    \b
    Behaviors:
      1. No arguments     - Configure NetFoundry repository only
      2. With arguments   - Configure repository and install specified packages

    The first argument that is not an option ends option parsing; pin a
    Debian package version with NAME=VERSION.

    \b
    Examples:
      # Configure repository only
      sudo netfoundry-install
    \b
      # Configure repository and install packages
      sudo netfoundry-install frontdoor-agent
    \b
      # Private channel, test track
      sudo netfoundry-install --private --username me --password s3cret --test zrok

    Supported distributions: Debian, Ubuntu, CentOS, RHEL, Fedora, Amazon Linux
    """
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("NFINSTALL_LOG_LEVEL"),
        ),
        log_file=os.environ.get("NFINSTALL_LOG_FILE"),
        log_file_level=os.environ.get("NFINSTALL_LOG_FILE_LEVEL"),
    )

    try:
        settings = load_settings(config_path)
        request = build_request(
            settings,
            private=private,
            test=test_track,
            username=username,
            password=password,
            packages=packages,
            post_exec=post_exec,
        )
        report = run_install(request, settings)
    except InstallerError as e:
        click.secho(f"ERROR: {e}", fg="red", err=True)
        sys.exit(e.exit_code)

    _print_report(report, quiet=quiet)


def _print_report(report: InstallReport, *, quiet: bool = False) -> None:
    """Human summary of a finished run."""
    if not quiet:
        click.echo(f"{_ACTION_MESSAGES[report.repo_action]}: {report.repo_file}")

    if not report.installed:
        if not quiet:
            click.secho(
                "Repository configured. You can now install packages with: "
                f"{_INSTALL_HINTS[report.family]}",
                fg="green",
            )
        return

    for check in report.packages:
        if check.ok:
            version = f" {check.version}" if check.version else ""
            click.secho(f"✅ {check.package}{version}", fg="green")
        else:
            click.secho(f"❌ {check.package}: {check.detail or 'verification failed'}", fg="yellow")

    if report.post_exec_ok is False:
        click.secho("⚠️  Post-exec command failed (see log)", fg="yellow")


def main() -> None:
    """Console-script entry point."""
    cli()


if __name__ == "__main__":
    main()
