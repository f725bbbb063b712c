from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from vramsply_installer.adapters.github_release import GitHubReleaseChannel
from vramsply_installer.internal.config import InstallerConfig
from vramsply_installer.internal.errors import InstallerError, InstallInterrupted
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel.execution import InstallerService, InstallProgress

logger = get_logger(__name__)

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_SMOKE_TEST_FAILED = 3
EXIT_INTERRUPTED = 130


def render_progress(event: InstallProgress) -> None:
    if event.stage == "report" and "remediation" in event.details:
        console.print()
        for line in event.details["remediation"]:
            console.print(f"[yellow]{escape(line)}[/yellow]" if line.startswith("WARNING") else escape(line))
        return

    if event.stage == "report" and "ok" in event.details:
        console.print()
        if event.message:
            console.print(escape(event.message))
        return

    if event.stage == "install":
        console.print()
        console.print(f"[green]{escape(event.message)}[/green]")
        return

    if event.stage == "verify" and "sha256" in event.details:
        console.print(f"[green]{escape(event.message)}[/green]")
        return

    console.print(escape(event.message))


def print_error(exc: InstallerError) -> None:
    err_console.print(f"[red]Error:[/red] {escape(exc.message)}")
    for key, value in exc.context.items():
        err_console.print(f"  {key.capitalize()}: {escape(str(value))}")
    if exc.hint:
        err_console.print(f"[dim]{escape(exc.hint)}[/dim]")


def install(
    agent_version: Optional[str] = typer.Option(
        None,
        "--agent-version",
        help="Release tag to install (default: $VRAM_SUPPLY_AGENT_VERSION, else latest).",
    ),
    install_dir: Optional[Path] = typer.Option(
        None,
        "--install-dir",
        help="Directory to install into (default: $VRAM_SUPPLY_INSTALL_DIR, else ~/.local/bin).",
    ),
    skip_smoke_test: bool = typer.Option(
        False,
        "--skip-smoke-test",
        help="Do not run the installed binary with --version afterwards.",
    ),
):
    """
    Download, verify and install the vramsply agent binary.
    """
    try:
        config = InstallerConfig.from_env().with_overrides(
            version=agent_version,
            install_dir=install_dir,
            smoke_test=False if skip_smoke_test else None,
        )
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    channel = GitHubReleaseChannel.from_config(config)
    service = InstallerService(config, channel)

    try:
        outcome = service.run(progress=render_progress)
    except InstallInterrupted as e:
        logger.warning("Install interrupted", signal=e.signum)
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(EXIT_INTERRUPTED)
    except KeyboardInterrupt:
        logger.warning("Install cancelled by user")
        err_console.print("[red]Installation cancelled.[/red]")
        raise typer.Exit(EXIT_INTERRUPTED)
    except InstallerError as e:
        logger.error("Install failed", **e.to_dict())
        print_error(e)
        raise typer.Exit(EXIT_FAILURE)

    if outcome.smoke_test is not None and not outcome.smoke_test.ok:
        err_console.print(
            f"[red]Warning:[/red] {escape(str(outcome.installed_path))} was installed "
            f"but failed to run with --version."
        )
        if outcome.smoke_test.output:
            err_console.print(f"  {escape(outcome.smoke_test.output)}")
        raise typer.Exit(EXIT_SMOKE_TEST_FAILED)


if __name__ == "__main__":
    typer.run(install)
