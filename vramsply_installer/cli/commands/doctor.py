import os
import sys
from pathlib import Path
from typing import Optional

import typer

from vramsply_installer.internal.config import InstallerConfig
from vramsply_installer.internal.errors import UnsupportedPlatform
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel import reporter
from vramsply_installer.kernel.platform import detect_platform

logger = get_logger(__name__)


def doctor(
    install_dir: Optional[Path] = typer.Option(
        None,
        "--install-dir",
        help="Directory the agent was installed into.",
    ),
):
    """
    Check an existing vramsply installation.
    """
    typer.echo("Running vramsply doctor checks...\n")
    all_passed = True

    def check(description: str, func):
        nonlocal all_passed
        typer.echo(f"- {description}...", nl=False)
        result, message = func()
        if result:
            typer.echo(f" {typer.style('PASSED', fg=typer.colors.GREEN)}")
        else:
            typer.echo(f" {typer.style('FAILED', fg=typer.colors.RED)}")
            typer.echo(f"  Reason: {message}")
            all_passed = False

    try:
        config = InstallerConfig.from_env().with_overrides(install_dir=install_dir)
    except ValueError as e:
        typer.echo(typer.style(f"Error: {e}", fg=typer.colors.RED), err=True)
        raise typer.Exit(2)

    binary = config.install_path

    # --- System Checks ---
    typer.echo(typer.style("System Information:", fg=typer.colors.BLUE, bold=True))
    typer.echo(f"  Python Version: {sys.version.split()[0]}")
    try:
        typer.echo(f"  Target: {detect_platform()}")
    except UnsupportedPlatform as e:
        typer.echo(f"  Target: {typer.style('unsupported', fg=typer.colors.RED)} ({e.message})")
        all_passed = False
    typer.echo(f"  Install path: {binary}")
    typer.echo("")

    # --- Installation Checks ---
    typer.echo(typer.style("Installation Checks:", fg=typer.colors.BLUE, bold=True))

    def check_binary_exists():
        return binary.is_file(), f"'{binary}' not found. Run `vramsply-install install`."
    check("Binary present", check_binary_exists)

    def check_binary_executable():
        return (
            binary.is_file() and os.access(binary, os.X_OK),
            f"'{binary}' is missing or not executable.",
        )
    check("Binary executable", check_binary_executable)

    def check_on_path():
        on_path = reporter.is_on_path(config.install_dir)
        hint = reporter.path_remediation(config.install_dir)[2].strip()
        return on_path, f"{config.install_dir} is not in your PATH. Run: {hint}"
    check("Install directory on PATH", check_on_path)

    def check_smoke_test():
        if not binary.is_file():
            return False, "binary not installed."
        result = reporter.smoke_test(binary)
        return result.ok, result.output or f"exit code {result.returncode}"
    check("Binary runs (--version)", check_smoke_test)

    typer.echo("\n--- Doctor Check Summary ---")
    if all_passed:
        typer.echo(typer.style("All checks PASSED!", fg=typer.colors.GREEN, bold=True))
        return

    logger.warning("Doctor checks failed", path=str(binary))
    typer.echo(typer.style("Some checks FAILED. Please review the output above.", fg=typer.colors.RED, bold=True))
    raise typer.Exit(1)


if __name__ == "__main__":
    typer.run(doctor)
