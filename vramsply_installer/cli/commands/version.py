import importlib.metadata

import typer

from vramsply_installer.internal.logging import get_logger

logger = get_logger(__name__)

DISTRIBUTION_NAME = "vramsply-installer"


def version():
    """
    Show the installer version.
    """
    try:
        # Read version from installed package metadata
        package_version = importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        typer.echo("vramsply-installer is not installed or version metadata not found.")
        typer.echo("Please install the package first (e.g., pip install . or pip install -e .)")
        logger.warning("vramsply-installer package version not found.")
        raise typer.Exit(1)
    typer.echo(f"vramsply-installer version: {package_version}")


if __name__ == "__main__":
    typer.run(version)
