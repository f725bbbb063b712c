import typer

from vramsply_installer.internal.errors import UnsupportedPlatform
from vramsply_installer.kernel.platform import detect_platform


def platform():
    """
    Show the target triple detected for this machine.
    """
    try:
        target = detect_platform()
    except UnsupportedPlatform as e:
        typer.echo(typer.style(f"Error: {e.message}", fg=typer.colors.RED), err=True)
        raise typer.Exit(1)
    typer.echo(str(target))


if __name__ == "__main__":
    typer.run(platform)
