import typer

from vramsply_installer.cli.commands import (
    doctor,
    install,
    platform,
    version,
)
from vramsply_installer.internal import paths
from vramsply_installer.internal.logging import setup_logging

app = typer.Typer(
    name="vramsply-install",
    help="Installer for the vram.supply agent.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Also print logs to stderr."),
):
    setup_logging(
        log_level_name="DEBUG" if verbose else "INFO",
        log_file_path=paths.get_installer_log_file(),
        console_output=verbose,
    )


app.command("install")(install.install)
app.command("doctor")(doctor.doctor)
app.command("platform")(platform.platform)
app.command("version")(version.version)

if __name__ == "__main__":
    app()
