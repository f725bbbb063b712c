import pytest
from typer.testing import CliRunner

from vramsply_installer.cli.main import app

runner = CliRunner()


def test_cli_app_exists():
    """Verify that the CLI app instance is available."""
    assert app is not None


# --- Valid Commands ---
@pytest.mark.parametrize("command, expected_output_substring", [
    (["--help"], "Installer for the vram.supply agent"),
    (["install", "--help"], "--agent-version"),
    (["install", "--help"], "--skip-smoke-test"),
    (["doctor", "--help"], "--install-dir"),
    (["platform", "--help"], "target triple"),
    (["version", "--help"], "installer version"),
])
def test_valid_commands_help_output(command, expected_output_substring):
    result = runner.invoke(app, command)
    assert result.exit_code == 0
    assert expected_output_substring in result.output


# --- Invalid Commands ---
@pytest.mark.parametrize("command", [
    ["nonexistent-command"],
    ["install", "extra-arg"],
    ["--invalid-global-flag"],
])
def test_invalid_commands_fail_loudly(command):
    result = runner.invoke(app, command)
    assert result.exit_code == 2


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "install" in result.output
    assert "doctor" in result.output


# --- platform ---

def test_platform_prints_triple(mocker):
    mocker.patch("vramsply_installer.internal.system.get_os_info", return_value="Linux")
    mocker.patch("vramsply_installer.internal.system.get_cpu_arch", return_value="aarch64")

    result = runner.invoke(app, ["platform"])

    assert result.exit_code == 0
    assert result.output.strip() == "aarch64-unknown-linux-gnu"


def test_platform_unsupported_exits_nonzero(mocker):
    mocker.patch("vramsply_installer.internal.system.get_os_info", return_value="Linux")
    mocker.patch("vramsply_installer.internal.system.get_cpu_arch", return_value="riscv64")

    result = runner.invoke(app, ["platform"])

    assert result.exit_code == 1
    assert "riscv64" in result.output


# --- version ---

def test_version_reads_package_metadata(mocker):
    mocker.patch("importlib.metadata.version", return_value="0.1.0")

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "vramsply-installer version: 0.1.0" in result.output


def test_version_without_metadata(mocker):
    import importlib.metadata

    mocker.patch("importlib.metadata.version", side_effect=importlib.metadata.PackageNotFoundError)

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 1
    assert "not installed" in result.output


# --- doctor ---

def test_doctor_reports_missing_install(mocker, install_dir):
    mocker.patch("vramsply_installer.internal.system.get_os_info", return_value="Linux")
    mocker.patch("vramsply_installer.internal.system.get_cpu_arch", return_value="x86_64")

    result = runner.invoke(app, ["doctor", "--install-dir", str(install_dir)])

    assert result.exit_code == 1
    assert "Binary present... FAILED" in result.output
    assert "Some checks FAILED" in result.output


def test_commands_run_when_home_is_unusable(tmp_path, monkeypatch, mocker):
    home_file = tmp_path / "home-file"
    home_file.write_text("")
    monkeypatch.setenv("HOME", str(home_file))
    mocker.patch("vramsply_installer.internal.logging._LOGGING_CONFIGURED", False)
    mocker.patch("vramsply_installer.internal.system.get_os_info", return_value="Linux")
    mocker.patch("vramsply_installer.internal.system.get_cpu_arch", return_value="x86_64")

    result = runner.invoke(app, ["platform"])

    assert result.exception is None
    assert result.exit_code == 0
    assert result.output.strip() == "x86_64-unknown-linux-gnu"
