import tempfile

import pytest

from tests.kernel.mocks import BASE_URL, LATEST_URL


@pytest.fixture
def host(mocker):
    """Pretend to run on a given (uname -s, uname -m) host."""
    def _set(os_name="Linux", machine="x86_64"):
        mocker.patch("vramsply_installer.internal.system.get_os_info", return_value=os_name)
        mocker.patch("vramsply_installer.internal.system.get_cpu_arch", return_value=machine)

    _set()
    return _set


@pytest.fixture
def system_tmp(tmp_path, monkeypatch):
    """Redirect the system temp dir so leftover workspaces can be detected."""
    root = tmp_path / "system-tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def release_env(monkeypatch, install_dir, system_tmp):
    monkeypatch.setenv("VRAM_SUPPLY_RELEASE_BASE_URL", BASE_URL)
    monkeypatch.setenv("VRAM_SUPPLY_LATEST_RELEASE_URL", LATEST_URL)
    monkeypatch.setenv("VRAM_SUPPLY_INSTALL_DIR", str(install_dir))
    return monkeypatch


@pytest.fixture
def serve_release(requests_mock):
    """Register release objects (url -> bytes) with requests_mock."""
    def _serve(objects):
        for url, content in objects.items():
            requests_mock.get(url, content=content)
        return requests_mock

    return _serve
