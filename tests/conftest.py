import os

import pytest

from vramsply_installer.internal.config import InstallerConfig
from tests.kernel.mocks import BASE_URL, LATEST_URL, MockReleaseChannel, publish_release

VRAM_ENV_VARS = [
    "VRAM_SUPPLY_AGENT_VERSION",
    "VRAM_SUPPLY_AGENT_REPO",
    "VRAM_SUPPLY_RELEASE_BASE_URL",
    "VRAM_SUPPLY_LATEST_RELEASE_URL",
    "VRAM_SUPPLY_INSTALL_DIR",
    "VRAM_SUPPLY_HTTP_TIMEOUT",
    "VRAM_SUPPLY_INSTALLER_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """
    Point HOME at the test's tmp_path and clear any installer
    environment so tests never touch the real user directories.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in VRAM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield home


@pytest.fixture
def workspace_root(tmp_path):
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def install_dir(tmp_path):
    return tmp_path / "home" / ".local" / "bin"


@pytest.fixture
def make_config(install_dir, workspace_root):
    """Factory for configs pointing at the mock release channel."""
    def _make(**overrides) -> InstallerConfig:
        values = dict(
            release_base_url=BASE_URL,
            latest_release_url=LATEST_URL,
            install_dir=install_dir,
            workspace_root=workspace_root,
        )
        values.update(overrides)
        return InstallerConfig(**values)

    return _make


@pytest.fixture
def channel():
    return MockReleaseChannel(objects=publish_release())


@pytest.fixture
def path_without(monkeypatch):
    """Set PATH to the system dirs only."""
    monkeypatch.setenv("PATH", os.pathsep.join(["/usr/bin", "/bin"]))


@pytest.fixture
def path_with(monkeypatch, install_dir):
    monkeypatch.setenv("PATH", os.pathsep.join([str(install_dir), "/usr/bin", "/bin"]))
