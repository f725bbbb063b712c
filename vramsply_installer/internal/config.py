"""
Installer configuration.

All inputs that the shell installer took from ambient environment variables
are gathered into one immutable structure and passed explicitly into each
component.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from vramsply_installer.internal import paths

# ---------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------

DEFAULT_REPO = "ohone/vram-supply-agent"
DEFAULT_BINARY_NAME = "vramsply"
DEFAULT_REQUEST_TIMEOUT = 60.0

MANIFEST_FILE_NAME = "SHA256SUMS.txt"

ENV_VERSION = "VRAM_SUPPLY_AGENT_VERSION"
ENV_REPO = "VRAM_SUPPLY_AGENT_REPO"
ENV_RELEASE_BASE_URL = "VRAM_SUPPLY_RELEASE_BASE_URL"
ENV_LATEST_RELEASE_URL = "VRAM_SUPPLY_LATEST_RELEASE_URL"
ENV_INSTALL_DIR = "VRAM_SUPPLY_INSTALL_DIR"
ENV_HTTP_TIMEOUT = "VRAM_SUPPLY_HTTP_TIMEOUT"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    # Blank values are treated the same as unset ones.
    value = environ.get(name, "")
    return value if value.strip() else None


@dataclass(frozen=True)
class InstallerConfig:
    release_base_url: str
    latest_release_url: str
    install_dir: Path
    version_override: Optional[str] = None
    binary_name: str = DEFAULT_BINARY_NAME
    workspace_root: Optional[Path] = None
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT
    smoke_test: bool = True

    @property
    def install_path(self) -> Path:
        return self.install_dir / self.binary_name

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InstallerConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Raises:
            ValueError: if VRAM_SUPPLY_HTTP_TIMEOUT is not a positive number.
        """
        environ = os.environ if environ is None else environ

        repo = _env(environ, ENV_REPO) or DEFAULT_REPO
        release_base_url = (
            _env(environ, ENV_RELEASE_BASE_URL)
            or f"https://github.com/{repo}/releases/download"
        )
        latest_release_url = (
            _env(environ, ENV_LATEST_RELEASE_URL)
            or f"https://api.github.com/repos/{repo}/releases/latest"
        )

        install_dir_raw = _env(environ, ENV_INSTALL_DIR)
        install_dir = (
            Path(install_dir_raw).expanduser()
            if install_dir_raw
            else paths.get_default_install_dir()
        )

        timeout = DEFAULT_REQUEST_TIMEOUT
        timeout_raw = _env(environ, ENV_HTTP_TIMEOUT)
        if timeout_raw is not None:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ValueError(f"{ENV_HTTP_TIMEOUT} must be a number, got {timeout_raw!r}")
            if timeout <= 0:
                raise ValueError(f"{ENV_HTTP_TIMEOUT} must be positive, got {timeout_raw!r}")

        return cls(
            release_base_url=release_base_url.rstrip("/"),
            latest_release_url=latest_release_url,
            install_dir=install_dir,
            version_override=_env(environ, ENV_VERSION),
            request_timeout=timeout,
        )

    def with_overrides(
        self,
        *,
        version: Optional[str] = None,
        install_dir: Optional[Path] = None,
        smoke_test: Optional[bool] = None,
    ) -> "InstallerConfig":
        """
        Return a copy with CLI-provided values layered over the environment.
        """
        changes = {}
        if version:
            changes["version_override"] = version
        if install_dir is not None:
            changes["install_dir"] = Path(install_dir).expanduser()
        if smoke_test is not None:
            changes["smoke_test"] = smoke_test
        return replace(self, **changes)
