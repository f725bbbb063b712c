"""
This module defines the install service of the kernel.
It runs the install pipeline strictly in order, delegating network access
to a ReleaseChannel adapter:

    platform -> version -> fetch -> verify -> install -> report

The first failure aborts the run. The download workspace is removed on
every exit path, including termination signals.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from vramsply_installer.internal.config import MANIFEST_FILE_NAME, InstallerConfig
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel import reporter
from vramsply_installer.kernel.artifacts import (
    ChecksumManifest,
    ReleaseAsset,
    ReleaseChannel,
    manifest_url,
)
from vramsply_installer.kernel.installer import install_binary
from vramsply_installer.kernel.platform import TargetTriple, detect_platform
from vramsply_installer.kernel.verification import verify_artifact
from vramsply_installer.kernel.version import resolve_version
from vramsply_installer.kernel.workspace import Workspace, signal_guard

logger = get_logger(__name__)


@dataclass
class InstallProgress:
    """
    A single narration event emitted while the pipeline runs.
    """
    stage: str  # 'platform', 'version', 'download', 'verify', 'install', 'report'
    message: str
    details: dict = field(default_factory=dict)


@dataclass
class InstallOutcome:
    target: TargetTriple
    version: str
    sha256: str
    installed_path: Path
    on_path: bool
    smoke_test: Optional[reporter.SmokeTestResult]


ProgressCallback = Callable[[InstallProgress], None]


class InstallerService:
    """
    Orchestrates one install run, from platform detection to the smoke test.
    """

    def __init__(
        self,
        config: InstallerConfig,
        channel: ReleaseChannel,
        os_name: Optional[str] = None,
        machine: Optional[str] = None,
    ):
        self.config = config
        self.channel = channel
        self._os_name = os_name
        self._machine = machine
        self._progress: Optional[ProgressCallback] = None

    def _emit(self, stage: str, message: str, **details) -> None:
        if self._progress is not None:
            self._progress(InstallProgress(stage=stage, message=message, details=details))

    def run(self, progress: Optional[ProgressCallback] = None) -> InstallOutcome:
        self._progress = progress
        try:
            with signal_guard():
                return self._run()
        finally:
            self._progress = None

    def _run(self) -> InstallOutcome:
        config = self.config

        # 1. Platform
        target = detect_platform(self._os_name, self._machine)
        logger.info("Detected platform", target=str(target))
        self._emit("platform", f"Detected platform: {target}", target=str(target))

        # 2. Version
        if config.version_override:
            version = resolve_version(config, self.channel)
            self._emit("version", f"Using pinned version: {version}", version=version, pinned=True)
        else:
            self._emit("version", "Fetching latest release...")
            version = resolve_version(config, self.channel)
            self._emit("version", f"Latest version: {version}", version=version, pinned=False)

        asset = ReleaseAsset(version=version, target=target, binary_name=config.binary_name)

        with Workspace(config.workspace_root) as workspace:
            # 3. Fetch
            binary_url = asset.url(config.release_base_url)
            checksums_url = manifest_url(config.release_base_url, version)

            self._emit("download", f"Downloading {asset.filename}...", url=binary_url)
            binary_path = self.channel.download(binary_url, workspace.file(config.binary_name))

            self._emit("download", "Downloading checksums...", url=checksums_url)
            manifest_path = self.channel.download(checksums_url, workspace.file(MANIFEST_FILE_NAME))

            # 4. Verify
            self._emit("verify", "Verifying checksum...")
            manifest = ChecksumManifest.from_file(manifest_path)
            digest = verify_artifact(binary_path, manifest, asset.filename)
            self._emit("verify", "Checksum verified.", sha256=digest)

            # 5. Install
            installed_path = install_binary(binary_path, config.install_dir, config.binary_name)
            self._emit("install", f"Installed {config.binary_name} to {installed_path}", path=str(installed_path))

        # 6. Report
        on_path = reporter.is_on_path(config.install_dir)
        if not on_path:
            self._emit(
                "report",
                f"{config.install_dir} is not in your PATH",
                remediation=reporter.path_remediation(config.install_dir),
            )

        smoke = None
        if config.smoke_test:
            smoke = reporter.smoke_test(installed_path)
            self._emit("report", smoke.output or "", ok=smoke.ok, returncode=smoke.returncode)

        logger.info(
            "Install completed",
            version=version,
            target=str(target),
            path=str(installed_path),
            on_path=on_path,
        )
        return InstallOutcome(
            target=target,
            version=version,
            sha256=digest,
            installed_path=installed_path,
            on_path=on_path,
            smoke_test=smoke,
        )
