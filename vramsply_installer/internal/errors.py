"""
Installer error taxonomy.

Every failure in the install pipeline is fatal. Each error carries a stable
machine-readable code, an optional remediation hint and the concrete values
(platform string, version, URL, digests, paths) needed to self-diagnose.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    UNSUPPORTED_PLATFORM = "E_UNSUPPORTED_PLATFORM"
    VERSION_RESOLUTION = "E_VERSION_RESOLUTION"
    DOWNLOAD = "E_DOWNLOAD"
    CHECKSUM_NOT_FOUND = "E_CHECKSUM_NOT_FOUND"
    CHECKSUM_MISMATCH = "E_CHECKSUM_MISMATCH"
    INSTALL = "E_INSTALL"
    INTERRUPTED = "E_INTERRUPTED"


class InstallerError(Exception):
    """
    Base class for all fatal installer errors.
    """

    code: ErrorCode = ErrorCode.INSTALL
    default_hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        context: Optional[Mapping[str, object]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else self.default_hint
        self.context = {k: v for k, v in (context or {}).items() if v is not None}

    def __str__(self) -> str:
        parts = [self.message]
        for key, value in self.context.items():
            parts.append(f"  {key}: {value}")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)

    def to_dict(self) -> dict:
        payload = {
            "code": self.code.value,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class UnsupportedPlatform(InstallerError):
    code = ErrorCode.UNSUPPORTED_PLATFORM
    default_hint = "Prebuilt binaries exist for x86_64/aarch64 on Linux and macOS only."


class VersionResolutionFailed(InstallerError):
    code = ErrorCode.VERSION_RESOLUTION
    default_hint = "Retry later, or pin a release with VRAM_SUPPLY_AGENT_VERSION=<tag>."


class DownloadFailed(InstallerError):
    code = ErrorCode.DOWNLOAD
    default_hint = "Check your network connection and that the release exists, then rerun."


class ChecksumNotFound(InstallerError):
    code = ErrorCode.CHECKSUM_NOT_FOUND
    default_hint = "The release manifest does not cover this platform; report it to the maintainers."


class ChecksumMismatch(InstallerError):
    code = ErrorCode.CHECKSUM_MISMATCH
    default_hint = "The download is corrupted or has been tampered with. Nothing was installed."


class InstallFailed(InstallerError):
    code = ErrorCode.INSTALL


class InstallInterrupted(InstallerError):
    code = ErrorCode.INTERRUPTED

    def __init__(self, signum: int, signame: str) -> None:
        super().__init__(
            f"Installation interrupted by {signame}",
            context={"signal": signum},
        )
        self.signum = signum


__all__ = [
    "ChecksumMismatch",
    "ChecksumNotFound",
    "DownloadFailed",
    "ErrorCode",
    "InstallFailed",
    "InstallInterrupted",
    "InstallerError",
    "UnsupportedPlatform",
    "VersionResolutionFailed",
]
