"""
Maps raw host OS / machine identifiers to the target triple used to name
release artifacts.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vramsply_installer.internal import system
from vramsply_installer.internal.errors import UnsupportedPlatform


class Architecture(str, Enum):
    X86_64 = "x86_64"
    AARCH64 = "aarch64"


class OsFamily(str, Enum):
    LINUX_GNU = "unknown-linux-gnu"
    DARWIN = "apple-darwin"


_OS_ALIASES = {
    "Linux": OsFamily.LINUX_GNU,
    "Darwin": OsFamily.DARWIN,
}

_ARCH_ALIASES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "aarch64": Architecture.AARCH64,
    "arm64": Architecture.AARCH64,
}


@dataclass(frozen=True)
class TargetTriple:
    architecture: Architecture
    os_family: OsFamily

    def __str__(self) -> str:
        return f"{self.architecture.value}-{self.os_family.value}"


def resolve_platform(os_name: str, machine: str) -> TargetTriple:
    """
    Resolve a (uname -s, uname -m) pair into a TargetTriple.

    There is no fallback target: any value outside the known set raises
    UnsupportedPlatform naming it.
    """
    os_family = _OS_ALIASES.get(os_name)
    if os_family is None:
        raise UnsupportedPlatform(
            f"Unsupported operating system: {os_name or '<empty>'}",
            context={"os": os_name, "arch": machine},
        )

    architecture = _ARCH_ALIASES.get(machine)
    if architecture is None:
        raise UnsupportedPlatform(
            f"Unsupported architecture: {machine or '<empty>'}",
            context={"os": os_name, "arch": machine},
        )

    return TargetTriple(architecture=architecture, os_family=os_family)


def detect_platform(os_name: Optional[str] = None, machine: Optional[str] = None) -> TargetTriple:
    """Resolve the current host, or the explicitly given identifiers."""
    return resolve_platform(
        os_name if os_name is not None else system.get_os_info(),
        machine if machine is not None else system.get_cpu_arch(),
    )
