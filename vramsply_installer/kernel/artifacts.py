"""
Defines the release artifacts the installer works with, and the abstract
contract for the release channel that publishes them.

This is a core part of the Kernel. It defines the 'port' for which
release channel adapters must be provided.
"""
from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

from vramsply_installer.internal.config import MANIFEST_FILE_NAME
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel.platform import TargetTriple

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseAsset:
    """
    A binary published for one (version, target) pair.
    Only a reference: nothing is materialized until it is fetched.
    """
    version: str
    target: TargetTriple
    binary_name: str

    @property
    def filename(self) -> str:
        return f"{self.binary_name}-{self.target}"

    def url(self, release_base_url: str) -> str:
        return release_url(release_base_url, self.version, self.filename)


def release_url(release_base_url: str, version: str, filename: str) -> str:
    return f"{release_base_url.rstrip('/')}/{version}/{filename}"


def manifest_url(release_base_url: str, version: str) -> str:
    return release_url(release_base_url, version, MANIFEST_FILE_NAME)


@dataclass
class ChecksumManifest:
    """
    Ordered (filename, hex digest) records covering every artifact of a release,
    as published in SHA256SUMS.txt.
    """
    entries: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "ChecksumManifest":
        """
        Parse `sha256sum`-style output: "<digest>  <filename>" per line.

        Two-space, single-space and tab separators are all accepted, and the
        binary-mode marker ("*filename") is stripped. Blank lines, comments
        and lines without both fields are skipped.
        """
        entries = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            fields = line.split(None, 1)
            if len(fields) != 2:
                logger.debug("Skipping malformed manifest line", line=lineno)
                continue

            digest, filename = fields[0], fields[1].strip()
            if filename.startswith("*"):
                filename = filename[1:]
            entries.append((filename, digest.lower()))

        return cls(entries=entries)

    @classmethod
    def from_file(cls, path: Path) -> "ChecksumManifest":
        return cls.parse(path.read_text(encoding="utf-8", errors="replace"))

    def digests_for(self, filename: str) -> List[str]:
        return [digest for name, digest in self.entries if name == filename]

    def lookup(self, filename: str) -> Optional[str]:
        """
        Return the digest recorded for exactly this filename.

        Returns None when the filename is absent, or when it is listed more
        than once with conflicting digests.
        """
        digests = set(self.digests_for(filename))
        if len(digests) != 1:
            return None
        return digests.pop()

    def __len__(self) -> int:
        return len(self.entries)


class ReleaseChannel(Protocol):
    """
    The interface (port) for the service that hosts versioned releases.
    """

    @abstractmethod
    def latest_version(self) -> str:
        """
        Look up the tag of the latest published release.

        Raises:
            VersionResolutionFailed: if no usable tag could be obtained.
        """
        ...

    @abstractmethod
    def download(self, url: str, destination: Path) -> Path:
        """
        Fetch a single release object to `destination` with one blocking request.

        Raises:
            DownloadFailed: on any transport error or HTTP error status.
        """
        ...
