"""
A concrete ReleaseChannel backed by GitHub releases, using requests.
This is an 'adapter' in the hexagonal architecture.
"""
from pathlib import Path
from typing import Optional

import requests

from vramsply_installer.internal.config import InstallerConfig
from vramsply_installer.internal.errors import DownloadFailed, VersionResolutionFailed
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel.artifacts import ReleaseChannel

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024
GITHUB_ACCEPT = "application/vnd.github+json"
USER_AGENT = "vramsply-installer"


class GitHubReleaseChannel(ReleaseChannel):
    """
    Resolves the latest tag from the releases API and downloads release
    assets. Every call is a single blocking request; there are no retries.
    """

    def __init__(
        self,
        latest_release_url: str,
        timeout: Optional[float] = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.latest_release_url = latest_release_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    @classmethod
    def from_config(cls, config: InstallerConfig) -> "GitHubReleaseChannel":
        return cls(latest_release_url=config.latest_release_url, timeout=config.request_timeout)

    # ---------------------------------------------------------------------
    # Latest version
    # ---------------------------------------------------------------------

    def latest_version(self) -> str:
        url = self.latest_release_url
        try:
            r = self._session.get(url, headers={"Accept": GITHUB_ACCEPT}, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Latest release lookup failed", url=url, status=status)
            raise VersionResolutionFailed(
                "Failed to determine latest release version",
                context={"url": url, "status": status},
            ) from e
        except requests.RequestException as e:
            logger.error("Latest release lookup failed", url=url, error=str(e))
            raise VersionResolutionFailed(
                "Failed to determine latest release version",
                context={"url": url, "error": e},
            ) from e

        try:
            payload = r.json()
        except ValueError as e:
            logger.error("Latest release response is not JSON", url=url)
            raise VersionResolutionFailed(
                "Failed to determine latest release version: malformed response",
                context={"url": url},
            ) from e

        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag.strip():
            raise VersionResolutionFailed(
                "Failed to determine latest release version: no tag in response",
                context={"url": url},
            )
        return tag.strip()

    # ---------------------------------------------------------------------
    # Downloads
    # ---------------------------------------------------------------------

    def download(self, url: str, destination: Path) -> Path:
        logger.info("Downloading", url=url, destination=str(destination))
        try:
            with self._session.get(url, stream=True, timeout=self.timeout) as r:
                r.raise_for_status()
                with open(destination, "wb") as f:
                    for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Download failed", url=url, status=status)
            raise DownloadFailed(
                f"Download failed with HTTP {status}: {url}",
                context={"url": url, "status": status},
            ) from e
        except requests.RequestException as e:
            logger.error("Download failed", url=url, error=str(e))
            raise DownloadFailed(
                f"Download failed: {url}",
                context={"url": url, "error": e},
            ) from e
        except OSError as e:
            logger.error("Could not write download", url=url, destination=str(destination))
            raise DownloadFailed(
                f"Download failed writing {destination.name}: {e.strerror or e}",
                context={"url": url, "path": destination},
            ) from e

        return destination
