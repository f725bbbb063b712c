from vramsply_installer.internal.config import InstallerConfig
from vramsply_installer.internal.errors import VersionResolutionFailed
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel.artifacts import ReleaseChannel

logger = get_logger(__name__)


def resolve_version(config: InstallerConfig, channel: ReleaseChannel) -> str:
    """
    Decide which release to install.

    A pinned version is used verbatim without touching the network. Otherwise
    the channel's latest release tag is used. Tags are opaque: no format
    validation is applied.
    """
    if config.version_override:
        logger.info("Using pinned version", version=config.version_override)
        return config.version_override

    logger.info("Looking up latest release", url=config.latest_release_url)
    version = channel.latest_version()
    if not version or not version.strip():
        raise VersionResolutionFailed(
            "Failed to determine latest release version",
            context={"url": config.latest_release_url},
        )

    logger.info("Resolved latest version", version=version)
    return version
