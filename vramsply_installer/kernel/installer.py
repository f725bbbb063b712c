import contextlib
import os
import shutil
import stat
from pathlib import Path

from vramsply_installer.internal.errors import InstallFailed
from vramsply_installer.internal.logging import get_logger

logger = get_logger(__name__)

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def install_binary(verified_binary: Path, install_dir: Path, binary_name: str) -> Path:
    """
    Move an already verified binary to `install_dir/binary_name` and mark it
    executable, replacing any previous install.

    The binary is first moved to a hidden staging name in the install
    directory so the final path only ever holds a complete file.
    """
    target = install_dir / binary_name
    staging = install_dir / f".{binary_name}.partial"

    try:
        install_dir.mkdir(parents=True, exist_ok=True)
        shutil.move(str(verified_binary), str(staging))
        mode = staging.stat().st_mode
        staging.chmod(mode | EXECUTABLE_BITS)
        os.replace(staging, target)
    except OSError as e:
        with contextlib.suppress(OSError):
            staging.unlink(missing_ok=True)
        logger.error("Install failed", path=str(target), error=str(e))
        raise InstallFailed(
            f"Failed to install {binary_name}: {e.strerror or e}",
            context={"path": target, "error": e},
        ) from e

    logger.info("Binary installed", path=str(target))
    return target
