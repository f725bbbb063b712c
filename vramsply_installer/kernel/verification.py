import hashlib
from pathlib import Path

from vramsply_installer.internal.errors import ChecksumMismatch, ChecksumNotFound
from vramsply_installer.internal.logging import get_logger
from vramsply_installer.kernel.artifacts import ChecksumManifest

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def calculate_sha256(file_path: Path) -> str:
    h = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_artifact(binary_path: Path, manifest: ChecksumManifest, expected_name: str) -> str:
    """
    Check a downloaded binary against its manifest record.

    The record must match `expected_name` exactly. Returns the verified
    digest; raises ChecksumNotFound or ChecksumMismatch otherwise.
    """
    expected = manifest.lookup(expected_name)
    if expected is None:
        if manifest.digests_for(expected_name):
            message = f"Conflicting checksums for {expected_name} in manifest"
        else:
            message = f"No checksum found for {expected_name} in manifest"
        raise ChecksumNotFound(
            message,
            context={"artifact": expected_name, "entries": len(manifest)},
        )

    actual = calculate_sha256(binary_path)
    if actual.lower() != expected.lower():
        logger.error(
            "Checksum mismatch",
            artifact=expected_name,
            expected=expected,
            actual=actual,
        )
        raise ChecksumMismatch(
            "Checksum verification failed!",
            context={"artifact": expected_name, "expected": expected, "actual": actual},
        )

    logger.info("Checksum verified", artifact=expected_name, sha256=actual)
    return actual
