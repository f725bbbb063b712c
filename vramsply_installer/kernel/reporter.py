"""
Post-install checks: PATH membership and a smoke-test invocation of the
installed binary. Nothing here modifies user configuration.
"""
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from vramsply_installer.internal.logging import get_logger

logger = get_logger(__name__)

SMOKE_TEST_FLAG = "--version"
SMOKE_TEST_TIMEOUT = 30


@dataclass
class SmokeTestResult:
    ok: bool
    returncode: Optional[int]
    output: str


def _normalize(entry: str) -> str:
    return os.path.normpath(os.path.expanduser(entry))


def is_on_path(install_dir: Path, path_env: Optional[str] = None) -> bool:
    """
    Exact directory membership of install_dir in the search path.
    """
    if path_env is None:
        path_env = os.environ.get("PATH", "")
    wanted = _normalize(str(install_dir))
    return any(_normalize(entry) == wanted for entry in path_env.split(os.pathsep) if entry)


def path_remediation(install_dir: Path) -> List[str]:
    """
    Lines telling the user how to put install_dir on PATH themselves.
    """
    return [
        f"WARNING: {install_dir} is not in your PATH.",
        "Add it by running:",
        f'  export PATH="{install_dir}:${{PATH}}"',
        "",
        "To make this permanent, add the line above to your shell profile "
        "(~/.bashrc, ~/.zshrc, etc.)",
    ]


def smoke_test(binary: Path, timeout: float = SMOKE_TEST_TIMEOUT) -> SmokeTestResult:
    """
    Run `binary --version`.

    Failures (non-zero exit, exec error, timeout) are reported in the
    result rather than raised: the binary is already installed by now.
    """
    command = [str(binary), SMOKE_TEST_FLAG]
    try:
        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Smoke test timed out", binary=str(binary), timeout=timeout)
        return SmokeTestResult(ok=False, returncode=None, output=f"timed out after {timeout}s")
    except OSError as e:
        logger.warning("Smoke test could not execute binary", binary=str(binary), error=str(e))
        return SmokeTestResult(ok=False, returncode=None, output=str(e))

    output = (proc.stdout or proc.stderr or "").strip()
    if proc.returncode != 0:
        logger.warning("Smoke test failed", binary=str(binary), returncode=proc.returncode)
    else:
        logger.info("Smoke test passed", binary=str(binary), output=output)
    return SmokeTestResult(ok=proc.returncode == 0, returncode=proc.returncode, output=output)
