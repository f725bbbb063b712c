"""
Ephemeral, run-scoped download directory, and the signal guard that makes
its cleanup fire on signal-driven termination too.
"""

import shutil
import signal
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from vramsply_installer.internal.errors import InstallInterrupted
from vramsply_installer.internal.logging import get_logger

logger = get_logger(__name__)

WORKSPACE_PREFIX = "vramsply-install-"

# SIGINT already surfaces as KeyboardInterrupt.
DEFAULT_GUARDED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class Workspace:
    """
    Owns a freshly created temporary directory for the duration of one run.

    The directory is removed when the context exits, whatever the exit path.
    """

    def __init__(self, root: Optional[Path] = None):
        self._root = root
        self.path: Optional[Path] = None

    def __enter__(self) -> "Workspace":
        if self._root is not None:
            self._root.mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=self._root))
        logger.debug("Workspace created", path=str(self.path))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def file(self, name: str) -> Path:
        if self.path is None:
            raise RuntimeError("Workspace is not active")
        return self.path / name

    def cleanup(self) -> None:
        if self.path is None:
            return
        path, self.path = self.path, None
        # Cleanup must never mask the error that ended the run.
        with _signals_deferred(DEFAULT_GUARDED_SIGNALS):
            shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Workspace could not be fully removed", path=str(path))
        else:
            logger.debug("Workspace removed", path=str(path))


@contextmanager
def _signals_deferred(signals: Sequence[int]) -> Iterator[None]:
    """
    Block `signals` for the duration of the block. Anything that arrives
    meanwhile is delivered once the block ends.
    """
    if (
        not signals
        or not hasattr(signal, "pthread_sigmask")
        or threading.current_thread() is not threading.main_thread()
    ):
        yield
        return

    previous = signal.pthread_sigmask(signal.SIG_BLOCK, signals)
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


@contextmanager
def signal_guard(signals: Sequence[int] = DEFAULT_GUARDED_SIGNALS) -> Iterator[None]:
    """
    Turn termination signals into an InstallInterrupted exception for the
    duration of the block, so that `finally` / `__exit__` cleanup runs.

    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _raise(signum, frame):
        raise InstallInterrupted(signum, signal.Signals(signum).name)

    previous = {}
    try:
        for signum in signals:
            previous[signum] = signal.signal(signum, _raise)
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
