"""
Advisory lock around a sync operation on the target directory.

Two pdd-dev processes writing the same directory at once would interleave
writes and deletes. The lock is a PID file inside the target directory; its
name does not match <namespace>-*.md, so legacy cleanup never touches it.
"""
import logging
import os
from pathlib import Path

import psutil

from pdd.errors import SyncInProgress, TargetWriteFailure

LOCK_FILENAME = ".pdd-sync.lock"


def _holder_alive(pid: int) -> bool:
    """True if pid is a running Python process other than ourselves."""
    if pid == os.getpid() or not psutil.pid_exists(pid):
        return False
    try:
        return "python" in psutil.Process(pid).name().lower()
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return False  # PID reuse or access denied — treat as stale


class TargetLock:
    """
    PID-file lock for one target directory.

    - Lock file exists and its PID is a live Python process: SyncInProgress.
    - Lock file exists but is stale or corrupt: removed, lock taken.
    - No lock file: current PID written; removed again on exit.
    """

    def __init__(self, directory: Path) -> None:
        self.path = directory / LOCK_FILENAME

    def acquire(self) -> None:
        if self.path.exists():
            try:
                pid = int(self.path.read_text(encoding="utf-8").strip())
            except (ValueError, OSError):
                pid = None  # Corrupt lock file — overwrite it
            if pid is not None and _holder_alive(pid):
                raise SyncInProgress(
                    f"Another pdd-dev process (PID {pid}) is updating {self.path.parent}.\n"
                    f"Wait for it to finish, or delete {self.path} if it is not running."
                )
            logging.info("Removing stale lock file %s", self.path)
            self.path.unlink(missing_ok=True)

        try:
            self.path.write_text(str(os.getpid()), encoding="utf-8")
        except OSError as exc:
            raise TargetWriteFailure(f"Cannot write lock file {self.path}: {exc}") from exc
        logging.debug("Lock acquired: %s (PID %d)", self.path, os.getpid())

    def release(self) -> None:
        self.path.unlink(missing_ok=True)
        logging.debug("Lock released: %s", self.path)

    def __enter__(self) -> 'TargetLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, exc_tb) -> None:
        self.release()
