"""
Target directory manager — the installed set in ~/.claude/commands/.

All mutations go through this class so that every filesystem failure is
reported as TargetWriteFailure naming the offending path. Absence is never
an error here: a missing directory lists as empty, a missing file removes
as a no-op.
"""
import logging
from pathlib import Path

from pdd.errors import TargetWriteFailure


def _failure(action: str, path: Path, exc: OSError) -> TargetWriteFailure:
    message = f"Cannot {action} {path}: {exc.strerror or exc}"
    if exc.errno:
        return TargetWriteFailure(exc.errno, message)
    return TargetWriteFailure(message)


class TargetDirectory:

    def __init__(self, path: Path, sentinel_name: str) -> None:
        self.path = path
        self.sentinel_name = sentinel_name

    def exists(self) -> bool:
        return self.path.is_dir()

    def ensure(self) -> None:
        """Create the directory and its parents; no-op if it already exists."""
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise _failure("create", self.path, exc) from exc

    def list_names(self) -> set[str]:
        """Names of every entry in the directory, or an empty set if it is absent."""
        if not self.path.is_dir():
            return set()
        return {entry.name for entry in self.path.iterdir()}

    def write(self, filename: str, content: str) -> None:
        """
        Replace filename with content.

        Writes to <filename>.tmp then calls Path.replace(), so readers see
        either the old file or the complete new one.
        """
        dest = self.path / filename
        tmp = self.path / f"{filename}.tmp"
        try:
            # newline="" keeps the template's line endings byte-for-byte
            with open(tmp, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            tmp.replace(dest)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise _failure("write", dest, exc) from exc
        logging.debug("Wrote %s (%d chars)", dest, len(content))

    def remove(self, filename: str) -> bool:
        """Delete filename. Returns False if it was already gone."""
        path = self.path / filename
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise _failure("remove", path, exc) from exc
        logging.debug("Removed %s", path)
        return True

    def read_sentinel(self) -> 'str | None':
        """Content of the sentinel artifact, or None if it is not installed."""
        path = self.path / self.sentinel_name
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8", errors="replace")
