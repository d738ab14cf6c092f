"""
config_loader.py — Paths and settings for the pdd synchronizer.

Provides:
  - claude_dir(): the Claude Code user config directory (~/.claude)
  - load_settings(): best-effort read of <claude_dir>/pdd-dev.json
  - default_config(): the SyncConfig used by the CLI

The Synchronizer never reads these globals itself; it receives a SyncConfig,
so tests point it at tmp_path instead of the real home directory.
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pdd import __version__

NAMESPACE = "pdd"
EXTENSION = "md"
SETTINGS_FILENAME = "pdd-dev.json"

# Templates ship inside the package as data files.
COMMANDS_SRC_DIR = Path(__file__).parent / "commands"


def claude_dir() -> Path:
    """Return $CLAUDE_CONFIG_DIR if set, else ~/.claude."""
    override = os.environ.get("CLAUDE_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".claude"


@dataclass(frozen=True)
class SyncConfig:
    """Everything the Synchronizer needs to know about one installation."""
    source_dir: Path
    target_dir: Path
    version: str = __version__
    namespace: str = NAMESPACE
    extension: str = EXTENSION
    prune_legacy_on_uninstall: bool = False
    use_lock: bool = True

    @property
    def sentinel_name(self) -> str:
        return f"{self.namespace}-help.{self.extension}"

    def is_recognized(self, filename: str) -> bool:
        """True if filename follows the <namespace>-<command>.<ext> convention."""
        return (
            filename.startswith(f"{self.namespace}-")
            and filename.endswith(f".{self.extension}")
        )


def _settings_path() -> Path:
    return claude_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """
    Read <claude_dir>/pdd-dev.json and return its contents as a dict.

    Returns {} if:
    - The file does not exist (the common case).
    - The file contains invalid JSON or something other than an object.

    Never raises — settings are optional. Logs a warning on parse error.
    """
    path = _settings_path()
    if not path.exists():
        logging.debug("No settings file at %s, using defaults.", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logging.warning("Failed to load settings from %s, using defaults.", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logging.warning("%s does not contain a JSON object, ignoring.", path)
        return {}
    logging.debug("Loaded settings from %s: %s", path, list(data.keys()))
    return data


def default_config(settings: 'dict | None' = None) -> SyncConfig:
    """Build the SyncConfig for the invoking user."""
    if settings is None:
        settings = load_settings()
    return SyncConfig(
        source_dir=COMMANDS_SRC_DIR,
        target_dir=claude_dir() / "commands",
        prune_legacy_on_uninstall=bool(settings.get("prune_legacy_on_uninstall", False)),
        use_lock=bool(settings.get("lock", True)),
    )
