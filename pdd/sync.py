"""
Synchronizer — reconciles the bundled catalog with ~/.claude/commands/.

States of an installation, as seen from the target directory:

  NOT_INSTALLED          no <namespace>-*.md files at all
  INSTALLED              sentinel present and stamped with a version
  INSTALLED_NO_VERSION   recognized files present, but the sentinel is missing
                         or carries no stamp (hand-edited, or a stale leftover)

install() is a full overwrite plus pruning of recognized files the current
catalog no longer ships, so it heals any prior partial or corrupted state.
uninstall() is narrower: by default it only removes the files this version
would install. update() is install() guarded by a version check.

Filesystem failures propagate immediately; nothing is rolled back. Re-running
install() is the recovery path.
"""
import contextlib
import enum
import logging
from dataclasses import dataclass

from pdd import marker
from pdd.catalog import CommandArtifact, list_source
from pdd.config_loader import SyncConfig
from pdd.lock import TargetLock
from pdd.target import TargetDirectory


class InstallState(enum.Enum):
    NOT_INSTALLED = "not-installed"
    INSTALLED = "installed"
    INSTALLED_NO_VERSION = "installed-no-version"


@dataclass(frozen=True)
class InstallResult:
    installed: tuple[str, ...]
    removed: tuple[str, ...]
    version: str

    @property
    def installed_count(self) -> int:
        return len(self.installed)

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(frozen=True)
class UninstallResult:
    removed: tuple[str, ...]
    target_missing: bool = False

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(frozen=True)
class UpdateResult:
    action: str  # "installed", "updated" or "current"
    installed_version: 'str | None'
    current_version: str
    install: 'InstallResult | None' = None


@dataclass(frozen=True)
class VersionInfo:
    tool_version: str
    installed_version: 'str | None'
    state: InstallState

    @property
    def outdated(self) -> bool:
        return self.installed_version is not None and self.installed_version != self.tool_version


class Synchronizer:

    def __init__(self, config: SyncConfig) -> None:
        self.config = config
        self.target = TargetDirectory(config.target_dir, config.sentinel_name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def catalog(self) -> list[CommandArtifact]:
        return list_source(self.config.source_dir, self.config.extension)

    def installed_version(self) -> 'str | None':
        """Version stamped into the installed sentinel, or None."""
        content = self.target.read_sentinel()
        if content is None:
            return None
        version = marker.extract(content, self.config.namespace)
        if version is None:
            logging.warning(
                "%s has no version marker; treating installed version as unknown.",
                self.target.path / self.config.sentinel_name,
            )
        return version

    def recognized_installed(self) -> set[str]:
        return {n for n in self.target.list_names() if self.config.is_recognized(n)}

    def state(self) -> InstallState:
        return self._state_for(self.installed_version())

    def _state_for(self, version: 'str | None') -> InstallState:
        if version is not None:
            return InstallState.INSTALLED
        if self.recognized_installed():
            return InstallState.INSTALLED_NO_VERSION
        return InstallState.NOT_INSTALLED

    def version_info(self) -> VersionInfo:
        installed = self.installed_version()
        return VersionInfo(
            tool_version=self.config.version,
            installed_version=installed,
            state=self._state_for(installed),
        )

    def available_commands(self) -> list[tuple[str, str]]:
        """(slash name, description) for every command in the catalog."""
        return [(a.slash_name, a.description) for a in self.catalog()]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _lock(self):
        if not self.config.use_lock:
            return contextlib.nullcontext()
        return TargetLock(self.target.path)

    def install(self) -> InstallResult:
        """
        Write every catalog artifact, stamped with the current version, and
        delete recognized artifacts the catalog no longer contains.

        Idempotent: a second run with the same catalog and version writes
        identical bytes and removes nothing.
        """
        artifacts = self.catalog()
        wanted = {a.filename for a in artifacts}
        version = self.config.version

        self.target.ensure()
        with self._lock():
            legacy = sorted(self.recognized_installed() - wanted)
            removed = []
            for name in legacy:
                if self.target.remove(name):
                    removed.append(name)
            if removed:
                logging.info("Removed %d legacy command(s): %s", len(removed), ", ".join(removed))

            installed = []
            for artifact in artifacts:
                content = marker.stamp(artifact.content, self.config.namespace, version)
                self.target.write(artifact.filename, content)
                installed.append(artifact.filename)

        logging.info("Installed %d command(s) at v%s into %s", len(installed), version, self.target.path)
        return InstallResult(installed=tuple(installed), removed=tuple(removed), version=version)

    def uninstall(self, prune_legacy: 'bool | None' = None) -> UninstallResult:
        """
        Remove installed artifacts.

        By default only names in the current catalog are removed; legacy
        artifacts from older versions are left alone. With prune_legacy=True
        (or SyncConfig.prune_legacy_on_uninstall) every recognized artifact
        goes. A missing target directory is not an error and is not created.
        """
        if prune_legacy is None:
            prune_legacy = self.config.prune_legacy_on_uninstall

        if not self.target.exists():
            return UninstallResult(removed=(), target_missing=True)

        artifacts = self.catalog()
        with self._lock():
            present = self.target.list_names()
            if prune_legacy:
                doomed = sorted(n for n in present if self.config.is_recognized(n))
            else:
                doomed = [a.filename for a in artifacts if a.filename in present]

            removed = []
            for name in doomed:
                if self.target.remove(name):
                    removed.append(name)

        logging.info("Uninstalled %d command(s) from %s", len(removed), self.target.path)
        return UninstallResult(removed=tuple(removed))

    def update(self) -> UpdateResult:
        """Install unless the sentinel already carries the current version."""
        current = self.config.version
        installed = self.installed_version()

        if installed is None:
            return UpdateResult("installed", None, current, self.install())
        if installed == current:
            logging.debug("Installed commands already at v%s", current)
            return UpdateResult("current", installed, current)
        return UpdateResult("updated", installed, current, self.install())
