"""
Exceptions raised by the pdd synchronization core.

Absence (no target directory, no sentinel, a file already gone) is never an
error. Only the conditions below abort an operation.
"""


class CatalogUnavailable(FileNotFoundError):
    """The bundled command directory is missing — a packaging defect."""


class TargetWriteFailure(OSError):
    """Creating, writing or deleting inside the target directory failed."""


class SyncInProgress(RuntimeError):
    """Another live process holds the lock on the target directory."""
