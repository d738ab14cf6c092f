"""
Source catalog — the command templates bundled with this version of pdd-dev.

The catalog is read-only at runtime. Its file names are the "desired set"
that install() writes into the target directory.
"""
import re
from dataclasses import dataclass
from pathlib import Path

from pdd.errors import CatalogUnavailable

_FRONTMATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*$", re.DOTALL | re.MULTILINE)
_DESCRIPTION_RE = re.compile(r"^description:\s*(.*?)\s*$", re.MULTILINE)


@dataclass(frozen=True)
class CommandArtifact:
    filename: str
    content: str

    @property
    def slash_name(self) -> str:
        """The name a user types in Claude Code, e.g. /pdd-prd."""
        return "/" + Path(self.filename).stem

    @property
    def description(self) -> str:
        """One-line description from the front matter, or '' if there is none."""
        fm = _FRONTMATTER_RE.search(self.content)
        if not fm:
            return ""
        desc = _DESCRIPTION_RE.search(fm.group(1))
        return desc.group(1).strip("'\"") if desc else ""


def list_source(source_dir: Path, extension: str) -> list[CommandArtifact]:
    """
    Return every bundled artifact with the given extension, sorted by name.

    Raises CatalogUnavailable if source_dir does not exist. A correctly
    packaged distribution always ships it, so this is not recovered.
    """
    if not source_dir.is_dir():
        raise CatalogUnavailable(
            f"Command templates directory not found: {source_dir}\n"
            "The pdd-dev installation is incomplete. Reinstall the package."
        )
    suffix = f".{extension}"
    return [
        CommandArtifact(path.name, path.read_text(encoding="utf-8"))
        for path in sorted(source_dir.iterdir())
        if path.is_file() and path.name.endswith(suffix)
    ]
