"""
Version marker embedded in installed command files.

Every installed artifact starts with a single HTML comment line:

    <!-- pdd v2.1.0 -->

Claude Code renders the command body as markdown, so the comment never shows
up in the prompt. Source templates in pdd/commands/ carry no marker.
"""
import re


def marker_line(namespace: str, version: str) -> str:
    return f"<!-- {namespace} v{version} -->"


def stamp(content: str, namespace: str, version: str) -> str:
    """Prepend the version marker line to unstamped content."""
    return f"{marker_line(namespace, version)}\n{content}"


def extract(content: str, namespace: str) -> 'str | None':
    """
    Return the version recorded in content, or None if no marker matches.

    Never raises on arbitrary text: a hand-edited or foreign file simply has
    no version.
    """
    pattern = re.compile(r"<!-- " + re.escape(namespace) + r" v(\d+(?:\.\d+)*) -->")
    match = pattern.search(content)
    return match.group(1) if match else None
