"""
pdd-dev — installs the PRD Driven Development slash commands into Claude Code.

The markdown templates in pdd/commands/ are copied to ~/.claude/commands/,
each stamped with the package version so later runs can detect stale
installs and upgrade or remove them cleanly.
"""
__version__ = "2.1.0"
