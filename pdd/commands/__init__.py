"""
PDD slash command source files.

These Markdown files define Claude Code slash commands named /pdd-<command>.
`pdd-dev install` copies them to ~/.claude/commands/, prefixing each with a
version marker line. pdd-help.md is the sentinel whose marker records the
installed version.

Manual installation (development, no version marker):
    mkdir -p ~/.claude/commands
    cp pdd/commands/pdd-*.md ~/.claude/commands/
"""
