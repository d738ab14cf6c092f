"""
pdd-dev CLI entry point.

Registered as a console_scripts entry point in pyproject.toml:
    pdd-dev = "pdd.cli:main"

Subcommands:
    pdd-dev install          — Install PDD commands to ~/.claude/commands/
    pdd-dev uninstall [--all] — Remove them again
    pdd-dev update           — Reinstall only if the installed version is stale
    pdd-dev version          — Show tool and installed versions (also -v/--version)
    pdd-dev help             — Show usage and the available slash commands
"""
import argparse
import logging
import sys

from pdd import __version__
from pdd.config_loader import default_config
from pdd.errors import SyncInProgress
from pdd.sync import InstallResult, InstallState, Synchronizer

PROG = "pdd-dev"
REPO_URL = "https://github.com/mesbahtanvir/prd-driven-dev"


def setup_logging(debug: bool = False) -> None:
    """Diagnostics go to stderr; progress output is plain print() to stdout."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="pdd-dev — PRD Driven Development commands for Claude Code",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message")
    parser.add_argument("-v", "--version", action="store_true", help="Show version information")
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("install", help="Install PDD commands to ~/.claude/commands/") \
        .set_defaults(func=_cmd_install)

    uninstall_parser = subparsers.add_parser(
        "uninstall", help="Remove PDD commands from ~/.claude/commands/"
    )
    uninstall_parser.add_argument(
        "--all",
        action="store_true",
        help="Also remove pdd-* commands left behind by older versions",
    )
    uninstall_parser.set_defaults(func=_cmd_uninstall)

    subparsers.add_parser("update", help="Update commands to the latest version") \
        .set_defaults(func=_cmd_update)
    subparsers.add_parser("version", help="Show version information") \
        .set_defaults(func=_cmd_version)
    subparsers.add_parser("help", help="Show this help message") \
        .set_defaults(func=_cmd_help)
    return parser


def main(argv: 'list[str] | None' = None) -> None:
    """Main entry point for the `pdd-dev` CLI command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    if args.version:
        func = _cmd_version
    elif args.help or args.command is None:
        func = _cmd_help
    else:
        func = args.func

    sync = Synchronizer(default_config())
    try:
        func(sync, args)
    except (OSError, SyncInProgress) as exc:
        logging.debug("Command %r failed", args.command, exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _print_install(sync: Synchronizer, result: InstallResult) -> None:
    if result.removed:
        for name in result.removed:
            print(f"  - {name}")
        print(f"  Cleaned up {result.removed_count} old command(s)\n")
    for name in result.installed:
        print(f"  + {name}")
    print(f"\nInstalled {result.installed_count} commands (v{result.version})")
    print("\nYou can now use these commands in any Claude Code session:")
    _print_slash_commands(sync)


def _print_slash_commands(sync: Synchronizer) -> None:
    commands = sync.available_commands()
    width = max((len(name) for name, _ in commands), default=0) + 2
    for name, description in commands:
        print(f"  {name:<{width}}{description}".rstrip())


def _cmd_install(sync: Synchronizer, args: argparse.Namespace) -> None:
    print(f"Installing PDD commands to {sync.target.path}...\n")
    _print_install(sync, sync.install())


def _cmd_uninstall(sync: Synchronizer, args: argparse.Namespace) -> None:
    print(f"Removing PDD commands from {sync.target.path}...\n")
    result = sync.uninstall(prune_legacy=True if args.all else None)
    if result.target_missing:
        print("No commands directory found. Nothing to uninstall.")
        return
    for name in result.removed:
        print(f"  - {name}")
    print(f"\nRemoved {result.removed_count} commands")


def _cmd_update(sync: Synchronizer, args: argparse.Namespace) -> None:
    result = sync.update()
    if result.installed_version is None:
        print("PDD commands not installed. Running install...\n")
    else:
        print(f"Installed version: v{result.installed_version}")
        print(f"Latest version: v{result.current_version}")
        if result.action == "current":
            print("\nAlready up to date!")
            return
        print("\nUpdating commands...\n")
    _print_install(sync, result.install)


def _cmd_version(sync: Synchronizer, args: argparse.Namespace) -> None:
    info = sync.version_info()
    print(f"{PROG} v{info.tool_version}")
    if info.state is InstallState.INSTALLED:
        print(f"Installed commands: v{info.installed_version}")
        if info.outdated:
            print(f'\nWARNING: Installed commands are outdated. Run "{PROG} update" to update.')
    elif info.state is InstallState.INSTALLED_NO_VERSION:
        print("Installed commands carry no version information.")
        print(f'Run "{PROG} install" to reinstall them.')
    else:
        print(f'Commands not installed. Run "{PROG} install" to install.')


def _cmd_help(sync: Synchronizer, args: argparse.Namespace) -> None:
    print(f"""
{PROG} v{__version__} - PRD Driven Development CLI

Usage:
  {PROG} install          Install PDD commands to {sync.target.path}
  {PROG} uninstall        Remove PDD commands installed by this version
  {PROG} uninstall --all  Also remove pdd-* commands from older versions
  {PROG} update           Update commands to latest version
  {PROG} --version        Show version information
  {PROG} --help           Show this help message

After installation, these slash commands are available in Claude Code:
""")
    _print_slash_commands(sync)
    print(f"\nLearn more: {REPO_URL}")


if __name__ == "__main__":
    main()
