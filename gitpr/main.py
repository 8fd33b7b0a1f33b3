"""git-pr entry point.

Usage: git-pr create [master] | git-pr view | git-pr list [index]

Installed as ``git-pr`` so git runs it for ``git pr <command>``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from gitpr.adapters import GitHubAdapter, GitPlatformAdapter
from gitpr.commands import handle_browse_pr, handle_create, handle_list, handle_view
from gitpr.config import AppConfig, load_config
from gitpr.context import load_context
from gitpr.errors import GitPrError, UsageError
from gitpr.logging import GitPrLogging

COMMANDS = ("create", "view", "list")


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for everything after the command name."""
    common = CommandParser(add_help=False)
    common.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: $GITPR_CONFIG or ~/.config/git-pr/config.yaml)",
    )
    common.add_argument("--verbose", "-v", action="store_true", help="Log git commands and API requests")

    parser = CommandParser(
        prog="git-pr",
        description="Open or update the pull request of the current branch",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", parents=[common], help="Create or update the PR for this branch")
    create.add_argument(
        "base",
        nargs="?",
        choices=["master"],
        help="Compare against master instead of the tracking branch",
    )
    sub.add_parser("view", parents=[common], help="Open this branch's PR in the browser")
    list_ = sub.add_parser("list", parents=[common], help="List open PRs, or open one by index")
    list_.add_argument("index", nargs="?", type=int, help="Index from the list output to open")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace | None:
    """Parse CLI; return None when the first argument is not a known command.

    Raises:
        UsageError: If the command is given arguments it does not accept.
    """
    argv = argv if argv is not None else sys.argv[1:]
    if not argv or argv[0] not in COMMANDS:
        return None
    return build_parser().parse_args(argv)


def build_adapter(config: AppConfig) -> GitPlatformAdapter:
    """GitHub client from config; raises ConfigurationError without a token."""
    return GitHubAdapter(config.require_github_token(), api_url=config.github.api_url)


def run(args: argparse.Namespace, config: AppConfig) -> None:
    """Dispatch one parsed command."""
    log = logging.getLogger("gitpr")
    ctx = load_context(remote=config.repo.default_remote, log=log)
    log.debug("Repository %s on %s, branch %s", ctx.repo, ctx.domain, ctx.branch)

    if args.command == "create":
        handle_create(ctx, config, build_adapter(config), use_master=args.base == "master")
    elif args.command == "view":
        handle_view(ctx, config)
    elif args.command == "list":
        adapter = build_adapter(config)
        if args.index is None:
            handle_list(ctx, adapter)
        else:
            handle_browse_pr(ctx, adapter, args.index)


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate the command, load config, dispatch."""
    argv = list(argv if argv is not None else sys.argv[1:])
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1
    if args is None:
        given = argv[0] if argv else ""
        print(f"Invalid command '{given}'; must be one of: {'/'.join(COMMANDS)}")
        return 1

    try:
        config = load_config(args.config)
        GitPrLogging(config.logging, verbose=args.verbose).setup()
        run(args, config)
    except GitPrError as e:
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logging.getLogger("gitpr").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
