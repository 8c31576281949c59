"""Command line entry point for Pages Publisher."""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .services.config_manager import ConfigManager
from .services.publish_service import PagesPublisher, clean_cache
from .utils.exceptions import PublisherError
from .utils.logging_config import set_log_level, setup_logging

logger = logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "--config", type=Path, default=default, help="Path to a JSON config file"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=default,
        help="Logging level (default: from config, else INFO)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `publish` and `clean` commands."""
    parser = argparse.ArgumentParser(
        prog="pages-publisher",
        description="Publish a directory of static files to a git branch.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_common_arguments(parser, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    # Accepted after the command too, without clobbering a value given before it
    common = argparse.ArgumentParser(add_help=False)
    add_common_arguments(common, default=argparse.SUPPRESS)

    p = sub.add_parser("publish", parents=[common], help="Publish a directory to a branch")
    p.add_argument("dir", help="Base directory containing the files to publish")
    p.add_argument("-s", "--src", help='Glob of files to publish (default: "**/*")')
    p.add_argument("-b", "--branch", help='Branch to publish to (default: "gh-pages")')
    p.add_argument("-e", "--dest", dest="destination", help="Target directory within the branch")
    p.add_argument("-r", "--remote", help='Remote name (default: "origin")')
    p.add_argument("--repo", help="Repository URL (default: URL of the remote)")
    p.add_argument("-m", "--message", help='Commit message (default: "Updates")')
    p.add_argument("-g", "--tag", help="Tag to create after committing")
    p.add_argument("-u", "--user", help='Commit identity as "Name <email>"')
    p.add_argument("-v", "--remove", help="Glob of files to remove before copying")
    p.add_argument("-p", "--depth", type=int, help="Clone depth (default: 1)")
    p.add_argument("--git", help='Git executable (default: "git")')
    p.add_argument("--cache-dir", help="Directory for cached clones")
    p.add_argument(
        "-t", "--dotfiles", action="store_true", default=None, help="Include dot-files"
    )
    p.add_argument(
        "-a", "--add", action="store_true", default=None,
        help="Only add files, never remove existing ones",
    )
    p.add_argument(
        "-x", "--silent", action="store_true", default=None,
        help="Hide the repository URL in output",
    )
    p.add_argument(
        "-n", "--no-push", dest="push", action="store_false", default=None,
        help="Commit only, without pushing",
    )
    p.add_argument(
        "-f", "--no-history", dest="history", action="store_false", default=None,
        help="Force push a branch without history",
    )

    c = sub.add_parser("clean", parents=[common], help="Remove cached clones")
    c.add_argument("--cache-dir", help="Directory for cached clones")

    return parser


PUBLISH_OPTION_NAMES = (
    "src",
    "branch",
    "destination",
    "remote",
    "repo",
    "message",
    "tag",
    "user",
    "remove",
    "depth",
    "git",
    "cache_dir",
    "dotfiles",
    "add",
    "silent",
    "push",
    "history",
)


def run_publish(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    overrides = {name: getattr(args, name, None) for name in PUBLISH_OPTION_NAMES}
    options = config_manager.resolve_options(overrides)
    result = PagesPublisher(options).publish(args.dir)
    logger.info(
        f"Published {len(result.files)} files to {options.branch}"
        + ("" if result.pushed else " (not pushed)")
    )
    return 0


def run_clean(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    cache_dir = args.cache_dir or config_manager.config.defaults.get("cache_dir")
    clean_cache(cache_dir)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level or "INFO")

    try:
        config_manager = ConfigManager(args.config)
        config = config_manager.config
        level = args.log_level or config.log_level
        if config.log_to_file:
            setup_logging(level=level, log_to_file=True)
        else:
            set_log_level(level)

        if args.command == "clean":
            return run_clean(args, config_manager)
        return run_publish(args, config_manager)

    except PublisherError as e:
        logger.error(e.message)
        if e.suggested_action:
            logger.error(e.suggested_action)
        logger.debug(f"Error details: {e.to_dict()}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
