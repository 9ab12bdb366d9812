"""
tender launcher command-line entry points.

The launcher only handles --help and --version itself. Every other
argument is forwarded verbatim to the tender binary, which is located or
downloaded by BinaryResolver and run by run_binary().

Two console scripts are installed:
    tender     : forwards all arguments
    tender-ui  : interactive-only; rejects arguments with exit code 2
"""

import argparse
import logging
import os
import sys
from typing import Callable, List, Mapping, Optional

from tender_launcher.binary.resolver import BinaryResolver
from tender_launcher.binary.supervisor import run_binary
from tender_launcher.core.config import (
    BINARY_PATH_ENV,
    CACHE_DIR_ENV,
    LOG_LEVEL_ENV,
    RELEASE_BASE_URL_ENV,
    TIMEOUT_ENV,
    LauncherConfig,
    get_package_version,
)
from tender_launcher.core.exceptions import LauncherError

logger = logging.getLogger(__name__)

HELP_FLAGS = ("--help", "-h")
VERSION_FLAGS = ("--version", "-v")

DESCRIPTION = """\
Purpose:
  Manage autonomous OpenCode runs with GitHub Actions workflows.
  OpenCode users only: tender reuses your existing opencode.json/.opencode setup.
  Workflow files are the source of truth (no sidecar metadata files).

Coding Agent Guide:
  1. Inspect current tenders with `ls`.
  2. Use `add` or `update` to define automation declaratively.
  3. Use `run` to trigger workflow_dispatch runs immediately.
  4. Commit generated workflow changes under .github/workflows.

Commands:
  init            Ensure .github/workflows exists
  add             Add a tender non-interactively (agent-friendly)
  update          Update a tender non-interactively (agent-friendly)
  ls              List managed tender workflows
  run             Trigger an on-demand tender now via GitHub CLI
  rm              Remove a tender workflow
  help [command]  Show command help

Examples:
  tender ls
  tender add --name nightly --agent Build --cron "0 9 * * 1"
  tender run nightly --prompt "review and commit"
  tender help add
"""

EPILOG = f"""\
Environment:
  {BINARY_PATH_ENV:<24} Run this binary instead of downloading one
  {CACHE_DIR_ENV:<24} Cache directory for downloaded binaries
  {RELEASE_BASE_URL_ENV:<24} Release download base URL
  {TIMEOUT_ENV:<24} Download timeout in seconds (default: 60)
  {LOG_LEVEL_ENV:<24} Launcher log level (default: WARNING)
"""

INTERACTIVE_USAGE_ERROR = (
    "tender-ui takes no arguments; use `tender <command>` for non-interactive use"
)


class CLI:
    """tender launcher command-line interface."""

    def __init__(
        self,
        prog: str = "tender",
        interactive_only: bool = False,
        config: Optional[LauncherConfig] = None,
        fetcher: Optional[Callable] = None,
    ):
        """
        Initialize CLI.

        Args:
            prog: Program name shown in help and error messages
            interactive_only: Reject forwarded arguments (tender-ui)
            config: Pre-built configuration (default: read from environment)
            fetcher: Download function passed to BinaryResolver
        """
        self.prog = prog
        self.interactive_only = interactive_only
        self.config = config
        self.fetcher = fetcher
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create the parser used to render help text.

        Arguments are not parsed with it: anything that is not a launcher
        flag belongs to the delegated binary.
        """
        if self.interactive_only:
            usage = f"{self.prog} [--help] [--version]"
        else:
            usage = f"{self.prog} [--help] [--version] <command> [args...]"

        parser = argparse.ArgumentParser(
            prog=self.prog,
            usage=usage,
            description=DESCRIPTION,
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            add_help=False,
        )
        parser.add_argument(*HELP_FLAGS, action="store_true", help="Show this help")
        parser.add_argument(
            *VERSION_FLAGS, action="store_true", help="Print the launcher version"
        )
        return parser

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments (uses sys.argv[1:] if None)

        Returns:
            Exit code: 0 for help/version, the child's exit code when
            delegating, 2 for rejected arguments, 1 on launcher failure
        """
        if args is None:
            args = sys.argv[1:]

        if any(arg in HELP_FLAGS for arg in args):
            self.parser.print_help(sys.stdout)
            return 0

        if any(arg in VERSION_FLAGS for arg in args):
            version = self.config.version if self.config else get_package_version()
            sys.stdout.write(f"{version}\n")
            return 0

        if self.interactive_only and args:
            print(INTERACTIVE_USAGE_ERROR, file=sys.stderr)
            return 2

        environ = self.config.environ if self.config else os.environ
        self._configure_logging(environ)

        try:
            return self._delegate(args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except LauncherError as e:
            print(f"{self.prog}: {e}", file=sys.stderr)
            return 1

    def _delegate(self, args: List[str]) -> int:
        config = self.config or LauncherConfig.from_environment()
        resolution = BinaryResolver(config, fetcher=self.fetcher).resolve()
        logger.debug(f"Resolved {resolution.path} ({resolution.source})")
        outcome = run_binary(resolution.path, args)
        return outcome.raise_for_failure()

    def _configure_logging(self, environ: Mapping[str, str]):
        """
        Configure launcher logging from TENDER_LOG_LEVEL.

        The default is WARNING so the launcher stays quiet in front of
        the delegated tool's own output.
        """
        level_name = (environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.WARNING

        if level <= logging.DEBUG:
            format_str = "%(levelname)s [%(name)s] %(message)s"
        else:
            format_str = f"{self.prog}: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,
        )


def main():
    """Entry point for the tender console script."""
    cli = CLI()
    sys.exit(cli.run())


def interactive_main():
    """Entry point for the tender-ui console script."""
    cli = CLI(prog="tender-ui", interactive_only=True)
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
