"""
Praxis CLI — Compile, validate and inspect a praxis project

Commands:
    praxis compile [--alias NAME]        Compile roles into agent documents
    praxis validate document PATH        Validate one document
    praxis validate all [--type T]       Validate every document
    praxis validate ci [--strict]        CI gate over every document
    praxis validate report PATH          Show what the cache knows
    praxis status                        Project health checks
    praxis cache stats|orphans|prune     Validation cache maintenance
    praxis config [--set KEY=VALUE]      Show or change configuration
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from . import __version__
from .config import ConfigManager
from .core.paths import Paths, ProjectNotFoundError
from .presentation.logger import Logger
from .presentation.symbols import get_symbols
from .services.providers import LLMProvider, get_provider
from .validator.cache import CacheManager


class PraxisCLI:
    """Holds the resources every command shares for one project."""

    def __init__(self, project_dir: Path, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.paths = Paths.discover(project_dir)
        self.project_dir = self.paths.root
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()

        self.symbols = get_symbols(self.config.display.symbols)
        self.out = out if out is not None else sys.stdout
        self.logger = Logger(output=err, symbols=self.symbols)

        self._provider: Optional[LLMProvider] = None
        self._cache: Optional[CacheManager] = None

    @property
    def provider(self) -> LLMProvider:
        """Classifier provider, created on first use."""
        if self._provider is None:
            self._provider = get_provider(self.config)
        return self._provider

    @property
    def cache(self) -> CacheManager:
        if self._cache is None:
            self._cache = CacheManager(
                self.config.cache_path(self.project_dir),
                project_root=self.project_dir,
                logger=self.logger,
            )
        return self._cache


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="praxis",
        description="Praxis -- compile knowledge documents into agent profiles",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("PRAXIS_PROJECT_PATH", "."),
        help='Project directory (default: PRAXIS_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'praxis {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the praxis CLI.

    Returns the process exit code. Fatal errors (no project root, bad
    configuration, unknown domain, unreadable classifier verdict) are
    reported on stderr and exit 1.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from .commands import dispatch

    logger = Logger()
    try:
        cli = PraxisCLI(Path(args.project))
        logger = cli.logger
        result = dispatch(args.command, cli, args)
    except (ProjectNotFoundError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1
    except KeyError as e:
        logger.error(str(e))
        parser.print_help()
        return 1

    return int(result or 0)


if __name__ == '__main__':
    sys.exit(main())
