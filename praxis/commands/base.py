"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and access its resources through properties.
"""

from typing import TYPE_CHECKING

from ..presentation.symbols import safe_print

if TYPE_CHECKING:
    from ..cli import PraxisCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources; they access them via the CLI instance.
    """

    def __init__(self, cli: 'PraxisCLI'):
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def paths(self):
        """Resolved project paths."""
        return self._cli.paths

    @property
    def project_dir(self):
        """Project root directory."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def config_manager(self):
        return self._cli.config_manager

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def logger(self):
        """Status logger (stderr)."""
        return self._cli.logger

    # -------------------------------------------------------------------------
    # Services (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def provider(self):
        """Classifier provider for validation."""
        return self._cli.provider

    @property
    def cache(self):
        """Validation cache."""
        return self._cli.cache

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def emit(self, text: str = "") -> None:
        """Print to the CLI's stdout with encoding fallback."""
        safe_print(text, file=self._cli.out)
