"""
Logger — Marker-prefixed status lines for CLI output

Writes to stderr by default so stdout stays clean for piped output.
Markers come from the active SymbolSet ([OK] / ✓ etc.).
"""

import os
import sys
from typing import Optional, TextIO

from .symbols import SymbolSet, get_symbols, safe_print


class Logger:
    """Status logger used by the compiler, validator and commands."""

    def __init__(self, output: Optional[TextIO] = None, symbols: Optional[SymbolSet] = None):
        self.output = output if output is not None else sys.stderr
        self.symbols = symbols or get_symbols()

    def info(self, message: str) -> None:
        self._log(self.symbols.info, message)

    def success(self, message: str) -> None:
        self._log(self.symbols.success, message)

    def warn(self, message: str) -> None:
        self._log(self.symbols.warning, message)

    def error(self, message: str) -> None:
        self._log(self.symbols.error, message)

    def debug(self, message: str) -> None:
        """Only emitted when PRAXIS_DEBUG or DEBUG is set."""
        if debug_enabled():
            self._log(self.symbols.debug, message)

    def _log(self, marker: str, message: str) -> None:
        safe_print(f"{marker} {message}", file=self.output)


def debug_enabled() -> bool:
    return bool(os.environ.get("PRAXIS_DEBUG") or os.environ.get("DEBUG"))
