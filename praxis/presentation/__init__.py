"""
Presentation — Symbols, safe output and the status logger
"""

from .symbols import (
    SymbolSet, UNICODE, ASCII, get_symbols, safe_print,
    sanitize_control_chars, normalize_quotes,
)
from .logger import Logger

__all__ = [
    'SymbolSet', 'UNICODE', 'ASCII', 'get_symbols', 'safe_print',
    'sanitize_control_chars', 'normalize_quotes',
    'Logger',
]
