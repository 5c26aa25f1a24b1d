"""
Core — Project paths, manifest parsing and reference expansion
"""

from .paths import Paths, ProjectNotFoundError, find_root
from .frontmatter import (
    Manifest, ValueKind, Frontmatter, Markdown,
    parse_document, as_sequence,
)
from .globber import GlobExpander, Found, Missing, is_glob

__all__ = [
    'Paths', 'ProjectNotFoundError', 'find_root',
    'Manifest', 'ValueKind', 'Frontmatter', 'Markdown',
    'parse_document', 'as_sequence',
    'GlobExpander', 'Found', 'Missing', 'is_glob',
]
