"""
Globber — Reference pattern expansion

Manifest fields list references either as literal paths or as glob
patterns. Literal paths are passed through untouched (existence is the
reader's concern); globs are expanded against the project root.

Glob expansion rules:
- files only, never directories
- '**' matches any number of directories
- results are root-relative POSIX paths, sorted and deduplicated
- README.md and _template.md are never returned, at any depth
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from .frontmatter import Markdown


EXCLUDED_NAMES = frozenset({"_template.md", "README.md"})
GLOB_CHARS = ("*", "?", "[")


def is_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in GLOB_CHARS)


def is_excluded(path: Union[str, Path]) -> bool:
    return Path(path).name in EXCLUDED_NAMES


@dataclass(frozen=True)
class Found:
    """A reference that resolved to a readable file."""
    path: str
    body: str


@dataclass(frozen=True)
class Missing:
    """A reference whose file could not be read."""
    path: str


class GlobExpander:
    """Expands reference patterns relative to a project root."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def expand(self, pattern: str) -> List[str]:
        if not is_glob(pattern):
            return [pattern]

        # Path.glob only takes relative patterns; anchored ones are re-rooted
        anchored = Path(pattern)
        if anchored.is_absolute():
            try:
                pattern = anchored.relative_to(self.root).as_posix()
            except ValueError:
                return []

        matches = set()
        for match in self.root.glob(pattern):
            if not match.is_file() or is_excluded(match):
                continue
            matches.add(match.relative_to(self.root).as_posix())
        return sorted(matches)

    def expand_all(self, patterns: Iterable[str]) -> List[str]:
        """Concatenate per-pattern expansions in input order."""
        result: List[str] = []
        for pattern in patterns:
            result.extend(self.expand(str(pattern)))
        return result

    def resolve(self, patterns: Iterable[str]) -> List[Union[Found, Missing]]:
        """
        Expand patterns and read each referenced document's body.

        Unreadable references come back as Missing so callers can decide
        whether to drop them (compiler) or report them (health check).
        """
        resolved: List[Union[Found, Missing]] = []
        for rel in self.expand_all(patterns):
            try:
                body = Markdown.from_file(self.root / rel).body()
            except (OSError, UnicodeDecodeError):
                resolved.append(Missing(rel))
                continue
            resolved.append(Found(rel, body))
        return resolved
