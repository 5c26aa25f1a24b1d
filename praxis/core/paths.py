"""
Paths — Project root discovery and well-known locations

The project root is the nearest ancestor that contains a .git entry.
Everything else (content, roles, plugin output) hangs off that root.
"""

from pathlib import Path
from typing import Optional, Union


CONTENT_DIR = "content"
ROLES_DIR = "content/roles"
RESPONSIBILITIES_DIR = "content/responsibilities"
REFERENCE_DIR = "content/reference"
CONTEXT_DIR = "content/context"
AGENTS_DIR = "plugins/praxis/agents"

CONFIG_FILE = "praxis.config.yaml"


class ProjectNotFoundError(Exception):
    """Raised when no .git directory is found above the start directory."""


def find_root(start: Optional[Path] = None) -> Path:
    """Walk up from start (default: cwd) until a .git entry exists."""
    current = Path(start).resolve() if start else Path.cwd().resolve()
    for candidate in [current, *current.parents]:
        if (candidate / ".git").exists():
            return candidate
    raise ProjectNotFoundError(
        f"Could not find project root (no .git directory above {current})"
    )


class Paths:
    """Resolved locations for one praxis project."""

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    @classmethod
    def discover(cls, start: Optional[Path] = None) -> 'Paths':
        return cls(find_root(start))

    @property
    def content_dir(self) -> Path:
        return self.root / CONTENT_DIR

    @property
    def roles_dir(self) -> Path:
        return self.root / ROLES_DIR

    @property
    def responsibilities_dir(self) -> Path:
        return self.root / RESPONSIBILITIES_DIR

    @property
    def reference_dir(self) -> Path:
        return self.root / REFERENCE_DIR

    @property
    def context_dir(self) -> Path:
        return self.root / CONTEXT_DIR

    @property
    def agents_dir(self) -> Path:
        return self.root / AGENTS_DIR

    @property
    def config_file(self) -> Path:
        return self.root / CONFIG_FILE

    def resolve(self, rel: Union[str, Path]) -> Path:
        """Resolve a root-relative path (absolute paths pass through)."""
        path = Path(rel)
        if path.is_absolute():
            return path
        return self.root / path

    def relative(self, path: Union[str, Path]) -> str:
        """Root-relative POSIX path, or the path unchanged if outside the root."""
        path = Path(path)
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
