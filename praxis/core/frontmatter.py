"""
Frontmatter — YAML manifest header parsing for knowledge documents

A document may open with a manifest:

    ---
    alias: Reviewer
    responsibilities:
      - content/responsibilities/review.md
    ---
    Body text...

The header is only recognised when the text starts with '---\\n' and is
closed by the next '\\n---'. Anything malformed degrades to an empty
manifest; parsing never raises.

Manifest values are a small closed variant (absent, scalar, sequence)
normalised by a single function, as_sequence().
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml


OPEN_MARKER = "---\n"
CLOSE_MARKER = "\n---"


class ValueKind(Enum):
    """Shape of a manifest value."""
    ABSENT = "absent"
    SCALAR = "scalar"
    SEQUENCE = "sequence"


def kind_of(raw: Any) -> ValueKind:
    if raw is None:
        return ValueKind.ABSENT
    if isinstance(raw, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def as_sequence(raw: Any) -> List[Any]:
    """Normalise a manifest value: absent -> [], scalar -> [x], list as-is."""
    kind = kind_of(raw)
    if kind is ValueKind.ABSENT:
        return []
    if kind is ValueKind.SEQUENCE:
        return list(raw)
    return [raw]


def _split(text: str) -> Tuple[Optional[str], str]:
    """Return (yaml_text, body). yaml_text is None when no valid header."""
    if not text.startswith(OPEN_MARKER):
        return None, text
    end = text.find(CLOSE_MARKER, len(OPEN_MARKER) - 1)
    if end == -1:
        return None, text
    yaml_text = text[len(OPEN_MARKER):end]
    # Skip the closing marker and the newline that follows it
    body = text[end + len(CLOSE_MARKER) + 1:]
    return yaml_text, body


class Manifest:
    """Parsed manifest header (ordered mapping)."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, raw: str = ""):
        self.data: Dict[str, Any] = dict(data or {})
        self._raw = raw

    def value(self, key: str) -> Any:
        return self.data.get(key)

    def kind(self, key: str) -> ValueKind:
        return kind_of(self.data.get(key))

    def array(self, key: str) -> List[Any]:
        return as_sequence(self.data.get(key))

    def has(self, key: str) -> bool:
        return self.kind(key) is not ValueKind.ABSENT

    def raw_yaml(self) -> str:
        return self._raw

    def __bool__(self) -> bool:
        return bool(self.data)

    def __repr__(self) -> str:
        return f"Manifest({self.data!r})"


def parse_document(text: str) -> Tuple[Manifest, str]:
    """
    Split a document into (manifest, raw body).

    Missing markers, YAML errors and non-mapping payloads all yield an
    empty manifest. The body is returned exactly as written.
    """
    yaml_text, body = _split(text)
    if yaml_text is None:
        return Manifest(), body

    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError:
        return Manifest(), body

    if not isinstance(data, dict):
        return Manifest(), body

    return Manifest(data, raw=yaml_text), body


class Frontmatter:
    """Manifest access for a single file, read fresh from disk."""

    def __init__(self, text: str):
        self.manifest, _ = parse_document(text)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Frontmatter':
        return cls(Path(path).read_text(encoding="utf-8"))

    def value(self, key: str) -> Any:
        return self.manifest.value(key)

    def array(self, key: str) -> List[Any]:
        return self.manifest.array(key)

    def raw_yaml(self) -> str:
        return self.manifest.raw_yaml()


class Markdown:
    """Body access for a single file, read fresh from disk."""

    def __init__(self, text: str):
        self.text = text
        self.manifest, self._body = parse_document(text)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Markdown':
        return cls(Path(path).read_text(encoding="utf-8"))

    def body(self) -> str:
        return self._body.strip()

    def body_raw(self) -> str:
        return self._body
