"""
Validation Cache — Content-addressed verdicts on disk

One JSON file per validated document, mirroring the document's
root-relative path under the cache root:

    content/roles/reviewer.md  ->  <cache_root>/content/roles/reviewer.json

Each entry records a hash over the document text plus its governing
README, so editing either one invalidates the verdict without any
explicit bookkeeping.

Entries are written whole and verified by a JSON round-trip first; a
half-written or hand-mangled file is deleted the next time a hash-checked
read touches it.
"""

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..presentation.logger import Logger, debug_enabled
from ..presentation.symbols import normalize_quotes, sanitize_control_chars


CACHE_VERSION = "1.0"

SEVERITIES = ("warning", "error")


def content_hash(document_text: str, spec_text: str) -> str:
    """First 8 hex chars of SHA-256 over document + spec."""
    return hashlib.sha256((document_text + spec_text).encode("utf-8")).hexdigest()[:8]


def sanitize_text(text: str) -> str:
    """Strip control chars (keeping \\t\\n\\r) and fold quotes to apostrophes."""
    return normalize_quotes(sanitize_control_chars(text))


@dataclass
class CachedResult:
    """A classifier verdict as stored in the cache."""
    compliant: bool
    issues: List[str] = field(default_factory=list)
    reason: str = ""
    severity: Optional[str] = None  # "warning" | "error" | None when compliant

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "compliant": self.compliant,
            "issues": list(self.issues),
            "reason": self.reason,
        }
        if self.severity is not None:
            data["severity"] = self.severity
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CachedResult':
        if not isinstance(data["compliant"], bool):
            raise TypeError("compliant must be a boolean")
        issues = data.get("issues", [])
        if not isinstance(issues, list):
            raise TypeError("issues must be a list")
        severity = data.get("severity")
        if severity is not None and severity not in SEVERITIES:
            raise ValueError(f"unknown severity: {severity}")
        return cls(
            compliant=data["compliant"],
            issues=[str(issue) for issue in issues],
            reason=str(data.get("reason", "")),
            severity=severity,
        )


@dataclass
class CacheEntry:
    """A full cache file."""
    version: str
    cached_at: str
    content_hash: str
    document_path: str
    document_type: str
    spec_path: str
    result: CachedResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "cached_at": self.cached_at,
            "content_hash": self.content_hash,
            "document": {
                "path": self.document_path,
                "type": self.document_type,
                "spec_path": self.spec_path,
            },
            "result": self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CacheEntry':
        document = data["document"]
        return cls(
            version=data["version"],
            cached_at=data.get("cached_at", ""),
            content_hash=data["content_hash"],
            document_path=document.get("path", ""),
            document_type=document.get("type", ""),
            spec_path=document.get("spec_path", ""),
            result=CachedResult.from_dict(data["result"]),
        )


@dataclass
class OrphanedEntry:
    """A cache file whose source document no longer exists."""
    file: Path
    doc_name: str
    type: str
    reason: str = "document_missing"


@dataclass
class CacheStats:
    total_files: int = 0
    total_size: int = 0
    by_type: Dict[str, int] = field(default_factory=dict)


class CacheManager:
    """
    File-based validation cache.

    The cache root is always passed in; there is no implicit default
    derived from the working directory.
    """

    def __init__(
        self,
        cache_root: Union[str, Path],
        project_root: Optional[Union[str, Path]] = None,
        logger: Optional[Logger] = None,
    ):
        self.cache_root = Path(cache_root)
        self.project_root = Path(project_root).resolve() if project_root else None
        self.logger = logger or Logger()

    # =========================================================================
    # Paths
    # =========================================================================

    def relative_key(self, document_path: Union[str, Path]) -> Path:
        """Document path relative to the project root (or re-anchored)."""
        path = Path(document_path)
        if self.project_root is not None and path.is_absolute():
            try:
                return path.resolve().relative_to(self.project_root)
            except ValueError:
                pass
        if path.is_absolute():
            return Path(*path.parts[1:])
        return path

    def cache_path_for(self, document_path: Union[str, Path]) -> Path:
        rel = self.relative_key(document_path)
        name = rel.name[:-3] if rel.name.endswith(".md") else rel.name
        return self.cache_root / rel.parent / f"{name}.json"

    # =========================================================================
    # Read / write
    # =========================================================================

    def write(
        self,
        document_path: Union[str, Path],
        content_hash: str,
        result: CachedResult,
        document_type: str,
        spec_path: Union[str, Path],
    ) -> bool:
        """
        Persist a verdict. Never raises; returns False when nothing was written.
        """
        cache_path = self.cache_path_for(document_path)

        entry = CacheEntry(
            version=CACHE_VERSION,
            cached_at=datetime.now(timezone.utc).isoformat(),
            content_hash=content_hash,
            document_path=self.relative_key(document_path).as_posix(),
            document_type=document_type,
            spec_path=self.relative_key(spec_path).as_posix(),
            result=CachedResult(
                compliant=result.compliant,
                issues=[sanitize_text(issue) for issue in result.issues],
                reason=sanitize_text(result.reason),
                severity=result.severity,
            ),
        )

        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(entry.to_dict(), indent=2)
            json.loads(payload)  # verify before touching the file
            cache_path.write_text(payload, encoding="utf-8")
            return True
        except (OSError, TypeError, ValueError) as e:
            try:
                if cache_path.exists():
                    cache_path.unlink()
            except OSError:
                pass
            if debug_enabled():
                self.logger.warn(f"Failed to write cache file {cache_path} ({e})")
            return False

    def read(self, document_path: Union[str, Path], content_hash: str) -> Optional[CachedResult]:
        """
        Cached verdict when version and hash both match, else None.

        A file that cannot be parsed is deleted and treated as a miss.
        """
        cache_path = self.cache_path_for(document_path)
        if not cache_path.exists():
            return None

        try:
            data = json.loads(cache_path.read_text(encoding="utf-8"))
            if data.get("version") != CACHE_VERSION:
                return None
            entry = CacheEntry.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            try:
                cache_path.unlink()
            except OSError:
                pass
            if debug_enabled():
                self.logger.warn(f"Removed corrupt cache file {cache_path} ({e})")
            return None

        if entry.content_hash != content_hash:
            return None
        return entry.result

    def read_raw(self, document_path: Union[str, Path]) -> Optional[CacheEntry]:
        """Full entry without a hash check. Read-only: never deletes."""
        cache_path = self.cache_path_for(document_path)
        if not cache_path.exists():
            return None

        try:
            data = json.loads(cache_path.read_text(encoding="utf-8"))
            if data.get("version") != CACHE_VERSION:
                return None
            return CacheEntry.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError):
            return None

    # =========================================================================
    # Maintenance
    # =========================================================================

    def cache_files(self) -> List[Path]:
        if not self.cache_root.is_dir():
            return []
        return sorted(p for p in self.cache_root.rglob("*.json") if p.is_file())

    def stats(self) -> CacheStats:
        stats = CacheStats()
        for cache_file in self.cache_files():
            stats.total_files += 1
            try:
                stats.total_size += cache_file.stat().st_size
            except OSError:
                pass
            type_key = self._type_of(cache_file)
            stats.by_type[type_key] = stats.by_type.get(type_key, 0) + 1
        return stats

    def orphaned_entries(self, root: Union[str, Path], sources: List[str]) -> List[OrphanedEntry]:
        """
        Cache files whose source document is gone from every source directory.

        A document whose content changed is not an orphan; its entry is
        simply overwritten on the next validation.
        """
        documents = self._document_keys(Path(root), sources)
        orphans = []
        for cache_file in self.cache_files():
            key = cache_file.relative_to(self.cache_root).with_suffix("").as_posix()
            if key not in documents:
                orphans.append(OrphanedEntry(
                    file=cache_file,
                    doc_name=cache_file.stem,
                    type=self._type_of(cache_file),
                ))
        return orphans

    def prune_orphans(self, root: Union[str, Path], sources: List[str]) -> int:
        """Delete orphaned entries. Returns how many were removed."""
        removed = 0
        for orphan in self.orphaned_entries(root, sources):
            try:
                orphan.file.unlink()
                removed += 1
            except FileNotFoundError:
                continue
        return removed

    def _type_of(self, cache_file: Path) -> str:
        parts = cache_file.relative_to(self.cache_root).parts
        return parts[0] if len(parts) > 1 else "unknown"

    def _document_keys(self, root: Path, sources: List[str]) -> set:
        keys = set()
        for source in sources:
            source_dir = root / source
            if not source_dir.is_dir():
                continue
            for doc in source_dir.rglob("*.md"):
                if doc.stem == "README" or doc.name.startswith("_"):
                    continue
                rel = doc.relative_to(source_dir).with_suffix("")
                keys.add((Path(source) / rel).as_posix())
        return keys
