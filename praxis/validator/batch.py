"""
Batch Validator — Validate every document across validation domains

A validation domain is any directory under a source root that carries a
README.md; that README governs every markdown document directly inside
the directory. Domains are keyed by their root-relative POSIX path
(e.g. "content/roles").

Per-document failures never abort a batch: they are recorded as
synthetic error results. With fail_fast, the run stops after the first
error-severity result (warnings do not stop it).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..presentation.logger import Logger
from ..services.providers import LLMProvider
from .cache import CacheManager, CachedResult
from .document import SPEC_FILENAME, DocumentValidator


@dataclass(frozen=True)
class ValidationDomain:
    key: str
    directory: Path
    spec_path: Path

    def documents(self) -> List[Path]:
        """Markdown files directly in the directory, minus README and _-prefixed."""
        return sorted(
            path for path in self.directory.glob("*.md")
            if path.is_file()
            and path.name != SPEC_FILENAME
            and not path.name.startswith("_")
        )


@dataclass
class BatchResult(CachedResult):
    """A verdict plus where it came from."""
    path: str = ""
    type: str = ""
    filename: str = ""
    cache_hit: bool = False


@dataclass
class DomainStats:
    total: int = 0
    compliant: int = 0
    non_compliant: int = 0


@dataclass
class ValidationSummary:
    total: int = 0
    compliant: int = 0
    warnings: int = 0
    errors: int = 0
    by_type: Dict[str, DomainStats] = field(default_factory=dict)


@dataclass
class CacheCounters:
    hits: int = 0
    misses: int = 0


def discover_domains(root: Union[str, Path], sources: List[str]) -> Dict[str, ValidationDomain]:
    """Every directory under the sources (source roots included) holding a README.md."""
    root = Path(root).resolve()
    domains: Dict[str, ValidationDomain] = {}

    for source in sources:
        source_dir = (root / source).resolve()
        if not source_dir.is_dir():
            continue
        for spec in sorted(source_dir.rglob(SPEC_FILENAME)):
            if not spec.is_file():
                continue
            directory = spec.parent
            try:
                key = directory.relative_to(root).as_posix()
            except ValueError:
                key = directory.as_posix()
            domains.setdefault(key, ValidationDomain(key, directory, spec))

    return dict(sorted(domains.items()))


class BatchValidator:
    """Runs DocumentValidator over one or all validation domains."""

    def __init__(
        self,
        root: Union[str, Path],
        sources: List[str],
        provider: LLMProvider,
        fail_fast: bool = False,
        use_cache: bool = True,
        cache: Optional[CacheManager] = None,
        logger: Optional[Logger] = None,
    ):
        if use_cache and cache is None:
            raise ValueError("A CacheManager is required when use_cache is enabled")

        self.root = Path(root).resolve()
        self.sources = list(sources)
        self.provider = provider
        self.fail_fast = fail_fast
        self.use_cache = use_cache
        self.cache = cache
        self.logger = logger or Logger()

        self.results: List[BatchResult] = []
        self.cache_stats = CacheCounters()
        self._stopped = False

    @property
    def stopped(self) -> bool:
        """True when fail-fast cut the last run short."""
        return self._stopped

    def domains(self) -> Dict[str, ValidationDomain]:
        return discover_domains(self.root, self.sources)

    def validate_all(self) -> List[BatchResult]:
        self._reset()
        for domain in self.domains().values():
            if self._stopped:
                break
            self._validate_domain(domain)
        return self.results

    def validate_type(self, key: str) -> List[BatchResult]:
        """Validate one domain. Unknown keys are a fatal error."""
        domain = self.find_domain(key)
        if domain is None:
            raise ValueError(f"Unknown document type: {key}")

        self._reset()
        self._validate_domain(domain)
        return self.results

    def find_domain(self, key: str) -> Optional[ValidationDomain]:
        """Look up by full key, or by directory name when that is unambiguous."""
        domains = self.domains()
        if key in domains:
            return domains[key]
        by_name = [d for d in domains.values() if d.directory.name == key]
        if len(by_name) == 1:
            return by_name[0]
        return None

    def summary(self) -> ValidationSummary:
        summary = ValidationSummary(total=len(self.results))

        for result in self.results:
            stats = summary.by_type.setdefault(result.type, DomainStats())
            stats.total += 1
            if result.compliant:
                summary.compliant += 1
                stats.compliant += 1
                continue
            stats.non_compliant += 1
            if result.severity == "warning":
                summary.warnings += 1
            elif result.severity == "error":
                summary.errors += 1

        return summary

    def _reset(self) -> None:
        self.results = []
        self._stopped = False
        self.cache_stats = CacheCounters()

    def _validate_domain(self, domain: ValidationDomain) -> None:
        for document in domain.documents():
            if self._stopped:
                break
            self.results.append(self._validate_document(document, domain))
            self._check_fail_fast()

    def _validate_document(self, document: Path, domain: ValidationDomain) -> BatchResult:
        validator = DocumentValidator(
            document,
            self.provider,
            spec_path=domain.spec_path,
            cache=self.cache,
            use_cache=self.use_cache,
        )
        try:
            rel_path = document.relative_to(self.root).as_posix()
        except ValueError:
            rel_path = document.as_posix()

        try:
            verdict = validator.validate()
        except Exception as e:
            # Classifier and I/O failures are per-document, never batch-fatal
            message = str(e) or e.__class__.__name__
            self.logger.debug(f"Validation of {rel_path} failed: {message}")
            verdict = CachedResult(
                compliant=False,
                issues=[f"Validation failed: {message}"],
                reason=message,
                severity="error",
            )
        else:
            if validator.cache_hit:
                self.cache_stats.hits += 1
            else:
                self.cache_stats.misses += 1

        return BatchResult(
            compliant=verdict.compliant,
            issues=list(verdict.issues),
            reason=verdict.reason,
            severity=verdict.severity,
            path=rel_path,
            type=domain.key,
            filename=document.name,
            cache_hit=validator.cache_hit,
        )

    def _check_fail_fast(self) -> None:
        if not self.fail_fast or not self.results:
            return
        last = self.results[-1]
        if not last.compliant and last.severity == "error":
            self._stopped = True
