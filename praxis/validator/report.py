"""
Validation Report — What the cache knows about one document

Reads the cached entry without re-validating and compares its hash with
the document's current content. Staleness wins over the cached verdict:
an edited document reports "stale" whatever it scored last time.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..presentation.symbols import SymbolSet, get_symbols
from .cache import CacheEntry, content_hash
from .document import SPEC_FILENAME


DIVIDER_WIDTH = 50


class ReportStatus(Enum):
    NOT_VALIDATED = "not_validated"
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    STALE = "stale"


@dataclass
class ValidationReport:
    document_path: str
    status: ReportStatus
    entry: Optional[CacheEntry]
    current_hash: Optional[str]

    @property
    def is_stale(self) -> bool:
        return self.status is ReportStatus.STALE


def verdict_status(entry: CacheEntry) -> ReportStatus:
    if entry.result.compliant:
        return ReportStatus.PASS
    if entry.result.severity == "warning":
        return ReportStatus.WARN
    return ReportStatus.FAIL


def build_report(
    document_path: Union[str, Path],
    entry: Optional[CacheEntry],
    current_hash: Optional[str],
) -> ValidationReport:
    document_path = str(document_path)
    if entry is None:
        return ValidationReport(document_path, ReportStatus.NOT_VALIDATED, None, current_hash)

    if current_hash is not None and entry.content_hash != current_hash:
        return ValidationReport(document_path, ReportStatus.STALE, entry, current_hash)

    return ValidationReport(document_path, verdict_status(entry), entry, current_hash)


def compute_current_hash(
    document_path: Union[str, Path],
    spec_path: Optional[Union[str, Path]] = None,
) -> Optional[str]:
    """Hash of the document and its README as they are now, or None if unreadable."""
    document_path = Path(document_path)
    spec = Path(spec_path) if spec_path else document_path.parent / SPEC_FILENAME
    try:
        document_text = document_path.read_text(encoding="utf-8")
        spec_text = spec.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return content_hash(document_text, spec_text)


def _format_date(iso: str) -> str:
    try:
        return datetime.fromisoformat(iso).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    except ValueError:
        return iso


def _badge(status: ReportStatus, symbols: SymbolSet) -> str:
    return {
        ReportStatus.PASS: f"{symbols.check_pass} Document is compliant",
        ReportStatus.WARN: f"{symbols.check_warn} Document has warnings",
        ReportStatus.FAIL: f"{symbols.check_fail} Document has errors",
        ReportStatus.STALE: f"{symbols.stale} Cached result is outdated",
        ReportStatus.NOT_VALIDATED: f"{symbols.not_validated} No cached result found",
    }[status]


def format_report(report: ValidationReport, verbose: bool = False, symbols: Optional[SymbolSet] = None) -> str:
    symbols = symbols or get_symbols()
    rule = "=" * DIVIDER_WIDTH
    entry = report.entry

    lines = ["", rule, "Validation Report", rule, ""]
    lines.append(f"  Document:  {report.document_path}")
    if entry:
        lines.append(f"  Type:      {entry.document_type}")
        lines.append(f"  Spec:      {entry.spec_path}")
        lines.append(f"  Validated: {_format_date(entry.cached_at)}")

    lines.append("")
    lines.append(f"  Status:    {_badge(report.status, symbols)}")

    if report.is_stale and entry:
        lines.append("")
        lines.append(f"  {symbols.warning} Document has changed since last validation")
        lines.append("    Run `praxis validate document <path>` to re-validate")
        last = verdict_status(entry).value.upper()
        count = len(entry.result.issues)
        suffix = f" ({count} issue{'' if count == 1 else 's'})" if count else ""
        lines.append("")
        lines.append(f"  Last result: [{last}]{suffix}")

    if entry and not entry.result.compliant and entry.result.issues:
        lines.append("")
        lines.append("  Issues:")
        for issue in entry.result.issues:
            lines.append(f"    {symbols.bullet} {issue}")

    if report.status is ReportStatus.NOT_VALIDATED:
        lines.append("")
        lines.append(f"  Run `praxis validate document {report.document_path}` to validate.")

    if verbose and entry:
        lines.append("")
        lines.append("-" * DIVIDER_WIDTH)
        lines.append("AI Reasoning:")
        lines.append("-" * DIVIDER_WIDTH)
        lines.append(entry.result.reason)

    lines.append("")
    lines.append(rule)
    return "\n".join(lines)
