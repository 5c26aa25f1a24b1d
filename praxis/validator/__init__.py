"""
Validator — LLM compliance checks behind a content-addressed cache
"""

from .cache import (
    CacheManager, CachedResult, CacheEntry, OrphanedEntry, CacheStats,
    content_hash, CACHE_VERSION,
)
from .document import DocumentValidator, VerdictParseError, parse_verdict
from .batch import (
    BatchValidator, BatchResult, ValidationDomain, ValidationSummary,
    DomainStats, discover_domains,
)
from .report import ReportStatus, ValidationReport, build_report, compute_current_hash, format_report

__all__ = [
    'CacheManager', 'CachedResult', 'CacheEntry', 'OrphanedEntry', 'CacheStats',
    'content_hash', 'CACHE_VERSION',
    'DocumentValidator', 'VerdictParseError', 'parse_verdict',
    'BatchValidator', 'BatchResult', 'ValidationDomain', 'ValidationSummary',
    'DomainStats', 'discover_domains',
    'ReportStatus', 'ValidationReport', 'build_report', 'compute_current_hash', 'format_report',
]
