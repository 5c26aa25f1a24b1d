"""
ValidateCommand — Compliance checks against directory READMEs

Subcommands:
    document PATH   one document (README beside it, or --spec)
    all             every validation domain, fail-fast by default
    ci              every domain, no fail-fast; --strict fails on warnings
    report PATH     cached verdict and staleness, no classifier call

Exit code is 1 whenever an error-severity result exists.
"""

from pathlib import Path
from typing import List, Optional

from ..commands.base import BaseCommand
from ..services.providers import MockProvider
from ..validator.batch import BatchResult, BatchValidator, ValidationSummary
from ..validator.cache import CachedResult
from ..validator.document import DocumentValidator
from ..validator.report import build_report, compute_current_hash, format_report


RULE_WIDTH = 50


class ValidateCommand(BaseCommand):
    """Runs the classifier over documents and reports verdicts."""

    def _require_provider(self) -> bool:
        """A real classifier must be configured; the mock never validates."""
        if not isinstance(self.provider, MockProvider):
            return True

        llm = self.config.llm
        self.logger.error(f"Missing {llm.api_key_env} environment variable")
        if llm.provider == "openrouter":
            self.logger.error("To use document validation, you need an OpenRouter API key:")
            self.logger.error("  1. Get a key at https://openrouter.ai/keys")
            self.logger.error("  2. Set it: export OPENROUTER_API_KEY=your-key-here")
        return False

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute() and not candidate.exists():
            candidate = self.paths.resolve(path)
        if not candidate.exists():
            raise FileNotFoundError(f"Document not found: {path}")
        return candidate.resolve()

    def _badge(self, result: CachedResult) -> str:
        if result.compliant:
            return self.symbols.check_pass
        if result.severity == "warning":
            return self.symbols.check_warn
        return self.symbols.check_fail

    # -------------------------------------------------------------------------
    # Subcommands
    # -------------------------------------------------------------------------

    def document(self, path: str, spec: Optional[str] = None, verbose: bool = False,
                 use_cache: bool = True) -> int:
        if not self._require_provider():
            return 1

        document_path = self._resolve(path)
        spec_path = self._resolve(spec) if spec else None

        self.emit(f"Validating {path}...")
        validator = DocumentValidator(
            document_path,
            self.provider,
            spec_path=spec_path,
            cache=self.cache if use_cache else None,
            use_cache=use_cache,
        )
        result = validator.validate()

        self.emit(f"{self._badge(result)} {path}")
        if not result.compliant:
            for issue in result.issues:
                self.emit(f"  {self.symbols.bullet} {issue}")
        if validator.cache_hit:
            self.emit(f"{self.symbols.cache} Result served from cache")
        if verbose:
            self.emit("")
            self.emit("Reasoning:")
            self.emit(result.reason)

        return 1 if (not result.compliant and result.severity == "error") else 0

    def all(self, type_key: Optional[str] = None, verbose: bool = False,
            fail_fast: bool = True, use_cache: bool = True) -> int:
        if not self._require_provider():
            return 1

        batch = self._batch(fail_fast=fail_fast, use_cache=use_cache)

        if type_key:
            self.emit(f"Validating all {type_key} documents...")
            results = batch.validate_type(type_key)
        else:
            self.emit("Validating all documents...")
            results = batch.validate_all()

        self._show_results(results, verbose)

        if batch.stopped:
            self.emit("")
            self.emit(f"{self.symbols.stopped} Validation stopped early due to fail-fast")

        summary = batch.summary()
        self._show_summary(summary)

        if use_cache:
            self.emit("")
            self.emit(f"{self.symbols.cache} Hits: {batch.cache_stats.hits}, "
                      f"Misses: {batch.cache_stats.misses}")

        return 0 if summary.errors == 0 else 1

    def ci(self, strict: bool = False) -> int:
        if not self._require_provider():
            return 1

        batch = self._batch(fail_fast=False, use_cache=True)
        self.emit("Running CI validation...")
        results = batch.validate_all()
        self._show_results(results, verbose=False)

        summary = batch.summary()
        self._show_summary(summary)

        if strict:
            return 0 if summary.compliant == summary.total else 1
        return 0 if summary.errors == 0 else 1

    def report(self, path: str, verbose: bool = False) -> int:
        document_path = self._resolve(path)
        entry = self.cache.read_raw(document_path)
        current = compute_current_hash(document_path)
        report = build_report(self.paths.relative(document_path), entry, current)
        self.emit(format_report(report, verbose=verbose, symbols=self.symbols))
        return 0

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def _batch(self, fail_fast: bool, use_cache: bool) -> BatchValidator:
        return BatchValidator(
            self.project_dir,
            self.config.sources,
            self.provider,
            fail_fast=fail_fast,
            use_cache=use_cache,
            cache=self.cache if use_cache else None,
            logger=self.logger,
        )

    def _show_results(self, results: List[BatchResult], verbose: bool) -> None:
        self.emit("")
        for result in results:
            self.emit(f"{self._badge(result)} {result.path}")
            if not result.compliant:
                for issue in result.issues:
                    self.emit(f"    {self.symbols.bullet} {issue}")
            if verbose:
                self.emit(result.reason)

    def _show_summary(self, summary: ValidationSummary) -> None:
        rule = "=" * RULE_WIDTH
        self.emit("")
        self.emit(rule)
        self.emit("Summary")
        self.emit(rule)
        self.emit(f"Total documents: {summary.total}")
        self.emit(f"Compliant: {summary.compliant}")
        self.emit(f"Warnings:  {summary.warnings}")
        self.emit(f"Errors:    {summary.errors}")

        if summary.by_type:
            self.emit("")
            self.emit("By type:")
            for key, stats in summary.by_type.items():
                self.emit(f"  {key}: {stats.compliant}/{stats.total} compliant")


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register validate command and its subcommands."""
    p = subparsers.add_parser('validate', help='Validate documents against their README specification')
    sub = p.add_subparsers(dest='validate_command')

    doc = sub.add_parser('document', help='Validate a single document')
    doc.add_argument('path', help='Document to validate')
    doc.add_argument('--spec', help='Specification file (default: README.md beside the document)')
    doc.add_argument('--verbose', action='store_true', help='Show full classifier reasoning')
    doc.add_argument('--no-cache', dest='use_cache', action='store_false',
                     help='Bypass the validation cache')

    all_p = sub.add_parser('all', help='Validate all documents')
    all_p.add_argument('--type', dest='type_key', metavar='TYPE',
                       help='Only validate one domain (e.g. content/roles or roles)')
    all_p.add_argument('--verbose', action='store_true', help='Show full classifier reasoning')
    all_p.add_argument('--no-fail-fast', dest='fail_fast', action='store_false',
                       help='Keep going after the first error')
    all_p.add_argument('--no-cache', dest='use_cache', action='store_false',
                       help='Bypass the validation cache')

    ci = sub.add_parser('ci', help='Run validation in CI mode')
    ci.add_argument('--strict', action='store_true', help='Fail on warnings too')

    rep = sub.add_parser('report', help='Show the cached validation report for a document')
    rep.add_argument('path', help='Document to report on')
    rep.add_argument('--verbose', action='store_true', help='Show full classifier reasoning')

    return p


def handle(cli, args):
    """Handle validate subcommand dispatch."""
    command = ValidateCommand(cli)
    sub = getattr(args, 'validate_command', None)

    if sub == 'document':
        return command.document(args.path, spec=args.spec, verbose=args.verbose,
                                use_cache=args.use_cache)
    if sub == 'all':
        return command.all(type_key=args.type_key, verbose=args.verbose,
                           fail_fast=args.fail_fast, use_cache=args.use_cache)
    if sub == 'ci':
        return command.ci(strict=args.strict)
    if sub == 'report':
        return command.report(args.path, verbose=args.verbose)

    cli.logger.error("Usage: praxis validate {document,all,ci,report}")
    return 1
