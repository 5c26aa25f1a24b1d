"""
StatusCommand — Project health dashboard

Exits 1 when any issue is found so it can gate CI.
"""

from ..commands.base import BaseCommand
from ..services.health import StatusReport, analyze_project


class StatusCommand(BaseCommand):

    def show(self) -> int:
        report = analyze_project(self.paths)
        self.display(report)
        return 1 if report.has_issues else 0

    def display(self, report: StatusReport) -> None:
        arrow = self.symbols.arrow
        counts = report.counts

        self.logger.info("Praxis Project Status")
        self.emit("")
        self.emit(f"  Roles:              {counts.roles}")
        self.emit(f"  Responsibilities:   {counts.responsibilities}")
        self.emit(f"  References:         {counts.references}")
        self.emit(f"  Context files:      {counts.context}")

        if report.dangling_refs:
            self.emit("")
            self.logger.warn("Dangling references (file not found):")
            for ref in report.dangling_refs:
                self.emit(f"  {ref.role} {arrow} {ref.ref}")

        if report.orphaned_responsibilities:
            self.emit("")
            self.logger.warn("Orphaned responsibilities (not referenced by any role):")
            for name in report.orphaned_responsibilities:
                self.emit(f"  {name}")

        if report.roles_missing_description:
            self.emit("")
            self.logger.warn("Roles missing description:")
            for name in report.roles_missing_description:
                self.emit(f"  {name}")

        if report.zero_match_globs:
            self.emit("")
            self.logger.warn("Glob patterns matching zero files:")
            for glob in report.zero_match_globs:
                self.emit(f"  {glob.role}: {glob.pattern}")

        if report.unmatched_owners:
            self.emit("")
            self.logger.warn("Responsibilities with unknown owners:")
            for owner in report.unmatched_owners:
                self.emit(f"  {owner.responsibility} (owner: {owner.owner})")

        self.emit("")
        if report.has_issues:
            self.logger.info(f"{report.issue_count} issue(s) found")
        else:
            self.logger.success("No issues found")


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register status command parser."""
    return subparsers.add_parser('status', help='Show project health dashboard')


def handle(cli, args):
    """Handle status command dispatch."""
    return StatusCommand(cli).show()
