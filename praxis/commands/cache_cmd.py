"""
CacheCommand — Validation cache maintenance

    praxis cache stats     file count, size, entries per top-level directory
    praxis cache orphans   entries whose document no longer exists
    praxis cache prune     delete those entries
"""

from ..commands.base import BaseCommand


class CacheCommand(BaseCommand):

    def stats(self) -> int:
        stats = self.cache.stats()
        self.emit(f"Cache: {self.paths.relative(self.cache.cache_root)}")
        self.emit(f"  Files: {stats.total_files}")
        self.emit(f"  Size:  {_format_size(stats.total_size)}")
        if stats.by_type:
            self.emit("  By type:")
            for key, count in sorted(stats.by_type.items()):
                self.emit(f"    {key}: {count}")
        return 0

    def orphans(self) -> int:
        orphans = self.cache.orphaned_entries(self.project_dir, self.config.sources)
        if not orphans:
            self.logger.success("No orphaned cache entries")
            return 0

        self.logger.warn(f"{len(orphans)} orphaned cache entr{'y' if len(orphans) == 1 else 'ies'}:")
        for orphan in orphans:
            self.emit(f"  {self.symbols.bullet} {self.paths.relative(orphan.file)} ({orphan.reason})")
        self.emit("")
        self.emit("Remove with: praxis cache prune")
        return 0

    def prune(self) -> int:
        removed = self.cache.prune_orphans(self.project_dir, self.config.sources)
        self.logger.success(f"Removed {removed} orphaned cache entr{'y' if removed == 1 else 'ies'}")
        return 0


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register cache command parser."""
    p = subparsers.add_parser('cache', help='Inspect or prune the validation cache')
    p.add_argument('action', nargs='?', default='stats', choices=['stats', 'orphans', 'prune'],
                   help='What to do (default: stats)')
    return p


def handle(cli, args):
    """Handle cache command dispatch."""
    command = CacheCommand(cli)
    if args.action == 'orphans':
        return command.orphans()
    if args.action == 'prune':
        return command.prune()
    return command.stats()
