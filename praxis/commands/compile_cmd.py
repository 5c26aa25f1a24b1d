"""
CompileCommand — Compile role documents into agent documents
"""

import time

from ..commands.base import BaseCommand
from ..compiler.plugins import resolve_plugins
from ..compiler.roles import RoleCompiler
from ..compiler.watch import watch_and_recompile


WATCH_POLL_SECONDS = 1.0


class CompileCommand(BaseCommand):
    """Compiles one role (by alias) or every role in content/roles."""

    def _compiler(self) -> RoleCompiler:
        error = self.config.validate()
        if error:
            raise ValueError(f"Invalid configuration: {error}")
        plugins = resolve_plugins(self.config.plugins, self.project_dir, self.logger)
        return RoleCompiler(self.project_dir, self.config, self.logger, plugins)

    def compile_all(self) -> int:
        summary = self._compiler().compile_all()
        self.emit(f"Compiled: {summary.compiled}  Skipped: {summary.skipped}")
        return 0

    def compile_alias(self, alias: str) -> int:
        compiler = self._compiler()
        role_file = compiler.find_role_by_alias(alias)
        if role_file is None:
            raise ValueError(f"No role found with alias '{alias}' in {self.paths.roles_dir}")

        result = compiler.compile(role_file)
        if result is None:
            return 1
        if result.output:
            self.emit(f"{self.symbols.arrow} {self.paths.relative(result.output)}")
        for path in result.plugin_outputs:
            self.emit(f"{self.symbols.arrow} {self.paths.relative(path)}")
        return 0

    def watch(self, debounce: float) -> int:
        """Compile everything, then recompile on content changes until Ctrl+C."""
        compiler = self._compiler()
        summary = compiler.compile_all()
        self.emit(f"Compiled: {summary.compiled}  Skipped: {summary.skipped}")

        watcher = watch_and_recompile(self.paths, compiler, self.logger, debounce_seconds=debounce)
        try:
            while True:
                self._wait()
        except KeyboardInterrupt:
            pass
        finally:
            watcher.close()

        self.logger.info("Stopped watching")
        return 0

    def _wait(self) -> None:
        time.sleep(WATCH_POLL_SECONDS)


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register compile command parser."""
    p = subparsers.add_parser('compile', help='Compile roles into agent documents')
    p.add_argument('--alias', metavar='NAME',
                   help='Compile only the role with this alias (case-insensitive)')
    p.add_argument('--watch', action='store_true',
                   help='Recompile whenever files under content/ change')
    p.add_argument('--debounce', type=float, default=0.3, metavar='SECONDS',
                   help='Quiet period before a watch recompile (default: 0.3)')
    return p


def handle(cli, args):
    """Handle compile command dispatch."""
    command = CompileCommand(cli)
    if args.alias and args.watch:
        cli.logger.error("--alias and --watch cannot be combined")
        return 1
    if args.watch:
        return command.watch(args.debounce)
    if args.alias:
        return command.compile_alias(args.alias)
    return command.compile_all()
