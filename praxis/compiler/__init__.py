"""
Compiler — Role documents to self-contained agent documents
"""

from .output import OutputBuilder, AgentMetadata, render_frontmatter
from .plugins import CompilerPlugin, ClaudeCodePlugin, resolve_plugins
from .roles import (
    RoleCompiler, CompileSummary, CompiledRole,
    ConstitutionSetting, ConstitutionKind, slugify,
)
from .watch import RecompileHandler, Watcher, watch_and_recompile

__all__ = [
    'OutputBuilder', 'AgentMetadata', 'render_frontmatter',
    'CompilerPlugin', 'ClaudeCodePlugin', 'resolve_plugins',
    'RoleCompiler', 'CompileSummary', 'CompiledRole',
    'ConstitutionSetting', 'ConstitutionKind', 'slugify',
    'RecompileHandler', 'Watcher', 'watch_and_recompile',
]
