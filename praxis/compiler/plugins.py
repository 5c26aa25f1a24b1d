"""
Compiler Plugins — Platform-specific renditions of compiled profiles

The compiler produces a pure profile (body sections only). Each enabled
plugin receives that profile plus the agent metadata and writes its own
platform format.

Available:
- claude-code: <output_dir>/agents/<alias>.md with agent frontmatter,
  plus <output_dir>/.claude-plugin/plugin.json
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

from ..config import PluginEntry
from ..presentation.logger import Logger
from .output import AgentMetadata, render_frontmatter


DEFAULT_PLUGIN_JSON = {
    "name": "praxis",
    "description": "A plugin for integrating assistant profiles with Claude.",
    "author": {"name": "Your Name"},
    "keywords": ["productivity"],
}


class CompilerPlugin(ABC):
    """Base class for output plugins."""

    name: str = ""

    def __init__(self, root: Path, logger: Logger, entry: Optional[PluginEntry] = None):
        self.root = Path(root)
        self.logger = logger
        self.entry = entry or PluginEntry(name=self.name)

    @abstractmethod
    def compile(self, profile: str, metadata: Optional[AgentMetadata], alias: str) -> Path:
        """Write the platform artifact for one role. Returns the written path."""
        pass


class ClaudeCodePlugin(CompilerPlugin):
    """Claude Code agents wrapped in a plugin directory."""

    name = "claude-code"

    def __init__(self, root: Path, logger: Logger, entry: Optional[PluginEntry] = None):
        super().__init__(root, logger, entry)
        if self.entry.output_dir:
            self.output_dir = (self.root / self.entry.output_dir).resolve()
        else:
            self.output_dir = self.root / "plugins" / "praxis"
        self.agents_dir = self.output_dir / "agents"
        self._manifest_written = False

    def compile(self, profile: str, metadata: Optional[AgentMetadata], alias: str) -> Path:
        self.agents_dir.mkdir(parents=True, exist_ok=True)

        if not self._manifest_written:
            self.ensure_plugin_json()
            self._manifest_written = True

        frontmatter = render_frontmatter(metadata)
        content = f"{frontmatter}\n{profile}" if frontmatter else profile

        target = self.agents_dir / f"{alias.lower()}.md"
        target.write_text(content, encoding="utf-8")
        return target

    def ensure_plugin_json(self) -> Path:
        """
        Create .claude-plugin/plugin.json from defaults, or update only the
        name of an existing one so user edits survive.
        """
        manifest_dir = self.output_dir / ".claude-plugin"
        manifest_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = manifest_dir / "plugin.json"

        if manifest_path.exists():
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
            data["name"] = self.entry.plugin_name
        else:
            data = dict(DEFAULT_PLUGIN_JSON, name=self.entry.plugin_name)

        manifest_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return manifest_path


PLUGINS: Dict[str, Type[CompilerPlugin]] = {
    ClaudeCodePlugin.name: ClaudeCodePlugin,
}


def resolve_plugins(entries: List[PluginEntry], root: Path, logger: Logger) -> List[CompilerPlugin]:
    """Instantiate configured plugins. Unknown names are a fatal config error."""
    plugins = []
    for entry in entries:
        plugin_cls = PLUGINS.get(entry.name)
        if plugin_cls is None:
            available = ", ".join(PLUGINS)
            raise ValueError(f'Unknown plugin: "{entry.name}". Available plugins: {available}')
        plugins.append(plugin_cls(root, logger, entry))
    return plugins
