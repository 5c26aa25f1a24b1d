"""
Role Compiler — Inline a role's references into one agent document

Reads a role's manifest, resolves every referenced document
(responsibilities, constitution, context, refs), strips their manifests,
and writes a single self-contained profile. Enabled plugins then get the
same profile to render in their own format.

Manifest keys:
    alias                  required; names the output file
    agent_description      enables the agent header
    agent_tools            header 'tools' (string or list)
    agent_model            header 'model'
    agent_permission_mode  header 'permissionMode'
    responsibilities       patterns, owned work
    constitution           patterns, or the legacy boolean
    context                patterns, general context
    refs                   patterns, reference material
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..config import Config
from ..core.frontmatter import Manifest, Markdown, as_sequence
from ..core.globber import GlobExpander, Found, is_excluded
from ..core.paths import Paths
from ..presentation.logger import Logger
from .output import AgentMetadata, OutputBuilder
from .plugins import CompilerPlugin


LEGACY_CONSTITUTION_GLOB = "content/context/constitution/*.md"


def slugify(alias: str) -> str:
    """Lower-case, runs of non-alphanumerics become '-', no edge dashes."""
    return re.sub(r"[^a-z0-9]+", "-", alias.lower()).strip("-")


class ConstitutionKind(Enum):
    DISABLED = "disabled"
    LEGACY_ALL = "legacy_all"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class ConstitutionSetting:
    """The manifest's constitution field as a tagged variant."""
    kind: ConstitutionKind
    patterns: Tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, raw) -> 'ConstitutionSetting':
        if raw is True:
            return cls(ConstitutionKind.LEGACY_ALL)
        if raw is None or raw is False:
            return cls(ConstitutionKind.DISABLED)
        return cls(ConstitutionKind.EXPLICIT, tuple(str(p) for p in as_sequence(raw)))


@dataclass
class CompiledRole:
    """Result of compiling one role."""
    alias: str
    slug: str
    output: Optional[Path] = None
    plugin_outputs: List[Path] = field(default_factory=list)


@dataclass
class CompileSummary:
    compiled: int = 0
    skipped: int = 0


def _text(value) -> Optional[str]:
    """Manifest scalar as text; lists are joined with ', '."""
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


class RoleCompiler:
    """Compiles role documents from content/roles into agent documents."""

    def __init__(
        self,
        root: Union[str, Path],
        config: Optional[Config] = None,
        logger: Optional[Logger] = None,
        plugins: Optional[List[CompilerPlugin]] = None,
    ):
        self.paths = Paths(root)
        self.root = self.paths.root
        self.config = config or Config()
        self.logger = logger or Logger()
        self.plugins = plugins or []
        self.expander = GlobExpander(self.root)

    def compile(self, role_file: Union[str, Path], output_file: Optional[Path] = None) -> Optional[CompiledRole]:
        """
        Compile one role file.

        Returns None (after a warning) when the role has no alias or
        cannot be read.
        """
        role_file = Path(role_file)
        try:
            md = Markdown.from_file(role_file)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warn(f"Could not read {role_file}: {e}, skipping")
            return None
        manifest = md.manifest

        alias = _text(manifest.value("alias"))
        if not alias:
            self.logger.warn(f"No alias found in {role_file}, skipping")
            return None

        slug = slugify(alias)
        metadata = self.build_agent_metadata(manifest, alias)

        builder = OutputBuilder(agent_metadata=metadata)
        builder.add_role(md.body())
        builder.add_responsibilities(self.inline_refs(manifest, "responsibilities"))
        builder.add_constitution(self.inline_constitution(manifest))
        builder.add_context(self.inline_refs(manifest, "context"))
        builder.add_reference(self.inline_refs(manifest, "refs"))

        result = CompiledRole(alias=alias, slug=slug)

        target = Path(output_file) if output_file else self.default_output_path(slug)
        if target is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(builder.build(), encoding="utf-8")
            result.output = target

        profile = builder.build_profile()
        for plugin in self.plugins:
            result.plugin_outputs.append(plugin.compile(profile, metadata, alias))

        self.logger.success(f"Compiled {slug}.md")
        return result

    def compile_all(self) -> CompileSummary:
        """Compile every role in the roles directory."""
        summary = CompileSummary()

        for role_file in self.role_files():
            if self.compile(role_file) is None:
                summary.skipped += 1
            else:
                summary.compiled += 1

        self.logger.info(f"Compiled {summary.compiled} agent(s)")
        if summary.skipped:
            self.logger.warn(f"Skipped {summary.skipped} role(s)")
        return summary

    def role_files(self) -> List[Path]:
        roles_dir = self.paths.roles_dir
        if not roles_dir.is_dir():
            return []
        return sorted(
            path for path in roles_dir.glob("*.md")
            if path.is_file() and not is_excluded(path)
        )

    def find_role_by_alias(self, alias: str) -> Optional[Path]:
        """Case-insensitive alias lookup across the roles directory."""
        wanted = alias.lower()
        for role_file in self.role_files():
            try:
                value = _text(Markdown.from_file(role_file).manifest.value("alias"))
            except (OSError, UnicodeDecodeError):
                continue
            if value and value.lower() == wanted:
                return role_file
        return None

    def default_output_path(self, slug: str) -> Optional[Path]:
        profiles_dir = self.config.profiles_path(self.root)
        if profiles_dir is None:
            return None
        return profiles_dir / f"{slug}.md"

    # =========================================================================
    # Reference inlining
    # =========================================================================

    def inline_refs(self, manifest: Manifest, key: str) -> List[str]:
        patterns = [str(p) for p in manifest.array(key)]
        return self._bodies(patterns)

    def constitution_patterns(self, manifest: Manifest) -> List[str]:
        setting = ConstitutionSetting.from_raw(manifest.value("constitution"))

        if setting.kind is ConstitutionKind.EXPLICIT:
            return list(setting.patterns)

        if setting.kind is ConstitutionKind.LEGACY_ALL:
            if self.config.compile.legacy_constitution_glob:
                self.logger.warn(
                    "'constitution: true' is deprecated; list constitution documents explicitly"
                )
                return [LEGACY_CONSTITUTION_GLOB]
            self.logger.warn(
                "'constitution: true' is deprecated and inlines nothing; list constitution "
                "documents explicitly or enable compile.legacy_constitution_glob"
            )

        return []

    def inline_constitution(self, manifest: Manifest) -> List[str]:
        return self._bodies(self.constitution_patterns(manifest))

    def _bodies(self, patterns: List[str]) -> List[str]:
        # Missing references are dropped here; the status command reports them
        return [ref.body for ref in self.expander.resolve(patterns) if isinstance(ref, Found)]

    # =========================================================================
    # Agent metadata
    # =========================================================================

    def build_agent_metadata(self, manifest: Manifest, alias: str) -> Optional[AgentMetadata]:
        description = _text(manifest.value("agent_description"))
        if not description:
            self.logger.warn("No agent_description found in role, skipping agent metadata")
            return None

        return AgentMetadata(
            name=slugify(alias),
            description=description,
            tools=_text(manifest.value("agent_tools")),
            model=_text(manifest.value("agent_model")),
            permission_mode=_text(manifest.value("agent_permission_mode")),
        )
