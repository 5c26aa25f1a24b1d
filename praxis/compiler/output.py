"""
Output Builder — Assemble compiled agent documents

Sections are collected independently and rendered in a fixed order:

    frontmatter -> Role -> Responsibilities -> Constitution -> Context -> Reference

Items inside Responsibilities, Context and Reference are separated by a
horizontal rule; Role and Constitution items by a blank line. Sections
with no content are omitted entirely.
"""

import re
from dataclasses import dataclass
from typing import List, Optional


SEPARATOR = "\n---\n"
BLANK_SEPARATOR = "\n"

# Characters that would change meaning in a plain YAML scalar
YAML_SPECIAL = re.compile(r"""[:\[\]{}#&*!|>'"%@`\\]""")


@dataclass
class AgentMetadata:
    """Agent header fields written above the compiled body."""
    name: str
    description: str
    tools: Optional[str] = None
    model: Optional[str] = None
    permission_mode: Optional[str] = None


def quote_if_needed(value: str) -> str:
    """Double-quote a YAML scalar when it contains special characters."""
    if YAML_SPECIAL.search(value) or "\n" in value:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def render_frontmatter(metadata: Optional[AgentMetadata]) -> Optional[str]:
    """Render the '---' delimited agent header, or None without name/description."""
    if metadata is None or not metadata.name or not metadata.description:
        return None

    lines = ["---"]
    lines.append(f"name: {metadata.name}")
    lines.append(f"description: {quote_if_needed(metadata.description)}")
    if metadata.tools:
        lines.append(f"tools: {metadata.tools}")
    if metadata.model:
        lines.append(f"model: {metadata.model}")
    if metadata.permission_mode:
        lines.append(f"permissionMode: {metadata.permission_mode}")
    lines.append("---")
    return "\n".join(lines)


def build_section(title: str, contents: List[str], separator: str) -> str:
    body = separator.join(contents)
    return f"# {title}\n\n{body}\n"


class OutputBuilder:
    """Collects section content for one compiled document."""

    def __init__(self, agent_metadata: Optional[AgentMetadata] = None):
        self.agent_metadata = agent_metadata
        self.role: Optional[str] = None
        self.responsibilities: List[str] = []
        self.constitution: List[str] = []
        self.context: List[str] = []
        self.reference: List[str] = []

    def add_role(self, content: str) -> None:
        self.role = content

    def add_responsibilities(self, contents: List[str]) -> None:
        self.responsibilities = list(contents)

    def add_constitution(self, contents: List[str]) -> None:
        self.constitution = list(contents)

    def add_context(self, contents: List[str]) -> None:
        self.context = list(contents)

    def add_reference(self, contents: List[str]) -> None:
        self.reference = list(contents)

    def build_profile(self) -> str:
        """Body sections only, without the agent header."""
        return "\n".join(self._sections())

    def build(self) -> str:
        """Full document: agent header (if any) followed by the body sections."""
        sections = []
        frontmatter = render_frontmatter(self.agent_metadata)
        if frontmatter:
            sections.append(frontmatter)
        sections.extend(self._sections())
        return "\n".join(sections)

    def _sections(self) -> List[str]:
        sections = []
        if self.role:
            sections.append(build_section("Role", [self.role], BLANK_SEPARATOR))
        if self.responsibilities:
            sections.append(build_section("Responsibilities", self.responsibilities, SEPARATOR))
        if self.constitution:
            sections.append(build_section("Constitution", self.constitution, BLANK_SEPARATOR))
        if self.context:
            sections.append(build_section("Context", self.context, SEPARATOR))
        if self.reference:
            sections.append(build_section("Reference", self.reference, SEPARATOR))
        return sections
