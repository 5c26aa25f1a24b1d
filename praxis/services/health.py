"""
Project Health — Static cross-reference checks over a praxis project

The compiler silently drops references it cannot read. This pass is
where those gaps surface:

- dangling literal references (file not found)
- glob patterns that match nothing
- responsibilities no role references
- roles without a description
- responsibilities whose owner is not a known role alias
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from ..compiler.roles import ConstitutionKind, ConstitutionSetting
from ..core.frontmatter import Frontmatter
from ..core.globber import GlobExpander, Missing, is_glob
from ..core.paths import Paths


REFERENCE_KEYS = ("responsibilities", "constitution", "context", "refs")


@dataclass
class ContentCounts:
    roles: int = 0
    responsibilities: int = 0
    references: int = 0
    context: int = 0


@dataclass
class DanglingRef:
    role: str
    ref: str


@dataclass
class ZeroMatchGlob:
    role: str
    pattern: str


@dataclass
class UnmatchedOwner:
    responsibility: str
    owner: str


@dataclass
class StatusReport:
    counts: ContentCounts = field(default_factory=ContentCounts)
    dangling_refs: List[DanglingRef] = field(default_factory=list)
    zero_match_globs: List[ZeroMatchGlob] = field(default_factory=list)
    orphaned_responsibilities: List[str] = field(default_factory=list)
    roles_missing_description: List[str] = field(default_factory=list)
    unmatched_owners: List[UnmatchedOwner] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return (
            len(self.dangling_refs)
            + len(self.zero_match_globs)
            + len(self.orphaned_responsibilities)
            + len(self.roles_missing_description)
            + len(self.unmatched_owners)
        )

    @property
    def has_issues(self) -> bool:
        return self.issue_count > 0


def list_content_files(directory: Path, recursive: bool = False) -> List[Path]:
    """Markdown files, minus README, templates and _-prefixed names."""
    if not directory.is_dir():
        return []
    pattern = "**/*.md" if recursive else "*.md"
    return sorted(
        path for path in directory.glob(pattern)
        if path.is_file()
        and path.name != "README.md"
        and not path.name.startswith("_")
    )


def _patterns(frontmatter: Frontmatter, key: str) -> List[str]:
    if key == "constitution":
        setting = ConstitutionSetting.from_raw(frontmatter.value(key))
        if setting.kind is not ConstitutionKind.EXPLICIT:
            return []
        return list(setting.patterns)
    return [str(p) for p in frontmatter.array(key)]


def analyze_project(paths: Paths) -> StatusReport:
    root = paths.root
    expander = GlobExpander(root)
    report = StatusReport()

    role_files = list_content_files(paths.roles_dir)
    resp_files = list_content_files(paths.responsibilities_dir)
    report.counts = ContentCounts(
        roles=len(role_files),
        responsibilities=len(resp_files),
        references=len(list_content_files(paths.reference_dir)),
        context=len(list_content_files(paths.context_dir, recursive=True)),
    )

    aliases: Set[str] = set()
    referenced: Set[str] = set()

    for role_file in role_files:
        fm = Frontmatter.from_file(role_file)
        role_name = role_file.name

        alias = fm.value("alias")
        if alias:
            aliases.add(str(alias).lower())

        if not fm.value("description"):
            report.roles_missing_description.append(role_name)

        for key in REFERENCE_KEYS:
            for pattern in _patterns(fm, key):
                if is_glob(pattern):
                    matches = expander.expand(pattern)
                    if not matches:
                        report.zero_match_globs.append(ZeroMatchGlob(role_name, pattern))
                else:
                    matches = [pattern]
                    for ref in expander.resolve([pattern]):
                        if isinstance(ref, Missing):
                            report.dangling_refs.append(DanglingRef(role_name, ref.path))
                if key == "responsibilities":
                    referenced.update(Path(m).as_posix() for m in matches)

    for resp_file in resp_files:
        if paths.relative(resp_file) not in referenced:
            report.orphaned_responsibilities.append(resp_file.name)

    for resp_file in resp_files:
        owner = Frontmatter.from_file(resp_file).value("owner")
        if owner and str(owner).lower() not in aliases:
            report.unmatched_owners.append(UnmatchedOwner(resp_file.name, str(owner)))

    return report
