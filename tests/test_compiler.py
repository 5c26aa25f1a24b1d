"""
Tests for RoleCompiler — roles to agent documents

These tests validate:
- The reviewer end-to-end compile (role + single responsibility)
- Idempotent output
- Section ordering with every section populated
- Skip-and-report for roles without alias
- Missing references dropped silently
- Legacy 'constitution: true' behaviour, both settings
- Profile directory configuration and alias lookup
"""

from praxis.compiler.roles import (
    ConstitutionKind, ConstitutionSetting, RoleCompiler, slugify,
)
from praxis.config import Config, CompileConfig


class TestSlugify:

    def test_slug(self):
        assert slugify("Code Reviewer") == "code-reviewer"
        assert slugify("  QA / Tester!! ") == "qa-tester"
        assert slugify("reviewer") == "reviewer"


class TestConstitutionSetting:

    def test_variants(self):
        assert ConstitutionSetting.from_raw(True).kind is ConstitutionKind.LEGACY_ALL
        assert ConstitutionSetting.from_raw(False).kind is ConstitutionKind.DISABLED
        assert ConstitutionSetting.from_raw(None).kind is ConstitutionKind.DISABLED

        explicit = ConstitutionSetting.from_raw("content/context/constitution/a.md")
        assert explicit.kind is ConstitutionKind.EXPLICIT
        assert explicit.patterns == ("content/context/constitution/a.md",)


class TestCompile:

    def test_reviewer_end_to_end(self, praxis_factory):
        praxis_factory.add_document("content/responsibilities/review.md", {"owner": "Reviewer"}, "Review PRs.")
        role = praxis_factory.add_role("reviewer", {
            "alias": "reviewer",
            "responsibilities": ["content/responsibilities/review.md"],
        }, "You review code.")

        result = praxis_factory.create_compiler().compile(role)

        output = result.output.read_text(encoding="utf-8")
        assert result.output == praxis_factory.root / "agent-profiles" / "reviewer.md"
        assert output == (
            "# Role\n\nYou review code.\n"
            "\n"
            "# Responsibilities\n\nReview PRs.\n"
        )
        for title in ("Constitution", "Context", "Reference"):
            assert f"# {title}" not in output

    def test_idempotent(self, praxis_env):
        compiler = praxis_env.create_compiler()
        role = praxis_env.root / "content/roles/reviewer.md"

        first = compiler.compile(role).output.read_bytes()
        second = compiler.compile(role).output.read_bytes()

        assert first == second

    def test_all_sections_in_order(self, praxis_env):
        result = praxis_env.create_compiler().compile(praxis_env.root / "content/roles/reviewer.md")
        output = result.output.read_text(encoding="utf-8")

        assert output.startswith("---\nname: reviewer\ndescription: Reviews pull requests\n---\n")
        positions = [output.index(f"# {title}\n") for title in
                     ("Role", "Responsibilities", "Constitution", "Context", "Reference")]
        assert positions == sorted(positions)
        assert "Be honest." in output
        assert "Imperative mood." in output
        assert "Use short sentences." in output

    def test_manifest_stripped_from_inlined_documents(self, praxis_env):
        result = praxis_env.create_compiler().compile(praxis_env.root / "content/roles/reviewer.md")
        output = result.output.read_text(encoding="utf-8")
        assert "owner:" not in output

    def test_missing_alias_skipped(self, praxis_factory):
        role = praxis_factory.add_role("nameless", {"description": "x"}, "Body")

        assert praxis_factory.create_compiler().compile(role) is None
        assert f"No alias found in {role}, skipping" in praxis_factory.log_text()

    def test_missing_description_warns(self, praxis_factory):
        role = praxis_factory.add_role("writer", {"alias": "Writer"}, "You write.")

        result = praxis_factory.create_compiler().compile(role)

        assert result.output.read_text(encoding="utf-8") == "# Role\n\nYou write.\n"
        assert "No agent_description found in role, skipping agent metadata" in praxis_factory.log_text()

    def test_missing_reference_dropped(self, praxis_factory):
        praxis_factory.add_document("content/reference/real.md", None, "Real ref.")
        role = praxis_factory.add_role("r", {
            "alias": "R",
            "refs": ["content/reference/gone.md", "content/reference/real.md"],
        }, "Body")

        output = praxis_factory.create_compiler().compile(role).output.read_text(encoding="utf-8")

        assert output.endswith("# Reference\n\nReal ref.\n")

    def test_scalar_reference_field(self, praxis_factory):
        praxis_factory.add_document("content/reference/one.md", None, "One.")
        role = praxis_factory.add_role("r", {"alias": "R", "refs": "content/reference/one.md"}, "Body")

        output = praxis_factory.create_compiler().compile(role).output.read_text(encoding="utf-8")

        assert "# Reference\n\nOne.\n" in output

    def test_explicit_output_file(self, praxis_factory, tmp_path):
        role = praxis_factory.add_role("r", {"alias": "R"}, "Body")
        target = tmp_path / "out" / "custom.md"

        result = praxis_factory.create_compiler().compile(role, output_file=target)

        assert result.output == target
        assert target.read_text(encoding="utf-8") == "# Role\n\nBody\n"

    def test_agent_tools_list_joined(self, praxis_factory):
        role = praxis_factory.add_role("r", {
            "alias": "R",
            "agent_description": "Does things",
            "agent_tools": ["Read", "Grep"],
        }, "Body")

        output = praxis_factory.create_compiler().compile(role).output.read_text(encoding="utf-8")

        assert "tools: Read, Grep\n" in output


class TestLegacyConstitution:

    def _setup(self, factory):
        factory.add_document("content/context/constitution/honesty.md", None, "Be honest.")
        return factory.add_role("r", {"alias": "R", "constitution": True}, "Body")

    def test_disabled_by_default(self, praxis_factory):
        role = self._setup(praxis_factory)

        output = praxis_factory.create_compiler().compile(role).output.read_text(encoding="utf-8")

        assert "# Constitution" not in output
        assert "deprecated" in praxis_factory.log_text()

    def test_compat_flag_globs_constitution(self, praxis_factory):
        role = self._setup(praxis_factory)
        config = Config(compile=CompileConfig(legacy_constitution_glob=True))

        output = praxis_factory.create_compiler(config).compile(role).output.read_text(encoding="utf-8")

        assert "# Constitution\n\nBe honest.\n" in output
        assert "deprecated" in praxis_factory.log_text()

    def test_false_is_disabled_without_warning(self, praxis_factory):
        role = praxis_factory.add_role("r", {"alias": "R", "constitution": False}, "Body")

        praxis_factory.create_compiler().compile(role)

        assert "deprecated" not in praxis_factory.log_text()


class TestCompileAll:

    def test_counts_compiled_and_skipped(self, praxis_env):
        praxis_env.add_role("nameless", {"description": "no alias"}, "Body")
        praxis_env.write("content/roles/_template.md", "---\nalias: Template\n---\nT")

        summary = praxis_env.create_compiler().compile_all()

        assert summary.compiled == 2
        assert summary.skipped == 1
        assert "Compiled 2 agent(s)" in praxis_env.log_text()
        profiles = sorted(p.name for p in (praxis_env.root / "agent-profiles").iterdir())
        assert profiles == ["reviewer.md", "writer.md"]

    def test_unreadable_role_skipped(self, praxis_env):
        (praxis_env.root / "content/roles/broken.md").write_bytes(b"---\nalias: \xff\xfe\n---\n")

        summary = praxis_env.create_compiler().compile_all()

        assert summary.compiled == 2
        assert summary.skipped == 1
        assert "broken.md" in praxis_env.log_text()
        assert "skipping" in praxis_env.log_text()

    def test_absolute_glob_outside_root_does_not_abort(self, praxis_env):
        outside = praxis_env.tmp_path.resolve() / "shared"
        outside.mkdir()
        (outside / "guide.md").write_text("Shared guide.", encoding="utf-8")
        praxis_env.add_role("aaa-external", {
            "alias": "External",
            "context": [f"{outside.as_posix()}/*.md"],
        }, "Uses shared guides.")

        summary = praxis_env.create_compiler().compile_all()

        assert summary.compiled == 3
        assert praxis_env.read("agent-profiles/external.md") == "# Role\n\nUses shared guides.\n"

    def test_no_roles_directory(self, praxis_factory):
        summary = praxis_factory.create_compiler().compile_all()
        assert summary.compiled == 0
        assert summary.skipped == 0

    def test_profiles_disabled(self, praxis_env):
        config = Config(agent_profiles_dir=False)

        summary = praxis_env.create_compiler(config).compile_all()

        assert summary.compiled == 2
        assert not (praxis_env.root / "agent-profiles").exists()

    def test_custom_profiles_dir(self, praxis_env):
        config = Config(agent_profiles_dir="build/agents")

        praxis_env.create_compiler(config).compile_all()

        assert (praxis_env.root / "build" / "agents" / "writer.md").exists()


class TestFindRoleByAlias:

    def test_case_insensitive(self, praxis_env):
        compiler = praxis_env.create_compiler()
        assert compiler.find_role_by_alias("REVIEWER") == praxis_env.root / "content/roles/reviewer.md"

    def test_unknown_alias(self, praxis_env):
        assert praxis_env.create_compiler().find_role_by_alias("nobody") is None

    def test_unreadable_role_ignored(self, praxis_env):
        (praxis_env.root / "content/roles/aaa.md").write_bytes(b"\xff\xfe")
        compiler = praxis_env.create_compiler()
        assert compiler.find_role_by_alias("writer") == praxis_env.root / "content/roles/writer.md"


def test_compiler_accepts_string_root(praxis_factory):
    compiler = RoleCompiler(str(praxis_factory.root))
    assert compiler.root == praxis_factory.root
