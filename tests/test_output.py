"""
Tests for OutputBuilder — compiled document assembly

These tests validate:
- Fixed section order and omission of empty sections
- Separators per section
- Agent header rendering and YAML quoting
"""

from praxis.compiler.output import AgentMetadata, OutputBuilder, quote_if_needed, render_frontmatter


class TestSections:

    def test_full_order(self):
        builder = OutputBuilder()
        builder.add_reference(["REF"])
        builder.add_context(["CTX"])
        builder.add_constitution(["CON"])
        builder.add_responsibilities(["RESP"])
        builder.add_role("ROLE")

        output = builder.build()
        positions = [output.index(f"# {title}") for title in
                     ("Role", "Responsibilities", "Constitution", "Context", "Reference")]
        assert positions == sorted(positions)

    def test_exact_rendering(self):
        builder = OutputBuilder()
        builder.add_role("You review.")
        builder.add_responsibilities(["One", "Two"])
        builder.add_constitution(["Be kind.", "Be honest."])

        assert builder.build() == (
            "# Role\n\nYou review.\n"
            "\n"
            "# Responsibilities\n\nOne\n---\nTwo\n"
            "\n"
            "# Constitution\n\nBe kind.\nBe honest.\n"
        )

    def test_empty_sections_omitted(self):
        builder = OutputBuilder()
        builder.add_role("Only role")
        output = builder.build()
        assert output == "# Role\n\nOnly role\n"
        for title in ("Responsibilities", "Constitution", "Context", "Reference"):
            assert f"# {title}" not in output

    def test_empty_role_omitted(self):
        builder = OutputBuilder()
        builder.add_role("")
        builder.add_context(["CTX"])
        assert builder.build() == "# Context\n\nCTX\n"

    def test_nothing_to_build(self):
        assert OutputBuilder().build() == ""


class TestAgentHeader:

    def test_header_precedes_sections(self):
        metadata = AgentMetadata(name="reviewer", description="Reviews PRs",
                                 tools="Read, Grep", model="opus", permission_mode="plan")
        builder = OutputBuilder(agent_metadata=metadata)
        builder.add_role("Body")

        assert builder.build() == (
            "---\n"
            "name: reviewer\n"
            "description: Reviews PRs\n"
            "tools: Read, Grep\n"
            "model: opus\n"
            "permissionMode: plan\n"
            "---\n"
            "# Role\n\nBody\n"
        )

    def test_profile_has_no_header(self):
        builder = OutputBuilder(agent_metadata=AgentMetadata("reviewer", "Reviews"))
        builder.add_role("Body")
        assert builder.build_profile() == "# Role\n\nBody\n"

    def test_optional_fields_skipped(self):
        header = render_frontmatter(AgentMetadata("reviewer", "Reviews"))
        assert header == "---\nname: reviewer\ndescription: Reviews\n---"

    def test_no_header_without_description(self):
        assert render_frontmatter(AgentMetadata("reviewer", "")) is None
        assert render_frontmatter(None) is None


class TestQuoting:

    def test_plain_value_unquoted(self):
        assert quote_if_needed("Reviews pull requests") == "Reviews pull requests"

    def test_special_characters_quoted(self):
        assert quote_if_needed("Use when: reviewing") == '"Use when: reviewing"'

    def test_escapes_quotes_and_backslashes(self):
        assert quote_if_needed('Say "hi" \\ bye') == '"Say \\"hi\\" \\\\ bye"'

    def test_newline_quoted(self):
        assert quote_if_needed("line one\nline two") == '"line one\nline two"'
