"""
Tests for Globber — reference pattern expansion

These tests validate:
- Literal patterns pass through untouched
- Globs return sorted root-relative files only
- README.md and _template.md never appear in glob results
- Missing files come back as Missing when resolved
"""

from praxis.core.globber import Found, GlobExpander, Missing, is_glob


def _touch(root, rel, text="x"):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestIsGlob:

    def test_detects_wildcards(self):
        assert is_glob("content/*.md")
        assert is_glob("content/doc?.md")
        assert is_glob("content/[ab].md")
        assert not is_glob("content/doc.md")


class TestExpand:

    def test_literal_passes_through_even_if_missing(self, tmp_path):
        expander = GlobExpander(tmp_path)
        assert expander.expand("content/nope.md") == ["content/nope.md"]

    def test_glob_sorted_and_relative(self, tmp_path):
        _touch(tmp_path, "content/b.md")
        _touch(tmp_path, "content/a.md")
        expander = GlobExpander(tmp_path)
        assert expander.expand("content/*.md") == ["content/a.md", "content/b.md"]

    def test_zero_matches(self, tmp_path):
        assert GlobExpander(tmp_path).expand("content/*.md") == []

    def test_excludes_readme_and_template(self, tmp_path):
        _touch(tmp_path, "content/README.md")
        _touch(tmp_path, "content/_template.md")
        _touch(tmp_path, "content/real.md")
        expander = GlobExpander(tmp_path)

        for pattern in ("content/*.md", "content/*", "content/R*.md",
                        "content/_*.md", "content/[R_]*", "**/*.md"):
            result = expander.expand(pattern)
            assert "content/README.md" not in result
            assert "content/_template.md" not in result

    def test_recursive_double_star(self, tmp_path):
        _touch(tmp_path, "content/context/a.md")
        _touch(tmp_path, "content/context/deep/b.md")
        _touch(tmp_path, "content/context/deep/README.md")
        expander = GlobExpander(tmp_path)
        assert expander.expand("content/context/**/*.md") == [
            "content/context/a.md",
            "content/context/deep/b.md",
        ]

    def test_directories_never_returned(self, tmp_path):
        (tmp_path / "content" / "folder.md").mkdir(parents=True)
        _touch(tmp_path, "content/file.md")
        assert GlobExpander(tmp_path).expand("content/*.md") == ["content/file.md"]

    def test_expand_all_keeps_order_without_cross_dedup(self, tmp_path):
        _touch(tmp_path, "content/a.md")
        expander = GlobExpander(tmp_path)
        result = expander.expand_all(["content/z.md", "content/*.md", "content/a.md"])
        assert result == ["content/z.md", "content/a.md", "content/a.md"]

    def test_absolute_glob_under_root_is_rerooted(self, tmp_path):
        root = tmp_path.resolve()
        _touch(root, "content/shared/a.md")
        expander = GlobExpander(root)
        assert expander.expand(f"{root.as_posix()}/content/shared/*.md") == ["content/shared/a.md"]

    def test_absolute_glob_outside_root_matches_nothing(self, tmp_path):
        root = tmp_path.resolve() / "project"
        _touch(tmp_path.resolve(), "shared/a.md")
        root.mkdir()
        pattern = f"{tmp_path.resolve().as_posix()}/shared/*.md"
        assert GlobExpander(root).expand(pattern) == []


class TestResolve:

    def test_found_and_missing(self, tmp_path):
        _touch(tmp_path, "content/a.md", "---\nowner: x\n---\n  Body A  \n")
        expander = GlobExpander(tmp_path)

        refs = expander.resolve(["content/a.md", "content/gone.md"])

        assert refs == [Found("content/a.md", "Body A"), Missing("content/gone.md")]
