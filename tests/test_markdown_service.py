"""
Tests for the markdown service.

Tests cover:
- Title, summary and file name helpers
- Markdown rendering (hard breaks, GFM extras)
- Walking the year/month/day tree and renaming files to their titles
"""

import logging
from datetime import datetime

import pytest

from myblog.services.markdown_service import (
    DEFAULT_TITLE,
    MarkdownImporter,
    convert_markdown_to_html,
    extract_summary,
    extract_title,
    parse_path_date,
    sanitize_filename,
)

FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9)


def _write(root, relative, content):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def importer(markdown_dir):
    return MarkdownImporter(markdown_dir, clock=lambda: FIXED_NOW)


class TestExtractTitle:
    """Tests for extract_title."""

    def test_first_heading(self):
        assert extract_title("# Hello\n\nbody\n# Second") == "Hello"

    def test_surrounding_whitespace(self):
        """Should trim the line before looking for the marker."""
        assert extract_title("intro\n   # Spaced Title   \n") == "Spaced Title"

    def test_subheading_ignored(self):
        """Should only accept level-one headings."""
        assert extract_title("## Sub\n### Deeper") == DEFAULT_TITLE

    def test_no_space_after_hash(self):
        assert extract_title("#NoSpace") == DEFAULT_TITLE

    def test_empty(self):
        assert extract_title("") == "未命名文档"


class TestConvertMarkdownToHtml:
    """Tests for convert_markdown_to_html."""

    def test_hard_line_breaks(self):
        """Should turn single newlines into <br />."""
        assert "line one<br />\nline two" in convert_markdown_to_html("line one\nline two")

    def test_heading(self):
        assert "<h1>Title</h1>" in convert_markdown_to_html("# Title")

    def test_strikethrough(self):
        assert "<del>gone</del>" in convert_markdown_to_html("~~gone~~")

    def test_table(self):
        html = convert_markdown_to_html("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_fenced_code(self):
        html = convert_markdown_to_html("```\nprint('x')\n```\n")
        assert "<code>" in html

    def test_task_list(self):
        html = convert_markdown_to_html("- [x] done\n- [ ] todo\n")
        assert 'type="checkbox"' in html

    def test_autolink(self):
        html = convert_markdown_to_html("see https://example.com now")
        assert 'href="https://example.com"' in html


class TestExtractSummary:
    """Tests for extract_summary."""

    def test_strips_tags(self):
        assert extract_summary("<p>Hello <strong>world</strong></p>\n") == "Hello world"

    def test_short_text_unchanged(self):
        assert extract_summary("<p>short</p>") == "short"

    def test_truncates_with_ellipsis(self):
        """Should keep the first 100 characters and add an ellipsis."""
        summary = extract_summary("<p>" + "x" * 150 + "</p>")
        assert summary == "x" * 100 + "..."

    def test_exactly_limit(self):
        assert extract_summary("y" * 100) == "y" * 100

    def test_counts_characters_not_bytes(self):
        summary = extract_summary("中" * 120)
        assert summary == "中" * 100 + "..."


class TestSanitizeFilename:
    """Tests for sanitize_filename."""

    def test_replaces_invalid_characters(self):
        assert sanitize_filename('a/b\\c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_trims_whitespace(self):
        assert sanitize_filename("  My Post  ") == "My Post"

    def test_empty_becomes_default(self):
        assert sanitize_filename("   ") == DEFAULT_TITLE

    def test_unicode_kept(self):
        assert sanitize_filename("你好 世界") == "你好 世界"


class TestParsePathDate:
    def test_valid(self):
        assert parse_path_date("2024", "01", "02") == datetime(2024, 1, 2)

    def test_invalid_falls_back_to_now(self):
        """Should return the supplied now for directories that are not a date."""
        assert parse_path_date("2024", "13", "40", now=FIXED_NOW) == FIXED_NOW

    def test_non_numeric(self):
        assert parse_path_date("drafts", "a", "b", now=FIXED_NOW) == FIXED_NOW


class TestMarkdownImporter:
    """Tests for MarkdownImporter."""

    def test_missing_root(self, tmp_path):
        """Should import nothing when the root does not exist."""
        assert MarkdownImporter(tmp_path / "nope").load_all() == []

    def test_matching_name_is_kept(self, markdown_dir, importer):
        """Should keep a file whose name already matches its title (case-insensitively)."""
        source = _write(markdown_dir, "2024/01/02/hello.md", "# Hello\n\nworld")

        [document] = importer.load_all()

        assert document.title == "Hello"
        assert document.created_at == datetime(2024, 1, 2)
        assert document.file_path == "2024/01/02/hello"
        assert document.source == source
        assert source.exists()
        assert "<p>world</p>" in document.content
        assert document.original_content == "# Hello\n\nworld"
        assert document.summary.startswith("Hello")

    def test_renames_to_title(self, markdown_dir, importer):
        """Should rename a file whose name differs from its title."""
        _write(markdown_dir, "2024/01/02/draft.md", "# My Post\n\ntext")

        [document] = importer.load_all()

        assert document.file_path == "2024/01/02/My Post"
        assert not (markdown_dir / "2024/01/02/draft.md").exists()
        assert (markdown_dir / "2024/01/02/My Post.md").exists()

    def test_rename_sanitizes_title(self, markdown_dir, importer):
        _write(markdown_dir, "2024/03/04/x.md", "# a/b: c?")

        [document] = importer.load_all()

        assert document.title == "a/b: c?"
        assert document.file_path == "2024/03/04/a_b_ c_"

    def test_rename_collision_gets_timestamp(self, markdown_dir, importer):
        """Should append a timestamp when the target name is taken."""
        _write(markdown_dir, "2024/01/02/Bar.md", "# Bar")
        _write(markdown_dir, "2024/01/02/foo.md", "# Bar")

        documents = importer.load_all()

        assert [d.file_path for d in documents] == [
            "2024/01/02/Bar",
            "2024/01/02/Bar-20240506-070809",
        ]
        assert (markdown_dir / "2024/01/02/Bar-20240506-070809.md").exists()

    def test_untitled_file(self, markdown_dir, importer):
        """Should use the default title for a file without a heading."""
        _write(markdown_dir, "2024/01/02/notes.md", "just text")

        [document] = importer.load_all()

        assert document.title == DEFAULT_TITLE
        assert document.file_path == f"2024/01/02/{DEFAULT_TITLE}"

    def test_invalid_date_directories(self, markdown_dir, importer):
        _write(markdown_dir, "2024/13/99/post.md", "# post")

        [document] = importer.load_all()

        assert document.created_at == FIXED_NOW

    def test_rejects_wrong_depth(self, markdown_dir, importer, caplog):
        """Should skip, with a warning, markdown files outside year/month/day."""
        _write(markdown_dir, "stray.md", "# Stray")
        _write(markdown_dir, "2024/01/shallow.md", "# Shallow")
        _write(markdown_dir, "2024/01/02/extra/deep.md", "# Deep")
        _write(markdown_dir, "2024/01/02/ok.md", "# ok")

        with caplog.at_level(logging.WARNING):
            paths = list(importer.iter_files())

        assert [p.name for p in paths] == ["ok.md"]
        rejected = [r for r in caplog.records if "Rejected markdown file" in r.getMessage()]
        assert len(rejected) == 3

    def test_ignores_other_extensions(self, markdown_dir, importer):
        _write(markdown_dir, "2024/01/02/image.png", "binary")
        _write(markdown_dir, "2024/01/02/readme.txt", "text")

        assert importer.load_all() == []

    def test_sorted_order(self, markdown_dir, importer):
        """Should walk dates and files in sorted order."""
        _write(markdown_dir, "2024/02/01/b.md", "# b")
        _write(markdown_dir, "2023/12/31/a.md", "# a")
        _write(markdown_dir, "2024/02/01/a.md", "# a")

        paths = [d.file_path for d in importer.load_all()]

        assert paths == ["2023/12/31/a", "2024/02/01/a", "2024/02/01/b"]
