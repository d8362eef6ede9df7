"""Tests for file naming, the archive index and Markdown conversion."""

import pytest

from note_archiver.archive import ArchiveIndex
from note_archiver.converter import html_to_markdown, render_document
from note_archiver.errors import SetupFailure
from note_archiver.models import ArticleRecord, sanitize_title


class TestSanitizeTitle:
    def test_replaces_each_reserved_character(self):
        assert sanitize_title('\\/:*?"<>|') == "_________"

    def test_leaves_other_characters_alone(self):
        title = "日記 #12 (draft) & notes.v2 ~!"
        assert sanitize_title(title) == title

    def test_filename_is_deterministic(self):
        record = ArticleRecord(title="Q&A: what?", date_stamp="20240101", content_markup="<p>x</p>")

        assert record.filename == "20240101_Q&A_ what_.md"
        assert ArticleRecord(title="Q&A: what?", date_stamp="20240101").filename == record.filename


class TestArchiveIndex:
    def test_snapshot_of_existing_files(self, output_dir):
        (open(f"{output_dir}/20230101_Hello.md", "w")).close()

        index = ArchiveIndex(output_dir)

        assert len(index) == 1
        assert index.exists_by_exact_filename("20230101_Hello.md")
        assert not index.exists_by_exact_filename("20230102_Hello.md")

    def test_title_suffix_ignores_date(self, output_dir):
        (open(f"{output_dir}/20230101_Hello.md", "w")).close()
        index = ArchiveIndex(output_dir)

        assert index.exists_by_title_suffix("Hello")
        assert not index.exists_by_title_suffix("ello World")

    def test_title_suffix_needs_separator(self, output_dir):
        (open(f"{output_dir}/20230101_SayHello.md", "w")).close()
        index = ArchiveIndex(output_dir)

        assert not index.exists_by_title_suffix("Hello")

    def test_snapshot_is_not_reread(self, output_dir):
        index = ArchiveIndex(output_dir)
        (open(f"{output_dir}/20230101_Late.md", "w")).close()

        assert not index.exists_by_exact_filename("20230101_Late.md")

    def test_write_registers_file(self, index, output_dir):
        path = index.write_article("20230503_New.md", "# New\n\nbody")

        assert path == f"{output_dir}/20230503_New.md"
        assert index.exists_by_exact_filename("20230503_New.md")
        assert index.exists_by_title_suffix("New")
        with open(path, encoding="utf-8") as f:
            assert f.read() == "# New\n\nbody"

    def test_missing_directory_is_setup_failure(self, tmp_path):
        with pytest.raises(SetupFailure):
            ArchiveIndex(str(tmp_path / "does-not-exist"))


class TestConversion:
    def test_strips_script_and_style(self):
        html = "<p>Hello <b>world</b></p><script>alert(1)</script><style>p{color:red}</style>"

        markdown = html_to_markdown(html)

        assert "Hello **world**" in markdown
        assert "alert" not in markdown
        assert "color" not in markdown

    def test_headings_use_atx(self):
        assert html_to_markdown("<h2>Section</h2>") == "## Section"

    def test_empty_content(self):
        assert html_to_markdown("") == ""

    def test_document_layout(self):
        assert render_document("Title", "Body") == "# Title\n\nBody"

    def test_empty_body_round_trip(self, index, output_dir):
        path = index.write_article("00000000_Empty.md", render_document("Empty", html_to_markdown("")))

        with open(path, encoding="utf-8") as f:
            assert f.read() == "# Empty\n\n"
