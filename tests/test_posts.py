"""Tests for post enumeration and pathname derivation."""

import pytest

from umami_pageviews.posts import DirectoryNotFoundError, list_content_files, pathname_for


class TestListContentFiles:
    def test_lists_markdown_only(self, tmp_path):
        (tmp_path / "first.md").write_text("# first")
        (tmp_path / "second.md").write_text("# second")
        (tmp_path / "cover.png").write_bytes(b"")
        (tmp_path / "notes.txt").write_text("")

        assert sorted(list_content_files(tmp_path)) == ["first.md", "second.md"]

    def test_skips_directories(self, tmp_path):
        (tmp_path / "assets.md").mkdir()
        (tmp_path / "post.md").write_text("")
        assert list_content_files(tmp_path) == ["post.md"]

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "a.md").write_text("")
        (tmp_path / "b.mdx").write_text("")
        assert sorted(list_content_files(tmp_path, (".md", ".mdx"))) == ["a.md", "b.mdx"]

    def test_empty_directory(self, tmp_path):
        assert list_content_files(tmp_path) == []

    def test_missing_directory_raises(self, tmp_path):
        missing = tmp_path / "posts"
        with pytest.raises(DirectoryNotFoundError, match="Posts directory not found"):
            list_content_files(missing)

    def test_error_is_a_file_not_found_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_content_files(tmp_path / "posts")


class TestPathnameFor:
    def test_lowercases_and_strips_extension(self):
        assert pathname_for("My-Post.md") == "/posts/my-post/"

    def test_plain_slug(self):
        assert pathname_for("hello-world.md") == "/posts/hello-world/"

    def test_keeps_inner_dots(self):
        assert pathname_for("Release-1.2.md") == "/posts/release-1.2/"

    def test_non_ascii_slug(self):
        assert pathname_for("Café.md") == "/posts/café/"
