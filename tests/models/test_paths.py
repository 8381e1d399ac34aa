"""Unit tests for virtual path resolution.

This module tests:
- resolve: canonicalization and rejection of malformed paths
- resolve_directory: the same rules with the root allowed
- basename, parent_of, ancestors_of, is_ancestor and rebase helpers
"""

import pytest

from models import paths
from models.errors import ErrorKind, InvalidPathError


class TestResolve:
    """Test canonicalization of raw paths."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("src/App.tsx", "/src/App.tsx"),
            ("/src/App.tsx", "/src/App.tsx"),
            ("src//components/App.tsx/", "/src/components/App.tsx"),
            ("  /index.html  ", "/index.html"),
            ("///a///b", "/a/b"),
        ],
    )
    def test_normalizes_separators(self, raw, expected):
        """Verify leading, trailing and repeated slashes are normalized."""
        assert paths.resolve(raw) == expected

    def test_is_idempotent(self):
        """Verify resolving a canonical path returns it unchanged."""
        canonical = paths.resolve("src/components/Button.jsx")
        assert paths.resolve(canonical) == canonical

    @pytest.mark.parametrize("raw", ["", "/", "//", "   "])
    def test_rejects_root_and_empty(self, raw):
        """Verify a path must name something below the root."""
        with pytest.raises(InvalidPathError):
            paths.resolve(raw)

    @pytest.mark.parametrize("raw", ["../etc/passwd", "/src/../App.tsx", "./App.tsx"])
    def test_rejects_relative_segments(self, raw):
        """Verify '.' and '..' segments are refused."""
        with pytest.raises(InvalidPathError) as exc_info:
            paths.resolve(raw)
        assert exc_info.value.kind == ErrorKind.INVALID_PATH

    def test_rejects_padded_segment(self):
        """Verify a segment with surrounding whitespace is refused."""
        with pytest.raises(InvalidPathError):
            paths.resolve("/src/ App.tsx")

    @pytest.mark.parametrize("raw", [None, 42, ["src", "App.tsx"]])
    def test_rejects_non_strings(self, raw):
        """Verify non-string input raises InvalidPathError, not TypeError."""
        with pytest.raises(InvalidPathError):
            paths.resolve(raw)


class TestResolveDirectory:
    """Test directory resolution, where the root is allowed."""

    @pytest.mark.parametrize("raw", ["/", "//", " / "])
    def test_root(self, raw):
        """Verify bare-slash paths resolve to the root."""
        assert paths.resolve_directory(raw) == "/"

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_rejects_blank(self, raw):
        """Verify an empty or blank path does not stand for the root."""
        with pytest.raises(InvalidPathError) as exc_info:
            paths.resolve_directory(raw)
        assert exc_info.value.kind == ErrorKind.INVALID_PATH

    def test_nested(self):
        """Verify nested directories resolve like files."""
        assert paths.resolve_directory("src/components/") == "/src/components"

    def test_rejects_parent_segment(self):
        """Verify '..' is refused for directories too."""
        with pytest.raises(InvalidPathError):
            paths.resolve_directory("/src/..")


class TestHelpers:
    """Test the small path helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("src/components/App.tsx", "App.tsx"),
            ("/index.html", "index.html"),
            ("App.tsx", "App.tsx"),
            ("", ""),
            (None, ""),
            (7, ""),
        ],
    )
    def test_basename_never_raises(self, value, expected):
        """Verify basename takes the last segment and tolerates junk."""
        assert paths.basename(value) == expected

    def test_parent_of(self):
        """Verify parent_of returns the containing directory."""
        assert paths.parent_of("/src/App.tsx") == "/src"
        assert paths.parent_of("/App.tsx") == "/"

    def test_ancestors_of(self):
        """Verify ancestors_of lists proper ancestors, outermost first."""
        assert paths.ancestors_of("/a/b/c.txt") == ["/a", "/a/b"]
        assert paths.ancestors_of("/c.txt") == []

    def test_is_ancestor(self):
        """Verify ancestry is by whole segments, not string prefix."""
        assert paths.is_ancestor("/src", "/src/App.tsx")
        assert paths.is_ancestor("/", "/src")
        assert not paths.is_ancestor("/src", "/src")
        assert not paths.is_ancestor("/src", "/srcs/App.tsx")

    def test_rebase(self):
        """Verify rebase moves a path to a new prefix."""
        assert paths.rebase("/src/a/b.js", "/src/a", "/lib") == "/lib/b.js"
        assert paths.rebase("/src/a", "/src/a", "/lib") == "/lib"
