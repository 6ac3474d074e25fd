"""Tests for glob patterns and file discovery."""

import os
from pathlib import Path

import pytest

from scanner.discovery import build_spec, iter_files
from scanner.errors import ScanError
from scanner.patterns import DEFAULT_EXCLUDES, DEFAULT_INCLUDES

from conftest import write_file


class TestBuildSpec:
    """Tests for glob pattern matching."""
    
    def test_double_star_across_segments(self):
        spec = build_spec(["**/*.fpl"])
        
        assert spec.match_file("Foo.fpl")
        assert spec.match_file("a/Foo.fpl")
        assert spec.match_file("a/b/c/Foo.fpl")
        assert not spec.match_file("a/Foo.fpl.bak")
        assert not spec.match_file("a/Foo.FPL")
    
    def test_star_within_segment(self):
        spec = build_spec(["keep/*.fpl"])
        
        assert spec.match_file("keep/A.fpl")
        assert not spec.match_file("keep/sub/A.fpl")
        assert not spec.match_file("other/A.fpl")
    
    def test_double_star_in_middle(self):
        spec = build_spec(["src/**/test/*.fpl"])
        
        assert spec.match_file("src/test/A.fpl")
        assert spec.match_file("src/x/y/test/A.fpl")
        assert not spec.match_file("other/test/A.fpl")
    
    def test_trailing_double_star(self):
        spec = build_spec(["**/.git/**"])
        
        assert spec.match_file(".git/config")
        assert spec.match_file("a/.git/objects/ab")
        assert not spec.match_file("a/git/config")
    
    def test_trailing_slash(self):
        spec = build_spec(["legacy/"])
        
        assert spec.match_file("legacy/A.fpl")
        assert spec.match_file("legacy/deep/A.fpl")
        assert not spec.match_file("current/A.fpl")
    
    def test_question_mark(self):
        spec = build_spec(["v?/*.fpl"])
        
        assert spec.match_file("v1/A.fpl")
        assert not spec.match_file("v10/A.fpl")
    
    def test_directory_match(self):
        spec = build_spec(["**/CVS/**"])
        
        assert spec.match_file("CVS/")
        assert spec.match_file("a/CVS/")
        assert not spec.match_file("a/CVSROOT/")
        assert not build_spec(["**/*.fpl"]).match_file("a/")
    
    def test_default_includes_cover_case_variants(self):
        includes = build_spec(DEFAULT_INCLUDES)
        
        assert includes.match_file("a/Foo.fpl")
        assert includes.match_file("a/Foo.FPL")
        assert not includes.match_file("a/Foo.java")
    
    def test_default_excludes(self):
        excludes = build_spec(DEFAULT_EXCLUDES)
        
        assert excludes.match_file("a/Foo.fpl~")
        assert excludes.match_file(".git/HEAD")
        assert excludes.match_file("a/.svn/entries")
        assert excludes.match_file(".DS_Store")
        assert not excludes.match_file("a/Foo.fpl")
    
    def test_empty_spec(self):
        assert not build_spec([]).match_file("Foo.fpl")


class TestIterFiles:
    """Tests for directory enumeration."""
    
    def test_default_patterns(self, tmp_path):
        write_file(tmp_path / "A.fpl")
        write_file(tmp_path / "sub" / "B.FPL")
        write_file(tmp_path / "sub" / "notes.txt")
        
        files = list(iter_files(tmp_path))
        
        assert files == ["A.fpl", os.path.join("sub", "B.FPL")]
    
    def test_sorted_order(self, tmp_path):
        for name in ["c.fpl", "a.fpl", "b.fpl"]:
            write_file(tmp_path / name)
        
        assert list(iter_files(tmp_path)) == ["a.fpl", "b.fpl", "c.fpl"]
    
    def test_custom_includes(self, tmp_path):
        write_file(tmp_path / "keep" / "A.fpl")
        write_file(tmp_path / "skip" / "B.fpl")
        
        files = list(iter_files(tmp_path, includes=["keep/*.fpl"]))
        
        assert files == [os.path.join("keep", "A.fpl")]
    
    def test_excludes(self, tmp_path):
        write_file(tmp_path / "A.fpl")
        write_file(tmp_path / "legacy" / "B.fpl")
        
        files = list(iter_files(tmp_path, excludes=["legacy/**"]))
        
        assert files == ["A.fpl"]
    
    def test_default_excludes_applied(self, tmp_path):
        write_file(tmp_path / "A.fpl")
        write_file(tmp_path / ".git" / "Hidden.fpl")
        write_file(tmp_path / "A.fpl~")
        
        assert list(iter_files(tmp_path, includes=["**/*"])) == ["A.fpl"]
    
    def test_default_excludes_with_caller_excludes(self, tmp_path):
        write_file(tmp_path / "A.fpl")
        write_file(tmp_path / "B.fpl")
        write_file(tmp_path / ".svn" / "C.fpl")
        
        files = list(iter_files(tmp_path, excludes=["B.fpl"]))
        
        assert files == ["A.fpl"]
    
    def test_default_excludes_disabled(self, tmp_path):
        write_file(tmp_path / ".git" / "Hidden.fpl")
        
        files = list(iter_files(tmp_path, use_default_excludes=False))
        
        assert files == [os.path.join(".git", "Hidden.fpl")]
    
    def test_missing_directory(self, tmp_path):
        with pytest.raises(ScanError):
            list(iter_files(tmp_path / "missing"))
    
    def test_follow_symlinks(self, tmp_path):
        target = tmp_path / "real"
        write_file(target / "A.fpl")
        root = tmp_path / "root"
        root.mkdir()
        try:
            os.symlink(target, root / "linked", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        
        assert list(iter_files(root)) == [os.path.join("linked", "A.fpl")]
        assert list(iter_files(root, follow_symlinks=False)) == []
    
    def test_symlink_cycle(self, tmp_path):
        write_file(tmp_path / "A.fpl")
        try:
            os.symlink(tmp_path, tmp_path / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        
        assert list(iter_files(tmp_path)) == ["A.fpl"]
