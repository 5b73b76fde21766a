"""
Tests for the check engine.
"""

import logging
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nestif.core.config import Config
from nestif.core.engine import CheckEngine
from nestif.core.errors import ConfigError, GeneratedFileError, ParseError


TESTDATA = os.path.join(os.path.dirname(os.path.abspath(__file__)), "testdata")
PKG = os.path.join(TESTDATA, "pkg")


def make_engine(**overrides) -> CheckEngine:
    return CheckEngine(Config.load(None).with_overrides(overrides))


class TestCheckEngine:
    """Tests for CheckEngine.run and check_file."""

    def test_single_file(self):
        """A file argument is checked directly."""
        report = make_engine().run([os.path.join(TESTDATA, "a.go")])
        assert [i.complexity for i in report.issues] == [1, 6, 4]
        assert report.files_checked == 1
        assert report.errors == []

    def test_generated_file_is_skipped(self):
        """Generated files yield no issues whatever their content."""
        report = make_engine().run([os.path.join(TESTDATA, "generated.go")])
        assert report.issues == []
        assert report.files_checked == 0

    def test_generated_file_raises_from_check_file(self):
        """check_file reports the reason for skipping."""
        with pytest.raises(GeneratedFileError, match="is a generated file"):
            make_engine().check_file(os.path.join(TESTDATA, "generated.go"))

    def test_broken_file_does_not_stop_the_batch(self, caplog):
        """Syntax errors are logged at debug level and the other files are still checked."""
        args = [os.path.join(TESTDATA, "broken.go"), os.path.join(TESTDATA, "c.go")]
        with caplog.at_level(logging.DEBUG, logger="nestif"):
            report = make_engine().run(args)
        assert [i.complexity for i in report.issues] == [4, 4]
        assert "syntax error" in caplog.text

    def test_broken_file_raises_from_check_file(self):
        """check_file surfaces parse failures."""
        with pytest.raises(ParseError):
            make_engine().check_file(os.path.join(TESTDATA, "broken.go"))

    def test_directory(self):
        """A directory argument checks its Go files only."""
        report = make_engine().run([PKG])
        assert [(i.pos.filename, i.pos.line) for i in report.issues] == [
            (os.path.join(PKG, "a.go"), 5)
        ]

    def test_recursive(self):
        """A ``dir/...`` argument checks the whole tree minus testdata."""
        report = make_engine().run([PKG + "/..."])
        assert [i.pos.filename for i in report.issues] == [
            os.path.join(PKG, "a.go"),
            os.path.join(PKG, "sub", "a.go"),
        ]

    def test_exclude_dirs(self):
        """Files in excluded directories are skipped."""
        report = make_engine(files={"exclude_dirs": ["sub$"]}).run([PKG + "/..."])
        assert [i.pos.filename for i in report.issues] == [os.path.join(PKG, "a.go")]

    def test_invalid_exclude_pattern(self):
        """A bad exclude pattern is rejected when the engine is built."""
        with pytest.raises(ConfigError):
            make_engine(files={"exclude_dirs": ["(^|/testdata"]})

    def test_unknown_package(self, tmp_path, monkeypatch):
        """Unresolvable import paths are reported as errors."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GOPATH", str(tmp_path / "gopath"))
        monkeypatch.delenv("GOROOT", raising=False)
        report = make_engine().run(["example.com/nowhere"])
        assert report.issues == []
        assert report.errors == ["cannot find package 'example.com/nowhere'"]

    def test_module_package(self, tmp_path, monkeypatch):
        """Import paths inside the current module are checked with absolute paths."""
        (tmp_path / "go.mod").write_text("module example.com/demo\n")
        lib = tmp_path / "lib"
        lib.mkdir()
        with open(os.path.join(PKG, "a.go"), "rb") as f:
            (lib / "a.go").write_bytes(f.read())
        monkeypatch.chdir(tmp_path)
        report = make_engine().run(["example.com/demo/lib"])
        assert [i.pos.filename for i in report.issues] == [str(lib.resolve() / "a.go")]

    def test_parallel_matches_sequential(self):
        """Worker count does not change results or their order."""
        args = [os.path.join(TESTDATA, name) for name in ("a.go", "c.go", "d.go", "closures.go")]
        sequential = make_engine(files={"workers": 1}).run(args)
        parallel = make_engine(files={"workers": 4}).run(args)
        assert parallel.issues == sequential.issues
        assert parallel.files_checked == sequential.files_checked == 4

    def test_min_complexity_from_config(self):
        """The configured threshold reaches the checker."""
        report = make_engine(checker={"min_complexity": 5}).run([os.path.join(TESTDATA, "a.go")])
        assert [i.complexity for i in report.issues] == [6]
