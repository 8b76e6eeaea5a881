"""Tests for the command-line front end."""

import io
from pathlib import Path

import pytest

from pydantic_mustache.__main__ import main
from pydantic_mustache.__main__ import merge_override


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Create a template, layout and data files."""
    (tmp_path / "hello.mustache").write_text("hello {{name}}", encoding="utf-8")
    (tmp_path / "layout.mustache").write_text("[{{{content}}}]", encoding="utf-8")
    (tmp_path / "data.yml").write_text("name: world\n", encoding="utf-8")
    (tmp_path / "data.json").write_text('{"name": "json"}', encoding="utf-8")
    (tmp_path / "over.yml").write_text("name: override\n", encoding="utf-8")
    return tmp_path


class TestMain:
    """Test running the command line."""

    def test_yaml_data_file(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test rendering with a YAML data file."""
        status = main([str(workdir / "data.yml"), str(workdir / "hello.mustache")])

        assert status == 0
        assert capsys.readouterr().out == "hello world"

    def test_json_data_file(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test JSON data is accepted."""
        status = main([str(workdir / "data.json"), str(workdir / "hello.mustache")])

        assert status == 0
        assert capsys.readouterr().out == "hello json"

    def test_data_from_stdin(
        self,
        workdir: Path,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test data is read from stdin when no data file is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("name: stdin\n"))

        assert main([str(workdir / "hello.mustache")]) == 0
        assert capsys.readouterr().out == "hello stdin"

    def test_layout(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test rendering inside a layout."""
        status = main(
            [
                "--layout",
                str(workdir / "layout.mustache"),
                str(workdir / "data.yml"),
                str(workdir / "hello.mustache"),
            ]
        )

        assert status == 0
        assert capsys.readouterr().out == "[hello world]"

    def test_override(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test override data replaces top-level keys."""
        status = main(
            [
                "--override",
                str(workdir / "over.yml"),
                str(workdir / "data.yml"),
                str(workdir / "hello.mustache"),
            ]
        )

        assert status == 0
        assert capsys.readouterr().out == "hello override"

    def test_strict_missing_variable(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test --strict reports missing variables and fails."""
        (workdir / "empty.yml").write_text("other: 1\n", encoding="utf-8")
        status = main(
            ["--strict", str(workdir / "empty.yml"), str(workdir / "hello.mustache")]
        )

        assert status == 1
        assert "Error: Missing variable 'name'" in capsys.readouterr().err

    def test_parse_error(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test malformed templates fail with the parse message."""
        (workdir / "bad.mustache").write_text("{{#a}}", encoding="utf-8")
        status = main([str(workdir / "data.yml"), str(workdir / "bad.mustache")])

        assert status == 1
        assert "line 1: Section a has no closing tag" in capsys.readouterr().err

    def test_missing_template_file(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an unreadable template fails cleanly."""
        status = main([str(workdir / "data.yml"), str(workdir / "nope.mustache")])

        assert status == 1
        assert capsys.readouterr().err.startswith("Error: ")


class TestMergeOverride:
    """Test combining data with override data."""

    def test_top_level_keys_replaced(self) -> None:
        """Test only top-level keys are replaced."""
        data = {"a": 1, "b": {"c": 2}}
        assert merge_override(data, {"b": {"d": 3}}) == {"a": 1, "b": {"d": 3}}

    def test_non_mapping_rejected(self) -> None:
        """Test both documents must be mappings."""
        with pytest.raises(TypeError, match="mappings"):
            merge_override([1], {"a": 1})
