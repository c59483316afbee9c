from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest

from md_to_html.cli import cli


def _write(tmp_path: Path, name: str, content: str) -> Path:
    target = tmp_path / name
    target.write_text(textwrap.dedent(content), encoding="utf-8")
    return target


def _error_text(result) -> str:
    """Return combined stdout and exception text for assertions."""
    return f"{result.output}{result.exception}"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_symlink_rejected(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "source.md", "# Heading\n")
    link = tmp_path / "alias.md"
    os.symlink(source, link)

    result = cli_runner.invoke(cli, [str(link)])

    assert result.exit_code != 0
    assert "Symlinks are not supported" in _error_text(result)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_symlinked_output_rejected(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "source.md", "# Heading\n")
    victim = _write(tmp_path, "victim.txt", "keep me\n")
    link = tmp_path / "out.html"
    os.symlink(victim, link)

    result = cli_runner.invoke(cli, [str(source), "-o", str(link)])

    assert result.exit_code != 0
    assert "Symlinks are not supported" in _error_text(result)
    assert victim.read_text(encoding="utf-8") == "keep me\n"


def test_file_outside_working_directory_rejected(cli_runner, tmp_path, monkeypatch):
    workdir = tmp_path / "work"
    workdir.mkdir()
    outside = _write(tmp_path, "outside.md", "# Heading\n")
    monkeypatch.chdir(workdir)

    result = cli_runner.invoke(cli, [str(outside)])

    assert result.exit_code != 0
    assert "outside of the working directory" in _error_text(result)


def test_large_file_rejected_by_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".md-to-html.toml").write_text(
        "[md-to-html]\nmax_file_size = 8\n", encoding="utf-8"
    )
    target = _write(tmp_path, "big.md", "x" * 64)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "exceeding the maximum allowed size of 8 bytes" in _error_text(result)


def test_markup_is_not_escaped_without_opt_in(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "xss.md", '[click](javascript:alert("x"))\n')

    result = cli_runner.invoke(cli, [str(target)])
    escaped = cli_runner.invoke(cli, ["--escape", str(target)])

    assert result.output == '<a href="javascript:alert("x"">click</a><p>)</p>\n'
    assert escaped.output == '<a href="javascript:alert(&quot;x&quot;">click</a><p>)</p>\n'
