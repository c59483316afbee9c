from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from md_to_html.config import (
    ConfigError,
    RenderConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".md-to-html.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        escape_html = true
        advisory_class = "notice"
        summary_class = "notice-title"
        separator = ""
        max_file_size = 1024
        """,
    )

    config = load_config(tmp_path)

    assert config == RenderConfig(
        escape_html=True,
        advisory_class="notice",
        summary_class="notice-title",
        separator="",
        max_file_size=1024,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [md-to-html]
        separator = "<br>"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.separator == "<br>"
    assert config.escape_html is False


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.md-to-html]
        escape_html = true
        """,
    )

    assert load_config(tmp_path).escape_html is True


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        advisory_class = "root"
        """,
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert load_config(nested).advisory_class == "root"


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "unrelated"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [md-to-html]
        separator = "dot"
        """,
    )

    assert load_config(tmp_path).separator == "dot"


def test_load_config_defaults_when_missing(tmp_path: Path):
    assert load_config(tmp_path) == RenderConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.md-to-html\n")

    assert load_config(tmp_path) == RenderConfig()


def test_empty_table_returns_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        """,
    )

    assert load_config(tmp_path) == RenderConfig()


def test_load_config_rejects_unknown_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        unknown = 1
        """,
    )

    with pytest.raises(ConfigError, match="Invalid `\\[tool.md-to-html\\]` settings"):
        load_config(tmp_path)


def test_load_config_rejects_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        md-to-html = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config, message",
    [
        (RenderConfig(escape_html="yes"), "`escape_html` must be a boolean"),
        (RenderConfig(separator=1), "`separator` must be a string"),
        (RenderConfig(advisory_class=""), "`advisory_class` must not be empty"),
        (RenderConfig(summary_class=""), "`summary_class` must not be empty"),
        (RenderConfig(max_file_size=0), "`max_file_size` must be a positive integer"),
        (RenderConfig(max_file_size="big"), "`max_file_size` must be an integer"),
        (RenderConfig(max_file_size=True), "`max_file_size` must be an integer"),
    ],
)
def test_validate_config_rejects_invalid_values(config: RenderConfig, message: str):
    with pytest.raises(ConfigError) as exc_info:
        validate_config(config)
    assert message in str(exc_info.value)


def test_validate_config_accepts_defaults():
    validate_config(RenderConfig())


def test_apply_overrides_ignores_none():
    config = RenderConfig()

    assert apply_overrides(config, escape_html=None) is config
    assert apply_overrides(config, escape_html=True).escape_html is True


def test_apply_overrides_rejects_unknown_field():
    with pytest.raises(TypeError):
        apply_overrides(RenderConfig(), unknown=1)


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        escape_html = true
        """,
    )

    assert build_config(tmp_path, escape_html=False).escape_html is False

    with pytest.raises(ConfigError):
        build_config(tmp_path, max_file_size=-1)
