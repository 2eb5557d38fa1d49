from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from license_render.config import (
    ConfigError,
    RenderConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)
from license_render.formats import Html, Markdown, Plain
from license_render.models import LineEnding


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".license-render.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        line_width = 72
        line_ending = "windows"
        emit_copyright = false
        output_encoding = "plain"
        year = 2024
        copyright_holder = "Jane Doe"
        ascii = true
        """,
    )

    config = load_config(tmp_path)

    assert config == RenderConfig(
        line_width=72,
        line_ending=LineEnding.WINDOWS,
        emit_copyright=False,
        output_encoding="plain",
        year=2024,
        copyright_holder="Jane Doe",
        ascii=True,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [license-render]
        line_width = 60
        output_encoding = "md"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.line_width == 60
    assert config.output_encoding == "markdown"


def test_pyproject_without_table_falls_through_to_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "demo"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [tool.license-render]
        line_width = 50
        """,
    )

    assert load_config(tmp_path).line_width == 50


def test_pyproject_table_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        line_width = 70
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [license-render]
        line_width = 50
        """,
    )

    assert load_config(tmp_path).line_width == 70


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        line_width = 66
        """,
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert load_config(nested).line_width == 66


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.license-render\n", encoding="utf-8")

    assert load_config(tmp_path) == RenderConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        colour = "blue"
        """,
    )

    with pytest.raises(ConfigError, match="tool.license-render"):
        load_config(tmp_path)


def test_non_table_value_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        license-render = 3
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_line_ending_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        line_ending = "mac"
        """,
    )

    with pytest.raises(ConfigError, match="line_ending"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("config", "message"),
    [
        (RenderConfig(line_width=0), "line_width"),
        (RenderConfig(line_width=True), "line_width"),
        (RenderConfig(line_width="80"), "line_width"),
        (RenderConfig(emit_copyright="yes"), "emit_copyright"),
        (RenderConfig(ascii=1), "ascii"),
        (RenderConfig(output_encoding="rtf"), "output_encoding"),
        (RenderConfig(year=0), "year"),
        (RenderConfig(copyright_holder="  "), "copyright_holder"),
    ],
)
def test_validate_config_rejects_invalid_values(config: RenderConfig, message: str):
    with pytest.raises(ConfigError, match=message):
        validate_config(config)


def test_encoding_follows_output_encoding():
    assert RenderConfig(line_width=70).encoding() == Plain(70, LineEnding.UNIX)
    assert RenderConfig(output_encoding="markdown", line_width=70).encoding() == Markdown(70)
    assert RenderConfig(output_encoding="html").encoding() == Html()


def test_encoding_accepts_markdown_alias():
    assert RenderConfig(output_encoding="md").encoding() == Markdown(80)


def test_encoding_rejects_unknown_output_encoding():
    with pytest.raises(ConfigError, match="output_encoding"):
        RenderConfig(output_encoding="rtf").encoding()


def test_apply_overrides_ignores_none():
    config = RenderConfig(line_width=72)

    assert apply_overrides(config, line_width=None) is config
    assert apply_overrides(config, emit_copyright=False).emit_copyright is False


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.license-render]
        line_width = 72
        line_ending = "windows"
        """,
    )

    config = build_config(tmp_path, line_width=40, line_ending="unix")

    assert config.line_width == 40
    assert config.line_ending is LineEnding.UNIX


def test_build_config_validates_overrides(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, line_width=-1)
