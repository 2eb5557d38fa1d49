"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    CONFIG_DOTFILE,
    CONFIG_TABLE,
    DEFAULT_LINE_WIDTH,
    DEFAULT_OUTPUT_ENCODING,
    ENCODING_ALIASES,
    OUTPUT_ENCODINGS,
)
from .exceptions import ParseEncodingError
from .formats import Html, Markdown, OutputEncoding, Plain
from .models import LineEnding


@dataclass(frozen=True)
class RenderConfig:
    """Configuration consumed by the renderer.

    Attributes:
        line_width: Maximum characters per wrapped line.
        line_ending: Line-ending convention for every emitted break.
        emit_copyright: Whether the copyright section is rendered.
        output_encoding: One of ``"plain"``, ``"markdown"`` or ``"html"``.
        year: Copyright year. Accepted but not substituted into the output.
        copyright_holder: Copyright holder. Accepted but not substituted into
            the output.
        ascii: Replace non-ASCII characters. Accepted but not applied.

    Examples:
        RenderConfig(line_width=72, line_ending=LineEnding.WINDOWS)
    """

    # Wrapping
    line_width: int = DEFAULT_LINE_WIDTH
    line_ending: LineEnding = LineEnding.UNIX

    # Sections
    emit_copyright: bool = True

    # Output
    output_encoding: str = DEFAULT_OUTPUT_ENCODING

    # Copyright notice
    year: int | None = None
    copyright_holder: str | None = None
    ascii: bool = False

    def encoding(self) -> OutputEncoding:
        """Build the output encoding variant this configuration selects.

        Raises:
            ConfigError: If `output_encoding` or `line_ending` names nothing
                known.
        """
        name = ENCODING_ALIASES.get(self.output_encoding, self.output_encoding)
        if name == "markdown":
            return Markdown(line_width=self.line_width)
        if name == "html":
            return Html()
        if name != "plain":
            raise ConfigError(f"`output_encoding` must be one of: {', '.join(OUTPUT_ENCODINGS)}")
        return Plain(line_width=self.line_width, line_ending=normalize_config(self).line_ending)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`line_width` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Find the closest license-render settings at or above `search_path`.

    In each directory, from `search_path` up to the root, the
    ``[tool.license-render]`` table of `pyproject.toml` wins over the
    `.license-render.toml` dotfile, which may use either ``[license-render]`` or
    ``[tool.license-render]``. Unreadable TOML is ignored; with no table
    anywhere the defaults are returned.

    Raises:
        ConfigError: If the table is not a mapping, has unknown keys, or names
            an unknown line ending.

    Examples:
        load_config(Path("licenses"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / CONFIG_DOTFILE,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RenderConfig()

    try:
        return RenderConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: RenderConfig) -> RenderConfig:
    """Convert loosely typed values (strings from TOML or the CLI) to canonical ones.

    Raises:
        ConfigError: If `line_ending` names an unknown convention.
    """
    line_ending = config.line_ending
    if isinstance(line_ending, str):
        try:
            line_ending = LineEnding.parse(line_ending)
        except ParseEncodingError as error:
            raise ConfigError("`line_ending` must be one of: unix, windows") from error

    output_encoding = config.output_encoding
    if isinstance(output_encoding, str):
        output_encoding = ENCODING_ALIASES.get(output_encoding, output_encoding)

    return replace(config, line_ending=line_ending, output_encoding=output_encoding)


def validate_config(config: RenderConfig) -> None:
    """Reject a configuration the renderer cannot honour.

    Raises:
        ConfigError: On a non-positive `line_width` or `year`, a non-boolean
            flag, an unknown encoding or line ending, or a blank
            `copyright_holder`.
    """
    config = normalize_config(config)

    _ensure_integers({"line_width": config.line_width})
    _ensure_positive({"line_width": config.line_width})

    for key in ("emit_copyright", "ascii"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    if config.output_encoding not in OUTPUT_ENCODINGS:
        raise ConfigError(f"`output_encoding` must be one of: {', '.join(OUTPUT_ENCODINGS)}")

    if not isinstance(config.line_ending, LineEnding):
        raise ConfigError("`line_ending` must be one of: unix, windows")

    if config.year is not None:
        _ensure_integers({"year": config.year})
        _ensure_positive({"year": config.year})

    if config.copyright_holder is not None:
        if not isinstance(config.copyright_holder, str) or not config.copyright_holder.strip():
            raise ConfigError("`copyright_holder` must be a non-empty string")


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Return `config` with every non-None override applied.

    Raises:
        TypeError: If an override is not a `RenderConfig` field.

    Examples:
        apply_overrides(config, line_width=72, emit_copyright=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Discover settings from `search_path`, apply CLI overrides, then check them.

    Raises:
        ConfigError: If the settings file or the resulting values are invalid.

    Examples:
        build_config(Path.cwd(), line_width=72)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
