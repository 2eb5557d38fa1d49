"""
Renders an SPDX-style license XML document as plain text.
Writes to stdout, or to the file given with --out.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .defaults import current_year, default_copyright_holder
from .exceptions import ParseEncodingError, RenderError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, safe_open_binary
from .formats import parse_encoding
from .renderer import render_file, render_to_bytes

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file. Defaults to stdout.",
)
@click.option(
    "--format",
    "output_format",
    help="Output format: plain[,WIDTH[,unix|windows]], markdown[,WIDTH] or html.",
)
@click.option("--line-width", type=int, help="Maximum characters per line")
@click.option(
    "--line-ending", type=click.Choice(["unix", "windows"]), help="Line-ending convention"
)
@click.option("--no-copyright", is_flag=True, help="Don't add a copyright notice.")
@click.option("--year", type=int, help="Copyright year. Defaults to the current year.")
@click.option(
    "--copyright",
    "copyright_holder",
    help="Copyright holder. Defaults to 'user.name' from git config.",
)
@click.option("--ascii", "ascii_only", is_flag=True, help="Replace unicode characters with ascii.")
@click.option("-v", "--verbose", is_flag=True, help="Log rendering steps to stderr.")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def cli(
    filepath: Path,
    out: Path | None = None,
    output_format: str | None = None,
    line_width: int | None = None,
    line_ending: str | None = None,
    no_copyright: bool = False,
    year: int | None = None,
    copyright_holder: str | None = None,
    ascii_only: bool = False,
    verbose: bool = False,
):
    """
    Entry point for rendering a license document.

    Args:
        filepath: Path to the license XML document.
        out: Destination file; stdout when omitted.
        output_format: Output encoding string such as ``plain,72,windows``.
        line_width: Override for the wrapping width.
        line_ending: Override for the line-ending convention.
        no_copyright: Leave out the copyright notice.
        year: Copyright year.
        copyright_holder: Copyright holder.
        ascii_only: Request ASCII-only output.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the format string or configuration values are invalid.
        click.ClickException: If the document is malformed, the format is not
            implemented, or the input or output file cannot be accessed.

    Examples:
        license-render MIT.xml --format plain,72 --out LICENSE
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    overrides: dict[str, object] = {}
    if output_format is not None:
        try:
            encoding = parse_encoding(output_format)
        except ParseEncodingError as error:
            raise click.BadParameter(str(error), param_hint="'--format'") from error
        overrides["output_encoding"] = encoding.name
        # Fields left out of the format string keep their configured values
        field_count = output_format.count(",")
        if field_count >= 1:
            overrides["line_width"] = encoding.line_width
        if field_count >= 2:
            overrides["line_ending"] = encoding.line_ending

    # Flags given alongside --format take precedence over its fields
    flags = {
        "line_width": line_width,
        "line_ending": line_ending,
        "emit_copyright": False if no_copyright else None,
        "year": year,
        "copyright_holder": copyright_holder,
        "ascii": True if ascii_only else None,
    }
    overrides.update({key: value for key, value in flags.items() if value is not None})

    try:
        config = build_config(filepath.parent.resolve(), **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    config = apply_overrides(
        config,
        year=config.year or current_year(),
        copyright_holder=config.copyright_holder or default_copyright_holder(),
    )

    if config.emit_copyright and (year is not None or copyright_holder is not None):
        click.echo(
            "Warning: --year and --copyright are not substituted into the copyright notice yet",
            err=True,
        )

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        if out is None:
            enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
            with safe_open_binary(filepath) as source:
                rendered = render_to_bytes(source, config)
            stdout = click.get_binary_stream("stdout")
            stdout.write(rendered)
            stdout.flush()
        else:
            render_file(filepath, out, config, max_file_size=max_file_size)
    except RenderError as error:
        raise click.ClickException(f"{filepath}: {error}") from error
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
