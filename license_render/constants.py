"""Constants used across the license-render package."""

from __future__ import annotations

# Element names of the license markup schema
TEXT_ELEMENT = "text"
TITLE_ELEMENT = "titleText"
COPYRIGHT_ELEMENT = "copyrightText"
PARAGRAPH_ELEMENT = "p"

# Rendering defaults
DEFAULT_LINE_WIDTH = 80
DEFAULT_OUTPUT_ENCODING = "plain"
OUTPUT_ENCODINGS = ("plain", "markdown", "html")
ENCODING_ALIASES = {"md": "markdown"}
DEFAULT_COPYRIGHT_HOLDER = "[copyright holder(s)]"

# Input limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
READ_CHUNK_SIZE = 64 * 1024

# Configuration lookup
CONFIG_TABLE = "license-render"
CONFIG_DOTFILE = ".license-render.toml"
