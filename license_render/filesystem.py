"""Filesystem helpers for license-render."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from .constants import DEFAULT_MAX_FILE_SIZE

MAX_FILE_SIZE_ENV_VAR = "LICENSE_RENDER_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Read the input size limit from `LICENSE_RENDER_MAX_FILE_SIZE`.

    Falls back to `default` bytes when the variable is unset.

    Raises:
        ValueError: If the variable holds anything but a positive integer.
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat a license document, refusing anything but a regular file.

    Raises:
        IOError: If the path cannot be stat'ed or names a directory, FIFO or
            device.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Refuse documents larger than `max_size` bytes.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_open_binary(filepath: Path) -> BinaryIO:
    """Open a license document for the reader, mapping access errors to `IOError`.

    Examples:
        with safe_open_binary(Path("MIT.xml")) as source:
            render(source, sink)
    """
    try:
        return open(filepath, "rb")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def atomic_write(filepath: Path, write: Callable[[BinaryIO], None]) -> None:
    """Create or replace `filepath` with the bytes produced by `write`.

    Output goes to a temporary file in the target directory which replaces
    `filepath` only after `write` returns. When `write` raises, the temporary
    file is removed and any existing `filepath` is left untouched. An existing
    file keeps its permissions; a new one gets the default permissions for the
    current umask.

    Args:
        filepath: Destination path.
        write: Callback receiving the temporary file opened for binary writing.

    Raises:
        IOError: If the destination directory is missing or cannot be written.

    Examples:
        atomic_write(Path("LICENSE"), lambda handle: handle.write(b"MIT License\\n"))
    """
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        permissions = 0o666 & ~_current_umask()
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    temp_path: Path | None = None
    try:
        try:
            tmp_file = tempfile.NamedTemporaryFile(
                mode="wb", delete=False, dir=filepath.parent, prefix=f".{filepath.name}."
            )
        except OSError as error:
            raise IOError(f"Cannot write to {filepath.parent}: {error}") from error

        with tmp_file:
            temp_path = Path(tmp_file.name)
            write(tmp_file)

            # Ensure the temporary file is flushed and synced before it replaces the target
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        # Replace the original file with the temporary file (atomic operation)
        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
