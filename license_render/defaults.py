"""Environment-derived defaults for the copyright notice."""

from __future__ import annotations

import datetime
import shutil
import subprocess

from .constants import DEFAULT_COPYRIGHT_HOLDER


def current_year() -> int:
    """Return the current year in local time."""
    return datetime.date.today().year


def git_user_name() -> str | None:
    """Return ``user.name`` from the git configuration, or None when unavailable."""
    git = shutil.which("git")
    if git is None:
        return None
    try:
        completed = subprocess.run(
            [git, "config", "--get", "user.name"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    name = completed.stdout.strip()
    return name if completed.returncode == 0 and name else None


def default_copyright_holder() -> str:
    """Resolve the default copyright holder.

    Examples:
        default_copyright_holder()  # "Jane Doe", or "[copyright holder(s)]"
    """
    return git_user_name() or DEFAULT_COPYRIGHT_HOLDER
