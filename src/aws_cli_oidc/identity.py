"""Process identity helpers."""

from __future__ import annotations

import getpass
import os


def current_user() -> str:
    """Return the login name of the invoking user.

    ``USER`` is checked first, then ``USERNAME`` (Windows), then the
    password database.
    """
    for key in ("USER", "USERNAME"):
        value = os.getenv(key)
        if value:
            return value
    return getpass.getuser()
