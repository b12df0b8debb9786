"""Whether the current user has administrator privileges."""

from __future__ import annotations

import os
import sys

_WINDOWS_PHYSICAL_DRIVE = "\\\\.\\PHYSICALDRIVE0"


def current_user_is_elevated() -> bool:
    """Return True when running as root, or as Administrator on Windows."""
    if sys.platform == "win32":
        try:
            with open(_WINDOWS_PHYSICAL_DRIVE, "rb"):
                return True
        except OSError:
            return False
    return os.getuid() == 0