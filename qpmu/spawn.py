"""Starting detached helper processes."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable


def free_null(
    cmd: str | os.PathLike[str], args: Iterable[str | os.PathLike[str]]
) -> subprocess.Popen[bytes]:
    """Start ``cmd`` with ``args``, its standard streams all sent to the null device.

    Raises ``OSError`` if the process cannot be started.
    """
    return subprocess.Popen(
        [os.fspath(cmd), *(os.fspath(arg) for arg in args)],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )