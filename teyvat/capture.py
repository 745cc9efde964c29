"""Collect what a callable prints."""

from __future__ import annotations

import contextlib
import io
from typing import Callable


def capture_output(func: Callable[[], object]) -> str:
    """Run func and return everything it wrote to stdout and stderr."""
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer), contextlib.redirect_stderr(buffer):
        func()
    return buffer.getvalue()