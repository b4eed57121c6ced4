# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Low-level file write primitives for the trace log."""

import os
from pathlib import Path


def _full_write(fd: int, data: bytes) -> None:
    """Write all bytes, retrying on short writes."""
    while data:
        n = os.write(fd, data)
        data = data[n:]


def truncate_partial_tail(path: Path) -> int:
    """Drop an incomplete trailing line left by a crash mid-append.

    Returns the number of bytes removed.
    """
    if not path.exists():
        return 0
    content = path.read_bytes()
    # A well-formed JSONL file is empty or ends with b'\n'.
    if not content or content.endswith(b"\n"):
        return 0
    last_nl = content.rfind(b"\n")
    truncate_to = last_nl + 1 if last_nl >= 0 else 0
    fd = os.open(path, os.O_WRONLY)
    try:
        os.ftruncate(fd, truncate_to)
        os.fsync(fd)
    finally:
        os.close(fd)
    return len(content) - truncate_to
