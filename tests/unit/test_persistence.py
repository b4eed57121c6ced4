# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the low-level write primitives."""

import os
from pathlib import Path

from maelnode.persistence import _full_write, truncate_partial_tail


def test_full_write(tmp_path: Path) -> None:
    target = tmp_path / "out.bin"
    fd = os.open(target, os.O_WRONLY | os.O_CREAT, 0o644)
    try:
        _full_write(fd, b"x" * 100_000)
    finally:
        os.close(fd)
    assert target.read_bytes() == b"x" * 100_000


def test_truncate_missing_file(tmp_path: Path) -> None:
    assert truncate_partial_tail(tmp_path / "nope.jsonl") == 0


def test_truncate_clean_file_untouched(tmp_path: Path) -> None:
    target = tmp_path / "log.jsonl"
    target.write_bytes(b'{"a":1}\n{"b":2}\n')
    assert truncate_partial_tail(target) == 0
    assert target.read_bytes() == b'{"a":1}\n{"b":2}\n'


def test_truncate_torn_tail(tmp_path: Path) -> None:
    target = tmp_path / "log.jsonl"
    target.write_bytes(b'{"a":1}\n{"b"')
    assert truncate_partial_tail(target) == 4
    assert target.read_bytes() == b'{"a":1}\n'


def test_truncate_single_partial_line(tmp_path: Path) -> None:
    """No newline at all means nothing complete was ever written."""
    target = tmp_path / "log.jsonl"
    target.write_bytes(b'{"a"')
    assert truncate_partial_tail(target) == 4
    assert target.read_bytes() == b""
