# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Append-only JSONL trace of the messages a node sees and sends."""

import json
import os
from pathlib import Path
from types import TracebackType
from typing import Any

from maelnode import now_iso
from maelnode.errors import EncodeError
from maelnode.persistence import _full_write, truncate_partial_tail


class EventLog:
    """Per-node structured event log.

    One JSON object per line: ``{**context, "seq", "ts", "event", "data"}``.
    With ``durable=True`` every entry is fsynced before log() returns. A torn
    tail left by a crash is cut off when the log is reopened.
    """

    def __init__(
        self,
        path: Path,
        context: dict[str, str] | None = None,
        *,
        durable: bool = True,
    ) -> None:
        self._path = path
        self._context = dict(context or {})
        self._durable = durable
        self._fd: int | None = None
        self._seq = 0

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        """Open for appending, repairing a torn tail from a prior crash."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        truncate_partial_tail(self._path)
        self._fd = os.open(
            self._path,
            os.O_WRONLY | os.O_CREAT | os.O_APPEND,
            0o644,
        )

    def __enter__(self) -> "EventLog":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def bind(self, **context: str) -> None:
        """Add context fields to every later entry (e.g. node_id after init)."""
        self._context.update(context)

    def log(self, event: str, data: dict[str, Any] | None = None) -> None:
        """Append one event. Raises EncodeError if *data* is not plain JSON."""
        if self._fd is None:
            msg = "EventLog not open"
            raise RuntimeError(msg)
        line = self._serialize(event, data)
        self._seq += 1
        _full_write(self._fd, line)
        if self._durable:
            os.fsync(self._fd)

    def close(self) -> None:
        """Close the file descriptor."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def _serialize(self, event: str, data: dict[str, Any] | None) -> bytes:
        entry: dict[str, Any] = {
            **self._context,
            "seq": self._seq + 1,
            "ts": now_iso(),
            "event": event,
        }
        if data is not None:
            entry["data"] = data
        try:
            text = json.dumps(entry, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"cannot encode trace entry {event!r}: {exc}") from exc
        return (text + "\n").encode()


def read_log(path: Path) -> list[dict[str, Any]]:
    """Read all complete entries. Missing file reads as empty.

    A trailing line without its newline is a torn write and is skipped.
    """
    if not path.exists():
        return []
    content = path.read_text()
    entries: list[dict[str, Any]] = []
    for line in content.split("\n")[:-1]:
        if line:
            entries.append(json.loads(line))
    return entries


__all__ = ["EventLog", "read_log"]
