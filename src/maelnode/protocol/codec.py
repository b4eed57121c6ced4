# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Line-delimited JSON codec for envelopes.

Generic over the payload set: only ``src``, ``dest``, ``body``, ``msg_id``
and ``in_reply_to`` are known here. Everything else in a body belongs to
the :class:`~maelnode.protocol.payload.PayloadSet` the caller passes in.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from typing import Any

from maelnode.errors import DecodeError, EncodeError
from maelnode.protocol.message import Body, Envelope
from maelnode.protocol.payload import PayloadSet


def _correlation_id(body: dict[str, Any], key: str) -> int | None:
    value = body.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"{key} must be a non-negative integer or null")
    return value


def envelope_from_dict(obj: Any, payloads: PayloadSet) -> Envelope[Any]:
    """Validate a parsed JSON value and build an envelope from it."""
    if not isinstance(obj, dict):
        raise DecodeError(f"expected a JSON object, got {type(obj).__name__}")
    for key in ("src", "dest"):
        if not isinstance(obj.get(key), str):
            raise DecodeError(f"missing or non-string {key!r}")
    body = obj.get("body")
    if not isinstance(body, dict):
        raise DecodeError("missing or non-object 'body'")
    return Envelope(
        src=obj["src"],
        dest=obj["dest"],
        body=Body(
            payload=payloads.decode(body),
            msg_id=_correlation_id(body, "msg_id"),
            in_reply_to=_correlation_id(body, "in_reply_to"),
        ),
    )


def decode_envelope(line: str | bytes, payloads: PayloadSet) -> Envelope[Any]:
    """Decode one line of UTF-8 JSON. Raises DecodeError."""
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8: {exc}") from exc
    text = line.rstrip("\r\n")
    try:
        obj = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the interpreter stack.
        raise DecodeError(f"invalid JSON: {exc}", line=text) from exc
    try:
        return envelope_from_dict(obj, payloads)
    except DecodeError as exc:
        exc.line = text
        raise


def encode_envelope(envelope: Envelope[Any]) -> str:
    """Encode to a single compact line, without the trailing newline."""
    try:
        return json.dumps(envelope.to_dict(), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        msg = f"cannot encode message to {envelope.dest}: {exc}"
        raise EncodeError(msg) from exc


def iter_envelopes(
    lines: Iterable[str | bytes],
    payloads: PayloadSet,
    *,
    start: int = 1,
) -> Iterator[Envelope[Any]]:
    """Lazily decode envelopes, one per non-blank line.

    *start* is the line number of the first line, for error messages.
    Stops when *lines* is exhausted. The first bad line raises DecodeError,
    including a text stream that fails to decode its bytes as UTF-8.
    """
    it = iter(lines)
    lineno = start
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8: {exc}", lineno=lineno) from exc
        if line.strip():
            try:
                envelope = decode_envelope(line, payloads)
            except DecodeError as exc:
                exc.lineno = lineno
                raise
            yield envelope
        lineno += 1
