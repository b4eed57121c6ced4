# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Node runtime: handshake, then a read/dispatch/write loop.

Single-threaded and synchronous. Every failure is fatal and propagates to
the caller; the supervisor that started the process owns retry policy.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Generic, TextIO, TypeVar

from maelnode.errors import DecodeError, HandshakeError, WriteError
from maelnode.logging import EventLog, log_method
from maelnode.node.base import Node
from maelnode.protocol.codec import decode_envelope, encode_envelope, iter_envelopes
from maelnode.protocol.message import (
    HANDSHAKE,
    INIT_OK_MSG_ID,
    Envelope,
    Init,
    InitOk,
)

_log = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


class NodeRuntime(Generic[N]):
    """Drives one node over an input stream and a text output stream.

    The first input line must be the init handshake. After that each
    non-blank line is one inbound envelope. Input may be text or bytes;
    byte lines are decoded as UTF-8 one at a time. Replies are written one
    per line and flushed immediately.
    """

    def __init__(
        self,
        node_cls: type[N],
        stdin: IO[str] | IO[bytes],
        stdout: TextIO,
        *,
        log: EventLog | None = None,
    ) -> None:
        self._node_cls = node_cls
        self._stdin = stdin
        self._stdout = stdout
        self._log = log
        self._node: N | None = None
        self._handled = 0
        self._replied = 0

    @property
    def node(self) -> N:
        """The handler instance. RuntimeError before the handshake."""
        if self._node is None:
            msg = "handshake not done"
            raise RuntimeError(msg)
        return self._node

    @property
    def handled(self) -> int:
        """Steady-state messages dispatched so far."""
        return self._handled

    @property
    def replied(self) -> int:
        """Steady-state replies written so far."""
        return self._replied

    def handshake(self) -> N:
        """Read the init line, build the node and acknowledge.

        Raises HandshakeError if input is closed or the line is not init.
        """
        if self._node is not None:
            msg = "handshake already done"
            raise RuntimeError(msg)
        try:
            line = self._stdin.readline()
        except UnicodeDecodeError as exc:
            msg = f"malformed init message: invalid UTF-8: {exc}"
            raise HandshakeError(msg) from exc
        if not line:
            raise HandshakeError("input closed before init message")
        try:
            init: Envelope[Init] = decode_envelope(line, HANDSHAKE)
        except DecodeError as exc:
            raise HandshakeError(f"malformed init message: {exc}") from exc
        self._node = self._node_cls.from_init(init)
        if self._log is not None:
            self._log.bind(node_id=init.payload.node_id)
        self._write(self.acknowledge(init))
        _log.info(
            "node %s initialized, cluster of %d",
            init.payload.node_id,
            len(init.payload.node_ids),
        )
        return self._node

    @log_method(before=True, after=True)
    def acknowledge(self, init: Envelope[Init]) -> Envelope[InitOk]:
        """Build the init_ok reply. Always msg_id 0."""
        return init.into_reply(INIT_OK_MSG_ID, InitOk())

    @log_method(before=True, after=True)
    def dispatch(self, envelope: Envelope[Any]) -> Envelope[Any] | None:
        """Hand one inbound payload to the node. Returns the reply, if any."""
        reply = self.node.handle(envelope.payload)
        if reply is None:
            return None
        msg_id, payload = reply
        return envelope.into_reply(msg_id, payload)

    def run(self) -> int:
        """Run until input closes. Returns the number of messages handled.

        Performs the handshake first if it has not been done yet.
        """
        if self._node is None:
            self.handshake()
        # Line 1 was the handshake.
        for envelope in iter_envelopes(self._stdin, self._node_cls.payloads, start=2):
            _log.debug(
                "dispatch %s from %s msg_id=%s",
                envelope.payload.TYPE,
                envelope.src,
                envelope.body.msg_id,
            )
            reply = self.dispatch(envelope)
            self._handled += 1
            if reply is not None:
                self._write(reply)
                self._replied += 1
        _log.info(
            "input closed after %d messages, %d replies",
            self._handled,
            self._replied,
        )
        return self._handled

    def _write(self, envelope: Envelope[Any]) -> None:
        line = encode_envelope(envelope)
        try:
            self._stdout.write(line + "\n")
            self._stdout.flush()
        except (OSError, ValueError) as exc:
            # ValueError: write to a closed file.
            raise WriteError(f"cannot write to output: {exc}") from exc


def spawn(node_cls: type[N], *, log: EventLog | None = None) -> int:
    """Run *node_cls* over the process's stdin and stdout.

    stdin is read as bytes: a bad byte is reported against its own line.
    """
    return NodeRuntime(node_cls, sys.stdin.buffer, sys.stdout, log=log).run()
