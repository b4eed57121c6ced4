# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Single-node broadcast store.

Keeps every broadcast value in receipt order and serves them on read.
Topology is acknowledged but not kept: nothing is forwarded to peers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from maelnode.node.base import Reply
from maelnode.protocol import Envelope, Init, Payload, PayloadSet


@dataclass(frozen=True)
class Topology(Payload):
    TYPE: ClassVar[str] = "topology"

    topology: dict[str, list[str]]


@dataclass(frozen=True)
class TopologyOk(Payload):
    TYPE: ClassVar[str] = "topology_ok"


@dataclass(frozen=True)
class Broadcast(Payload):
    TYPE: ClassVar[str] = "broadcast"

    message: int


@dataclass(frozen=True)
class BroadcastOk(Payload):
    TYPE: ClassVar[str] = "broadcast_ok"


@dataclass(frozen=True)
class Read(Payload):
    TYPE: ClassVar[str] = "read"


@dataclass(frozen=True)
class ReadOk(Payload):
    TYPE: ClassVar[str] = "read_ok"

    messages: list[int]


class BroadcastNode:
    payloads: ClassVar[PayloadSet] = PayloadSet(
        Topology, TopologyOk, Broadcast, BroadcastOk, Read, ReadOk
    )

    def __init__(self, node_id: str, node_ids: list[str] | None = None) -> None:
        self.node_id = node_id
        self.node_ids = list(node_ids or [])
        self.last_sent_msg_id = 0
        self._messages: list[int] = []

    @classmethod
    def from_init(cls, init: Envelope[Init]) -> BroadcastNode:
        return cls(init.payload.node_id, init.payload.node_ids)

    @property
    def messages(self) -> list[int]:
        """Broadcast values in receipt order. A copy."""
        return list(self._messages)

    def handle(self, payload: Payload) -> Reply | None:
        reply: Payload | None = None
        if isinstance(payload, Topology):
            reply = TopologyOk()
        elif isinstance(payload, Broadcast):
            self._messages.append(payload.message)
            reply = BroadcastOk()
        elif isinstance(payload, Read):
            reply = ReadOk(messages=self.messages)
        # *_ok variants are terminal.
        if reply is None:
            return None
        self.last_sent_msg_id += 1
        return self.last_sent_msg_id, reply
