# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Unique-id node.

Ids are ``<node_id>-<msg_id>``. Node ids are unique in the cluster and the
outbound counter never repeats within a process, so no coordination is
needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from maelnode.node.base import Reply
from maelnode.protocol import Envelope, Init, Payload, PayloadSet


@dataclass(frozen=True)
class Generate(Payload):
    TYPE: ClassVar[str] = "generate"


@dataclass(frozen=True)
class GenerateOk(Payload):
    TYPE: ClassVar[str] = "generate_ok"

    id: str


class UniqueIdNode:
    payloads: ClassVar[PayloadSet] = PayloadSet(Generate, GenerateOk)

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        self.last_sent_msg_id = 0

    @classmethod
    def from_init(cls, init: Envelope[Init]) -> UniqueIdNode:
        return cls(init.payload.node_id)

    def handle(self, payload: Payload) -> Reply | None:
        if isinstance(payload, Generate):
            self.last_sent_msg_id += 1
            msg_id = self.last_sent_msg_id
            return msg_id, GenerateOk(id=f"{self.node_id}-{msg_id}")
        return None
