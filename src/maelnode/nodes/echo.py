# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Echo node: replies with whatever it was sent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from maelnode.node.base import Reply
from maelnode.protocol import Envelope, Init, Payload, PayloadSet


@dataclass(frozen=True)
class Echo(Payload):
    TYPE: ClassVar[str] = "echo"

    echo: str


@dataclass(frozen=True)
class EchoOk(Payload):
    TYPE: ClassVar[str] = "echo_ok"

    echo: str


class EchoNode:
    payloads: ClassVar[PayloadSet] = PayloadSet(Echo, EchoOk)

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        self.last_sent_msg_id = 0

    @classmethod
    def from_init(cls, init: Envelope[Init]) -> EchoNode:
        return cls(init.payload.node_id)

    def handle(self, payload: Payload) -> Reply | None:
        if isinstance(payload, Echo):
            self.last_sent_msg_id += 1
            return self.last_sent_msg_id, EchoOk(echo=payload.echo)
        # echo_ok is terminal.
        return None
