# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Message envelope, body, and the handshake payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from maelnode.protocol.payload import Payload, PayloadSet

P = TypeVar("P", bound=Payload)
R = TypeVar("R", bound=Payload)

# The handshake ack always takes the first outbound id.
INIT_OK_MSG_ID = 0


@dataclass(frozen=True)
class Body(Generic[P]):
    """Correlation ids plus a payload. Flattened into one object on the wire."""

    payload: P
    msg_id: int | None = None
    in_reply_to: int | None = None

    def into_reply(self, msg_id: int, payload: R) -> Body[R]:
        return Body(payload=payload, msg_id=msg_id, in_reply_to=self.msg_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "msg_id": self.msg_id,
            "in_reply_to": self.in_reply_to,
            **self.payload.to_dict(),
        }


@dataclass(frozen=True)
class Envelope(Generic[P]):
    """Wire format for every message.

    ``src`` and ``dest`` are node or client ids (``n1``, ``c3``).
    """

    src: str
    dest: str
    body: Body[P]

    @property
    def payload(self) -> P:
        return self.body.payload

    def into_reply(self, msg_id: int, payload: R) -> Envelope[R]:
        """Address a reply back to the sender. *msg_id* comes from the caller."""
        return Envelope(
            src=self.dest,
            dest=self.src,
            body=self.body.into_reply(msg_id, payload),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "dest": self.dest, "body": self.body.to_dict()}


@dataclass(frozen=True)
class Init(Payload):
    """Handshake: this node's id and the full cluster membership."""

    TYPE: ClassVar[str] = "init"

    node_id: str
    node_ids: list[str]


@dataclass(frozen=True)
class InitOk(Payload):
    TYPE: ClassVar[str] = "init_ok"


HANDSHAKE = PayloadSet(Init)
