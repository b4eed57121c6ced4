# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Node protocol: the interface every message handler implements."""

from typing import Any, ClassVar, Protocol, Self, runtime_checkable

from maelnode.protocol.message import Envelope, Init
from maelnode.protocol.payload import Payload, PayloadSet

# (outbound msg_id, reply payload). The id comes from the node's own counter.
Reply = tuple[int, Payload]


@runtime_checkable
class Node(Protocol):
    """Domain behaviour plugged into the runtime.

    One instance per process, built from the handshake and owned by the
    runtime loop. The node keeps its outbound msg_id counter as ordinary
    instance state; the runtime never allocates ids for it. Ids returned
    from handle() must be strictly increasing and start above 0, which is
    taken by the handshake ack.
    """

    payloads: ClassVar[PayloadSet]

    @classmethod
    def from_init(cls, init: Envelope[Init]) -> Self:
        """Build initial state from the handshake. Must not fail."""
        ...

    def handle(self, payload: Any) -> Reply | None:
        """React to one inbound payload. None means no reply."""
        ...
