# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Example nodes, keyed by the name the command line uses."""

from maelnode.node.base import Node
from maelnode.nodes.broadcast import BroadcastNode
from maelnode.nodes.echo import EchoNode
from maelnode.nodes.unique_ids import UniqueIdNode

NODES: dict[str, type[Node]] = {
    "echo": EchoNode,
    "unique-ids": UniqueIdNode,
    "broadcast": BroadcastNode,
}

__all__ = ["NODES", "BroadcastNode", "EchoNode", "UniqueIdNode"]
