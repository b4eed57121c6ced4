# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the example nodes, called directly without the runtime."""

import pytest

from maelnode.nodes import NODES, BroadcastNode, EchoNode, UniqueIdNode
from maelnode.nodes.broadcast import (
    Broadcast,
    BroadcastOk,
    Read,
    ReadOk,
    Topology,
    TopologyOk,
)
from maelnode.nodes.echo import Echo, EchoOk
from maelnode.nodes.unique_ids import Generate, GenerateOk
from maelnode.protocol import Body, Envelope, Init


def _init(node_id: str = "n1", node_ids: list[str] | None = None) -> Envelope[Init]:
    return Envelope(
        src="c0",
        dest=node_id,
        body=Body(
            payload=Init(node_id=node_id, node_ids=node_ids or [node_id]),
            msg_id=1,
        ),
    )


def test_registry_names() -> None:
    assert NODES == {
        "echo": EchoNode,
        "unique-ids": UniqueIdNode,
        "broadcast": BroadcastNode,
    }


class TestEchoNode:
    def test_echoes(self) -> None:
        node = EchoNode.from_init(_init())
        assert node.handle(Echo(echo="hi")) == (1, EchoOk(echo="hi"))

    def test_counter_advances_per_reply(self) -> None:
        node = EchoNode.from_init(_init())
        ids = [node.handle(Echo(echo=str(i)))[0] for i in range(3)]  # type: ignore[index]
        assert ids == [1, 2, 3]

    def test_echo_ok_is_terminal(self) -> None:
        node = EchoNode.from_init(_init())
        assert node.handle(EchoOk(echo="hi")) is None
        # No id consumed by a non-reply.
        assert node.last_sent_msg_id == 0


class TestUniqueIdNode:
    def test_ids_embed_node_and_counter(self) -> None:
        node = UniqueIdNode.from_init(_init("n3"))
        assert node.handle(Generate()) == (1, GenerateOk(id="n3-1"))
        assert node.handle(Generate()) == (2, GenerateOk(id="n3-2"))

    def test_unique_across_nodes(self) -> None:
        a = UniqueIdNode.from_init(_init("n1", ["n1", "n2"]))
        b = UniqueIdNode.from_init(_init("n2", ["n1", "n2"]))
        generated = set()
        for _ in range(50):
            for node in (a, b):
                reply = node.handle(Generate())
                assert reply is not None
                payload = reply[1]
                assert isinstance(payload, GenerateOk)
                generated.add(payload.id)
        assert len(generated) == 100

    def test_independent_instances(self) -> None:
        a = UniqueIdNode.from_init(_init())
        b = UniqueIdNode.from_init(_init())
        a.handle(Generate())
        assert b.handle(Generate()) == (1, GenerateOk(id="n1-1"))

    def test_generate_ok_is_terminal(self) -> None:
        node = UniqueIdNode.from_init(_init())
        assert node.handle(GenerateOk(id="n2-1")) is None


class TestBroadcastNode:
    def test_read_empty(self) -> None:
        node = BroadcastNode.from_init(_init())
        assert node.handle(Read()) == (1, ReadOk(messages=[]))

    def test_receipt_order_kept(self) -> None:
        node = BroadcastNode.from_init(_init())
        for value in (9, 3, 9, 1):
            assert node.handle(Broadcast(message=value)) is not None
        reply = node.handle(Read())
        assert reply == (5, ReadOk(messages=[9, 3, 9, 1]))

    def test_read_snapshot_not_aliased(self) -> None:
        node = BroadcastNode.from_init(_init())
        node.handle(Broadcast(message=1))
        reply = node.handle(Read())
        assert reply is not None
        node.handle(Broadcast(message=2))
        assert reply[1] == ReadOk(messages=[1])

    def test_topology_acknowledged_and_ignored(self) -> None:
        node = BroadcastNode.from_init(_init("n1", ["n1", "n2"]))
        reply = node.handle(Topology(topology={"n1": ["n2"], "n2": ["n1"]}))
        assert reply == (1, TopologyOk())
        assert node.messages == []
        assert node.node_ids == ["n1", "n2"]

    @pytest.mark.parametrize(
        "terminal", [BroadcastOk(), ReadOk(messages=[1]), TopologyOk()]
    )
    def test_acks_are_terminal(self, terminal: object) -> None:
        node = BroadcastNode.from_init(_init())
        assert node.handle(terminal) is None  # type: ignore[arg-type]
        assert node.last_sent_msg_id == 0
