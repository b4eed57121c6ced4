# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

from maelnode.node.base import Node, Reply
from maelnode.node.runtime import NodeRuntime, spawn

__all__ = ["Node", "NodeRuntime", "Reply", "spawn"]
