# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Process entry points.

stdout carries protocol replies only. Diagnostics go to stderr through
``logging``. Exit status is 0 when input closes cleanly and 1 on any
handshake, decode, encode or write failure.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from maelnode.errors import NodeError
from maelnode.logging import EventLog
from maelnode.node.runtime import spawn
from maelnode.nodes import NODES

_log = logging.getLogger(__name__)

LOG_LEVEL_ENV = "MAELNODE_LOG_LEVEL"
TRACE_ENV = "MAELNODE_TRACE"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser(*, node: str | None = None) -> argparse.ArgumentParser:
    """Argument parser. With *node* fixed, the positional is omitted."""
    parser = argparse.ArgumentParser(
        prog=f"maelnode-{node}" if node else "maelnode",
        description="Run a line-delimited JSON node over stdin/stdout.",
    )
    if node is None:
        parser.add_argument("node", choices=sorted(NODES), help="node to run")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LEVELS,
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        help=f"stderr log level (env {LOG_LEVEL_ENV}, default WARNING)",
    )
    parser.add_argument(
        "--trace",
        type=Path,
        default=os.environ.get(TRACE_ENV) or None,
        help=f"append a JSONL message trace to this file (env {TRACE_ENV})",
    )
    return parser


def main(argv: Sequence[str] | None = None, *, node: str | None = None) -> int:
    parser = build_parser(node=node)
    args = parser.parse_args(argv)
    if args.log_level not in _LEVELS:
        # argparse does not check choices against an env-supplied default.
        parser.error(f"{LOG_LEVEL_ENV}: invalid level {args.log_level!r}")
    name = node or args.node
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    trace = EventLog(args.trace, context={"node": name}) if args.trace else None
    try:
        if trace is not None:
            trace.open()
        spawn(NODES[name], log=trace)
    except NodeError as exc:
        _log.error("%s failed: %s", exc.phase, exc)
        return 1
    finally:
        if trace is not None:
            trace.close()
    return 0


def echo_main() -> int:
    return main(node="echo")


def unique_ids_main() -> int:
    return main(node="unique-ids")


def broadcast_main() -> int:
    return main(node="broadcast")
