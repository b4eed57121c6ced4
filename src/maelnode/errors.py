# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Fatal node errors. Every one of them ends the process."""


class NodeError(Exception):
    """Base for all harness failures. ``phase`` names the step that failed."""

    phase = "node"


class DecodeError(NodeError):
    """Raised when an inbound line is not a well-formed envelope.

    ``line`` and ``lineno`` are filled in by whichever layer knows them.
    """

    phase = "decode"

    def __init__(
        self,
        reason: str,
        *,
        line: str | None = None,
        lineno: int | None = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is not None:
            return f"line {self.lineno}: {self.reason}"
        return self.reason


class HandshakeError(NodeError):
    """Raised when the first line is missing or is not an init message."""

    phase = "handshake"


class EncodeError(NodeError):
    """Raised when a reply cannot be serialized."""

    phase = "encode"


class WriteError(NodeError):
    """Raised when a reply cannot be written to the output sink."""

    phase = "write"
