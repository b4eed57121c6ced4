# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

from maelnode.protocol.codec import (
    decode_envelope,
    encode_envelope,
    envelope_from_dict,
    iter_envelopes,
)
from maelnode.protocol.message import (
    HANDSHAKE,
    INIT_OK_MSG_ID,
    Body,
    Envelope,
    Init,
    InitOk,
)
from maelnode.protocol.payload import RESERVED_FIELDS, Payload, PayloadSet

__all__ = [
    "Body",
    "Envelope",
    "HANDSHAKE",
    "INIT_OK_MSG_ID",
    "Init",
    "InitOk",
    "Payload",
    "PayloadSet",
    "RESERVED_FIELDS",
    "decode_envelope",
    "encode_envelope",
    "envelope_from_dict",
    "iter_envelopes",
]
