# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tagged-union payloads.

A payload variant is a frozen dataclass deriving from :class:`Payload` with a
``TYPE`` class attribute holding its wire tag. Each node groups its variants
into a :class:`PayloadSet`, which is the only thing the codec needs to turn a
body object into a payload value.
"""

from __future__ import annotations

import dataclasses
import types
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from maelnode.errors import DecodeError

# Body keys owned by the envelope layer. Payload fields may not use them.
RESERVED_FIELDS: frozenset[str] = frozenset({"msg_id", "in_reply_to", "type"})


class Payload:
    """Base for payload variants. Subclasses must be dataclasses."""

    TYPE: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Flatten into body fields, discriminator first."""
        data: dict[str, Any] = {"type": self.TYPE}
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            data[f.name] = getattr(self, f.name)
        return data


def _matches(value: Any, hint: Any) -> bool:
    """Shallow JSON type check of *value* against a field annotation."""
    if hint is Any:
        return True
    if hint is None or hint is type(None):
        return value is None
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        return any(_matches(value, arg) for arg in get_args(hint))
    # bool is an int subclass; JSON keeps them apart.
    if hint is bool:
        return isinstance(value, bool)
    if hint is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if hint is float:
        return isinstance(value, int | float) and not isinstance(value, bool)
    if origin is list:
        if not isinstance(value, list):
            return False
        args = get_args(hint)
        return not args or all(_matches(item, args[0]) for item in value)
    if origin is dict:
        if not isinstance(value, dict):
            return False
        args = get_args(hint)
        return not args or all(
            _matches(k, args[0]) and _matches(v, args[1]) for k, v in value.items()
        )
    if isinstance(hint, type):
        return isinstance(value, hint)
    return True


class PayloadSet:
    """Closed set of payload variants keyed by their ``type`` tag."""

    def __init__(self, *variants: type[Payload]) -> None:
        self._variants: dict[str, type[Payload]] = {}
        self._hints: dict[str, dict[str, Any]] = {}
        for variant in variants:
            self.register(variant)

    def register(self, variant: type[Payload]) -> type[Payload]:
        """Add a variant. Raises ValueError on a bad or duplicate tag."""
        if not dataclasses.is_dataclass(variant):
            raise ValueError(f"{variant.__name__} is not a dataclass")
        tag = variant.TYPE
        if not tag:
            raise ValueError(f"{variant.__name__} has no TYPE tag")
        if tag in self._variants:
            raise ValueError(f"duplicate payload type {tag!r}")
        names = {f.name for f in dataclasses.fields(variant)}
        clash = names & RESERVED_FIELDS
        if clash:
            raise ValueError(
                f"{variant.__name__} uses reserved body field(s) {sorted(clash)}"
            )
        hints = get_type_hints(variant)
        self._variants[tag] = variant
        self._hints[tag] = {name: hints.get(name, Any) for name in names}
        return variant

    def __contains__(self, tag: object) -> bool:
        return tag in self._variants

    def __len__(self) -> int:
        return len(self._variants)

    def tags(self) -> list[str]:
        return sorted(self._variants)

    def decode(self, body: dict[str, Any]) -> Payload:
        """Build the payload named by ``body["type"]``. Extra keys are ignored."""
        tag = body.get("type")
        if not isinstance(tag, str):
            raise DecodeError("body has no string 'type' discriminator")
        variant = self._variants.get(tag)
        if variant is None:
            raise DecodeError(f"unknown payload type {tag!r}")
        hints = self._hints[tag]
        kwargs: dict[str, Any] = {}
        for f in dataclasses.fields(variant):
            if f.name not in body:
                required = (
                    f.default is dataclasses.MISSING
                    and f.default_factory is dataclasses.MISSING
                )
                if required:
                    raise DecodeError(f"{tag}: missing field {f.name!r}")
                continue
            value = body[f.name]
            if not _matches(value, hints[f.name]):
                raise DecodeError(
                    f"{tag}: field {f.name!r} has wrong type "
                    f"{type(value).__name__}"
                )
            kwargs[f.name] = value
        return variant(**kwargs)
