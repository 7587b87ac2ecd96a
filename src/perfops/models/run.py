# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request and result models for the run API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NewType

from ..errors import DecodeError

PingID = NewType("PingID", str)


def _omit_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "", 0)}


def _expect_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _string_field(data: Mapping[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{what}.{key}: expected a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Ping:
    """Parameters of a ping run."""

    # Target host name or address
    target: str
    # Node ids, comma separated
    nodes: str = ""
    # Country names, comma separated
    location: str = ""
    # Max number of nodes, 0 leaves it to the backend
    limit: int = 0

    def to_dict(self) -> dict[str, Any]:
        payload = _omit_empty({"nodes": self.nodes, "location": self.location, "limit": self.limit})
        return {"target": self.target, **payload}


@dataclass(frozen=True)
class PingResult:
    """Output reported by a single measurement node."""

    node_id: str = ""
    output: str = ""

    def is_complete(self) -> bool:
        return self.node_id != ""

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty({"nodeId": self.node_id, "output": self.output})

    @classmethod
    def from_mapping(cls, data: Any) -> PingResult:
        mapping = _expect_mapping(data, "result")
        return cls(
            node_id=_string_field(mapping, "nodeId", "result"),
            output=_string_field(mapping, "output", "result"),
        )


@dataclass(frozen=True)
class PingItem:
    """One slot of a ping output; ``result`` stays None until its node reports."""

    id: str = ""
    result: PingResult | None = None

    def is_complete(self) -> bool:
        return self.result is not None and self.result.is_complete()

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = _omit_empty({"id": self.id})
        if self.result is not None:
            payload["result"] = self.result.to_dict()
        return payload

    @classmethod
    def from_mapping(cls, data: Any) -> PingItem:
        if data is None:
            return cls()
        mapping = _expect_mapping(data, "item")
        raw_result = mapping.get("result")
        return cls(
            id=_string_field(mapping, "id", "item"),
            result=PingResult.from_mapping(raw_result) if raw_result is not None else None,
        )


@dataclass(frozen=True)
class PingOutput:
    """Snapshot of a ping run as returned by the output endpoint."""

    id: str = ""
    requested: str = ""
    items: tuple[PingItem, ...] = field(default_factory=tuple)

    def is_complete(self) -> bool:
        """
        Report whether every node of the run has produced its result.

        An output without a ``requested`` target has not been populated yet
        and is never complete. Otherwise items are scanned in order and the
        scan stops at the first one still waiting on its node.
        """
        if self.requested == "":
            return False
        completed = 0
        for item in self.items:
            if not item.is_complete():
                break
            completed += 1
        return completed == len(self.items)

    @property
    def results(self) -> list[PingResult]:
        """Results reported so far, in item order."""
        return [item.result for item in self.items if item.result is not None]

    def to_dict(self) -> dict[str, Any]:
        payload = _omit_empty({"id": self.id, "requested": self.requested})
        if self.items:
            payload["items"] = [item.to_dict() for item in self.items]
        return payload

    @classmethod
    def from_mapping(cls, data: Any) -> PingOutput:
        if data is None:
            return cls()
        mapping = _expect_mapping(data, "output")
        raw_items = mapping.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise DecodeError(f"output.items: expected a JSON array, got {type(raw_items).__name__}")
        return cls(
            id=_string_field(mapping, "id", "output"),
            requested=_string_field(mapping, "requested", "output"),
            items=tuple(PingItem.from_mapping(item) for item in raw_items),
        )


def is_complete(output: PingOutput) -> bool:
    """Functional form of PingOutput.is_complete()."""
    return output.is_complete()


__all__ = [
    "Ping",
    "PingID",
    "PingItem",
    "PingOutput",
    "PingResult",
    "is_complete",
]
