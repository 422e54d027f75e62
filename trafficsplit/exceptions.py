"""Exception types raised by trafficsplit."""

from __future__ import annotations

from typing import Any


class TrafficSplitError(Exception):
    """Base class for all trafficsplit errors."""


class InvalidDemand(TrafficSplitError, ValueError):
    """A demand record or candidate set violates the allocation contract.

    Raised for negative demand counts and for empty candidate path lists
    handed directly to AllocationEngine.allocate().
    """


class UnknownVertex(TrafficSplitError, LookupError):
    """A vertex id does not exist in the base network.

    Only the base network and the path search raise this. OverlayGraph
    reports unknown ids structurally (empty sets, None, DISCONNECTED).

    Attributes:
        vertex_id: The offending id.
    """

    def __init__(self, vertex_id: Any, message: str | None = None) -> None:
        self.vertex_id = vertex_id
        super().__init__(message or f"Vertex {vertex_id!r} does not exist.")

    def __str__(self) -> str:
        return str(self.args[0])
