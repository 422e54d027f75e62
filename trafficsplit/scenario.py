"""Closure scenarios: named sets of removed vertices and edges loaded from YAML.

Documents are shape-checked for readable errors, then validated against the
packaged ``closures.json`` schema.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, FrozenSet

import jsonschema
import yaml

from trafficsplit.lib.network import EdgePair, VertexID
from trafficsplit.lib.overlay import OverlayGraph
from trafficsplit.logging import get_logger

logger = get_logger(__name__)

_ALLOWED_KEYS = {"name", "vertices", "edges"}


@dataclass(frozen=True)
class ClosureScenario:
    """A road-closure scenario to apply to an OverlayGraph.

    Typical usage example:

        scenario = ClosureScenario.from_yaml(yaml_str)
        scenario.apply(overlay)

    Attributes:
        name: Human-readable label used in logs.
        vertices: Vertex ids to close.
        edges: Directed (source_id, sink_id) pairs to close.
    """

    name: str = "default"
    vertices: FrozenSet[VertexID] = field(default_factory=frozenset)
    edges: FrozenSet[EdgePair] = field(default_factory=frozenset)

    def apply(self, overlay: OverlayGraph) -> None:
        """Add this scenario's closures to the overlay's removal sets."""
        overlay.remove_vertices(sorted(self.vertices))
        overlay.remove_edges(sorted(self.edges))
        logger.info(
            "Applied closure scenario '%s': %d vertices, %d edges",
            self.name,
            len(self.vertices),
            len(self.edges),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ClosureScenario:
        """Build a scenario from a parsed mapping.

        Raises:
            ValueError: If the mapping has unknown keys or a section of the
                wrong shape.
            jsonschema.ValidationError: If an entry violates the closure
                schema (e.g. a negative id or a three-element edge).
        """
        unknown = set(data) - _ALLOWED_KEYS
        if unknown:
            raise ValueError(
                f"Unrecognized key(s) in closure scenario: {sorted(unknown)}"
            )
        if data.get("vertices") is not None and not isinstance(data["vertices"], list):
            raise ValueError("'vertices' must be a list of vertex ids")
        if data.get("edges") is not None and not isinstance(data["edges"], list):
            raise ValueError("'edges' must be a list of [source, sink] pairs")

        jsonschema.validate(data, _closure_schema())

        # The schema accepts integral floats such as 3.0 as integers
        vertices = frozenset(int(v) for v in data.get("vertices") or [])
        edges = frozenset((int(s), int(t)) for s, t in data.get("edges") or [])
        return cls(name=data.get("name", "default"), vertices=vertices, edges=edges)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> ClosureScenario:
        """Parse a closure scenario from a YAML document.

        An empty document yields a scenario that closes nothing.
        """
        data = yaml.safe_load(yaml_str)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("The provided YAML must map to a dictionary at top-level.")
        return cls.from_dict(data)


@lru_cache(maxsize=None)
def _closure_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("trafficsplit.schemas")
            .joinpath("closures.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:
        raise RuntimeError(
            "Failed to locate packaged schema 'trafficsplit/schemas/closures.json'."
        ) from exc
