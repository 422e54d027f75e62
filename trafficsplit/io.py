"""Readers and writers for network files, demand CSVs and allocation CSVs."""

from __future__ import annotations

import csv
from typing import Iterable, Iterator, List, TextIO, Tuple

from trafficsplit.demand import AllocationRecord, DemandRecord
from trafficsplit.lib.network import RoadNetwork, VertexID

ALLOCATION_HEADER = ("nodes", "car_num")


def read_network(lines: Iterable[str]) -> RoadNetwork:
    """
    Build a RoadNetwork from the plain-text network format.

    The first non-blank line holds the vertex count n; vertices 0..n-1 are
    created in order. Every further non-blank line is ``source sink weight``
    separated by whitespace.

    Args:
        lines: An iterable of text lines, e.g. an open file.

    Returns:
        The parsed RoadNetwork.

    Raises:
        ValueError: If the count is missing, a line does not have three
            tokens, or a token cannot be parsed.
    """
    vertex_count = None
    edges: List[Tuple[VertexID, VertexID, float]] = []

    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        if vertex_count is None:
            if len(tokens) != 1:
                raise ValueError(
                    f"Line {lineno}: expected the vertex count, got '{line.strip()}'."
                )
            vertex_count = _parse(int, tokens[0], lineno)
            continue
        if len(tokens) != 3:
            raise ValueError(
                f"Line {lineno}: '{line.strip()}' does not match 'source sink weight'."
            )
        edges.append(
            (
                _parse(int, tokens[0], lineno),
                _parse(int, tokens[1], lineno),
                _parse(float, tokens[2], lineno),
            )
        )

    if vertex_count is None:
        raise ValueError("Network file is empty; expected a vertex count.")
    return RoadNetwork.from_edges(vertex_count, edges)


def read_demands(stream: TextIO) -> Iterator[DemandRecord]:
    """
    Yield DemandRecords from ``origin,destination,count`` CSV rows.

    Blank rows are skipped. There is no header row.

    Raises:
        ValueError: If a row does not have three integer fields.
        InvalidDemand: If a parsed record violates DemandRecord's contract.
    """
    for lineno, row in enumerate(csv.reader(stream), start=1):
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) != 3:
            raise ValueError(
                f"Row {lineno}: expected 'origin,destination,count', got {row!r}."
            )
        origin, destination, count = (_parse(int, cell.strip(), lineno) for cell in row)
        yield DemandRecord(origin, destination, count)


def write_allocations(stream: TextIO, records: Iterable[AllocationRecord]) -> int:
    """
    Write allocation records as CSV with a ``nodes,car_num`` header.

    Vertex ids of each route are joined by ``-``.

    Returns:
        Number of records written.
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(ALLOCATION_HEADER)
    written = 0
    for record in records:
        writer.writerow(
            ("-".join(str(vid) for vid in record.vertex_ids), record.allocated_count)
        )
        written += 1
    return written


def _parse(kind: type, token: str, lineno: int):
    try:
        return kind(token)
    except ValueError as exc:
        raise ValueError(
            f"Line {lineno}: cannot parse '{token}' as {kind.__name__}."
        ) from exc
