"""File I/O helpers for maximum-flow problems.

Three input formats are supported:

Plain text (the default)::

    4
    0 1 3
    0 2 2
    1 3 2
    2 3 3

The first non-blank line is the node count; every further non-blank line is
``tail head capacity``. Source and sink default to node 0 and the last node.

JSON::

    {"num_nodes": 4, "source": 0, "sink": 3,
     "edges": [{"tail": 0, "head": 1, "capacity": 3}, ...]}

DIMACS maximum-flow format (1-indexed node ids)::

    c comment
    p max 4 5
    n 1 s
    n 4 t
    a 1 2 3
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .data import FlowNetwork, MaxFlowResult, build_network
from .exceptions import DuplicateEdgeError, InvalidNetworkError, NetworkParseError

TEXT_FORMAT = "text"
JSON_FORMAT = "json"
DIMACS_FORMAT = "dimacs"

_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")

_SUFFIX_FORMATS = {
    ".json": JSON_FORMAT,
    ".max": DIMACS_FORMAT,
    ".dimacs": DIMACS_FORMAT,
}


@dataclass
class NetworkInstance:
    """A parsed network together with its source and sink.

    Attributes:
        network: The flow network.
        source: Source node (defaults to 0).
        sink: Sink node (defaults to the last node).
    """

    network: FlowNetwork
    source: int
    sink: int

    @classmethod
    def with_default_terminals(cls, network: FlowNetwork) -> NetworkInstance:
        return cls(network=network, source=0, sink=network.num_nodes - 1)


def _parse_int(token: str) -> int:
    """Parse a plain decimal integer: optional sign followed by ASCII digits."""
    if not _INTEGER_TOKEN.fullmatch(token):
        raise ValueError(f"invalid integer literal: {token!r}")
    return int(token)


def _read_text(file_path: str | Path) -> str:
    """Read a UTF-8 input file, reporting undecodable bytes as a parse error."""
    data = Path(file_path).read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_number = data.count(b"\n", 0, e.start) + 1
        raise NetworkParseError(
            f"Line {line_number}: Input is not valid UTF-8 text "
            f"({e.reason} at byte {e.start})",
            line_number=line_number,
        ) from e


# ============================================================================
# Plain text format
# ============================================================================


def parse_network_string(content: str) -> FlowNetwork:
    """Parse a network from the plain text format.

    Raises:
        NetworkParseError: With the offending line number for wrong token
            counts, non-integer tokens, out-of-range nodes, negative
            capacities and duplicate edges.
    """
    return _parse_network_lines(content.splitlines())


def parse_network_file(file_path: str | Path) -> FlowNetwork:
    """Parse a network from a plain text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        NetworkParseError: If the contents are malformed.
    """
    return _parse_network_lines(_read_text(file_path).splitlines())


def _parse_network_lines(lines: Iterable[str]) -> FlowNetwork:
    network: FlowNetwork | None = None

    for line_num, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue

        if network is None:
            try:
                num_nodes = _parse_int(line)
            except ValueError as e:
                raise NetworkParseError(
                    f"Line {line_num}: Invalid number of nodes: '{line}'", line_number=line_num
                ) from e
            if num_nodes < 2:
                raise NetworkParseError(
                    f"Line {line_num}: Number of nodes must be at least 2, got {num_nodes}",
                    line_number=line_num,
                )
            network = FlowNetwork(num_nodes)
            continue

        tokens = line.split()
        if len(tokens) != 3:
            raise NetworkParseError(
                f"Line {line_num}: Invalid edge format. Expected 'tail head capacity', "
                f"got: '{line}'",
                line_number=line_num,
            )
        try:
            tail, head, capacity = (_parse_int(token) for token in tokens)
        except ValueError as e:
            raise NetworkParseError(
                f"Line {line_num}: Invalid number format: '{line}'", line_number=line_num
            ) from e

        if tail < 0 or tail >= network.num_nodes:
            raise NetworkParseError(
                f"Line {line_num}: Invalid source node {tail} "
                f"(expected 0..{network.num_nodes - 1})",
                line_number=line_num,
            )
        if head < 0 or head >= network.num_nodes:
            raise NetworkParseError(
                f"Line {line_num}: Invalid destination node {head} "
                f"(expected 0..{network.num_nodes - 1})",
                line_number=line_num,
            )
        if capacity < 0:
            raise NetworkParseError(
                f"Line {line_num}: Negative capacity {capacity}", line_number=line_num
            )
        try:
            network.add_edge(tail, head, capacity)
        except DuplicateEdgeError as e:
            raise NetworkParseError(f"Line {line_num}: {e}", line_number=line_num) from e

    if network is None:
        raise NetworkParseError("Empty input: expected the number of nodes on the first line")
    return network


# ============================================================================
# JSON format
# ============================================================================


def network_from_dict(payload: Mapping[str, Any]) -> NetworkInstance:
    """Build a NetworkInstance from a decoded JSON payload."""
    num_nodes = payload.get("num_nodes")
    edges = payload.get("edges")
    count_is_int = isinstance(num_nodes, int) and not isinstance(num_nodes, bool)
    if not count_is_int or not isinstance(edges, list):
        raise NetworkParseError(
            "Invalid network format: JSON must include an integer 'num_nodes' and an "
            f"'edges' array. Got num_nodes type: {type(num_nodes).__name__}, "
            f"edges type: {type(edges).__name__}"
        )
    try:
        network = build_network(num_nodes, edges)
    except InvalidNetworkError as e:
        raise NetworkParseError(f"Invalid network: {e}") from e

    source = payload.get("source", 0)
    sink = payload.get("sink", network.num_nodes - 1)
    for name, value in (("source", source), ("sink", sink)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise NetworkParseError(
                f"Invalid network format: '{name}' must be an integer node id, "
                f"got {type(value).__name__}"
            )
    return NetworkInstance(network=network, source=source, sink=sink)


def load_network_json(path: str | Path) -> NetworkInstance:
    """Load a network (with optional source/sink) from a JSON file."""
    try:
        payload = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise NetworkParseError(
            f"Line {e.lineno}: Malformed JSON: {e.msg}", line_number=e.lineno
        ) from e
    if not isinstance(payload, dict):
        raise NetworkParseError("Invalid network format: JSON root must be an object")
    return network_from_dict(payload)


# ============================================================================
# DIMACS maximum-flow format
# ============================================================================


def parse_dimacs_string(content: str) -> NetworkInstance:
    """Parse a DIMACS maximum-flow problem from a string."""
    return _parse_dimacs_lines(content.splitlines())


def parse_dimacs_file(file_path: str | Path) -> NetworkInstance:
    """Parse a DIMACS maximum-flow problem from a file."""
    return _parse_dimacs_lines(_read_text(file_path).splitlines())


def _parse_dimacs_lines(lines: Iterable[str]) -> NetworkInstance:
    network: FlowNetwork | None = None
    num_arcs = 0
    arcs_seen = 0
    source: int | None = None
    sink: int | None = None

    for line_num, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue

        tokens = line.split()
        line_type = tokens[0]

        try:
            if line_type == "p":
                if network is not None:
                    raise NetworkParseError(
                        f"Line {line_num}: Multiple problem descriptor lines found. "
                        "Only one 'p max' line is allowed.",
                        line_number=line_num,
                    )
                if len(tokens) != 4 or tokens[1] != "max":
                    raise NetworkParseError(
                        f"Line {line_num}: Invalid problem descriptor. "
                        f"Expected 'p max <nodes> <arcs>', got: '{line}'",
                        line_number=line_num,
                    )
                num_nodes = _parse_int(tokens[2])
                num_arcs = _parse_int(tokens[3])
                if num_nodes < 2:
                    raise NetworkParseError(
                        f"Line {line_num}: Number of nodes must be at least 2, got {num_nodes}",
                        line_number=line_num,
                    )
                if num_arcs < 0:
                    raise NetworkParseError(
                        f"Line {line_num}: Number of arcs cannot be negative, got {num_arcs}",
                        line_number=line_num,
                    )
                network = FlowNetwork(num_nodes)

            elif line_type in ("n", "a"):
                if network is None:
                    raise NetworkParseError(
                        f"Line {line_num}: Descriptor before problem line. "
                        "The 'p max' line must come first.",
                        line_number=line_num,
                    )
                if line_type == "n":
                    if len(tokens) != 3 or tokens[2] not in ("s", "t"):
                        raise NetworkParseError(
                            f"Line {line_num}: Invalid node descriptor. "
                            f"Expected 'n <id> s|t', got: '{line}'",
                            line_number=line_num,
                        )
                    node = _parse_int(tokens[1]) - 1
                    network.validate_node(node)
                    if tokens[2] == "s":
                        source = node
                    else:
                        sink = node
                else:
                    if len(tokens) != 4:
                        raise NetworkParseError(
                            f"Line {line_num}: Invalid arc descriptor. "
                            f"Expected 'a <tail> <head> <capacity>', got: '{line}'",
                            line_number=line_num,
                        )
                    network.add_edge(
                        _parse_int(tokens[1]) - 1,
                        _parse_int(tokens[2]) - 1,
                        _parse_int(tokens[3]),
                    )
                    arcs_seen += 1

            else:
                raise NetworkParseError(
                    f"Line {line_num}: Unknown line type '{line_type}'. "
                    "Expected 'c' (comment), 'p' (problem), 'n' (node) or 'a' (arc).",
                    line_number=line_num,
                )

        except (ValueError, InvalidNetworkError) as e:
            raise NetworkParseError(
                f"Line {line_num}: Failed to parse line '{line}': {e}", line_number=line_num
            ) from e

    if network is None:
        raise NetworkParseError(
            "No problem descriptor found. DIMACS input must contain a 'p max <nodes> <arcs>' line."
        )
    if arcs_seen != num_arcs:
        raise NetworkParseError(
            f"Arc count mismatch: problem descriptor specifies {num_arcs} arcs, "
            f"but {arcs_seen} arc descriptors found."
        )

    instance = NetworkInstance.with_default_terminals(network)
    if source is not None:
        instance.source = source
    if sink is not None:
        instance.sink = sink
    return instance


# ============================================================================
# Format dispatch and results
# ============================================================================


def load_network(path: str | Path, fmt: str | None = None) -> NetworkInstance:
    """Load a network, choosing the parser from ``fmt`` or the file suffix.

    Args:
        path: Input file.
        fmt: 'text', 'json' or 'dimacs'. When None, '.json' selects JSON,
             '.max' and '.dimacs' select DIMACS, and anything else is read as
             plain text.
    """
    path = Path(path)
    if fmt is None:
        fmt = _SUFFIX_FORMATS.get(path.suffix.lower(), TEXT_FORMAT)

    if fmt == TEXT_FORMAT:
        return NetworkInstance.with_default_terminals(parse_network_file(path))
    if fmt == JSON_FORMAT:
        return load_network_json(path)
    if fmt == DIMACS_FORMAT:
        return parse_dimacs_file(path)
    raise ValueError(f"Unknown network format '{fmt}'. Expected 'text', 'json' or 'dimacs'.")


def save_result(path: str | Path, result: MaxFlowResult) -> None:
    """Persist a solver result to JSON."""
    # Sorted flow entries keep the output deterministic.
    data = {
        "status": result.status,
        "source": result.source,
        "sink": result.sink,
        "max_flow": result.max_flow,
        "iterations": result.iterations,
        "searches": result.searches,
        "total_time": result.total_time,
        "iteration_times": list(result.iteration_times),
        "flows": [
            {"tail": tail, "head": head, "flow": flow}
            for (tail, head), flow in sorted(result.flows.items())
        ],
        "execution_steps": list(result.execution_steps),
    }
    with Path(path).open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)
