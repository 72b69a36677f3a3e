"""Utility functions for analyzing and validating maximum-flow solutions."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from .data import FlowNetwork
from .edmonds_karp import residual_arcs


@dataclass
class ValidationResult:
    """Results from validating the flow on a network.

    Attributes:
        is_valid: True if the flow satisfies all constraints.
        errors: List of validation error messages (empty if valid).
        flow_value: Net flow leaving the source.
        node_imbalance: Dict mapping inner nodes with inflow != outflow to
                        their inflow minus outflow.
        capacity_violations: Edges whose flow lies outside [0, capacity].
    """

    is_valid: bool
    errors: list[str]
    flow_value: int
    node_imbalance: dict[int, int]
    capacity_violations: list[tuple[int, int]]


@dataclass
class MinCut:
    """An s-t cut of the network.

    Attributes:
        source_side: Nodes reachable from the source in the residual graph.
        sink_side: All other nodes.
        cut_edges: Edges from source_side to sink_side, as (tail, head).
        capacity: Total capacity of cut_edges.
    """

    source_side: set[int]
    sink_side: set[int]
    cut_edges: list[tuple[int, int]]
    capacity: int


@dataclass
class SaturatedEdge:
    """An edge whose flow has reached its capacity.

    Attributes:
        tail: Source node.
        head: Destination node.
        flow: Flow on the edge (equal to capacity).
        capacity: Edge capacity.
        in_min_cut: True if the edge crosses the minimum cut.
    """

    tail: int
    head: int
    flow: int
    capacity: int
    in_min_cut: bool


def validate_flow(network: FlowNetwork, source: int, sink: int) -> ValidationResult:
    """Validate that the flow on ``network`` is a feasible s-t flow.

    Checks:
    - Capacity constraints (0 <= flow <= capacity for each edge)
    - Flow conservation at every node other than source and sink

    Args:
        network: Network whose edge flows are checked.
        source: Source node.
        sink: Sink node.

    Returns:
        ValidationResult with detailed information about any violations.
    """
    network.validate_node(source)
    network.validate_node(sink)

    errors: list[str] = []
    capacity_violations: list[tuple[int, int]] = []
    imbalance: dict[int, int] = {}

    for edge in network:
        if edge.flow < 0 or edge.flow > edge.capacity:
            capacity_violations.append(edge.key)
            errors.append(
                f"Edge ({edge.tail}, {edge.head}): flow {edge.flow} outside [0, {edge.capacity}]"
            )

    for node in range(network.num_nodes):
        if node == source or node == sink:
            continue
        balance = network.node_imbalance(node)
        if balance != 0:
            imbalance[node] = balance
            errors.append(f"Node {node}: flow imbalance {balance} (should be zero)")

    flow_value = -network.node_imbalance(source)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        flow_value=flow_value,
        node_imbalance=imbalance,
        capacity_violations=capacity_violations,
    )


def compute_min_cut(network: FlowNetwork, source: int) -> MinCut:
    """Compute the s-t cut induced by the current flow.

    The source side is every node reachable from ``source`` in the residual
    graph. After a completed Edmonds-Karp run the sink is unreachable, so the
    cut is a minimum cut and its capacity equals the maximum flow.

    Args:
        network: Solved network.
        source: Source node of the run.

    Returns:
        MinCut describing the partition and the crossing edges.
    """
    network.validate_node(source)

    reachable = {source}
    queue: deque[int] = deque([source])
    while queue:
        node = queue.popleft()
        for arc in residual_arcs(network, node):
            if arc.head not in reachable:
                reachable.add(arc.head)
                queue.append(arc.head)

    cut_edges = [
        edge.key for edge in network if edge.tail in reachable and edge.head not in reachable
    ]
    capacity = sum(network.get_edge(tail, head).capacity for tail, head in cut_edges)

    return MinCut(
        source_side=reachable,
        sink_side=set(range(network.num_nodes)) - reachable,
        cut_edges=cut_edges,
        capacity=capacity,
    )


def compute_saturated_edges(network: FlowNetwork, source: int) -> list[SaturatedEdge]:
    """Identify edges at full capacity.

    Saturated edges that cross the minimum cut are the ones limiting the
    maximum flow; raising their capacity is the only way to increase it.
    Zero-capacity edges are skipped.

    Returns:
        List of SaturatedEdge sorted with min-cut edges first, then by capacity
        (largest first).
    """
    cut = set(compute_min_cut(network, source).cut_edges)
    saturated = [
        SaturatedEdge(
            tail=edge.tail,
            head=edge.head,
            flow=edge.flow,
            capacity=edge.capacity,
            in_min_cut=edge.key in cut,
        )
        for edge in network
        if edge.capacity > 0 and edge.flow == edge.capacity
    ]
    saturated.sort(key=lambda x: (not x.in_min_cut, -x.capacity, x.tail, x.head))
    return saturated
