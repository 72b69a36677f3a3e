"""Edmonds-Karp maximum-flow engine.

The residual graph is never materialized. For a node ``u`` it consists of:

- forward arcs ``u -> v`` for every edge ``u -> v`` with residual capacity left,
- reverse arcs ``u -> w`` for every edge ``w -> u`` currently carrying flow,
  which cancel flow that an earlier augmentation pushed.

Both kinds are represented by ResidualArc, so path search, bottleneck
computation and augmentation treat them uniformly.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from .data import (
    Edge,
    FlowNetwork,
    IterationRecord,
    MaxFlowResult,
    ProgressCallback,
    ProgressInfo,
    SolverOptions,
)
from .exceptions import InvalidNetworkError


@dataclass(frozen=True)
class ResidualArc:
    """One arc of the residual graph, backed by a network edge.

    Attributes:
        edge: The underlying network edge.
        forward: True when the arc follows the edge's stored direction,
                 False when it travels against it to cancel flow.
    """

    edge: Edge
    forward: bool = True

    @property
    def tail(self) -> int:
        return self.edge.tail if self.forward else self.edge.head

    @property
    def head(self) -> int:
        return self.edge.head if self.forward else self.edge.tail

    @property
    def residual_capacity(self) -> int:
        """Directional residual capacity: ``capacity - flow`` forward, ``flow`` reverse."""
        if self.forward:
            return self.edge.residual_capacity
        return self.edge.flow

    def push(self, amount: int) -> None:
        """Push ``amount`` units along the arc by adjusting the underlying edge."""
        self.edge.add_flow(amount if self.forward else -amount)


@dataclass(frozen=True)
class AugmentingPath:
    """An ordered sequence of residual arcs from source to sink."""

    arcs: tuple[ResidualArc, ...]

    def __len__(self) -> int:
        return len(self.arcs)

    @property
    def nodes(self) -> tuple[int, ...]:
        if not self.arcs:
            return ()
        return (self.arcs[0].tail,) + tuple(arc.head for arc in self.arcs)

    @property
    def bottleneck(self) -> int:
        """Minimum directional residual capacity along the path."""
        return min(arc.residual_capacity for arc in self.arcs)

    def describe(self, max_display: int = 10) -> str:
        """Render the path for the trace, summarizing paths longer than ``max_display`` edges."""
        nodes = self.nodes
        if not nodes:
            return "[]"
        if len(self.arcs) > max_display:
            return f"{nodes[0]} → ... → {nodes[-1]} ({len(self.arcs)} edges)"
        return " → ".join(str(node) for node in nodes)


def residual_arcs(network: FlowNetwork, node: int) -> Iterator[ResidualArc]:
    """Yield the residual arcs leaving ``node``.

    Forward arcs come first, in insertion order of the node's outgoing edges,
    followed by reverse-cancellation arcs in insertion order of its incoming
    edges. This order is the search's tie-break rule.
    """
    for edge in network.outgoing_edges(node):
        if edge.residual_capacity > 0:
            yield ResidualArc(edge, forward=True)
    for edge in network.incoming_edges(node):
        if edge.flow > 0:
            yield ResidualArc(edge, forward=False)


class EdmondsKarp:
    """Maximum-flow solver using shortest (fewest-edge) augmenting paths.

    Each call to find_max_flow() builds its own search state and returns the
    whole trace in a MaxFlowResult, so one instance can be reused for any
    number of independent runs. It must not be shared between threads that
    solve at the same time.

    Examples:
        >>> from maxflow_solver import EdmondsKarp, build_network
        >>> network = build_network(4, [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)])
        >>> result = EdmondsKarp().find_max_flow(network, source=0, sink=3)
        >>> result.max_flow
        5
    """

    def __init__(self, options: SolverOptions | None = None):
        self.options = options if options is not None else SolverOptions()
        self.logger = logging.getLogger(__name__)

    # ============================================================================
    # Path Search and Augmentation
    # ============================================================================

    def find_augmenting_path(
        self, network: FlowNetwork, source: int, sink: int
    ) -> AugmentingPath | None:
        """Breadth-first search for a shortest augmenting path.

        Returns:
            The path from source to sink, or None when the sink is unreachable
            in the residual graph.
        """
        visited = [False] * network.num_nodes
        predecessor: dict[int, ResidualArc] = {}

        queue: deque[int] = deque([source])
        visited[source] = True

        while queue and not visited[sink]:
            node = queue.popleft()
            for arc in residual_arcs(network, node):
                nxt = arc.head
                if not visited[nxt]:
                    visited[nxt] = True
                    predecessor[nxt] = arc
                    queue.append(nxt)

        if not visited[sink]:
            return None

        # Walk predecessor arcs back from the sink, then flip to source order.
        path: list[ResidualArc] = []
        node = sink
        while node != source:
            arc = predecessor[node]
            path.append(arc)
            node = arc.tail
        path.reverse()
        return AugmentingPath(tuple(path))

    @staticmethod
    def augment(path: AugmentingPath, amount: int) -> None:
        """Push ``amount`` units along every arc of ``path``."""
        for arc in path.arcs:
            arc.push(amount)

    # ============================================================================
    # Main Solve Method
    # ============================================================================

    def find_max_flow(
        self,
        network: FlowNetwork,
        source: int,
        sink: int,
        progress_callback: ProgressCallback | None = None,
    ) -> MaxFlowResult:
        """Compute the maximum flow from ``source`` to ``sink``.

        Flow already present on the network is kept, so calling this again on a
        network that a previous run saturated finds no augmenting path and
        returns a max_flow of 0.

        Args:
            network: Network to solve. Edge flows are updated in place.
            source: Source node.
            sink: Sink node, distinct from the source.
            progress_callback: Optional callback receiving ProgressInfo every
                               options.progress_interval augmenting iterations.

        Returns:
            MaxFlowResult with the flow value, per-edge flows and the trace.

        Raises:
            InvalidNodeIndexError: If source or sink is out of range.
            InvalidNetworkError: If source equals sink.
            InvalidFlowAdjustmentError: If an augmentation breaks an edge's
                flow bounds. This signals an internal defect and is not caught.
        """
        network.validate_node(source)
        network.validate_node(sink)
        if source == sink:
            raise InvalidNetworkError(
                f"Source and sink must be different nodes, got {source} for both."
            )

        options = self.options
        detailed = options.detailed_trace
        steps: list[str] = []
        iteration_times: list[float] = []
        history: list[IterationRecord] = []
        max_flow = 0
        iterations = 0
        searches = 0
        status = "optimal"

        start_time = time.perf_counter()
        self.logger.info(
            "Starting Edmonds-Karp solver",
            extra={
                "nodes": network.num_nodes,
                "edges": network.num_edges,
                "source": source,
                "sink": sink,
                "max_iterations": options.max_iterations,
            },
        )
        if detailed:
            steps.append(f"Starting Edmonds-Karp algorithm with source={source}, sink={sink}")

        while True:
            iteration_start = time.perf_counter()
            searches += 1
            path = self.find_augmenting_path(network, source, sink)

            if path is None:
                if detailed:
                    steps.append(
                        f"Iteration {searches}: No augmenting path found. Algorithm terminates."
                    )
                break

            # The limit only applies when another augmenting path exists.
            if options.max_iterations is not None and iterations >= options.max_iterations:
                status = "iteration_limit"
                self.logger.warning(
                    "Iteration limit reached before the flow was maximal",
                    extra={"iterations": iterations, "max_flow": max_flow},
                )
                steps.append(f"Iteration limit of {options.max_iterations} reached.")
                break

            bottleneck = path.bottleneck
            self.augment(path, bottleneck)
            max_flow += bottleneck
            iterations += 1

            elapsed = time.perf_counter() - iteration_start
            iteration_times.append(elapsed)
            history.append(
                IterationRecord(
                    iteration=iterations,
                    path=path.nodes,
                    bottleneck=bottleneck,
                    max_flow=max_flow,
                    elapsed=elapsed,
                )
            )

            if detailed:
                steps.append(f"Iteration {iterations}:")
                steps.append(
                    f"  Found augmenting path: {path.describe(options.max_path_display)}"
                )
                steps.append(f"  Bottleneck capacity: {bottleneck}")
                steps.append(f"  Current max flow: {max_flow}")
                steps.append(f"  Iteration time: {elapsed * 1000.0:.3f} ms")

            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    f"Augmented {bottleneck} units along {len(path)}-edge path",
                    extra={
                        "iteration": iterations,
                        "bottleneck": bottleneck,
                        "max_flow": max_flow,
                    },
                )

            if iterations % options.progress_interval == 0:
                if not detailed:
                    self.logger.info(
                        f"Completed {iterations} iterations. Current max flow: {max_flow}",
                        extra={"iterations": iterations, "max_flow": max_flow},
                    )
                if progress_callback is not None:
                    progress_callback(
                        ProgressInfo(
                            iteration=iterations,
                            max_flow=max_flow,
                            elapsed_time=time.perf_counter() - start_time,
                        )
                    )

        total_time = time.perf_counter() - start_time

        if not detailed:
            steps.append(f"Edmonds-Karp completed after {iterations} iterations")
            steps.append(f"Maximum flow: {max_flow}")

        self.logger.info(
            f"Edmonds-Karp finished: max flow {max_flow} after {iterations} iterations",
            extra={
                "status": status,
                "max_flow": max_flow,
                "iterations": iterations,
                "searches": searches,
                "elapsed_ms": round(total_time * 1000.0, 3),
            },
        )

        return MaxFlowResult(
            max_flow=max_flow,
            source=source,
            sink=sink,
            status=status,
            iterations=iterations,
            searches=searches,
            iteration_times=iteration_times,
            execution_steps=steps,
            history=history,
            flows=network.flows(),
            total_time=total_time,
        )
