"""Visualization utilities for flow networks and maximum-flow solutions.

This module provides functions to draw network structure and solved flows,
with the minimum cut highlighted, using matplotlib and networkx.

Example:
    >>> from maxflow_solver import find_max_flow, visualize_flows, visualize_network
    >>>
    >>> # Visualize network structure
    >>> fig = visualize_network(network)
    >>> fig.savefig("network.png")
    >>>
    >>> # Visualize flows with the minimum cut highlighted
    >>> result = find_max_flow(network)
    >>> fig = visualize_flows(network, result, highlight_min_cut=True)
    >>> fig.savefig("flows.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .utils import compute_min_cut

if TYPE_CHECKING:
    from .data import FlowNetwork, MaxFlowResult

logger = logging.getLogger(__name__)

# Check for optional dependencies
try:
    import matplotlib.pyplot as plt
    import networkx as nx  # type: ignore[import-untyped,unused-ignore]
    from matplotlib.figure import Figure

    _HAS_VISUALIZATION_DEPS = True
except ImportError:
    _HAS_VISUALIZATION_DEPS = False
    Figure = Any  # type: ignore[misc, assignment]


def _check_dependencies() -> None:
    """Check if visualization dependencies are installed."""
    if not _HAS_VISUALIZATION_DEPS:
        msg = (
            "Visualization requires optional dependencies. "
            "Install with: pip install 'maxflow-solver[visualization]'"
        )
        raise ImportError(msg)


def _to_graph(network: FlowNetwork) -> nx.DiGraph:
    G = nx.DiGraph()
    G.add_nodes_from(range(network.num_nodes))
    for edge in network:
        G.add_edge(edge.tail, edge.head, capacity=edge.capacity, flow=edge.flow)
    return G


def _layout(G: nx.DiGraph, layout: str) -> dict[Any, Any]:
    layout_funcs = {
        "spring": nx.spring_layout,
        "circular": nx.circular_layout,
        "kamada_kawai": nx.kamada_kawai_layout,
        "shell": nx.shell_layout,
    }
    if layout not in layout_funcs:
        logger.warning(f"Unknown layout '{layout}', using 'spring'")
        layout = "spring"

    try:
        return layout_funcs[layout](G)
    except Exception as e:
        logger.warning(f"Layout '{layout}' failed: {e}, using 'spring'")
        return nx.spring_layout(G)


def _draw_nodes(
    G: nx.DiGraph,
    pos: dict[Any, Any],
    ax: Any,
    source: int,
    sink: int,
    node_size: int,
    font_size: int,
) -> None:
    inner = [n for n in G.nodes if n not in (source, sink)]
    nx.draw_networkx_nodes(
        G, pos, nodelist=[source], node_color="lightgreen", node_size=node_size,
        ax=ax, label="Source",
    )
    nx.draw_networkx_nodes(
        G, pos, nodelist=[sink], node_color="lightcoral", node_size=node_size,
        ax=ax, label="Sink",
    )
    if inner:
        nx.draw_networkx_nodes(
            G, pos, nodelist=inner, node_color="lightblue", node_size=node_size,
            ax=ax, label="Inner nodes",
        )
    nx.draw_networkx_labels(G, pos, font_size=font_size, ax=ax)


def visualize_network(
    network: FlowNetwork,
    source: int = 0,
    sink: int | None = None,
    layout: str = "spring",
    figsize: tuple[float, float] = (12, 8),
    node_size: int = 800,
    font_size: int = 10,
    show_capacities: bool = True,
    title: str | None = None,
) -> Figure:
    """Visualize network structure showing nodes, edges and capacities.

    Args:
        network: Network to draw.
        source: Source node, drawn in green (default: 0).
        sink: Sink node, drawn in red (default: last node).
        layout: Graph layout algorithm ("spring", "circular", "kamada_kawai", "shell").
        figsize: Figure size (width, height) in inches.
        node_size: Size of node markers.
        font_size: Font size for labels.
        show_capacities: Whether to label edges with their capacity.
        title: Custom title for the plot (default: "Network Structure").

    Returns:
        matplotlib Figure object

    Raises:
        ImportError: If matplotlib or networkx are not installed
    """
    _check_dependencies()
    if sink is None:
        sink = network.num_nodes - 1

    G = _to_graph(network)
    fig, ax = plt.subplots(figsize=figsize)
    pos = _layout(G, layout)

    _draw_nodes(G, pos, ax, source, sink, node_size, font_size)
    nx.draw_networkx_edges(
        G, pos, edge_color="gray", arrows=True, arrowsize=20, ax=ax,
        connectionstyle="arc3,rad=0.1",
    )
    if show_capacities:
        edge_labels = {edge.key: f"{edge.capacity}" for edge in network}
        nx.draw_networkx_edge_labels(
            G, pos, edge_labels=edge_labels, font_size=font_size - 2, ax=ax
        )

    ax.set_title(title or "Network Structure", fontsize=14, fontweight="bold")
    ax.legend(loc="upper left", fontsize=font_size)
    ax.axis("off")

    plt.tight_layout()
    return fig


def visualize_flows(
    network: FlowNetwork,
    result: MaxFlowResult,
    layout: str = "spring",
    figsize: tuple[float, float] = (14, 10),
    node_size: int = 1000,
    font_size: int = 10,
    highlight_min_cut: bool = True,
    show_zero_flows: bool = False,
    title: str | None = None,
) -> Figure:
    """Visualize a solved network with flow/capacity labels.

    Creates a network visualization showing:
    - Flow and capacity on each edge (``flow/capacity``)
    - Edge width proportional to flow
    - Minimum-cut edges highlighted in red

    Args:
        network: Solved network (edge flows are read from it).
        result: Result of find_max_flow() on the network.
        layout: Graph layout algorithm ("spring", "circular", "kamada_kawai", "shell").
        figsize: Figure size (width, height) in inches.
        node_size: Size of node markers.
        font_size: Font size for labels.
        highlight_min_cut: Whether to draw minimum-cut edges in red.
        show_zero_flows: Whether to draw edges that carry no flow.
        title: Custom title (default: "Maximum Flow = <value>").

    Returns:
        matplotlib Figure object

    Raises:
        ImportError: If matplotlib or networkx are not installed
    """
    _check_dependencies()

    G = _to_graph(network)
    fig, ax = plt.subplots(figsize=figsize)
    pos = _layout(G, layout)

    cut_edges = set(compute_min_cut(network, result.source).cut_edges) if highlight_min_cut else set()
    shown = [edge for edge in network if show_zero_flows or edge.flow > 0 or edge.key in cut_edges]
    max_flow_on_edge = max((edge.flow for edge in shown), default=0) or 1

    _draw_nodes(G, pos, ax, result.source, result.sink, node_size, font_size)

    normal = [edge for edge in shown if edge.key not in cut_edges]
    cut = [edge for edge in shown if edge.key in cut_edges]
    if normal:
        nx.draw_networkx_edges(
            G, pos, edgelist=[edge.key for edge in normal],
            width=[1.0 + 4.0 * edge.flow / max_flow_on_edge for edge in normal],
            edge_color="steelblue", arrows=True, arrowsize=20, ax=ax,
            connectionstyle="arc3,rad=0.1",
        )
    if cut:
        nx.draw_networkx_edges(
            G, pos, edgelist=[edge.key for edge in cut],
            width=[1.0 + 4.0 * edge.flow / max_flow_on_edge for edge in cut],
            edge_color="red", arrows=True, arrowsize=20, ax=ax,
            connectionstyle="arc3,rad=0.1",
        )

    edge_labels = {edge.key: f"{edge.flow}/{edge.capacity}" for edge in shown}
    nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=font_size - 2, ax=ax)

    ax.set_title(title or f"Maximum Flow = {result.max_flow}", fontsize=14, fontweight="bold")
    ax.legend(loc="upper left", fontsize=font_size)
    ax.axis("off")

    plt.tight_layout()
    return fig
