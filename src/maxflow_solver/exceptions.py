"""Custom exceptions for the max-flow solver library."""

from __future__ import annotations


class MaxFlowError(Exception):
    """Base exception for all max-flow solver errors.

    All custom exceptions in the maxflow_solver package inherit from this class,
    allowing users to catch all solver-related errors with a single except clause.

    Example:
        try:
            result = find_max_flow(network)
        except MaxFlowError as e:
            print(f"Solver error: {e}")
    """


class InvalidNetworkError(MaxFlowError):
    """Raised when a network or a solve request is structurally invalid.

    This includes:
    - Networks with fewer than two nodes
    - Edges referencing nodes outside ``[0, num_nodes)``
    - Negative or non-integer capacities
    - Duplicate directed edges
    - A solve request whose source equals its sink

    Example:
        InvalidNetworkError("Network must have at least 2 nodes, got 1")
    """


class InvalidNodeIndexError(InvalidNetworkError):
    """Raised when a node id lies outside ``[0, num_nodes)``.

    Example:
        InvalidNodeIndexError("Node index out of range: 7 (network has 4 nodes)",
                              node=7, num_nodes=4)
    """

    def __init__(self, message: str, node: int | None = None, num_nodes: int | None = None):
        """Initialize with message and the offending node id."""
        super().__init__(message)
        self.node = node
        self.num_nodes = num_nodes


class InvalidCapacityError(InvalidNetworkError):
    """Raised when an edge capacity is negative or not an integer."""

    def __init__(self, message: str, capacity: object = None):
        """Initialize with message and the rejected capacity."""
        super().__init__(message)
        self.capacity = capacity


class DuplicateEdgeError(InvalidNetworkError):
    """Raised when a second edge is added for an existing ``(tail, head)`` pair.

    Parallel edges in the same direction are not supported. Callers who need
    the combined capacity should add a single edge with the summed capacity.
    """

    def __init__(self, message: str, tail: int | None = None, head: int | None = None):
        """Initialize with message and the duplicated edge endpoints."""
        super().__init__(message)
        self.tail = tail
        self.head = head


class NetworkParseError(MaxFlowError):
    """Raised when a textual network description cannot be parsed.

    The ``line_number`` attribute points at the offending line (1-based) when
    the error is tied to a specific line, and is None for whole-file errors.

    Example:
        NetworkParseError("Line 3: Invalid edge format: '0 1'", line_number=3)
    """

    def __init__(self, message: str, line_number: int | None = None):
        """Initialize with message and optional line number."""
        super().__init__(message)
        self.line_number = line_number


class InvalidFlowAdjustmentError(MaxFlowError):
    """Raised when a flow adjustment would leave ``[0, capacity]`` on an edge.

    The solver computes every adjustment from directional residual capacities,
    so seeing this error during ``find_max_flow`` means the solver itself is
    inconsistent. It is never clamped or retried.

    Example:
        InvalidFlowAdjustmentError(
            "Resulting flow would be invalid on edge 0 -> 1: 3 + 4 = 7 (capacity 5)",
            edge=(0, 1), flow=3, delta=4, capacity=5,
        )
    """

    def __init__(
        self,
        message: str,
        edge: tuple[int, int] | None = None,
        flow: int | None = None,
        delta: int | None = None,
        capacity: int | None = None,
    ):
        """Initialize with message and the state of the rejected adjustment."""
        super().__init__(message)
        self.edge = edge
        self.flow = flow
        self.delta = delta
        self.capacity = capacity


class SolverConfigurationError(MaxFlowError):
    """Raised when solver configuration or options are invalid.

    This includes:
    - Non-positive path display length
    - Non-positive progress interval or iteration limit

    Example:
        SolverConfigurationError("max_iterations must be positive, got -1")
    """
