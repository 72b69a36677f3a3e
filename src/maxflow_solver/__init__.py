"""High-level entrypoints for the Edmonds-Karp maximum-flow library."""

from .data import (
    Edge,
    FlowNetwork,
    IterationRecord,
    MaxFlowResult,
    ProgressCallback,
    ProgressInfo,
    SolverOptions,
    build_network,
)
from .diagnostics import TimingSummary, slowest_iterations, summarize_iteration_times
from .edmonds_karp import AugmentingPath, EdmondsKarp, ResidualArc
from .exceptions import (
    DuplicateEdgeError,
    InvalidCapacityError,
    InvalidFlowAdjustmentError,
    InvalidNetworkError,
    InvalidNodeIndexError,
    MaxFlowError,
    NetworkParseError,
    SolverConfigurationError,
)
from .io import NetworkInstance, parse_dimacs_string, parse_network_file, parse_network_string
from .reporting import format_report
from .solver import find_max_flow, load_network, save_result
from .utils import (
    MinCut,
    SaturatedEdge,
    ValidationResult,
    compute_min_cut,
    compute_saturated_edges,
    validate_flow,
)
from .visualization import visualize_flows, visualize_network

__version__ = "0.1.0"

__all__ = [
    # Main API
    "build_network",
    "find_max_flow",
    "load_network",
    "save_result",
    # Data model
    "Edge",
    "FlowNetwork",
    "NetworkInstance",
    # Engine
    "EdmondsKarp",
    "AugmentingPath",
    "ResidualArc",
    # Configuration and results
    "SolverOptions",
    "MaxFlowResult",
    "IterationRecord",
    # Progress tracking
    "ProgressCallback",
    "ProgressInfo",
    # Parsing
    "parse_network_string",
    "parse_network_file",
    "parse_dimacs_string",
    # Reporting and diagnostics
    "format_report",
    "summarize_iteration_times",
    "slowest_iterations",
    "TimingSummary",
    # Utilities
    "validate_flow",
    "compute_min_cut",
    "compute_saturated_edges",
    "ValidationResult",
    "MinCut",
    "SaturatedEdge",
    # Visualization
    "visualize_network",
    "visualize_flows",
    # Exceptions
    "MaxFlowError",
    "InvalidNetworkError",
    "InvalidNodeIndexError",
    "InvalidCapacityError",
    "DuplicateEdgeError",
    "NetworkParseError",
    "InvalidFlowAdjustmentError",
    "SolverConfigurationError",
    # Version
    "__version__",
]
