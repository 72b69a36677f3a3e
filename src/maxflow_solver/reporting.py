"""Console rendering of solver results."""

from __future__ import annotations

from .data import FlowNetwork, MaxFlowResult
from .diagnostics import summarize_iteration_times

SECTION_RULE = "-----"


def format_execution_details(result: MaxFlowResult) -> str:
    lines = [f"{SECTION_RULE} EXECUTION DETAILS {SECTION_RULE}"]
    lines.extend(result.execution_steps)
    return "\n".join(lines)


def format_summary(result: MaxFlowResult, elapsed: float | None = None) -> str:
    """Render the run summary.

    Args:
        result: Result to summarize.
        elapsed: Wall-clock seconds measured by the caller around the solve.
                 Defaults to result.total_time.
    """
    total = result.total_time if elapsed is None else elapsed
    timing = summarize_iteration_times(result)
    lines = [
        f"{SECTION_RULE} SUMMARY {SECTION_RULE}",
        f"Maximum Flow: {result.max_flow}",
        f"Total Iterations: {result.iterations}",
        f"Total Execution Time: {total * 1000.0:.3f} ms",
        f"Average Time per Iteration: {result.average_iteration_time_ms:.3f} ms",
    ]
    if timing.count > 1:
        lines.append(f"Slowest Iteration: {timing.maximum * 1000.0:.3f} ms")
    if result.status != "optimal":
        lines.append(f"Status: {result.status} (flow may not be maximal)")
    return "\n".join(lines)


def format_report(
    result: MaxFlowResult,
    network: FlowNetwork | None = None,
    elapsed: float | None = None,
) -> str:
    """Render execution details and summary as printed by the command line tool.

    When ``network`` is given, the flow on every edge that carries flow is
    listed after the summary.
    """
    sections = [format_execution_details(result), format_summary(result, elapsed)]
    if network is not None:
        flow_lines = [f"{SECTION_RULE} EDGE FLOWS {SECTION_RULE}"]
        for edge in network:
            if edge.flow > 0:
                flow_lines.append(f"{edge.tail} -> {edge.head}: {edge.flow}/{edge.capacity}")
        sections.append("\n".join(flow_lines))
    return "\n\n".join(sections)
