"""Tests for visualization utilities."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import SolverOptions, build_network, find_max_flow  # noqa: E402

# Check if visualization dependencies are available
try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from maxflow_solver import visualize_flows, visualize_network

    HAS_VISUALIZATION = True
except ImportError:
    HAS_VISUALIZATION = False
    plt = None

pytestmark = pytest.mark.skipif(
    not HAS_VISUALIZATION,
    reason="Visualization dependencies (matplotlib, networkx) not installed",
)


@pytest.fixture(autouse=True)
def close_figures():
    """Close all matplotlib figures after each test."""
    yield
    if plt is not None:
        plt.close("all")


@pytest.fixture
def diamond():
    return build_network(4, [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)])


@pytest.fixture
def bottleneck():
    return build_network(4, [(0, 1, 10), (1, 2, 1), (2, 3, 10), (0, 3, 0)])


class TestVisualizeNetwork:
    """Tests for visualize_network function."""

    def test_simple_network(self, diamond):
        fig = visualize_network(diamond)
        assert fig is not None
        assert len(fig.axes) == 1
        assert fig.axes[0].get_title() == "Network Structure"

    def test_custom_layout(self, diamond):
        """Test different layout algorithms."""
        for layout in ["spring", "circular", "kamada_kawai", "shell"]:
            fig = visualize_network(diamond, layout=layout)
            assert fig is not None

    def test_invalid_layout_fallback(self, diamond, caplog):
        """Test that invalid layout falls back to spring."""
        fig = visualize_network(diamond, layout="invalid_layout")
        assert fig is not None
        assert "Unknown layout 'invalid_layout'" in caplog.text

    def test_custom_figsize(self, diamond):
        fig = visualize_network(diamond, figsize=(10, 6))
        assert fig.get_figwidth() == 10
        assert fig.get_figheight() == 6

    def test_custom_title_and_terminals(self, diamond):
        fig = visualize_network(
            diamond, source=1, sink=2, show_capacities=False, title="My Network"
        )
        assert fig.axes[0].get_title() == "My Network"


class TestVisualizeFlows:
    """Tests for visualize_flows function."""

    def test_default_title_shows_flow_value(self, diamond):
        result = find_max_flow(diamond)
        fig = visualize_flows(diamond, result)
        assert fig.axes[0].get_title() == "Maximum Flow = 5"

    def test_without_min_cut(self, bottleneck):
        result = find_max_flow(bottleneck)
        fig = visualize_flows(bottleneck, result, highlight_min_cut=False)
        assert fig is not None

    def test_show_zero_flows(self, bottleneck):
        result = find_max_flow(bottleneck)
        fig = visualize_flows(bottleneck, result, show_zero_flows=True, title="All edges")
        assert fig.axes[0].get_title() == "All edges"

    def test_partial_flow(self, diamond):
        result = find_max_flow(diamond, options=SolverOptions(max_iterations=1))
        fig = visualize_flows(diamond, result)
        assert fig.axes[0].get_title() == "Maximum Flow = 2"


def test_missing_dependencies_raise_helpful_error(monkeypatch, diamond):
    from maxflow_solver import visualization

    monkeypatch.setattr(visualization, "_HAS_VISUALIZATION_DEPS", False)
    with pytest.raises(ImportError, match="maxflow-solver\\[visualization\\]"):
        visualization.visualize_network(diamond)
