import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver.data import build_network  # noqa: E402
from maxflow_solver.exceptions import NetworkParseError  # noqa: E402
from maxflow_solver.io import (  # noqa: E402
    load_network,
    load_network_json,
    parse_dimacs_file,
    parse_dimacs_string,
    parse_network_file,
    parse_network_string,
    save_result,
)
from maxflow_solver.solver import find_max_flow  # noqa: E402

# These tests pin the text, JSON and DIMACS contracts implemented by maxflow_solver.io.


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestTextFormat:
    def test_parses_nodes_and_edges(self):
        network = parse_network_string("4\n0 1 3\n0 2 2\n1 3 2\n2 3 3\n")
        assert network.num_nodes == 4
        assert network.flows() == {(0, 1): 0, (0, 2): 0, (1, 3): 0, (2, 3): 0}
        assert network.get_edge(2, 3).capacity == 3

    def test_skips_blank_lines_and_whitespace(self):
        network = parse_network_string("\n\n  3  \n\n0   1\t5\n   \n1 2 4\n")
        assert network.num_nodes == 3
        assert network.num_edges == 2

    def test_node_count_only(self):
        network = parse_network_string("2\n")
        assert network.num_edges == 0

    def test_empty_input(self):
        with pytest.raises(NetworkParseError, match="Empty input") as exc_info:
            parse_network_string("   \n\n")
        assert exc_info.value.line_number is None

    def test_invalid_node_count(self):
        with pytest.raises(NetworkParseError, match="Invalid number of nodes") as exc_info:
            parse_network_string("four\n0 1 1\n")
        assert exc_info.value.line_number == 1

    def test_too_few_nodes(self):
        with pytest.raises(NetworkParseError, match="at least 2"):
            parse_network_string("1\n")

    # Each malformed edge line must be reported with its own line number.
    @pytest.mark.parametrize(
        "content,line,fragment",
        [
            ("3\n0 1\n", 2, "Invalid edge format"),
            ("3\n0 1 2 4\n", 2, "Invalid edge format"),
            ("3\n0 1 2\n0 x 2\n", 3, "Invalid number format"),
            ("3\n0 1 2.5\n", 2, "Invalid number format"),
            ("3\n\n0 1 2\n5 1 2\n", 4, "Invalid source node 5"),
            ("3\n0 -1 2\n", 2, "Invalid destination node -1"),
            ("3\n0 1 -4\n", 2, "Negative capacity -4"),
            ("3\n0 1 2\n0 1 3\n", 3, "Duplicate edge 0 -> 1"),
            ("3\n0 1 1_000\n", 2, "Invalid number format"),
            ("3\n0 \u0661 2\n", 2, "Invalid number format"),
        ],
    )
    def test_edge_errors_report_line_number(self, content, line, fragment):
        with pytest.raises(NetworkParseError) as exc_info:
            parse_network_string(content)
        assert exc_info.value.line_number == line
        assert f"Line {line}" in str(exc_info.value)
        assert fragment in str(exc_info.value)

    def test_parse_file(self, tmp_path: Path):
        path = _write(tmp_path, "network.txt", "2\n0 1 5\n")
        network = parse_network_file(path)
        assert network.get_edge(0, 1).capacity == 5

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            parse_network_file(tmp_path / "missing.txt")

    def test_underscore_node_count_is_rejected(self):
        with pytest.raises(NetworkParseError, match="Invalid number of nodes"):
            parse_network_string("1_0\n0 1 1\n")

    def test_invalid_utf8_file(self, tmp_path: Path):
        path = tmp_path / "network.txt"
        path.write_bytes(b"2\n0 1 \xff\n")
        with pytest.raises(NetworkParseError, match="Line 2: Input is not valid UTF-8") as exc_info:
            parse_network_file(path)
        assert exc_info.value.line_number == 2


class TestJsonFormat:
    def test_loads_network_and_terminals(self, tmp_path: Path):
        payload = {
            "num_nodes": 3,
            "source": 2,
            "sink": 0,
            "edges": [
                {"tail": 2, "head": 1, "capacity": 4},
                {"tail": 1, "head": 0, "capacity": 3},
            ],
        }
        path = _write(tmp_path, "network.json", json.dumps(payload))
        instance = load_network_json(path)

        assert instance.source == 2
        assert instance.sink == 0
        assert instance.network.get_edge(2, 1).capacity == 4

    def test_terminals_default_to_first_and_last(self, tmp_path: Path):
        payload = {"num_nodes": 3, "edges": [{"tail": 0, "head": 2, "capacity": 1}]}
        instance = load_network_json(_write(tmp_path, "n.json", json.dumps(payload)))
        assert (instance.source, instance.sink) == (0, 2)

    def test_requires_edges_array(self, tmp_path: Path):
        path = _write(tmp_path, "n.json", json.dumps({"num_nodes": 3, "edges": {}}))
        with pytest.raises(NetworkParseError, match="'edges' array"):
            load_network_json(path)

    def test_invalid_edges_are_wrapped(self, tmp_path: Path):
        payload = {"num_nodes": 2, "edges": [{"tail": 0, "head": 3, "capacity": 1}]}
        path = _write(tmp_path, "n.json", json.dumps(payload))
        with pytest.raises(NetworkParseError, match="out of range"):
            load_network_json(path)

    @pytest.mark.parametrize("edge", [5, None, "0 1 2"])
    def test_non_object_edges_are_wrapped(self, tmp_path: Path, edge):
        payload = {"num_nodes": 2, "edges": [edge]}
        path = _write(tmp_path, "n.json", json.dumps(payload))
        with pytest.raises(NetworkParseError, match="Invalid edge specification"):
            load_network_json(path)

    def test_boolean_node_count_is_rejected(self, tmp_path: Path):
        path = _write(tmp_path, "n.json", json.dumps({"num_nodes": True, "edges": []}))
        with pytest.raises(NetworkParseError, match="integer 'num_nodes'"):
            load_network_json(path)

    @pytest.mark.parametrize("field,value", [("source", True), ("sink", "1")])
    def test_non_integer_terminals_are_rejected(self, tmp_path: Path, field, value):
        payload = {"num_nodes": 2, "edges": [], field: value}
        path = _write(tmp_path, "n.json", json.dumps(payload))
        with pytest.raises(NetworkParseError, match=f"'{field}' must be an integer"):
            load_network_json(path)

    def test_invalid_utf8_is_a_parse_error(self, tmp_path: Path):
        path = tmp_path / "n.json"
        path.write_bytes(b'{"num_nodes": 2,\n"edges": [], "note": "\xff"}')
        with pytest.raises(NetworkParseError, match="not valid UTF-8") as exc_info:
            load_network_json(path)
        assert exc_info.value.line_number == 2

    def test_malformed_json_reports_line(self, tmp_path: Path):
        path = _write(tmp_path, "n.json", '{\n"num_nodes": 2,\n"edges": [,]\n}')
        with pytest.raises(NetworkParseError) as exc_info:
            load_network_json(path)
        assert exc_info.value.line_number == 3


class TestDimacsFormat:
    SAMPLE = """c Sample max-flow problem
p max 4 5
n 1 s
n 4 t
a 1 2 3
a 1 3 2
a 2 3 1
a 2 4 2
a 3 4 3
"""

    def test_parses_one_indexed_ids(self):
        instance = parse_dimacs_string(self.SAMPLE)
        assert instance.network.num_nodes == 4
        assert (instance.source, instance.sink) == (0, 3)
        assert instance.network.get_edge(0, 1).capacity == 3
        assert instance.network.get_edge(2, 3).capacity == 3

    def test_solves_like_text_format(self):
        instance = parse_dimacs_string(self.SAMPLE)
        result = find_max_flow(instance.network, instance.source, instance.sink)
        assert result.max_flow == 5

    def test_custom_terminals(self):
        instance = parse_dimacs_string("p max 3 1\nn 3 s\nn 1 t\na 3 1 7\n")
        assert (instance.source, instance.sink) == (2, 0)

    def test_arc_count_mismatch(self):
        with pytest.raises(NetworkParseError, match="Arc count mismatch"):
            parse_dimacs_string("p max 3 2\na 1 2 1\n")

    def test_missing_problem_line(self):
        with pytest.raises(NetworkParseError, match="No problem descriptor"):
            parse_dimacs_string("c nothing here\n")

    def test_arc_before_problem_line(self):
        with pytest.raises(NetworkParseError) as exc_info:
            parse_dimacs_string("a 1 2 3\np max 2 1\n")
        assert exc_info.value.line_number == 1

    def test_min_cost_problems_are_rejected(self):
        with pytest.raises(NetworkParseError, match="p max"):
            parse_dimacs_string("p min 2 1\na 1 2 0 3 1\n")

    def test_bad_arc_reports_line(self):
        with pytest.raises(NetworkParseError) as exc_info:
            parse_dimacs_string("p max 2 1\n\na 1 3 4\n")
        assert exc_info.value.line_number == 3

    def test_unknown_line_type(self):
        with pytest.raises(NetworkParseError, match="Unknown line type 'x'"):
            parse_dimacs_string("p max 2 0\nx 1 2\n")

    def test_underscore_capacity_is_rejected(self):
        with pytest.raises(NetworkParseError) as exc_info:
            parse_dimacs_string("p max 2 1\na 1 2 1_0\n")
        assert exc_info.value.line_number == 2

    def test_invalid_utf8_file(self, tmp_path: Path):
        path = tmp_path / "network.max"
        path.write_bytes(b"c \xfe\np max 2 1\na 1 2 5\n")
        with pytest.raises(NetworkParseError, match="not valid UTF-8") as exc_info:
            parse_dimacs_file(path)
        assert exc_info.value.line_number == 1


class TestLoadNetworkDispatch:
    def test_suffix_selects_parser(self, tmp_path: Path):
        text = load_network(_write(tmp_path, "a.txt", "2\n0 1 5\n"))
        data = load_network(
            _write(
                tmp_path,
                "a.json",
                json.dumps({"num_nodes": 2, "edges": [{"tail": 0, "head": 1, "capacity": 5}]}),
            )
        )
        dimacs = load_network(_write(tmp_path, "a.max", "p max 2 1\na 1 2 5\n"))

        for instance in (text, data, dimacs):
            assert (instance.source, instance.sink) == (0, 1)
            assert instance.network.get_edge(0, 1).capacity == 5

    def test_explicit_format_overrides_suffix(self, tmp_path: Path):
        path = _write(tmp_path, "network.dat", "p max 2 1\na 1 2 5\n")
        instance = load_network(path, fmt="dimacs")
        assert instance.network.num_edges == 1

    def test_unknown_format(self, tmp_path: Path):
        with pytest.raises(ValueError, match="Unknown network format"):
            load_network(_write(tmp_path, "a.txt", "2\n"), fmt="xml")


def test_save_result_writes_sorted_flows(tmp_path: Path):
    network = build_network(3, [(1, 2, 4), (0, 1, 3), (0, 2, 1)])
    result = find_max_flow(network)
    output = tmp_path / "result.json"
    save_result(output, result)

    saved = json.loads(output.read_text(encoding="utf-8"))
    assert saved["status"] == "optimal"
    assert saved["max_flow"] == 4
    assert saved["source"] == 0
    assert saved["sink"] == 2
    assert saved["iterations"] == result.iterations
    assert saved["searches"] == result.searches
    assert len(saved["iteration_times"]) == result.iterations
    assert saved["flows"] == [
        {"tail": 0, "head": 1, "flow": 3},
        {"tail": 0, "head": 2, "flow": 1},
        {"tail": 1, "head": 2, "flow": 3},
    ]
    assert saved["execution_steps"] == result.execution_steps
