import json
import os
import shutil
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _replicate_examples(tmp_path: Path) -> Path:
    # Copy the sample CLI assets into an isolated workspace the subprocess can mutate.
    examples_dir = PROJECT_ROOT / "examples"

    dest = tmp_path / "examples"
    dest.mkdir(parents=True, exist_ok=True)

    for name in (
        "solve_example.py",
        "sample_network.txt",
        "solve_dimacs_example.py",
        "sample_network.max",
    ):
        shutil.copy2(examples_dir / name, dest / name)

    # Provide src/ so the example script can import using its relative path logic.
    src_symlink = tmp_path / "src"
    if not src_symlink.exists():
        src_symlink.symlink_to(PROJECT_ROOT / "src", target_is_directory=True)

    return dest


def test_example_script_produces_solution(tmp_path: Path):
    # Run the example script as a subprocess to mimic the documented usage.
    examples_dir = _replicate_examples(tmp_path)
    output_path = examples_dir / "sample_solution.json"

    proc = subprocess.run(
        [sys.executable, str(examples_dir / "solve_example.py")],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=True,
    )

    assert "Solved sample_network.txt: status=optimal, max_flow=5" in proc.stdout
    assert "----- EDGE FLOWS -----" in proc.stdout
    assert proc.stderr == ""

    contents = json.loads(output_path.read_text(encoding="utf-8"))
    assert contents["status"] == "optimal"
    assert contents["max_flow"] == 5
    flows = {(entry["tail"], entry["head"]): entry["flow"] for entry in contents["flows"]}
    assert flows[(0, 1)] == 3
    assert flows[(2, 3)] == 3


def test_dimacs_example_script_produces_solution(tmp_path: Path):
    examples_dir = _replicate_examples(tmp_path)
    output_path = examples_dir / "sample_network_solution.json"

    proc = subprocess.run(
        [sys.executable, str(examples_dir / "solve_dimacs_example.py")],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=True,
    )

    assert "Solved sample_network.max: status=optimal, max_flow=23" in proc.stdout
    assert proc.stderr == ""

    contents = json.loads(output_path.read_text(encoding="utf-8"))
    assert contents["source"] == 0
    assert contents["sink"] == 5
    assert contents["max_flow"] == 23
    assert contents["execution_steps"][-1] == "Maximum flow: 23"


def test_module_entrypoint(tmp_path: Path):
    # ``python -m maxflow_solver`` dispatches to the same CLI.
    examples_dir = _replicate_examples(tmp_path)
    env = dict(os.environ)
    env["PYTHONPATH"] = str(PROJECT_ROOT / "src")

    proc = subprocess.run(
        [sys.executable, "-m", "maxflow_solver", str(examples_dir / "sample_network.txt")],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
    )

    assert proc.returncode == 0
    assert "Maximum Flow: 5" in proc.stdout


def test_module_entrypoint_reports_parse_errors(tmp_path: Path):
    bad = tmp_path / "bad.txt"
    bad.write_text("3\n0 1 2\n0 1\n", encoding="utf-8")
    env = dict(os.environ)
    env["PYTHONPATH"] = str(PROJECT_ROOT / "src")

    proc = subprocess.run(
        [sys.executable, "-m", "maxflow_solver", str(bad)],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
    )

    assert proc.returncode == 1
    assert "Error in input file format: Line 3: Invalid edge format" in proc.stderr
