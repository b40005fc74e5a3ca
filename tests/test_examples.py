"""Smoke tests for all example scripts.

These tests verify that examples run without errors.
They don't verify correctness of results, just that the code executes.
"""

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
EXAMPLES_DIR = PROJECT_ROOT / "hoverslam" / "examples"


def run_example(example_name: str, cwd: Path, timeout: int = 300) -> subprocess.CompletedProcess:
    """Run an example script and return the result."""
    script_path = EXAMPLES_DIR / f"{example_name}.py"

    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=cwd,
        env={**os.environ, "MPLBACKEND": "Agg", "PYTHONPATH": str(PROJECT_ROOT)},
    )

    return result


class TestExamplesSmoke:
    """Smoke tests that verify examples run without crashing."""

    def test_hover_slam_runs(self, tmp_path) -> None:
        """Test that hover_slam.py runs and writes its outputs."""
        result = run_example("hover_slam", tmp_path)
        assert result.returncode == 0, f"hover_slam failed:\n{result.stderr}"
        assert "LANDED" in result.stdout
        output_dir = tmp_path / "outputs" / "hover_slam"
        assert (output_dir / "scenario.json").exists()
        assert list(output_dir.glob("FlightLog - *.csv"))

    def test_dispersion_study_runs(self, tmp_path) -> None:
        """Test that dispersion_study.py runs without errors."""
        result = run_example("dispersion_study", tmp_path)
        assert result.returncode == 0, f"dispersion_study failed:\n{result.stderr}"
        assert (tmp_path / "outputs" / "dispersion_study" / "dispersion.csv").exists()
