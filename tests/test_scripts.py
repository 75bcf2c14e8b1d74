"""Smoke tests for the example scripts.

These tests verify that scripts run without errors.
They don't verify correctness of results, just that the code executes.
"""

import subprocess
import sys
from pathlib import Path

SCRIPTS_DIR = Path(__file__).parent.parent / "scripts"


def run_script(script_name: str, timeout: int = 300) -> subprocess.CompletedProcess:
    """Run a script and return the result."""
    script_path = SCRIPTS_DIR / f"{script_name}.py"

    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=Path(__file__).parent.parent,  # Run from project root
    )

    return result


class TestScriptsSmoke:
    """Smoke tests that verify scripts run without crashing."""

    def test_run_descent(self) -> None:
        """Test that run_descent.py runs and reports an outcome."""
        result = run_script("run_descent")
        assert result.returncode == 0, f"run_descent failed:\n{result.stderr}"
        assert "Outcome:" in result.stdout
