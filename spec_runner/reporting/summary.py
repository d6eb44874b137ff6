"""JSON summary of a run."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from spec_runner.aggregator import aggregate
from spec_runner.orchestrator import UnitResult


def format_output(unit_results: Sequence[UnitResult]) -> dict[str, Any]:
    """Format unit results for JSON output."""
    all_results: list[dict[str, Any]] = []
    for unit_result in unit_results:
        stats = aggregate(unit_result.result)
        all_results.append(
            {
                "package": unit_result.unit.name,
                "import_path": unit_result.unit.import_path,
                "passed": stats.passed,
                "failed": stats.failed,
                "duration": unit_result.result.duration,
            }
        )

    return {
        "total": len(all_results),
        "passed": sum(r["passed"] for r in all_results),
        "failed": sum(r["failed"] for r in all_results),
        "duration": sum(r["duration"] for r in all_results),
        "results": all_results,
    }


def write_json_report(path: Path, unit_results: Sequence[UnitResult]) -> None:
    """Write the JSON summary of unit_results to path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(format_output(unit_results), indent=2) + "\n")
