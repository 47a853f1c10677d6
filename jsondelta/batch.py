"""Batch runner for comparing folders of JSON document pairs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .engine import DeltaEngine
from .models import EngineConfig, ComparisonResult, DiffType, Severity

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Result of a single dataset comparison."""
    name: str
    dataset_path: str
    passed: bool
    identical: Optional[bool] = None
    expected_identical: bool = True
    comparison: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "dataset_path": self.dataset_path,
            "passed": self.passed,
            "identical": self.identical,
            "expected_identical": self.expected_identical,
        }
        if self.comparison:
            result["comparison"] = self.comparison
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class GlobalReport:
    """Aggregated report across all datasets."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    total_differences: int = 0
    scenarios: list[ScenarioResult] = field(default_factory=list)
    severity_totals: dict[str, int] = field(default_factory=dict)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.severity_totals:
            self.severity_totals = {s.value: 0 for s in Severity}
        if not self.breakdown:
            self.breakdown = {
                "identical": [],
                "with_changes": [],
                "entries_removed": [],
                "entries_added": [],
                "errors": []
            }

    @property
    def pass_rate(self) -> str:
        return f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_comparisons": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": self.pass_rate,
                "total_differences": self.total_differences,
                "by_severity": self.severity_totals
            },
            "breakdown": self.breakdown,
            "scenarios": [s.to_dict() for s in self.scenarios]
        }

    def print_summary(self):
        print(f"\nResults: {self.passed}/{self.total} passed ({self.pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")

        if self.breakdown.get("identical"):
            print(f"  Identical: {len(self.breakdown['identical'])} datasets")
        if self.breakdown.get("with_changes"):
            print(f"  With changes: {len(self.breakdown['with_changes'])} datasets")
        if self.breakdown.get("entries_removed"):
            print(f"  Entries removed: {len(self.breakdown['entries_removed'])} datasets")
        if self.breakdown.get("entries_added"):
            print(f"  Entries added: {len(self.breakdown['entries_added'])} datasets")
        if self.breakdown.get("errors"):
            print(f"  Errors: {len(self.breakdown['errors'])} datasets")

        if self.total_differences:
            print(f"\nDifferences: {self.total_differences}")
            for severity, count in self.severity_totals.items():
                print(f"  {severity}: {count}")


class BatchRunner:
    """Runs dataset files through the comparison engine."""

    def __init__(self, engine_config: Optional[EngineConfig] = None):
        self.engine_config = engine_config or EngineConfig()
        self.engine = DeltaEngine(self.engine_config)

    def _engine_for(self, dataset: dict) -> DeltaEngine:
        """Get an engine honouring a per-dataset order_sensitive override."""
        order_sensitive = dataset.get("order_sensitive")
        if order_sensitive is None or bool(order_sensitive) == self.engine_config.order_sensitive:
            return self.engine

        return DeltaEngine(replace(self.engine_config, order_sensitive=bool(order_sensitive)))

    def run_dataset(self, dataset: dict, name: str, dataset_path: str) -> ScenarioResult:
        """Run a single dataset comparison."""
        left = dataset.get("left", {})
        right = dataset.get("right", {})
        expected = bool(dataset.get("expected_identical", True))

        result = self._engine_for(dataset).compare(left, right)

        if isinstance(result, ComparisonResult):
            return ScenarioResult(
                name=name,
                dataset_path=dataset_path,
                passed=result.identical == expected,
                identical=result.identical,
                expected_identical=expected,
                comparison=result.to_dict()
            )

        return ScenarioResult(
            name=name,
            dataset_path=dataset_path,
            passed=False,
            expected_identical=expected,
            error=f"{result.error['code']}: {result.error['message']}"
        )

    def _record(self, report: GlobalReport, result: ScenarioResult, print_report: bool):
        """Fold one scenario into the report."""
        report.scenarios.append(result)
        report.total += 1

        if result.passed:
            report.passed += 1
            if print_report:
                print(f"PASS: {result.name}")
        else:
            report.failed += 1
            if print_report:
                print(f"FAIL: {result.name}")

        if result.error:
            report.breakdown["errors"].append(result.name)
            return

        if result.identical:
            report.breakdown["identical"].append(result.name)
            return

        report.breakdown["with_changes"].append(result.name)
        differences = result.comparison.get("differences", [])
        report.total_differences += len(differences)

        for diff in differences:
            report.severity_totals[diff["severity"]] += 1

        types = {diff["type"] for diff in differences}
        if DiffType.MISSING.value in types:
            report.breakdown["entries_removed"].append(result.name)
        if DiffType.EXTRA.value in types:
            report.breakdown["entries_added"].append(result.name)

    def run_folder(self, folder: str, print_report: bool = True) -> GlobalReport:
        """Run all dataset files in a folder."""
        report = GlobalReport()
        folder_path = Path(folder)

        for dataset_file in sorted(folder_path.glob("*.json")):
            name = dataset_file.stem
            try:
                with open(dataset_file, encoding="utf-8") as f:
                    dataset: Any = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable dataset %s: %s", dataset_file, e)
                result = ScenarioResult(
                    name=name,
                    dataset_path=str(dataset_file),
                    passed=False,
                    error=f"Invalid dataset file: {e}"
                )
            else:
                if not isinstance(dataset, dict):
                    result = ScenarioResult(
                        name=name,
                        dataset_path=str(dataset_file),
                        passed=False,
                        error="Dataset must be a JSON object with 'left' and 'right'"
                    )
                else:
                    name = dataset.get("name", name)
                    result = self.run_dataset(dataset, name, str(dataset_file))

            self._record(report, result, print_report)

        if print_report:
            report.print_summary()

        return report


def run_batch(
    dataset_dir: str,
    engine_config: Optional[EngineConfig] = None,
    print_report: bool = True
) -> GlobalReport:
    """Run all datasets in a directory."""
    runner = BatchRunner(engine_config)
    return runner.run_folder(dataset_dir, print_report)
