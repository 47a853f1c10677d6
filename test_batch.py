"""Tests for jsondelta dataset runners and command line."""

import json

import pytest
import yaml
from jsondelta import BatchRunner, DatasetRunner, EngineConfig, GlobalReport, ValidationError, run_tests
from jsondelta.batch import run_batch

import run_dataset_tests


def write_dataset(folder, filename, content):
    path = folder / filename
    if isinstance(content, str):
        path.write_text(content, encoding="utf-8")
    else:
        path.write_text(json.dumps(content), encoding="utf-8")
    return path


@pytest.fixture
def dataset_folder(tmp_path):
    """Folder mixing passing, failing and broken datasets."""
    folder = tmp_path / "datasets"
    folder.mkdir()

    write_dataset(folder, "identical.json", {
        "name": "same",
        "left": {"a": 1},
        "right": {"a": 1}
    })
    write_dataset(folder, "changed.json", {
        "left": {"items": [1, 2]},
        "right": {"items": [2, 3]}
    })
    write_dataset(folder, "expected_diff.json", {
        "left": {"a": 1},
        "right": {"a": 2},
        "expected_identical": False
    })
    write_dataset(folder, "reordered.json", {
        "left": {"t": [1, 2]},
        "right": {"t": [2, 1]},
        "order_sensitive": True
    })
    write_dataset(folder, "bad.json", "not json{")
    return folder


@pytest.fixture
def ignorable_folder(tmp_path):
    """Folder whose only difference is a volatile timestamp."""
    folder = tmp_path / "ignorable"
    folder.mkdir()
    write_dataset(folder, "volatile.json", {
        "left": {"a": 1, "updatedAt": "2025-01-01"},
        "right": {"a": 1, "updatedAt": "2025-02-02"}
    })
    return folder


class TestBatchRunner:
    """Test running a folder of datasets."""

    def setup_method(self):
        self.runner = BatchRunner()

    def test_run_folder_counts(self, dataset_folder):
        """Test pass/fail totals across the folder."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)

        assert report.total == 5
        assert report.passed == 2
        assert report.failed == 3
        assert report.pass_rate == "40.0%"

    def test_scenarios_in_file_order(self, dataset_folder):
        """Test scenarios follow sorted file names and prefer dataset names."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)
        names = [s.name for s in report.scenarios]
        assert names == ["bad", "changed", "expected_diff", "same", "reordered"]

    def test_breakdown(self, dataset_folder):
        """Test datasets are bucketed by outcome."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)

        assert report.breakdown["identical"] == ["same"]
        assert report.breakdown["with_changes"] == ["changed", "expected_diff", "reordered"]
        assert report.breakdown["entries_removed"] == ["changed"]
        assert report.breakdown["entries_added"] == ["changed"]
        assert report.breakdown["errors"] == ["bad"]

    def test_difference_totals(self, dataset_folder):
        """Test difference and severity totals."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)

        assert report.total_differences == 5
        assert report.severity_totals == {"low": 5, "medium": 0, "high": 0, "critical": 0}

    def test_order_sensitive_override(self, dataset_folder):
        """Test a dataset can switch its own array mode."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)
        reordered = next(s for s in report.scenarios if s.name == "reordered")

        assert reordered.identical is False
        paths = [d["path"] for d in reordered.comparison["differences"]]
        assert paths == ["t[0]", "t[1]"]

    def test_invalid_dataset_file(self, dataset_folder):
        """Test unreadable files become error scenarios."""
        report = self.runner.run_folder(str(dataset_folder), print_report=False)
        bad = report.scenarios[0]

        assert bad.passed is False
        assert bad.identical is None
        assert bad.error.startswith("Invalid dataset file")

    def test_non_object_dataset(self, tmp_path):
        """Test datasets must be JSON objects."""
        write_dataset(tmp_path, "list.json", [1, 2])
        report = self.runner.run_folder(str(tmp_path), print_report=False)

        assert report.failed == 1
        assert report.breakdown["errors"] == ["list"]

    def test_engine_error_recorded(self, tmp_path):
        """Test engine error responses fail the dataset."""
        write_dataset(tmp_path, "deep.json", {"left": {"a": {"b": 1}}, "right": {}})
        runner = BatchRunner(EngineConfig(max_depth=1))
        report = runner.run_folder(str(tmp_path), print_report=False)

        assert report.failed == 1
        assert report.scenarios[0].error.startswith("MAX_DEPTH_ERROR")

    def test_printed_output(self, dataset_folder, capsys):
        """Test the console report."""
        run_batch(str(dataset_folder))
        output = capsys.readouterr().out

        assert "PASS: same" in output
        assert "FAIL: changed" in output
        assert "Results: 2/5 passed (40.0%)" in output

    def test_report_to_dict(self, dataset_folder):
        report = self.runner.run_folder(str(dataset_folder), print_report=False)
        data = report.to_dict()

        assert data["summary"]["total_comparisons"] == 5
        assert data["summary"]["by_severity"]["low"] == 5
        assert data["timestamp"].endswith("Z")
        assert len(data["scenarios"]) == 5
        assert "comparison" not in data["scenarios"][0]
        assert data["scenarios"][0]["error"].startswith("Invalid dataset file")


class TestGlobalReport:
    """Test the report container."""

    def test_defaults(self):
        report = GlobalReport()
        assert report.pass_rate == "0.0%"
        assert report.severity_totals == {"low": 0, "medium": 0, "high": 0, "critical": 0}
        assert set(report.breakdown) == {
            "identical", "with_changes", "entries_removed", "entries_added", "errors"
        }


class TestDatasetRunner:
    """Test the config-file driven runner."""

    def test_defaults_without_config(self, ignorable_folder):
        """Test the volatile field fails without an ignore rule."""
        report = DatasetRunner(None, str(ignorable_folder)).run(print_report=False)
        assert report.failed == 1

    def test_yaml_config(self, tmp_path, ignorable_folder):
        """Test ignore rules loaded from YAML are applied."""
        config_path = tmp_path / "jsondelta.yaml"
        config_path.write_text(yaml.safe_dump({"ignore_paths": ["updatedAt"]}), encoding="utf-8")

        runner = DatasetRunner(str(config_path), str(ignorable_folder))
        report = runner.run(print_report=False)

        assert runner.engine_config.ignore_paths == ["updatedAt"]
        assert report.passed == 1

    def test_json_config(self, tmp_path, ignorable_folder):
        """Test a JSON config file is accepted too."""
        config_path = tmp_path / "jsondelta.json"
        config_path.write_text(json.dumps({"global_ignores": ["$.updatedAt"]}), encoding="utf-8")

        report = run_tests(str(config_path), str(ignorable_folder), print_report=False)
        assert report.passed == 1

    def test_explicit_config_wins(self, ignorable_folder):
        config = EngineConfig(ignore_paths=["updatedAt"])
        report = DatasetRunner.run_tests(None, str(ignorable_folder), False, engine_config=config)
        assert report.passed == 1

    def test_unknown_config_key(self, tmp_path, ignorable_folder):
        config_path = tmp_path / "jsondelta.yaml"
        config_path.write_text("ignore_path: [updatedAt]\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            DatasetRunner(str(config_path), str(ignorable_folder)).run(print_report=False)

    def test_malformed_config(self, tmp_path, ignorable_folder):
        config_path = tmp_path / "jsondelta.yaml"
        config_path.write_text("ignore_paths: [updatedAt\n", encoding="utf-8")

        with pytest.raises(ValueError):
            DatasetRunner(str(config_path), str(ignorable_folder)).run(print_report=False)

    def test_missing_config(self, tmp_path, ignorable_folder):
        with pytest.raises(FileNotFoundError):
            DatasetRunner(str(tmp_path / "nope.yaml"), str(ignorable_folder)).run(print_report=False)

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DatasetRunner(None, str(tmp_path / "nope")).run(print_report=False)


class TestCommandLine:
    """Test the run_dataset_tests entry point."""

    def test_all_pass(self, tmp_path, ignorable_folder):
        """Test exit code 0 and the saved report when every dataset passes."""
        config_path = tmp_path / "jsondelta.yaml"
        config_path.write_text("ignore_paths:\n  - updatedAt\n", encoding="utf-8")
        report_path = tmp_path / "report.json"

        code = run_dataset_tests.main([
            str(report_path), str(ignorable_folder), "-c", str(config_path), "-q"
        ])

        assert code == 0
        saved = json.loads(report_path.read_text(encoding="utf-8"))
        assert saved["summary"]["total_comparisons"] == 1
        assert saved["summary"]["passed"] == 1

    def test_failures(self, tmp_path, dataset_folder):
        """Test exit code 1 when any dataset fails."""
        report_path = tmp_path / "report.json"
        code = run_dataset_tests.main(["-r", str(report_path), "-d", str(dataset_folder), "-q"])

        assert code == 1
        assert report_path.exists()

    def test_missing_datasets(self, tmp_path, capsys):
        code = run_dataset_tests.main([str(tmp_path / "report.json"), str(tmp_path / "nope")])
        assert code == 1
        assert "Datasets folder not found" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, ignorable_folder):
        code = run_dataset_tests.main([
            str(tmp_path / "report.json"), str(ignorable_folder), "-c", str(tmp_path / "nope.yaml")
        ])
        assert code == 1

    def test_invalid_config(self, tmp_path, ignorable_folder, capsys):
        config_path = tmp_path / "jsondelta.yaml"
        config_path.write_text("log_level: loud\n", encoding="utf-8")

        code = run_dataset_tests.main([
            str(tmp_path / "report.json"), str(ignorable_folder), "-c", str(config_path), "-q"
        ])
        assert code == 1
        assert "Invalid log_level" in capsys.readouterr().err
