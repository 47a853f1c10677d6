"""Simple runner that takes a YAML config file and a dataset folder."""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Optional

from .batch import GlobalReport, run_batch
from .models import EngineConfig


class DatasetRunner:
    """
    Runner that loads engine config from YAML and compares datasets from a folder.

    Usage:
        runner = DatasetRunner("jsondelta.yaml", "datasets")
        report = runner.run()

    Or as a one-liner:
        report = DatasetRunner.run_tests("jsondelta.yaml", "datasets")
    """

    def __init__(
        self,
        config_path: Optional[str],
        dataset_folder: str,
        engine_config: Optional[EngineConfig] = None
    ):
        """
        Initialize the runner.

        Args:
            config_path: Path to YAML/JSON engine config file, or None for defaults
            dataset_folder: Path to folder containing dataset JSON files
            engine_config: Explicit configuration, takes precedence over config_path
        """
        self.config_path = Path(config_path) if config_path else None
        self.dataset_folder = Path(dataset_folder)
        self._engine_config = engine_config

    @property
    def engine_config(self) -> EngineConfig:
        """Load and cache the engine config from file."""
        if self._engine_config is None:
            self._engine_config = self._load_config()
        return self._engine_config

    def _load_config(self) -> EngineConfig:
        """Load engine config from YAML or JSON file."""
        if self.config_path is None:
            return EngineConfig()

        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # JSON is valid YAML, so one parser covers both
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse config file: {e}")

        return EngineConfig.from_dict(data)

    def run(self, print_report: bool = True) -> GlobalReport:
        """
        Run all datasets in the folder.

        Args:
            print_report: Whether to print the summary report

        Returns:
            GlobalReport with all results
        """
        if not self.dataset_folder.exists():
            raise FileNotFoundError(f"Dataset folder not found: {self.dataset_folder}")

        return run_batch(
            dataset_dir=str(self.dataset_folder),
            engine_config=self.engine_config,
            print_report=print_report
        )

    @classmethod
    def run_tests(
        cls,
        config_path: Optional[str],
        dataset_folder: str,
        print_report: bool = True,
        engine_config: Optional[EngineConfig] = None
    ) -> GlobalReport:
        """
        Convenience class method to run datasets in one call.

        Example:
            report = DatasetRunner.run_tests("jsondelta.yaml", "datasets/")
        """
        runner = cls(config_path, dataset_folder, engine_config)
        return runner.run(print_report=print_report)


def run_tests(
    config_path: Optional[str],
    dataset_folder: str,
    print_report: bool = True
) -> GlobalReport:
    """
    Run dataset comparisons from a config file and a folder.

        from jsondelta.runner import run_tests
        report = run_tests("jsondelta.yaml", "datasets")

    Args:
        config_path: Path to YAML/JSON engine config file, or None for defaults
        dataset_folder: Path to folder containing dataset JSON files
        print_report: Whether to print the summary report

    Returns:
        GlobalReport with all results
    """
    return DatasetRunner.run_tests(config_path, dataset_folder, print_report)
