"""
Run configuration.

A run can be described entirely by a YAML file; command-line arguments
override the file, and the file overrides DEFAULT_RUN_CONFIG.

Example run configuration:

    target: "01215456"
    generations: 2
    policy: default
    progress_interval: 1000000
    output:
      report: results/dup4_report.tsv
      registry: results/dup4_registry.csv
      metadata: results/dup4_run.yaml
      plot: results/dup4_summary.png
      overwrite: false
"""

import copy
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import ConfigurationError
from .policies import POLICY_NAMES


DEFAULT_RUN_CONFIG: Dict[str, Any] = {
    "target": None,
    "generations": None,
    "policy": "default",
    "progress_interval": 1_000_000,
    "breakpoint_marker": "|",
    "quiet": False,
    "output": {
        "report": None,
        "registry": None,
        "metadata": None,
        "plot": None,
        "overwrite": False,
    },
}


def load_run_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config is not valid YAML or is empty
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigurationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigurationError("Configuration file must contain a mapping")

    return config


def merge_run_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configurations, recursing into nested dictionaries.

    Values of None in override are ignored so unset command-line options
    don't mask the file.

    Returns:
        New merged dictionary (inputs are not modified)
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_run_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Target and generation count are checked separately (see cli), since they
    may still be missing when a file is loaded.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    policy = config.get('policy')
    if policy not in POLICY_NAMES:
        raise ConfigurationError(
            f"Invalid policy: '{policy}'. Must be one of: {', '.join(POLICY_NAMES)}"
        )

    interval = config.get('progress_interval')
    if not isinstance(interval, int) or isinstance(interval, bool) or interval <= 0:
        raise ConfigurationError(
            f"'progress_interval' must be a positive integer, got: {interval}"
        )

    marker = config.get('breakpoint_marker')
    if not isinstance(marker, str) or not marker:
        raise ConfigurationError(f"'breakpoint_marker' must be a non-empty string, got: {marker}")

    if not isinstance(config.get('quiet', False), bool):
        raise ConfigurationError("'quiet' must be true or false")

    output = config.get('output')
    if not isinstance(output, dict):
        raise ConfigurationError("'output' must be a dictionary")

    for key in ('report', 'registry', 'metadata', 'plot'):
        value = output.get(key)
        if value is not None and not isinstance(value, (str, Path)):
            raise ConfigurationError(f"'output.{key}' must be a path, got: {value}")

    if not isinstance(output.get('overwrite', False), bool):
        raise ConfigurationError("'output.overwrite' must be true or false")
