"""Configuration loader for refsum."""

from pathlib import Path
from typing import Any

import yaml

from refsum.types import DigestAlgorithm, LineFormatKind, RefsumConfig


def load_config(config_path: Path) -> RefsumConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        RefsumConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(raw_config).__name__}")

    return parse_config(raw_config)


def parse_config(raw_config: dict[str, Any]) -> RefsumConfig:
    """Parse raw configuration dictionary into RefsumConfig.

    Args:
        raw_config: Raw configuration dictionary

    Returns:
        RefsumConfig instance
    """
    algorithm = DigestAlgorithm.from_name(str(raw_config.get("algorithm", "SHA256")))

    format_str = str(raw_config.get("format", "simple")).lower()
    try:
        line_format = LineFormatKind(format_str)
    except ValueError:
        raise ValueError(f"Invalid format: {format_str}. Must be simple or bsd.")

    return RefsumConfig(
        algorithm=algorithm,
        line_format=line_format,
        verbose=bool(raw_config.get("verbose", False)),
    )


def get_default_config() -> dict[str, Any]:
    """Return default configuration template."""
    return {
        "algorithm": DigestAlgorithm.SHA256.value,
        "format": LineFormatKind.SIMPLE.value,
        "verbose": False,
    }


def merge_cli_args(config: RefsumConfig, **cli_args: Any) -> RefsumConfig:
    """Merge CLI arguments into existing config (CLI takes precedence).

    Only truthy options override, so flags left at their defaults keep the
    file's values.

    Args:
        config: Existing RefsumConfig
        **cli_args: CLI arguments to merge

    Returns:
        Updated RefsumConfig
    """
    if cli_args.get("algorithm"):
        config.algorithm = DigestAlgorithm.from_name(cli_args["algorithm"])
    if cli_args.get("sha512"):
        config.algorithm = DigestAlgorithm.SHA512
    if cli_args.get("use_bsd"):
        config.line_format = LineFormatKind.BSD
    if cli_args.get("verbose"):
        config.verbose = True

    return config
