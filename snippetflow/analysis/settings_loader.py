"""
Analysis settings loader: supports YAML files, dicts, AnalysisSettings instances, and defaults.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path

try:
    import yaml
except ImportError:
    yaml = None  # type: ignore

from snippetflow.analysis.data_model import AnalysisSettings

_INT_FIELDS = (
    "long_function_lines",
    "deep_nesting_depth",
    "max_parameter_commas",
    "complexity_threshold",
    "nesting_threshold",
    "variable_count_threshold",
    "label_max_length",
)


def default_settings() -> AnalysisSettings:
    """
    Return the default settings.

    Returns:
        AnalysisSettings with long functions over 50 lines, deep nesting past depth 8,
        more than 4 parameter commas, magic-number exemptions (100, 1000), complexity
        threshold 10, nesting threshold 4, labels of 25 characters and an unbounded cache.
    """
    return AnalysisSettings()


def load_settings(
    source: AnalysisSettings | str | Path | dict | None,
) -> AnalysisSettings:
    """
    Load AnalysisSettings from various sources.

    Args:
        source: Can be:
            - AnalysisSettings instance: returned as-is
            - str or Path: treated as YAML file path
            - dict: constructed directly from dict keys
            - None: returns default_settings()

    Returns:
        AnalysisSettings instance

    Raises:
        FileNotFoundError: If source is a file path that doesn't exist
        ValueError: If the YAML is invalid or a field has the wrong type
        TypeError: If source is of an unsupported type
    """
    if source is None:
        return default_settings()

    if isinstance(source, AnalysisSettings):
        return source

    if isinstance(source, (str, Path)):
        return _load_from_yaml_file(source)

    if isinstance(source, dict):
        return _load_from_dict(source)

    raise TypeError(
        f"Unsupported source type for load_settings: {type(source).__name__}"
    )


def _load_from_yaml_file(path: str | Path) -> AnalysisSettings:
    """Load AnalysisSettings from a YAML file."""
    if yaml is None:
        raise ImportError(
            "PyYAML is required to load settings from YAML files. "
            "Install it with: pip install pyyaml"
        )

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {file_path}: {e}") from e

    if data is None:
        raise ValueError(f"YAML file {file_path} is empty")
    if not isinstance(data, dict):
        raise ValueError(f"YAML file {file_path}: expected dict, got {type(data).__name__}")

    # Either flat fields at root or nested under "analysis"
    if "analysis" in data:
        nested = data["analysis"]
        if not isinstance(nested, dict):
            raise ValueError(f"YAML file {file_path}: 'analysis' must be a dict")
        return _load_from_dict(nested)
    return _load_from_dict(data)


def _load_from_dict(data: dict) -> AnalysisSettings:
    """
    Construct AnalysisSettings from a dict; missing keys keep their defaults.

    Raises:
        ValueError: If a key is unknown or a value has an invalid type
    """
    known = {f.name for f in fields(AnalysisSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings field(s): {', '.join(unknown)}")

    values: dict = {}
    for name in _INT_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Setting '{name}' must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Setting '{name}' must be >= 0, got {value}")
        values[name] = value

    if "magic_number_exemptions" in data:
        exemptions = data["magic_number_exemptions"]
        if not isinstance(exemptions, (list, tuple)) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in exemptions
        ):
            raise ValueError("Setting 'magic_number_exemptions' must be a list of ints")
        values["magic_number_exemptions"] = tuple(exemptions)

    if "cache_max_entries" in data:
        limit = data["cache_max_entries"]
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
            raise ValueError(
                f"Setting 'cache_max_entries' must be a positive int or null, got {limit!r}"
            )
        values["cache_max_entries"] = limit

    return AnalysisSettings(**values)
