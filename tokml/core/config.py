"""
Conversion options and configuration file handling.

Options are resolved once per conversion into an immutable `ConvertOptions`.
The CLI layers a YAML config file (`tokml_config.yaml`) between the built-in
defaults and its own flags.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

CONFIG_FILE_NAMES = ("tokml_config.yaml", "tokml_config.yml")

# camelCase spellings accepted for compatibility with tokml's JS options.
_OPTION_ALIASES = {
    "documentName": "document_name",
    "documentDescription": "document_description",
    "document-name": "document_name",
    "document-description": "document_description",
}


@dataclass(frozen=True)
class ConvertOptions:
    """
    Options for one conversion.

    `name`, `description` and `timestamp` are the property keys read for each
    Placemark; None or "" disables that element. `document_name` and
    `document_description` label the KML Document itself.
    """

    document_name: Optional[str] = None
    document_description: Optional[str] = None
    name: Optional[str] = "name"
    description: Optional[str] = "description"
    timestamp: Optional[str] = "timestamp"
    simplestyle: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_OPTION_NAMES = frozenset(f.name for f in fields(ConvertOptions))


def normalize_option_keys(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase/hyphenated keys to field names and drop unknown keys."""
    normalized: Dict[str, Any] = {}
    for key, value in overrides.items():
        name = _OPTION_ALIASES.get(key, key)
        if name in _OPTION_NAMES:
            normalized[name] = value
    return normalized


def resolve_options(
    overrides: Union[ConvertOptions, Mapping[str, Any], None] = None,
    base: Optional[ConvertOptions] = None,
) -> ConvertOptions:
    """
    Merge caller overrides onto `base` (defaults when omitted).

    Example:
        >>> resolve_options({"documentName": "Trails"}).document_name
        'Trails'
        >>> resolve_options({"name": None}).name is None
        True
    """
    if isinstance(overrides, ConvertOptions):
        return overrides
    base = base or ConvertOptions()
    if not overrides:
        return base

    values = normalize_option_keys(overrides)
    if "simplestyle" in values:
        values["simplestyle"] = bool(values["simplestyle"])
    return replace(base, **values)


def load_config_file(config_file: Path) -> ConvertOptions:
    """
    Load options from a YAML config file.

    Format:
        document_name: My Map
        name: title
        simplestyle: true

    Raises:
        ValueError: If the file is not valid YAML, not a mapping, or holds a
            non-boolean simplestyle or a non-string value for another option
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except OSError as e:
        raise ValueError(f"Error loading config file: {e}")

    # Handle empty config file
    if user_config is None:
        user_config = {}

    if not isinstance(user_config, dict):
        raise ValueError(
            "Error loading config file: expected a mapping of option names to values"
        )

    values = normalize_option_keys(user_config)
    for key, value in values.items():
        if value is None:
            continue
        if key == "simplestyle":
            if not isinstance(value, bool):
                raise ValueError(
                    "Error loading config file: 'simplestyle' must be true or false"
                )
        elif not isinstance(value, str):
            raise ValueError(f"Error loading config file: '{key}' must be a string")

    return resolve_options(values)


def find_config_file(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first `tokml_config.yaml`/`.yml` found in `directory` (default: cwd)."""
    base = directory or Path(".")
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_config(config_file: Optional[Path] = None) -> ConvertOptions:
    """
    Load conversion options.

    Args:
        config_file: Optional path to a config file (.yaml or .yml).
                    If None, looks for 'tokml_config.yaml' in current directory.

    Returns:
        ConvertOptions (defaults when no config file exists)
    """
    if config_file is None:
        config_file = find_config_file()
        if config_file is None:
            return ConvertOptions()

    return load_config_file(config_file)


def export_template(output_path: Path) -> None:
    """Write a commented config template with the default values."""
    yaml_content = """# =============================================================================
# tokml configuration
# =============================================================================
# Place this file in the working directory as tokml_config.yaml, or pass it
# with --config. Command-line flags override the values below.

# <name> and <description> of the KML Document (omit to leave out)
# document_name: My Map
# document_description: Exported from GeoJSON

# Feature property keys used for each Placemark.
# Set to an empty string to disable the element.
name: name
description: description
timestamp: timestamp

# Turn simplestyle properties (marker-color, stroke, fill, ...) into KML styles
simplestyle: false
"""
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(yaml_content)
