import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml


def from_json_or_yaml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a dictionary from a JSON or YAML file, chosen by file extension.

    Args:
    filepath (str or Path): Path to a .json, .yaml or .yml file.

    Returns:
    dict: The parsed content.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            return json.load(handle)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(handle) or {}
    raise ValueError(f"Unsupported config file type: {path.suffix}")
