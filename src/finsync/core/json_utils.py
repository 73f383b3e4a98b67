#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent pretty-printing,
used for sync run reports.
"""

import json
from pathlib import Path
from typing import Any


def write_json(filepath: str | Path, data: Any, default: Any = str) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file (parent directories are created)
        data: Data to write to the file
        default: Serializer for non-JSON types such as dates (default: str)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=default)


def read_json(filepath: str | Path) -> Any:
    """Read data from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)
