"""
File handling utilities for tern2dts.
"""

import json
from typing import Any, Union
from pathlib import Path


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load JSON from file.

    Args:
        filepath: Path to JSON file

    Returns:
        Parsed JSON data
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(data: Any, filepath: Union[str, Path], indent: int = 2) -> None:
    """
    Save data to JSON file, creating parent directories as needed.

    Args:
        data: Data to save
        filepath: Path to output file
        indent: JSON indentation
    """
    ensure_directory(Path(filepath).parent)
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write('\n')


def save_text(text: str, filepath: Union[str, Path]) -> Path:
    """
    Write a text file, creating parent directories as needed.

    Args:
        text: Content to write
        filepath: Path to output file

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    ensure_directory(path.parent)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    return path


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
