"""
Generator configuration and the static tables it ships with.

Every field of :class:`GeneratorConfig` can be overridden from a JSON file
via :func:`load_config`.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tern2dts.errors import ConfigError
from tern2dts.utils.file_handlers import load_json

DEFAULT_BASE_URL = "https://docs.scriptable.app/"
DEFAULT_SOURCE = "scriptable.json"

DEFAULT_HEADER = """// Type definitions for iOS-Scriptable
// Project: https://scriptable.app/
"""

# Key holding the long (HTML) documentation of an entry
LONG_DOC_KEY = "!scriptable.description"
PARAMETERS_KEY = "!scriptable.parameters"
RETURNS_KEY = "!scriptable.returns"
ENUM_KEY = "!scriptable.enum"

# Short-doc prefix marking a property whose value is a function
PROPERTY_FUNCTION_MARKER = "(property)"

WRAP_COLUMN = 180

# Functions that keep an untyped return instead of the inferred "void".
# Entries are "name" (everywhere), "Owner.name", "*" or "Owner.*".
IGNORE_VOID_RETURN = ["constructor", "importModule"]

# Functions the source grammar lists without a return type although they
# return a string. Enumerated on purpose; do not turn into a rule.
STRING_RETURN_OVERRIDES = ["Pasteboard.paste", "Pasteboard.pasteString"]

# Globals that are not part of the Tern document. Either an alias for an
# already emitted declaration ("Owner.member" or "name"), or an explicit
# definition with its JSDoc parts.
DEFAULT_GLOBALS: Dict[str, Dict[str, Any]] = {
    "log": {"aliasFor": "console.log"},
    "logWarning": {"aliasFor": "console.warn"},
    "logError": {"aliasFor": "console.error"},
    "atob": {
        "description": "Decodes base64 into a binary string (\"ASCII to binary\")",
        "definition": "function atob(str: string): string",
        "parameters": [
            {"name": "str", "type": "string", "description": "The string to decode"},
        ],
        "returns": {"type": "string", "description": "The decoded binary string"},
    },
    "btoa": {
        "description": "Encodes a binary string as base64 (\"binary to ASCII\")",
        "definition": "function btoa(str: string): string",
        "parameters": [
            {"name": "str", "type": "string", "description": "The string to encode"},
        ],
        "returns": {"type": "string", "description": "The base64 encoded string"},
    },
}

# Always listed in the lint configuration: scripts use top-level await
RESERVED_IDENTIFIERS = ["await"]


@dataclass
class GeneratorConfig:
    """Settings for one generator run."""
    base_url: str = DEFAULT_BASE_URL
    source: str = DEFAULT_SOURCE
    timeout: float = 15.0
    header: str = DEFAULT_HEADER
    wrap_column: int = WRAP_COLUMN
    long_doc_key: str = LONG_DOC_KEY
    parameters_key: str = PARAMETERS_KEY
    returns_key: str = RETURNS_KEY
    enum_key: str = ENUM_KEY
    property_function_marker: str = PROPERTY_FUNCTION_MARKER
    ignore_void_return: List[str] = field(
        default_factory=lambda: list(IGNORE_VOID_RETURN)
    )
    string_return_overrides: List[str] = field(
        default_factory=lambda: list(STRING_RETURN_OVERRIDES)
    )
    globals: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_GLOBALS.items()}
    )
    reserved_identifiers: List[str] = field(
        default_factory=lambda: list(RESERVED_IDENTIFIERS)
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """
        Build a configuration from a mapping. Unknown keys are rejected.

        Args:
            data: Mapping of field names to values

        Returns:
            Configuration with defaults for missing fields
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Load a configuration overlay from a JSON file.

    Args:
        path: JSON file with a mapping at the root, or None for defaults

    Returns:
        The resulting configuration
    """
    if path is None:
        return GeneratorConfig()
    try:
        data = load_json(path)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the root")
    return GeneratorConfig.from_dict(data)
