"""Utility modules for tern2dts."""

from tern2dts.utils.file_handlers import (
    load_json,
    save_json,
    save_text,
    ensure_directory,
)
from tern2dts.utils.fetch import (
    fetch_json,
    fetch_text,
    is_url,
)
from tern2dts.utils.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    # File handlers
    "load_json",
    "save_json",
    "save_text",
    "ensure_directory",
    # HTTP
    "fetch_json",
    "fetch_text",
    "is_url",
    # Logging
    "configure_logging",
    "get_logger",
]
