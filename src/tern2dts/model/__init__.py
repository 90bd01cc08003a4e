"""Symbol Model Builder module."""

from tern2dts.model.builder import SymbolModelBuilder, build_symbols, convert_url
from tern2dts.model.symbols import (
    STATIC_PREFIX,
    Entry,
    Member,
    Parameter,
    Symbol,
    SymbolKind,
)

__all__ = [
    "STATIC_PREFIX",
    "Entry",
    "Member",
    "Parameter",
    "Symbol",
    "SymbolKind",
    "SymbolModelBuilder",
    "build_symbols",
    "convert_url",
]
