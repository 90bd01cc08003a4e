"""
Symbol model - top-level entities of a Tern document and their members.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from tern2dts.signature.types import Signature
from tern2dts.synthesis.interfaces import InferredInterface

STATIC_PREFIX = "static."


class SymbolKind(Enum):
    """How a symbol is declared."""
    CLASS = "class"
    VAR = "var"
    FUNCTION = "function"
    NAMESPACE = "namespace"


@dataclass
class Parameter:
    """Documented parameter of a function or constructor."""
    name: str
    doc: str = ""


@dataclass
class Entry:
    """Fields shared by symbols and members."""
    name: str
    short_doc: str = ""
    long_doc: str = ""
    source_type: str = ""
    url: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    returns_doc: str = ""
    enum_values: List[str] = field(default_factory=list)
    signature: Optional[Signature] = None

    @property
    def translated_signature(self) -> str:
        return self.signature.render() if self.signature is not None else ""


@dataclass
class Member(Entry):
    """Property or function attached to a symbol."""
    is_static: bool = False
    inferred_interface: Optional[InferredInterface] = None


@dataclass
class Symbol(Entry):
    """Top-level declared entity."""
    kind: SymbolKind = SymbolKind.VAR
    properties: Dict[str, Member] = field(default_factory=dict)
    functions: Dict[str, Member] = field(default_factory=dict)

    def members(self) -> Iterator[Member]:
        """Iterate properties then functions, in insertion order."""
        yield from self.properties.values()
        yield from self.functions.values()

    def add_member(self, member: Member) -> str:
        """
        Attach a member under its map key.

        Static members are keyed with a ``static.`` prefix so they never
        collide with an instance member of the same name.

        Returns:
            The key the member was stored under
        """
        key = f"{STATIC_PREFIX}{member.name}" if member.is_static else member.name
        target = self.functions if _is_function_type(member.source_type) else self.properties
        target[key] = member
        return key


def _is_function_type(source_type: str) -> bool:
    text = source_type.strip()
    return text.startswith("fn(")
