"""
Interface synthesis from JSON documentation samples.

A member whose prose shows a JSON sample "on the following form" gets a
nested interface named after it, and its signature is rewritten to reference
``Owner.InterfaceName`` instead of a generic map or ``any``.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from tern2dts.signature.types import (
    Atom,
    MapType,
    Signature,
    TypeExpression,
    map_type,
    replace_first,
)

logger = logging.getLogger(__name__)

_QUOTE = "[\"“”']"

# 'each value in the array must have the "title" key, the others are optional'
# or '... must have the "value" key. The other keys are optional.'
_REQUIRED_KEY_RE = re.compile(
    rf"each value\b[^.]*?\bmust have the {_QUOTE}(?P<key>[\w$]+){_QUOTE} key"
    rf"[^.]*?(?:\.\s*)?\bthe other(?:s|\s+keys) are optional",
    re.IGNORECASE,
)
# 'the "url" key is optional'
_OPTIONAL_KEY_RE = re.compile(
    rf"\bthe {_QUOTE}(?P<key>[\w$]+){_QUOTE} key is optional",
    re.IGNORECASE,
)

NULL_TYPE = "null"


class ValueKind(Enum):
    """Whether every field of a sample shares one JSON type."""
    HOMOGENEOUS = "homogeneous"
    MIXED = "mixed"


@dataclass
class InterfaceField:
    key: str
    type: str
    optional: bool = False


@dataclass
class InferredInterface:
    """Object shape synthesised from a documentation sample."""
    name: str
    fields: List[InterfaceField] = field(default_factory=list)
    value_kind: ValueKind = ValueKind.HOMOGENEOUS

    @property
    def field_optionality(self) -> Dict[str, bool]:
        return {f.key: f.optional for f in self.fields}

    def render(self) -> str:
        """Render ``interface Name { ... }`` with tab indentation."""
        lines = []
        for f in self.fields:
            marker = "?" if f.optional else ""
            lines.append(f'\t"{f.key}"{marker}: {f.type}')
        if self.value_kind == ValueKind.MIXED:
            lines.append("\t[key: string]: any")
        if not lines:
            return f"interface {self.name} {{}}"
        return f"interface {self.name} {{\n" + ",\n".join(lines) + "\n}"


def interface_name(member_name: str) -> str:
    """``attendees`` → ``Attendees``."""
    return member_name[:1].upper() + member_name[1:]


def json_type(value: Any) -> str:
    """
    Map a JSON value to a declaration type. ``null`` is its own pseudo-type.
    """
    if value is None:
        return NULL_TYPE
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        inner: Set[str] = {json_type(v) for v in value}
        if len(inner) == 1:
            element = inner.pop()
            if element in ("string", "number", "boolean"):
                return f"{element}[]"
        return "any[]"
    if isinstance(value, dict):
        return "{[key: string]: any}"
    return "any"


def sample_object(sample: Any) -> Optional[Dict[str, Any]]:
    """Return the object a sample describes: the sample itself or its first object element."""
    if isinstance(sample, dict):
        return sample
    if isinstance(sample, list):
        for item in sample:
            if isinstance(item, dict):
                return item
    return None


def optionality_hints(prose: str) -> Tuple[Optional[str], Set[str]]:
    """
    Mine required/optional key hints from prose.

    Returns:
        Tuple of (the only required key or None, explicitly optional keys)
    """
    required = None
    match = _REQUIRED_KEY_RE.search(prose or "")
    if match:
        required = match.group("key")
    optional = {m.group("key") for m in _OPTIONAL_KEY_RE.finditer(prose or "")}
    return required, optional


def infer_interface(
    member_name: str,
    sample: Dict[str, Any],
    prose: str = "",
) -> InferredInterface:
    """
    Build an interface from a JSON object sample.

    Args:
        member_name: Name of the member documenting the sample
        sample: Parsed JSON object
        prose: Documentation text searched for optionality hints

    Returns:
        The inferred interface
    """
    kinds = []
    fields: List[InterfaceField] = []
    for key, value in sample.items():
        kind = json_type(value)
        if kind not in kinds:
            kinds.append(kind)
        fields.append(InterfaceField(key, "any" if kind == NULL_TYPE else kind))

    interface = InferredInterface(
        name=interface_name(member_name),
        fields=fields,
        value_kind=ValueKind.MIXED if len(kinds) > 1 else ValueKind.HOMOGENEOUS,
    )
    apply_optionality(interface, prose)
    return interface


def apply_optionality(interface: InferredInterface, prose: str) -> InferredInterface:
    """Mark fields optional according to the prose hints."""
    required, optional = optionality_hints(prose)
    known = {f.key for f in interface.fields}
    if required is not None and required not in known:
        logger.warning(
            "Interface %s: prose requires key %r which the sample lacks",
            interface.name, required,
        )
        required = None
    for f in interface.fields:
        if required is not None:
            f.optional = f.key != required
        if f.key in optional:
            f.optional = True
    return interface


def _is_map(node: TypeExpression) -> bool:
    return isinstance(node, MapType)


def _is_any(node: TypeExpression) -> bool:
    return isinstance(node, Atom) and node.name == "any"


def apply_interface(
    signature: Signature,
    owner: str,
    interface: InferredInterface,
) -> Signature:
    """
    Point a signature at ``Owner.InterfaceName``.

    Homogeneous samples replace the first ``{string: T}`` map, mixed samples
    the first ``any`` placeholder.
    """
    reference = Atom(f"{owner}.{interface.name}")
    targets = [_is_map, _is_any]
    if interface.value_kind == ValueKind.MIXED:
        targets.reverse()
    for predicate in targets:
        new_type, replaced = replace_first(signature.type, predicate, reference)
        if replaced:
            return signature.copy(type=new_type)
    logger.warning(
        "%s.%s: no map or 'any' placeholder to replace with %s",
        owner, signature.name, reference.name,
    )
    return signature


def expand_index_maps(signature: Signature) -> Signature:
    """``{string: T}`` → ``{[key: string]: T}``, arrays of maps included."""
    def expand(node: TypeExpression) -> TypeExpression:
        if isinstance(node, MapType) and not node.indexed:
            return MapType(node.value, indexed=True)
        return node
    return signature.copy(type=map_type(signature.type, expand))


def render_interface(interface: InferredInterface) -> str:
    return interface.render()
