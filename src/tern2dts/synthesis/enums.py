"""
Enum substitution: replace a generic ``string`` with a union of literals.
"""

import json
import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

from tern2dts.signature.types import (
    Atom,
    Literal,
    Signature,
    TypeExpression,
    UnionType,
)

logger = logging.getLogger(__name__)


def _is_string(node: TypeExpression) -> bool:
    return isinstance(node, Atom) and node.name == "string"


def string_slots(signature: Signature) -> List[Tuple[str, int]]:
    """
    Locate ``string`` atoms eligible for enum substitution.

    Eligible positions are a property's own type, a parameter's type and a
    function's return type.

    Returns:
        List of ("type" | "param" | "returns", index) in declaration order
    """
    func = signature.function
    if func is None or not signature.has_parameter_list:
        return [("type", 0)] if _is_string(signature.type) else []
    slots = [("param", i) for i, p in enumerate(func.params) if _is_string(p.type)]
    if func.returns is not None and _is_string(func.returns):
        slots.append(("returns", 0))
    return slots


def enum_union(values: Sequence[str]) -> UnionType:
    """``["busy", "free"]`` → ``"busy" | "free"``."""
    return UnionType([Literal(json.dumps(v)) for v in values])


def apply_enum(signature: Signature, values: Sequence[str]) -> Signature:
    """
    Substitute the enum values for the first eligible ``string`` atom.

    More than one eligible atom is ambiguous: the first one is used and a
    warning is logged. No eligible atom leaves the signature untouched.

    Args:
        signature: Translated signature
        values: Literal values in documentation order

    Returns:
        Rewritten signature
    """
    if not values:
        return signature
    slots = string_slots(signature)
    if not slots:
        logger.debug("%s: list found but no string type to turn into an enum", signature.name)
        return signature
    if len(slots) > 1:
        logger.warning(
            "Multiple string types are eligible for the enum at %s; using the first",
            signature.name,
        )
    union = enum_union(values)
    position, index = slots[0]
    func = signature.function
    if position == "type":
        return signature.copy(type=union)
    if position == "param":
        params = list(func.params)
        params[index] = replace(params[index], type=union)
        return signature.copy(type=replace(func, params=params))
    return signature.copy(type=replace(func, returns=union))
