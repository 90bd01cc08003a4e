"""Interface & enum synthesis module."""

from tern2dts.synthesis.enums import apply_enum, enum_union, string_slots
from tern2dts.synthesis.interfaces import (
    InferredInterface,
    InterfaceField,
    ValueKind,
    apply_interface,
    apply_optionality,
    expand_index_maps,
    infer_interface,
    interface_name,
    json_type,
    render_interface,
    sample_object,
)

__all__ = [
    "InferredInterface",
    "InterfaceField",
    "ValueKind",
    "apply_enum",
    "apply_interface",
    "apply_optionality",
    "enum_union",
    "expand_index_maps",
    "infer_interface",
    "interface_name",
    "json_type",
    "render_interface",
    "sample_object",
    "string_slots",
]
