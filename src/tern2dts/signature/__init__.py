"""Type Signature Translator module."""

from tern2dts.signature.parser import parse_declaration, parse_type
from tern2dts.signature.rules import RULES, TranslationContext
from tern2dts.signature.translator import (
    SignatureTranslator,
    translate,
    translate_signature,
)
from tern2dts.signature.types import (
    Signature,
    SignatureForm,
    TypeExpression,
    render_type,
)

__all__ = [
    "RULES",
    "Signature",
    "SignatureForm",
    "SignatureTranslator",
    "TranslationContext",
    "TypeExpression",
    "parse_declaration",
    "parse_type",
    "render_type",
    "translate",
    "translate_signature",
]
