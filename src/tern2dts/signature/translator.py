"""
Type Signature Translator - Convert Tern type expressions into declaration signatures.

This module parses a Tern type string, runs it through the ordered rewrite
rules and renders the resulting signature.
"""

import logging
from typing import List, Optional, Sequence

from tern2dts.config import IGNORE_VOID_RETURN, STRING_RETURN_OVERRIDES
from tern2dts.signature.parser import parse_declaration, parse_type
from tern2dts.signature.rules import RULES, Rule, TranslationContext
from tern2dts.signature.types import Signature

logger = logging.getLogger(__name__)


class SignatureTranslator:
    """
    Translate Tern type expressions into declaration signatures.
    """

    def __init__(
        self,
        ignore_void_return: Optional[Sequence[str]] = None,
        string_return_overrides: Optional[Sequence[str]] = None,
        rules: Optional[Sequence[Rule]] = None,
    ) -> None:
        self.ignore_void_return = list(
            IGNORE_VOID_RETURN if ignore_void_return is None else ignore_void_return
        )
        self.string_return_overrides = list(
            STRING_RETURN_OVERRIDES
            if string_return_overrides is None
            else string_return_overrides
        )
        self.rules: List[Rule] = list(rules) if rules is not None else [r for _, r in RULES]

    def translate_signature(
        self,
        source_type: Optional[str],
        name: str,
        is_static: bool = False,
        may_be_constructor: bool = False,
        owner: Optional[str] = None,
    ) -> Signature:
        """
        Translate a type string into a structured signature.

        Args:
            source_type: Tern type expression; None or "" means untyped
            name: Member name
            is_static: Whether the member is static
            may_be_constructor: Whether a self-returning function is a constructor
            owner: Name of the symbol that owns the member

        Returns:
            Translated signature
        """
        ctx = TranslationContext(
            name=name,
            owner=owner,
            is_static=is_static,
            may_be_constructor=may_be_constructor,
            ignore_void_return=self.ignore_void_return,
            string_return_overrides=self.string_return_overrides,
        )
        signature = self._initial_signature(source_type or "", name, is_static)
        for rule in self.rules:
            signature = rule(signature, ctx)
        return signature

    def translate(
        self,
        source_type: Optional[str],
        name: str,
        is_static: bool = False,
        may_be_constructor: bool = False,
        owner: Optional[str] = None,
    ) -> str:
        """
        Translate a type string into signature text.

        Example:
            >>> SignatureTranslator().translate("fn(x: number) -> bool", "check")
            'check(x: number): boolean'
        """
        return self.translate_signature(
            source_type, name, is_static, may_be_constructor, owner
        ).render()

    def _initial_signature(self, source_type: str, name: str, is_static: bool) -> Signature:
        declared = parse_declaration(source_type)
        if declared is not None:
            signature, _ = declared
            logger.debug("Re-translating declaration %r", source_type)
            return signature.copy(name=name, is_static=signature.is_static or is_static)
        return Signature(name=name, type=parse_type(source_type), is_static=is_static)


_DEFAULT_TRANSLATOR = SignatureTranslator()


def translate(
    source_type: Optional[str],
    name: str,
    is_static: bool = False,
    may_be_constructor: bool = False,
    owner: Optional[str] = None,
) -> str:
    """Translate with the default configuration tables."""
    return _DEFAULT_TRANSLATOR.translate(
        source_type, name, is_static, may_be_constructor, owner
    )


def translate_signature(
    source_type: Optional[str],
    name: str,
    is_static: bool = False,
    may_be_constructor: bool = False,
    owner: Optional[str] = None,
) -> Signature:
    return _DEFAULT_TRANSLATOR.translate_signature(
        source_type, name, is_static, may_be_constructor, owner
    )
