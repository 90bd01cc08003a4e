"""
Declaration Emitter - Assemble per-symbol declaration text.

Each symbol becomes one :class:`Declaration`: its rendered text plus the
per-member pieces it was assembled from, which global alias resolution reuses
instead of re-parsing the text.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from tern2dts.config import GeneratorConfig
from tern2dts.description.renderer import DescriptionRenderer
from tern2dts.model.symbols import Entry, Symbol, SymbolKind
from tern2dts.signature.types import Signature, SignatureForm
from tern2dts.synthesis.interfaces import InferredInterface

logger = logging.getLogger(__name__)

INDENT = "\t"


@dataclass
class EmittedMember:
    """A member's comment and final signature as emitted."""
    name: str
    comment: str
    signature: Signature

    @property
    def is_function(self) -> bool:
        return self.signature.form == SignatureForm.METHOD


@dataclass
class Declaration:
    """Declaration text of one symbol or global."""
    name: str
    kind: SymbolKind
    text: str
    comment: str = ""
    signature: Optional[Signature] = None
    members: Dict[str, EmittedMember] = field(default_factory=dict)
    interfaces: List[InferredInterface] = field(default_factory=list)

    def find_member(self, name: str) -> Optional[EmittedMember]:
        """Look a member up by its plain name, instance members first."""
        for member in self.members.values():
            if member.name == name and not member.signature.is_static:
                return member
        for member in self.members.values():
            if member.name == name:
                return member
        return None


def indent(text: str, prefix: str = INDENT) -> str:
    """Indent every non-empty line."""
    return "\n".join(prefix + line if line else line for line in text.splitlines())


def with_comment(comment: str, line: str) -> str:
    return f"{comment}\n{line}" if comment else line


class DeclarationEmitter:
    """
    Emit declaration text for symbols.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        renderer: Optional[DescriptionRenderer] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = renderer or DescriptionRenderer(self.config)

    def emit_all(self, symbols: Iterable[Symbol]) -> List[Declaration]:
        """Emit symbols in input order."""
        return [self.emit(symbol) for symbol in symbols]

    def emit(self, symbol: Symbol) -> Declaration:
        """
        Emit one symbol.

        Args:
            symbol: Symbol with translated signatures and final kind

        Returns:
            The declaration, with interfaces folded from its members
        """
        logger.debug("Emitting %s %s", symbol.kind.value, symbol.name)
        header = self.renderer.render(
            symbol,
            symbol.name,
            check_for_interface=False,
            emit_parameters=symbol.kind == SymbolKind.FUNCTION,
        )
        members: Dict[str, EmittedMember] = {}
        interfaces: List[InferredInterface] = []
        for key, member in _keyed_members(symbol):
            rendered = self.renderer.render(member, symbol.name)
            member.signature = rendered.signature
            member.inferred_interface = rendered.interface
            if rendered.interface is not None:
                interfaces.append(rendered.interface)
            if rendered.signature is not None:
                members[key] = EmittedMember(member.name, rendered.comment, rendered.signature)

        declaration = Declaration(
            name=symbol.name,
            kind=symbol.kind,
            text="",
            comment=header.comment,
            signature=header.signature,
            members=members,
            interfaces=interfaces,
        )
        declaration.text = self._text(symbol, declaration)
        return declaration

    def _text(self, symbol: Symbol, declaration: Declaration) -> str:
        kind = declaration.kind
        if kind == SymbolKind.FUNCTION:
            parts = [self._function_text(declaration)]
            if declaration.members or declaration.interfaces:
                parts.append(self._namespace_text(declaration))
            return "\n\n".join(parts)
        if kind == SymbolKind.NAMESPACE:
            return "\n\n".join([
                self._class_text(symbol, declaration, with_members=False),
                self._namespace_text(declaration),
            ])
        if kind == SymbolKind.VAR:
            text = self._var_text(declaration)
        else:
            text = self._class_text(symbol, declaration, with_members=True)
        if declaration.interfaces:
            text += "\n\n" + self._namespace_text(declaration, with_members=False)
        return text

    def _function_text(self, declaration: Declaration) -> str:
        signature = declaration.signature
        return with_comment(
            declaration.comment, f"declare function {signature.render(prefix='')}"
        )

    def _var_text(self, declaration: Declaration) -> str:
        signature = declaration.signature
        if not declaration.members and signature is not None and signature.form == SignatureForm.PROPERTY:
            return with_comment(declaration.comment, f"declare var {signature.render(prefix='')}")
        body = [
            with_comment(m.comment, m.signature.render(prefix=""))
            for m in declaration.members.values()
        ]
        return with_comment(
            declaration.comment,
            _block(f"declare var {declaration.name}: {{", body),
        )

    def _class_text(self, symbol: Symbol, declaration: Declaration, with_members: bool) -> str:
        properties = []
        functions = []
        if with_members:
            for key, member in declaration.members.items():
                target = functions if key in symbol.functions else properties
                target.append(with_comment(member.comment, member.signature.render()))
        constructor = self._constructor_text(symbol, declaration.signature)
        body = properties + ([constructor] if constructor else []) + functions
        return with_comment(
            declaration.comment,
            _block(f"declare class {declaration.name} {{", body),
        )

    def _constructor_text(self, symbol: Symbol, signature: Optional[Signature]) -> str:
        if signature is None or signature.form != SignatureForm.CONSTRUCTOR:
            return ""
        entry = Entry(
            name="constructor",
            parameters=symbol.parameters,
            signature=signature,
        )
        rendered = self.renderer.render(entry, symbol.name, check_for_interface=False)
        return with_comment(rendered.comment, rendered.signature.render())

    def _namespace_text(self, declaration: Declaration, with_members: bool = True) -> str:
        body = []
        if with_members:
            for member in declaration.members.values():
                token = "function" if member.is_function else "var"
                body.append(with_comment(
                    member.comment, f"{token} {member.signature.render(prefix='')}"
                ))
        body.extend(i.render() for i in declaration.interfaces)
        return _block(f"declare namespace {declaration.name} {{", body)


def _keyed_members(symbol: Symbol):
    yield from symbol.properties.items()
    yield from symbol.functions.items()


def _block(opening: str, body: List[str]) -> str:
    if not body:
        return opening + "}"
    return opening + "\n" + indent("\n\n".join(body)) + "\n}"


def emit_declarations(
    symbols: Iterable[Symbol],
    config: Optional[GeneratorConfig] = None,
) -> List[Declaration]:
    """Emit symbols with a default emitter."""
    return DeclarationEmitter(config).emit_all(symbols)
