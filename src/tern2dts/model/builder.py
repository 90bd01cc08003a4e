"""
Symbol Model Builder - Normalise a raw Tern document into Symbol records.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import parse_qs, urlsplit

from tern2dts.config import GeneratorConfig
from tern2dts.model.symbols import Member, Parameter, Symbol, SymbolKind
from tern2dts.signature.translator import SignatureTranslator
from tern2dts.signature.types import SignatureForm

logger = logging.getLogger(__name__)

# Top-level keys that are document metadata rather than symbols
SKIPPED_KEYS = {"define", "details", "indexEntries"}

STATIC_MARKER = "static "

_DOCS_SCHEME = "scriptable://docs"


def convert_url(url: Optional[str], base_url: str = "https://docs.scriptable.app/") -> Optional[str]:
    """
    Turn an in-app documentation link into its web address.

    ``scriptable://docs?bridgeName=Alert&methodName=present`` becomes
    ``https://docs.scriptable.app/Alert/#present``. Other URLs pass through.
    """
    if not url or not url.startswith(_DOCS_SCHEME):
        return url
    query = parse_qs(urlsplit(url).query)
    bridge = query.get("bridgeName", [""])[0]
    method = query.get("methodName", [""])[0]
    link = f"{base_url.rstrip('/')}/{bridge}/"
    if method:
        link += f"#{method}"
    return link


class SymbolModelBuilder:
    """
    Build the ordered symbol table from a raw Tern document.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        translator: Optional[SignatureTranslator] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.translator = translator or SignatureTranslator(
            ignore_void_return=self.config.ignore_void_return,
            string_return_overrides=self.config.string_return_overrides,
        )

    def build(
        self,
        document: Dict[str, Any],
        define_overlay: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Symbol]:
        """
        Build symbols from a document.

        Args:
            document: Mapping of symbol names to raw symbol data
            define_overlay: Extra members per symbol; defaults to the
                document's own ``!define`` entry

        Returns:
            Symbols keyed by name, in document order
        """
        symbols: Dict[str, Symbol] = {}
        for name, data in document.items():
            if name.startswith("!") or name in SKIPPED_KEYS or not isinstance(data, dict):
                continue
            symbols[name] = self._build_symbol(name, data)

        if define_overlay is None:
            define_overlay = document.get("!define") or {}
        for name, data in define_overlay.items():
            symbol = symbols.get(name)
            if symbol is None:
                logger.warning("!define entry %r does not name a known symbol; skipped", name)
                continue
            for key, member_data in _member_items(data):
                self._attach_member(symbol, key, member_data)

        for symbol in symbols.values():
            self._translate_members(symbol)
            symbol.kind = self.classify(symbol)
        return symbols

    def classify(self, symbol: Symbol) -> SymbolKind:
        """
        Final kind of a symbol once its members are known.

        * a callable self-signature makes a ``function``;
        * static-only members that all mention the symbol's own name make a
          ``namespace`` (self-referential factory pattern).
        """
        kind = symbol.kind
        if symbol.signature is not None and symbol.signature.form == SignatureForm.METHOD:
            kind = SymbolKind.FUNCTION
        members = list(symbol.members())
        own_name = re.compile(rf"\b{re.escape(symbol.name)}\b")
        if (
            kind == SymbolKind.CLASS
            and members
            and all(m.is_static for m in members)
            and all(own_name.search(_type_text(m)) for m in members)
        ):
            kind = SymbolKind.NAMESPACE
        return kind

    def _build_symbol(self, name: str, data: Dict[str, Any]) -> Symbol:
        symbol = Symbol(
            name=name,
            kind=SymbolKind.CLASS if name[:1].isupper() else SymbolKind.VAR,
            **self._entry_fields(data),
        )
        for key, member_data in _member_items(data):
            self._attach_member(symbol, key, member_data)
        if symbol.source_type:
            symbol.signature = self.translator.translate_signature(
                symbol.source_type,
                name,
                may_be_constructor=symbol.kind == SymbolKind.CLASS,
                owner=name,
            )
        return symbol

    def _attach_member(self, symbol: Symbol, key: str, data: Any) -> None:
        if not isinstance(data, dict):
            logger.debug("%s.%s is not an object; skipped", symbol.name, key)
            return
        is_static = bool(data.get("!static")) or key.startswith(STATIC_MARKER)
        name = key[len(STATIC_MARKER):].strip() if key.startswith(STATIC_MARKER) else key
        member = Member(name=name, is_static=is_static, **self._entry_fields(data))
        stored = symbol.add_member(member)
        logger.debug("%s: attached member %s", symbol.name, stored)

    def _translate_members(self, symbol: Symbol) -> None:
        for member in symbol.members():
            member.signature = self.translator.translate_signature(
                member.source_type,
                member.name,
                is_static=member.is_static,
                owner=symbol.name,
            )

    def _entry_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        cfg = self.config
        return {
            "short_doc": _text(data.get("!doc")),
            "long_doc": _text(data.get(cfg.long_doc_key)),
            "source_type": _text(data.get("!type")),
            "url": convert_url(data.get("!url"), cfg.base_url),
            "parameters": _parameters(data.get(cfg.parameters_key)),
            "returns_doc": _text(data.get(cfg.returns_key)),
            "enum_values": [str(v) for v in data.get(cfg.enum_key) or []],
        }


def _member_items(data: Dict[str, Any]) -> Iterable:
    for key, value in data.items():
        if key.startswith("!"):
            continue
        yield key, value


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parameters(raw: Any) -> List[Parameter]:
    params = []
    for item in raw or []:
        if isinstance(item, dict) and item.get("name"):
            doc = item.get("doc", item.get("description", ""))
            params.append(Parameter(str(item["name"]), _text(doc)))
    return params


def _type_text(member: Member) -> str:
    if member.signature is None:
        return member.source_type
    return member.signature.render()


def build_symbols(
    document: Dict[str, Any],
    define_overlay: Optional[Dict[str, Any]] = None,
    config: Optional[GeneratorConfig] = None,
) -> Dict[str, Symbol]:
    """Build the symbol table with a default builder."""
    return SymbolModelBuilder(config).build(document, define_overlay)
