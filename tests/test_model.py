"""Tests for the symbol model builder."""

import logging

import pytest

from tern2dts.model import (
    STATIC_PREFIX,
    Member,
    Symbol,
    SymbolKind,
    SymbolModelBuilder,
    build_symbols,
    convert_url,
)
from tern2dts.signature import SignatureForm


@pytest.fixture
def symbols(sample_document, config):
    """Symbols built from the sample document."""
    return SymbolModelBuilder(config).build(sample_document)


class TestConvertUrl:
    """Tests for in-app documentation links."""

    def test_bridge_and_method(self):
        url = "scriptable://docs?bridgeName=Alert&methodName=present"
        assert convert_url(url) == "https://docs.scriptable.app/Alert/#present"

    def test_bridge_only(self):
        assert convert_url("scriptable://docs?bridgeName=Alert") == "https://docs.scriptable.app/Alert/"

    def test_other_urls_pass_through(self):
        assert convert_url("https://example.com/a#b") == "https://example.com/a#b"
        assert convert_url(None) is None


class TestSymbolModelBuilder:
    """Tests for SymbolModelBuilder.build."""

    def test_skips_metadata_keys(self, symbols):
        assert list(symbols) == ["Alert", "Calendar", "Size", "console", "importModule"]

    def test_initial_kinds(self, symbols):
        assert symbols["Alert"].kind == SymbolKind.CLASS
        assert symbols["console"].kind == SymbolKind.VAR

    def test_constructor_signature(self, symbols):
        signature = symbols["Alert"].signature
        assert signature.form == SignatureForm.CONSTRUCTOR
        assert signature.render() == "constructor()"

    def test_members_split_by_type(self, symbols):
        alert = symbols["Alert"]
        assert list(alert.properties) == ["title"]
        assert list(alert.functions) == ["addAction", "presentAlert", "addCancelAction"]

    def test_member_signatures(self, symbols):
        alert = symbols["Alert"]
        assert alert.properties["title"].translated_signature == "title: string"
        assert alert.functions["presentAlert"].translated_signature == "presentAlert(): Promise<number>"

    def test_define_overlay_adds_members(self, symbols):
        member = symbols["Alert"].functions["addCancelAction"]
        assert member.translated_signature == "addCancelAction(title: string): void"

    def test_unknown_overlay_symbol_is_warned(self, sample_document, config, caplog):
        with caplog.at_level(logging.WARNING, logger="tern2dts"):
            symbols = SymbolModelBuilder(config).build(sample_document)
        assert "Missing" not in symbols
        assert "'Missing'" in caplog.text

    def test_explicit_overlay_argument(self, sample_document, config):
        overlay = {"console": {"error": {"!type": "fn(message: ?)"}}}
        symbols = SymbolModelBuilder(config).build(sample_document, define_overlay=overlay)
        assert "error" in symbols["console"].functions
        assert "addCancelAction" not in symbols["Alert"].functions

    def test_static_members_are_prefixed(self, symbols):
        size = symbols["Size"]
        assert list(size.properties) == [f"{STATIC_PREFIX}zero"]
        assert list(size.functions) == [f"{STATIC_PREFIX}make"]
        assert size.functions["static.make"].name == "make"
        assert size.functions["static.make"].is_static

    def test_static_flag_key(self, config):
        document = {"Color": {"red": {"!type": "+Color", "!static": True}}}
        member = build_symbols(document, config=config)["Color"].properties["static.red"]
        assert member.translated_signature == "static red: Color"

    def test_static_and_instance_members_do_not_collide(self):
        symbol = Symbol(name="Thing")
        symbol.add_member(Member(name="count", source_type="number"))
        symbol.add_member(Member(name="count", source_type="number", is_static=True))
        assert list(symbol.properties) == ["count", "static.count"]

    def test_namespace_reclassification(self, symbols):
        """Static-only members that all mention the owner make a namespace."""
        assert symbols["Size"].kind == SymbolKind.NAMESPACE

    def test_class_with_instance_members_stays_class(self, symbols):
        assert symbols["Calendar"].kind == SymbolKind.CLASS

    def test_function_promotion(self, symbols):
        symbol = symbols["importModule"]
        assert symbol.kind == SymbolKind.FUNCTION
        assert symbol.translated_signature == "importModule(name: string)"

    def test_missing_type_is_untyped(self, config):
        symbols = build_symbols({"thing": {"value": {"!doc": "No type."}}}, config=config)
        assert symbols["thing"].properties["value"].translated_signature == "value: any"

    def test_entry_fields(self, symbols):
        member = symbols["Alert"].functions["addAction"]
        assert member.short_doc == "Adds an action to the alert."
        assert member.url == "https://docs.scriptable.app/Alert/#addAction"
        assert member.parameters[0].name == "title"
        assert member.parameters[0].doc == "Title of the action."

    def test_enum_key(self, config):
        document = {"Mode": {"set": {"!type": "fn(m: string)", "!scriptable.enum": ["a", "b"]}}}
        assert build_symbols(document, config=config)["Mode"].functions["set"].enum_values == ["a", "b"]

    def test_order_is_preserved(self, config):
        document = {name: {} for name in ["zeta", "Alpha", "mid"]}
        assert list(build_symbols(document, config=config)) == ["zeta", "Alpha", "mid"]
