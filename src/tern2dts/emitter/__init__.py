"""Declaration Emitter module."""

from tern2dts.emitter.emitter import (
    Declaration,
    DeclarationEmitter,
    EmittedMember,
    emit_declarations,
    indent,
)
from tern2dts.emitter.globals import explicit_global, resolve_alias, resolve_globals
from tern2dts.emitter.lint import assemble_document, build_lint_config

__all__ = [
    "Declaration",
    "DeclarationEmitter",
    "EmittedMember",
    "assemble_document",
    "build_lint_config",
    "emit_declarations",
    "explicit_global",
    "indent",
    "resolve_alias",
    "resolve_globals",
]
