"""
Global declarations that are not part of the Tern document.

An alias entry (``{"aliasFor": "console.log"}``) reuses an already emitted
declaration under a new global name. An explicit entry carries its own
definition and JSDoc parts.
"""

import logging
import re
from typing import Any, Dict, List, Sequence

from tern2dts.description.renderer import format_comment
from tern2dts.emitter.emitter import Declaration, EmittedMember, with_comment
from tern2dts.errors import AliasResolutionError, ConfigError
from tern2dts.model.symbols import SymbolKind

logger = logging.getLogger(__name__)

# Kinds whose members can be pulled out into a global of their own
MEMBER_OWNER_KINDS = (SymbolKind.CLASS, SymbolKind.VAR, SymbolKind.NAMESPACE)
# Kinds that can be re-declared under another name as a whole
RENAMABLE_KINDS = (SymbolKind.FUNCTION, SymbolKind.VAR)


def resolve_globals(
    declarations: Sequence[Declaration],
    globals_table: Dict[str, Dict[str, Any]],
) -> List[Declaration]:
    """
    Build the declarations of every global entry, in table order.

    Args:
        declarations: Already emitted symbol declarations
        globals_table: Global name to alias or explicit definition

    Returns:
        One declaration per global

    Raises:
        AliasResolutionError: An alias target is missing or cannot be aliased
    """
    by_name = {d.name: d for d in declarations}
    resolved = []
    for name, entry in globals_table.items():
        if "aliasFor" in entry:
            resolved.append(resolve_alias(name, entry["aliasFor"], by_name))
        else:
            resolved.append(explicit_global(name, entry))
        logger.debug("Resolved global %s", name)
    return resolved


def resolve_alias(
    alias: str,
    target: str,
    declarations: Dict[str, Declaration],
) -> Declaration:
    """Declare ``alias`` as a copy of ``Owner.member`` or of a whole declaration."""
    owner_name, _, member_name = target.partition(".")
    owner = declarations.get(owner_name)
    if owner is None:
        raise AliasResolutionError(alias, target, f"no declaration named '{owner_name}'")

    if member_name:
        if owner.kind not in MEMBER_OWNER_KINDS:
            raise AliasResolutionError(
                alias, target, f"members of a {owner.kind.value} cannot be extracted"
            )
        member = owner.find_member(member_name)
        if member is None:
            raise AliasResolutionError(
                alias, target, f"'{owner_name}' has no member '{member_name}'"
            )
        return _member_global(alias, member)

    if owner.kind not in RENAMABLE_KINDS:
        raise AliasResolutionError(
            alias, target, f"a {owner.kind.value} cannot be declared under another name"
        )
    header = re.compile(rf"^declare (function|var) {re.escape(owner.name)}\b", re.MULTILINE)
    text, count = header.subn(lambda m: f"declare {m.group(1)} {alias}", owner.text, count=1)
    if not count:
        raise AliasResolutionError(alias, target, "the declaration has no header to rename")
    return Declaration(
        name=alias,
        kind=owner.kind,
        text=text,
        comment=owner.comment,
        signature=owner.signature.copy(name=alias) if owner.signature else None,
    )


def _member_global(alias: str, member: EmittedMember) -> Declaration:
    signature = member.signature.copy(name=alias, is_static=False)
    if member.is_function:
        kind, token = SymbolKind.FUNCTION, "function"
    else:
        kind, token = SymbolKind.VAR, "var"
    return Declaration(
        name=alias,
        kind=kind,
        text=with_comment(member.comment, f"declare {token} {signature.render(prefix='')}"),
        comment=member.comment,
        signature=signature,
    )


def explicit_global(name: str, entry: Dict[str, Any]) -> Declaration:
    """Declare a global from its description, definition, parameters and returns."""
    definition = entry.get("definition", "").strip()
    if not definition:
        raise ConfigError(f"Global '{name}' has neither 'aliasFor' nor 'definition'")
    lines = entry.get("description", "").splitlines()
    for param in entry.get("parameters") or []:
        lines.append(f"@param {{{param.get('type', 'any')}}} {param['name']} - {param.get('description', '')}".rstrip())
    returns = entry.get("returns") or {}
    if returns.get("type"):
        lines.append(f"@returns {{{returns['type']}}} {returns.get('description', '')}".rstrip())
    comment = format_comment(lines)
    kind = SymbolKind.FUNCTION if definition.startswith("function ") else SymbolKind.VAR
    return Declaration(
        name=name,
        kind=kind,
        text=with_comment(comment, f"declare {definition}"),
        comment=comment,
    )
