"""
Output document assembly and the lint configuration that goes with it.
"""

from typing import Dict, Iterable, Sequence

from tern2dts.config import RESERVED_IDENTIFIERS

DECLARATION_SEPARATOR = "\n\n\n"


def assemble_document(header: str, parts: Iterable[str]) -> str:
    """
    Prepend the header preamble and join declarations with two blank lines.

    Args:
        header: Preamble, emitted as-is
        parts: Declaration texts in output order

    Returns:
        The complete declaration document, ending with a newline
    """
    body = DECLARATION_SEPARATOR.join(p.strip("\n") for p in parts if p.strip())
    header = header.rstrip("\n")
    document = f"{header}\n\n{body}" if header else body
    return document + "\n"


def build_lint_config(
    names: Iterable[str],
    reserved: Sequence[str] = RESERVED_IDENTIFIERS,
) -> Dict[str, Dict[str, str]]:
    """
    ESLint ``globals`` block listing every declared name as read-only.

    Reserved identifiers are always listed, after the declared names.
    """
    lint_globals = {}
    for name in list(names) + list(reserved):
        lint_globals.setdefault(name, "readonly")
    return {"globals": lint_globals}
