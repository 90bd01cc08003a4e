"""
Description Renderer - Turn documentation prose into JSDoc comments.

Besides producing the comment text, the renderer reads three structural
signals out of the prose and applies them to the member's signature:

* a single bullet list of literals becomes an enum union;
* a JSON sample "on the following form:" becomes an inferred interface;
* parameters documented as "Optional" or "defaults to" become optional.
"""

import json
import logging
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional

from tern2dts.config import GeneratorConfig
from tern2dts.description.markdown import html_to_markdown, inline_markdown
from tern2dts.description.prose import (
    Block,
    bullet_lists,
    enum_literals,
    is_optional_parameter,
    soft_wrap,
    split_blocks,
    wrap_code_spans,
)
from tern2dts.errors import InterfaceSampleError
from tern2dts.model.symbols import Entry
from tern2dts.signature.types import (
    Atom,
    Signature,
    SignatureForm,
    render_type,
)
from tern2dts.synthesis.enums import apply_enum
from tern2dts.synthesis.interfaces import (
    InferredInterface,
    apply_interface,
    expand_index_maps,
    infer_interface,
    sample_object,
)

logger = logging.getLogger(__name__)

SAMPLE_PHRASE = "on the following form:"
DEPRECATION_MARKERS = ("Deprecated in version", "DeprecatedVersion ")

_EMAIL_ARTEFACT_RE = re.compile(r"\[email\s*protected\]")
EMAIL_PLACEHOLDER = "my@example.com"


@dataclass
class RenderedDescription:
    """Comment text plus the signature rewritten by the prose signals."""
    comment: str
    signature: Optional[Signature] = None
    interface: Optional[InferredInterface] = None
    enum_values: List[str] = field(default_factory=list)


class DescriptionRenderer:
    """
    Render symbol and member documentation.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()

    def render(
        self,
        entry: Entry,
        owner: str,
        check_for_interface: bool = True,
        emit_parameters: bool = True,
    ) -> RenderedDescription:
        """
        Render the documentation of a symbol or member.

        Args:
            entry: Symbol or member carrying docs and a translated signature
            owner: Name of the owning symbol, used for interface references
            check_for_interface: Whether a JSON sample may seed an interface
            emit_parameters: Whether to append @param and @returns lines

        Returns:
            The rendered comment and the rewritten signature

        Raises:
            InterfaceSampleError: The prose announces a sample "on the
                following form:" but no valid JSON object sample follows
        """
        signature = entry.signature
        short_doc = entry.short_doc.strip()

        marker = self.config.property_function_marker
        if marker and short_doc.startswith(marker):
            short_doc = short_doc[len(marker):].lstrip()
            if signature is not None:
                signature = self._as_property_function(signature)

        blocks = self._blocks(short_doc, entry.long_doc)

        enum_values = list(entry.enum_values) or self._enum_from_lists(entry, blocks)
        if enum_values and signature is not None:
            signature = apply_enum(signature, enum_values)

        interface = None
        if check_for_interface and signature is not None:
            interface = self._interface_from_sample(entry, owner, blocks)
            if interface is not None:
                signature = apply_interface(signature, owner, interface)

        if signature is not None:
            signature = expand_index_maps(signature)
            signature = self._mark_optional_parameters(entry, signature)

        lines = self._body_lines(blocks)
        lines.extend(self._tags(entry, signature, emit_parameters))

        return RenderedDescription(
            comment=format_comment(lines),
            signature=signature,
            interface=interface,
            enum_values=enum_values,
        )

    def _blocks(self, short_doc: str, long_doc: str) -> List[Block]:
        summary = inline_markdown(short_doc) if short_doc else ""
        body = html_to_markdown(long_doc) if long_doc else ""
        if summary and body:
            text = f"_{summary}_\n\n{body}"
        else:
            text = summary or body
        text = _EMAIL_ARTEFACT_RE.sub(EMAIL_PLACEHOLDER, text)
        blocks = split_blocks(text)
        return [b if b.is_code else Block(wrap_code_spans(b.text)) for b in blocks]

    @staticmethod
    def _as_property_function(signature: Signature) -> Signature:
        func = signature.function
        if func is None or signature.form != SignatureForm.METHOD:
            return signature
        if func.returns is None:
            func = replace(func, returns=Atom("void"))
        return signature.copy(form=SignatureForm.PROPERTY, type=replace(func, arrow=True))

    @staticmethod
    def _enum_from_lists(entry: Entry, blocks: List[Block]) -> List[str]:
        lists = bullet_lists(blocks)
        if len(lists) != 1:
            if lists:
                logger.debug("%s: %d lists in the prose, none used as enum", entry.name, len(lists))
            return []
        return enum_literals(lists[0]) or []

    @staticmethod
    def _interface_from_sample(
        entry: Entry,
        owner: str,
        blocks: List[Block],
    ) -> Optional[InferredInterface]:
        index = next(
            (i for i, b in enumerate(blocks) if not b.is_code and SAMPLE_PHRASE in b.text),
            None,
        )
        if index is None:
            return None
        if index + 1 >= len(blocks) or not blocks[index + 1].is_code:
            raise InterfaceSampleError(owner, entry.name, "no code block follows")
        try:
            sample = json.loads(blocks[index + 1].code)
        except ValueError as e:
            raise InterfaceSampleError(
                owner, entry.name, f"the code block is not valid JSON ({e})"
            ) from e
        obj = sample_object(sample)
        if obj is None:
            raise InterfaceSampleError(owner, entry.name, "the sample holds no JSON object")
        prose = "\n".join(b.text for b in blocks if not b.is_code)
        return infer_interface(entry.name, obj, prose)

    @staticmethod
    def _mark_optional_parameters(entry: Entry, signature: Signature) -> Signature:
        func = signature.function
        if func is None:
            return signature
        optional = {p.name for p in entry.parameters if is_optional_parameter(p.doc)}
        if not optional:
            return signature
        # only a trailing run of parameters may be optional
        params = list(func.params)
        trailing = True
        for i in range(len(params) - 1, -1, -1):
            param = params[i]
            if param.name in optional and trailing:
                params[i] = replace(param, optional=True)
            elif param.name in optional:
                logger.warning(
                    "%s: parameter %r is documented as optional but a required "
                    "parameter follows it; keeping it required",
                    entry.name, param.name,
                )
            elif not param.optional:
                trailing = False
        return signature.copy(type=replace(func, params=params))

    def _body_lines(self, blocks: List[Block]) -> List[str]:
        prose = []
        deprecated = []
        for block in blocks:
            if not block.is_code and any(m in block.text for m in DEPRECATION_MARKERS):
                deprecated.append(block)
            else:
                prose.append(block)

        lines: List[str] = []
        for block in prose:
            if lines:
                lines.append("")
            if block.is_code:
                lines.extend(block.text.splitlines())
            else:
                lines.extend(self._wrap(block.text.splitlines()))
        for block in deprecated:
            if lines:
                lines.append("")
            lines.extend(self._wrap(f"@deprecated {block.text}".splitlines()))
        return lines

    def _tags(
        self,
        entry: Entry,
        signature: Optional[Signature],
        emit_parameters: bool,
    ) -> List[str]:
        tags = []
        func = signature.function if signature is not None else None
        if emit_parameters and func is not None:
            types = {p.name: render_type(p.type) for p in func.params}
            for param in entry.parameters:
                doc = inline_markdown(param.doc)
                tags.append(f"@param {{{types.get(param.name, 'any')}}} {param.name} - {doc}".rstrip())
            returns = func.returns
            if (
                signature.form != SignatureForm.CONSTRUCTOR
                and returns is not None
                and returns != Atom("void")
            ):
                doc = inline_markdown(entry.returns_doc)
                tags.append(f"@returns {{{render_type(returns)}}} {doc}".rstrip())
        if entry.url:
            tags.append(f"@see {entry.url}")
        return self._wrap(tags)

    def _wrap(self, lines: List[str]) -> List[str]:
        wrapped = []
        for line in lines:
            wrapped.extend(soft_wrap(line, self.config.wrap_column))
        return wrapped


def format_comment(lines: List[str]) -> str:
    """Wrap comment lines in a ``/** ... */`` block; no lines, no comment."""
    if not lines:
        return ""
    escaped = [line.replace("*/", "*\\/") for line in lines]
    body = "\n".join(f" * {line}".rstrip() for line in escaped)
    return f"/**\n{body}\n */"


def render_description(
    entry: Entry,
    owner: str,
    check_for_interface: bool = True,
    emit_parameters: bool = True,
    config: Optional[GeneratorConfig] = None,
) -> RenderedDescription:
    """Render with a default renderer."""
    return DescriptionRenderer(config).render(
        entry, owner, check_for_interface, emit_parameters
    )
