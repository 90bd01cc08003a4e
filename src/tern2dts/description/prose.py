"""
Structural heuristics over rendered documentation prose.

Everything here works on Markdown split into blocks: fenced code blocks are
kept intact and never rewritten, wrapped or searched for prose patterns.
"""

import re
import textwrap
from dataclasses import dataclass
from typing import List, Optional

_BACKTICKS_RE = re.compile(r"`+")
_BULLET_RE = re.compile(r"^[*+-]\s+(?P<item>.+)$")
_NESTED_BULLET_RE = re.compile(r"^\s+(?:[*+-]|\d+[.)])\s+")
_CODE_ITEM_RE = re.compile(r"^`(?P<code>[^`]+)`")
_DEFAULTS_TO_RE = re.compile(r"\bdefaults to\b", re.IGNORECASE)


@dataclass
class Block:
    """A paragraph, list or fenced code block of Markdown."""
    text: str
    is_code: bool = False

    @property
    def code(self) -> str:
        """Content of a fenced block without its fence lines."""
        lines = self.text.splitlines()
        if lines and lines[0].strip().startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        return "\n".join(lines)


def split_blocks(markdown: str) -> List[Block]:
    """Split Markdown at blank lines, keeping fenced code blocks whole."""
    blocks: List[Block] = []
    current: List[str] = []
    in_code = False

    def flush(is_code: bool = False) -> None:
        if current:
            blocks.append(Block("\n".join(current), is_code))
            current.clear()

    for line in (markdown or "").splitlines():
        if line.strip().startswith("```"):
            if in_code:
                current.append(line)
                flush(is_code=True)
                in_code = False
            else:
                flush()
                current.append(line)
                in_code = True
            continue
        if in_code:
            current.append(line)
        elif not line.strip():
            flush()
        else:
            current.append(line)
    flush(is_code=in_code)
    return blocks


def join_blocks(blocks: List[Block]) -> str:
    return "\n\n".join(b.text for b in blocks)


def wrap_code_spans(text: str) -> str:
    """
    Turn single-backtick spans that contain whitespace into triple-backtick snippets.

    Backtick runs pair only with a later run of the same length, so a span is
    never matched across an unrelated closing marker.
    """
    runs = list(_BACKTICKS_RE.finditer(text))
    out = []
    last = 0
    i = 0
    while i < len(runs):
        opening = runs[i]
        width = len(opening.group())
        closing_index = next(
            (k for k in range(i + 1, len(runs)) if len(runs[k].group()) == width),
            None,
        )
        if closing_index is None:
            break
        closing = runs[closing_index]
        content = text[opening.end():closing.start()]
        if width == 1 and re.search(r"\s", content.strip()):
            out.append(text[last:opening.start()])
            out.append(f"```{content}```")
            last = closing.end()
        i = closing_index + 1
    out.append(text[last:])
    return "".join(out)


def bullet_lists(blocks: List[Block]) -> List[List[str]]:
    """Collect top-level bullet lists (ordered lists are not included)."""
    lists: List[List[str]] = []
    for block in blocks:
        if block.is_code:
            continue
        current: Optional[List[str]] = None
        for line in block.text.splitlines():
            match = _BULLET_RE.match(line)
            if match:
                if current is None:
                    current = []
                    lists.append(current)
                current.append(match.group("item").strip())
            elif current is not None and _NESTED_BULLET_RE.match(line):
                continue
            else:
                current = None
    return lists


def enum_literals(items: List[str]) -> Optional[List[str]]:
    """
    Read list items as enum literals.

    An item is a literal when it starts with a code span or is a single
    word. Any other item means the list is prose, not an enum.
    """
    values = []
    for item in items:
        match = _CODE_ITEM_RE.match(item)
        if match:
            value = match.group("code").strip()
        else:
            value = item.strip().strip("\"'")
            if not value or re.search(r"\s", value):
                return None
        if value in values:
            continue
        values.append(value)
    return values or None


def is_optional_parameter(doc: str) -> bool:
    """``Optional. ...`` or ``... Defaults to ...`` documents an optional parameter."""
    text = (doc or "").strip()
    return text.startswith("Optional") or bool(_DEFAULTS_TO_RE.search(text))


def soft_wrap(line: str, width: int) -> List[str]:
    """
    Wrap a line longer than ``width`` at whitespace, never mid-word.

    Continuation lines keep the original indentation.
    """
    if len(line) <= width:
        return [line]
    indent = line[:len(line) - len(line.lstrip())]
    wrapped = textwrap.wrap(
        line,
        width=width,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return wrapped or [line]
