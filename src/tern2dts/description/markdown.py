"""
HTML to Markdown conversion for documentation fragments.
"""

import re

from markdownify import ATX, MarkdownConverter

_PRE_RE = re.compile(r"(<pre\b.*?</pre>)", re.IGNORECASE | re.DOTALL)
# newline runs between two pieces of text (not between tags)
_TEXT_NEWLINES_RE = re.compile(r"(?<=[^>\s])[ \t]*(\n[ \t\n]*)(?=[^<\s])")
_BLANK_RUN_RE = re.compile(r"\n{3,}")

CONVERTER_OPTIONS = {
    "heading_style": ATX,
    "escape_asterisks": False,
    "escape_underscores": False,
    "escape_misc": False,
    "code_language": "",
}


class DocMarkdownConverter(MarkdownConverter):
    """Markdown converter with single-tilde strikethrough and no buttons."""

    def convert_del(self, el, text, *args, **kwargs):
        text = (text or "").strip()
        return f"~{text}~" if text else ""

    convert_s = convert_del
    convert_strike = convert_del

    def convert_button(self, el, text, *args, **kwargs):
        return ""


def preserve_line_breaks(html: str) -> str:
    """
    Turn newlines inside prose into ``<br>`` so Markdown rendering keeps them.

    Newlines inside ``<pre>`` regions and between tags are left alone.
    """
    parts = _PRE_RE.split(html)
    for i in range(0, len(parts), 2):
        parts[i] = _TEXT_NEWLINES_RE.sub(
            lambda m: "<br>" * m.group(1).count("\n"), parts[i]
        )
    return "".join(parts)


def html_to_markdown(html: str) -> str:
    """
    Convert an HTML (or plain prose) documentation fragment to Markdown.

    Args:
        html: Documentation fragment

    Returns:
        Markdown text without trailing whitespace on any line
    """
    if not html or not html.strip():
        return ""
    text = DocMarkdownConverter(**CONVERTER_OPTIONS).convert(preserve_line_breaks(html))
    text = "\n".join(line.rstrip() for line in text.splitlines())
    return _BLANK_RUN_RE.sub("\n\n", text).strip("\n")


def inline_markdown(html: str) -> str:
    """Convert a fragment and fold it onto one line."""
    return " ".join(
        line.strip() for line in html_to_markdown(html).splitlines() if line.strip()
    )
