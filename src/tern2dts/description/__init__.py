"""Description Renderer module."""

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
from tern2dts.description.renderer import (
    DescriptionRenderer,
    RenderedDescription,
    format_comment,
    render_description,
)

__all__ = [
    "Block",
    "DescriptionRenderer",
    "RenderedDescription",
    "bullet_lists",
    "enum_literals",
    "format_comment",
    "html_to_markdown",
    "inline_markdown",
    "is_optional_parameter",
    "render_description",
    "soft_wrap",
    "split_blocks",
    "wrap_code_spans",
]
