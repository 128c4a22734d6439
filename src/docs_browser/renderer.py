"""Contract between the corpus and a presentation layer that displays pages."""

import logging
import re
from collections.abc import Sequence
from typing import Protocol, TypeVar

from docs_browser.models import BlockKind, ContentBlock, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class BlockRenderer(Protocol[T_co]):
    """Displays content blocks, one method per block kind.

    Implementations receive payloads whose shape already matches the kind.
    Mermaid source is passed through unmodified and unvalidated; turning it
    into a diagram is the implementation's concern.
    """

    def render_header(self, text: str) -> T_co: ...

    def render_text(self, text: str) -> T_co: ...

    def render_code(self, source: str, language: str | None) -> T_co: ...

    def render_mermaid(self, source: str) -> T_co: ...

    def render_list(self, items: Sequence[str]) -> T_co: ...


def heading_anchor(text: str) -> str:
    """Return the in-page anchor for a header.

    Args:
        text: Header text.

    Returns:
        Lowercased text with whitespace runs replaced by hyphens.
    """
    return re.sub(r"\s+", "-", text.lower())


def render_block(block: ContentBlock, renderer: BlockRenderer[T]) -> T | None:
    """Dispatch one block to the renderer method for its kind.

    Args:
        block: Block to render.
        renderer: Presentation-layer renderer.

    Returns:
        The renderer's output, or None for a block of unknown kind or with a
        payload that does not match its kind.
    """
    if not block.is_well_formed:
        logger.debug("Skipping malformed %r block", block.kind)
        return None

    value = block.value
    if block.kind is BlockKind.HEADER:
        return renderer.render_header(value)  # type: ignore[arg-type]
    if block.kind is BlockKind.TEXT:
        return renderer.render_text(value)  # type: ignore[arg-type]
    if block.kind is BlockKind.CODE:
        return renderer.render_code(value, block.language)  # type: ignore[arg-type]
    if block.kind is BlockKind.MERMAID:
        return renderer.render_mermaid(value)  # type: ignore[arg-type]
    return renderer.render_list(value)  # type: ignore[arg-type]


def render_page(page: Page, renderer: BlockRenderer[T]) -> list[T]:
    """Render every displayable block of a page in declared order.

    Args:
        page: Page to render.
        renderer: Presentation-layer renderer.

    Returns:
        Renderer outputs for the well-formed blocks, in page order.
    """
    rendered = []
    for block in page.blocks:
        output = render_block(block, renderer)
        if output is not None:
            rendered.append(output)
    return rendered


class PlainTextRenderer:
    """Renders blocks as plain text for terminal display."""

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent

    def render_header(self, text: str) -> str:
        return f"{text}\n{'-' * len(text)}"

    def render_text(self, text: str) -> str:
        return text

    def render_code(self, source: str, language: str | None) -> str:
        label = f"[{language or 'text'}]"
        return "\n".join([label, *(self.indent + line for line in source.splitlines())])

    def render_mermaid(self, source: str) -> str:
        return "\n".join(["[mermaid]", *(self.indent + line for line in source.splitlines())])

    def render_list(self, items: Sequence[str]) -> str:
        return "\n".join(f"  * {item}" for item in items)

    def render(self, page: Page) -> str:
        """Render a whole page, title first.

        Args:
            page: Page to render.

        Returns:
            The page as a single string with blank lines between blocks.
        """
        title = f"{page.title}\n{'=' * len(page.title)}"
        return "\n\n".join([title, *render_page(page, self)])
