"""Parser turning reStructuredText documentation files into pages."""

import re
from pathlib import Path

import docutils.frontend  # type: ignore[import-untyped]
import docutils.nodes  # type: ignore[import-untyped]
import docutils.parsers.rst  # type: ignore[import-untyped]
import docutils.parsers.rst.directives  # type: ignore[import-untyped]
import docutils.parsers.rst.directives.body  # type: ignore[import-untyped]
import docutils.utils  # type: ignore[import-untyped]

from docs_browser.models import ContentBlock, Page


class mermaid(docutils.nodes.General, docutils.nodes.FixedTextElement):  # type: ignore[misc]  # noqa: N801
    """Doctree node holding raw Mermaid diagram source."""


class MermaidDirective(docutils.parsers.rst.Directive):  # type: ignore[misc]
    """``.. mermaid::`` directive keeping its content as opaque diagram source."""

    has_content = True

    def run(self) -> list[docutils.nodes.Node]:
        """Create a mermaid node from the directive content.

        Returns:
            Single-element list with the mermaid node.
        """
        source = "\n".join(self.content)
        return [mermaid(source, source)]


docutils.parsers.rst.directives.register_directive("mermaid", MermaidDirective)
docutils.parsers.rst.directives.register_directive("code-block", docutils.parsers.rst.directives.body.CodeBlock)


def _clean_inline(text: str) -> str:
    """Normalise inline text for a content block.

    Unresolved roles (``:role:`text```) are reduced to their text and
    whitespace runs collapse to single spaces.

    Args:
        text: Raw node text.

    Returns:
        Cleaned single-line text.
    """
    text = re.sub(r":[\w-]+:`([^`]+)`", r"\1", text)
    return re.sub(r"\s+", " ", text).strip()


class PageContentVisitor(docutils.nodes.GenericNodeVisitor):  # type: ignore[misc]
    """Visitor collecting the title and content blocks of an RST document."""

    def __init__(self, document: docutils.nodes.document) -> None:
        """Initialise page content visitor.

        Args:
            document: Docutils document tree.
        """
        super().__init__(document)
        self.title: str | None = None
        self.blocks: list[ContentBlock] = []

    def visit_title(self, node: docutils.nodes.title) -> None:
        """Use the leading title as page title and later titles as headers.

        Args:
            node: Title node.

        Raises:
            docutils.nodes.SkipNode: Always raised; title text is consumed here.
        """
        text = _clean_inline(node.astext())
        if self.title is None and not self.blocks:
            self.title = text
        elif text:
            self.blocks.append(ContentBlock.header(text))
        raise docutils.nodes.SkipNode

    def visit_paragraph(self, node: docutils.nodes.paragraph) -> None:
        """Collect a paragraph as a text block.

        Args:
            node: Paragraph node.

        Raises:
            docutils.nodes.SkipNode: Always raised; inline children are consumed here.
        """
        text = _clean_inline(node.astext())
        if text:
            self.blocks.append(ContentBlock.text(text))
        raise docutils.nodes.SkipNode

    def visit_literal_block(self, node: docutils.nodes.literal_block) -> None:
        """Collect a literal or code block.

        The ``code`` directive tags its node with ``["code", <language>]``
        classes; plain ``::`` literal blocks carry no language.

        Args:
            node: Literal block node.

        Raises:
            docutils.nodes.SkipNode: Always raised.
        """
        classes = node.get("classes", [])
        language = None
        if "code" in classes:
            languages = [cls for cls in classes if cls != "code"]
            language = languages[0] if languages else None
        self.blocks.append(ContentBlock.code(node.astext(), language))
        raise docutils.nodes.SkipNode

    def visit_mermaid(self, node: mermaid) -> None:
        """Collect Mermaid source unmodified.

        Args:
            node: Mermaid node.

        Raises:
            docutils.nodes.SkipNode: Always raised.
        """
        self.blocks.append(ContentBlock.mermaid(node.astext()))
        raise docutils.nodes.SkipNode

    def visit_bullet_list(self, node: docutils.nodes.bullet_list) -> None:
        """Collect a bulleted list as a list block.

        Args:
            node: Bullet list node.

        Raises:
            docutils.nodes.SkipNode: Always raised; nested lists are flattened into their item text.
        """
        items = [_clean_inline(item.astext()) for item in node.children if isinstance(item, docutils.nodes.list_item)]
        self.blocks.append(ContentBlock.list_items(items))
        raise docutils.nodes.SkipNode

    visit_enumerated_list = visit_bullet_list

    def visit_comment(self, node: docutils.nodes.comment) -> None:
        """Skip comments.

        Args:
            node: Comment node.

        Raises:
            docutils.nodes.SkipNode: Always raised to skip comments.
        """
        raise docutils.nodes.SkipNode

    def visit_system_message(self, node: docutils.nodes.system_message) -> None:
        """Skip parser diagnostics embedded in the tree.

        Args:
            node: System message node.

        Raises:
            docutils.nodes.SkipNode: Always raised.
        """
        raise docutils.nodes.SkipNode

    def visit_substitution_definition(self, node: docutils.nodes.substitution_definition) -> None:
        """Skip substitution definitions.

        Args:
            node: Substitution definition node.

        Raises:
            docutils.nodes.SkipNode: Always raised.
        """
        raise docutils.nodes.SkipNode

    def default_visit(self, node: docutils.nodes.Node) -> None:
        """Default visit handler (no-op).

        Args:
            node: Any node.
        """

    def default_departure(self, node: docutils.nodes.Node) -> None:
        """Default departure handler (no-op).

        Args:
            node: Any node.
        """


class RstPageParser:
    """Parses reStructuredText files into documentation pages."""

    RST_SUFFIXES = (".rst", ".rest")

    def parse_file(self, file_path: Path) -> Page | None:
        """Parse an RST file into a page.

        The page identifier is the file stem.

        Args:
            file_path: Path to the RST file.

        Returns:
            Page instance or None if the file cannot be read or parsed.
        """
        try:
            source = file_path.read_text(encoding="utf-8")
            return self.parse_string(source, file_path.stem, str(file_path))
        except (OSError, UnicodeDecodeError, docutils.utils.SystemMessage):
            return None

    def parse_string(self, source: str, page_id: str, source_path: str = "<string>") -> Page:
        """Parse RST source text into a page.

        Args:
            source: RST source text.
            page_id: Identifier for the resulting page.
            source_path: Path reported in docutils diagnostics.

        Returns:
            Page whose title is the document title, falling back to the
            title-cased page identifier.
        """
        doctree = self._parse_rst(source, source_path)
        visitor = PageContentVisitor(doctree)
        doctree.walk(visitor)

        title = visitor.title
        if not title:
            # Fallback to identifier if no title found
            title = self.title_from_name(page_id)

        return Page(id=page_id, title=title, blocks=tuple(visitor.blocks))

    @staticmethod
    def title_from_name(name: str) -> str:
        """Derive a display title from a file or directory name.

        Args:
            name: File stem or directory name.

        Returns:
            Name with separators replaced by spaces, title-cased.
        """
        return name.replace("-", " ").replace("_", " ").title()

    def _parse_rst(self, source: str, source_path: str) -> docutils.nodes.document:
        """Parse RST source into docutils document tree.

        Args:
            source: RST source text.
            source_path: Path to the file (for error reporting).

        Returns:
            Docutils document tree.
        """
        parser = docutils.parsers.rst.Parser()
        settings = docutils.frontend.get_default_settings(docutils.parsers.rst.Parser)
        settings.report_level = 5  # Suppress warnings
        settings.halt_level = 5
        settings.syntax_highlight = "none"
        document = docutils.utils.new_document(source_path, settings)
        parser.parse(source, document)
        return document
