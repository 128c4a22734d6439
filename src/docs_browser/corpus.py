"""Immutable in-memory store of documentation sections."""

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from docs_browser.errors import CorpusError
from docs_browser.models import Page, Route, Section

logger = logging.getLogger(__name__)


class Corpus:
    """The full ordered collection of sections for one running instance.

    The corpus is validated once at construction and never mutated
    afterwards, so it can be shared freely between route resolution and
    search.
    """

    __slots__ = ("_page_index", "_section_index", "_sections")

    def __init__(self, sections: Iterable[Section]) -> None:
        """Build and validate a corpus.

        Args:
            sections: Sections in display order.

        Raises:
            CorpusError: If the corpus is empty, a section has no pages, or
                an identifier is duplicated.
        """
        self._sections = tuple(sections)
        self._validate()
        self._section_index = MappingProxyType({section.id: section for section in self._sections})
        self._page_index = MappingProxyType(
            {(section.id, page.id): page for section in self._sections for page in section.pages}
        )
        logger.debug("Built corpus with %d sections and %d pages", len(self._sections), len(self._page_index))

    def _validate(self) -> None:
        if not self._sections:
            msg = "Corpus must contain at least one section"
            raise CorpusError(msg)

        seen_sections: set[str] = set()
        for section in self._sections:
            if section.id in seen_sections:
                msg = f"Duplicate section id: {section.id!r}"
                raise CorpusError(msg)
            seen_sections.add(section.id)

            if not section.pages:
                msg = f"Section {section.id!r} has no pages"
                raise CorpusError(msg)

            seen_pages: set[str] = set()
            for page in section.pages:
                if page.id in seen_pages:
                    msg = f"Duplicate page id {page.id!r} in section {section.id!r}"
                    raise CorpusError(msg)
                seen_pages.add(page.id)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"Corpus(sections={len(self._sections)}, pages={len(self._page_index)})"

    @property
    def sections(self) -> tuple[Section, ...]:
        """Sections in declared order."""
        return self._sections

    @property
    def default_section(self) -> Section:
        """The first section, used when navigation names no known section."""
        return self._sections[0]

    @property
    def page_count(self) -> int:
        """Total number of pages across all sections."""
        return len(self._page_index)

    def get_section(self, section_id: str) -> Section | None:
        """Look up a section by identifier.

        Args:
            section_id: Section identifier.

        Returns:
            The matching section or None if no section has that identifier.
        """
        return self._section_index.get(section_id)

    def get_page(self, section_id: str, page_id: str) -> Page | None:
        """Look up a page by its (section, page) address.

        Args:
            section_id: Identifier of the owning section.
            page_id: Identifier of the page within that section.

        Returns:
            The matching page or None if the address is unknown.
        """
        return self._page_index.get((section_id, page_id))

    def iter_pages(self) -> Iterator[tuple[Section, Page]]:
        """Yield every page with its section, in traversal order."""
        for section in self._sections:
            for page in section.pages:
                yield section, page

    def routes(self) -> list[Route]:
        """Return the route of every page, in traversal order."""
        return [Route(section.id, page.id) for section, page in self.iter_pages()]
