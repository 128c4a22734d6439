"""Resolve navigation targets to concrete pages."""

from docs_browser.corpus import Corpus
from docs_browser.models import Page, Route, Section


def resolve(corpus: Corpus, section_id: str | None = None, page_id: str | None = None) -> tuple[Section, Page]:
    """Resolve a (section, page) address to the page to display.

    Unknown or missing identifiers are never an error: an unknown section
    falls back to the first section of the corpus, and an unknown page falls
    back to the first page of the resolved section.

    Args:
        corpus: Corpus to navigate.
        section_id: Requested section identifier.
        page_id: Requested page identifier.

    Returns:
        Tuple of the resolved section and page.
    """
    section = corpus.get_section(section_id) if section_id else None
    if section is None:
        section = corpus.default_section

    page = section.get_page(page_id) if page_id else None
    if page is None:
        page = section.pages[0]

    return section, page


def split_path(path: str) -> tuple[str | None, str | None]:
    """Split a navigation address into its section and page segments.

    Empty segments are dropped and anything beyond the second segment is
    ignored, so ``"//a//b/c"`` splits into ``("a", "b")``.

    Args:
        path: Address such as ``/architecture/system-architecture``.

    Returns:
        Tuple of section and page identifiers, None where absent.
    """
    parts = [part for part in path.split("/") if part]
    section_id = parts[0] if parts else None
    page_id = parts[1] if len(parts) > 1 else None
    return section_id, page_id


def resolve_path(corpus: Corpus, path: str) -> tuple[Section, Page]:
    """Resolve a ``/{section_id}/{page_id}`` navigation address."""
    return resolve(corpus, *split_path(path))


def route_for(section: Section, page: Page) -> Route:
    """Build the route addressing a resolved page."""
    return Route(section.id, page.id)
