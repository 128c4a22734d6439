"""In-memory substring search over a documentation corpus."""

import logging

from docs_browser.corpus import Corpus
from docs_browser.models import STRING_KINDS, Page, SearchResult

logger = logging.getLogger(__name__)

TITLE_MATCH_SNIPPET = "Page Title Match"
SNIPPET_LENGTH = 80
ELLIPSIS = "..."


def is_blank_query(query: str) -> bool:
    """Return True when nothing searchable has been typed yet.

    Callers use this to tell the "nothing typed" state apart from "typed but
    no hits", since both produce an empty result list.
    """
    return not query.strip()


def search(corpus: Corpus, query: str) -> list[SearchResult]:
    """Search page titles and string content blocks for a query.

    Matching is case-insensitive substring containment of the query as
    typed. Each page contributes at most one result: a title match wins,
    otherwise the first header, text, code or mermaid block whose string
    payload contains the query supplies the snippet. List blocks and blocks
    of unknown kind are never searched. Results follow corpus order
    (sections, then pages in declared order).

    Args:
        corpus: Corpus to search.
        query: Free-text query string.

    Returns:
        List of SearchResult instances in corpus order; empty for a blank query.
    """
    if is_blank_query(query):
        return []

    needle = query.lower()
    results = []
    for section, page in corpus.iter_pages():
        snippet = _match_page(page, needle)
        if snippet is None:
            continue
        results.append(
            SearchResult(
                section_id=section.id,
                page_id=page.id,
                title=f"{section.title} > {page.title}",
                snippet=snippet,
            )
        )

    logger.debug("Query %r matched %d pages", query, len(results))
    return results


def _match_page(page: Page, needle: str) -> str | None:
    """Return the snippet for a page matching a lowercased query, or None."""
    if needle in page.title.lower():
        return TITLE_MATCH_SNIPPET

    for block in page.blocks:
        if block.kind in STRING_KINDS and isinstance(block.value, str) and needle in block.value.lower():
            return make_snippet(block.value)
    return None


def make_snippet(text: str) -> str:
    """Truncate matched block text for display.

    Args:
        text: Full block payload.

    Returns:
        The first ``SNIPPET_LENGTH`` characters followed by an ellipsis.
    """
    return text[:SNIPPET_LENGTH] + ELLIPSIS
