"""Static documentation corpus with route resolution and substring search."""

from docs_browser.corpus import Corpus
from docs_browser.errors import CorpusError, CorpusLoadError, DocsBrowserError
from docs_browser.loader import corpus_from_dict, load_bundled_corpus, load_corpus
from docs_browser.models import BlockKind, ContentBlock, Page, Route, SearchResult, Section
from docs_browser.resolver import resolve, resolve_path
from docs_browser.search import is_blank_query, search

__all__ = [
    "BlockKind",
    "ContentBlock",
    "Corpus",
    "CorpusError",
    "CorpusLoadError",
    "DocsBrowserError",
    "Page",
    "Route",
    "SearchResult",
    "Section",
    "corpus_from_dict",
    "is_blank_query",
    "load_bundled_corpus",
    "load_corpus",
    "resolve",
    "resolve_path",
    "search",
]
