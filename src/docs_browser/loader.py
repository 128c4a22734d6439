"""Build corpora from mappings, JSON files and reStructuredText directories."""

import json
import logging
from collections.abc import Mapping, Sequence
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from docs_browser.corpus import Corpus
from docs_browser.errors import CorpusLoadError
from docs_browser.models import ContentBlock, Page, Section
from docs_browser.parser import RstPageParser

logger = logging.getLogger(__name__)

BUNDLED_CORPUS = "webstudio.json"


def _require(data: Mapping[str, Any], key: str, expected: type | tuple[type, ...], location: str) -> Any:
    """Fetch a required key and check its type.

    Args:
        data: Mapping to read from.
        key: Required key.
        expected: Accepted type or types.
        location: Human-readable position of ``data`` for error messages.

    Returns:
        The value stored under ``key``.

    Raises:
        CorpusLoadError: If the key is missing or has the wrong type.
    """
    if key not in data:
        msg = f"{location}: missing required key {key!r}"
        raise CorpusLoadError(msg)
    value = data[key]
    if not isinstance(value, expected):
        msg = f"{location}.{key}: expected {_type_names(expected)}, got {type(value).__name__}"
        raise CorpusLoadError(msg)
    return value


def _type_names(expected: type | tuple[type, ...]) -> str:
    types = expected if isinstance(expected, tuple) else (expected,)
    return " or ".join(t.__name__ for t in types)


def _require_mapping(data: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        msg = f"{location}: expected an object, got {type(data).__name__}"
        raise CorpusLoadError(msg)
    return data


def _require_list(data: Any, location: str) -> Sequence[Any]:
    if not isinstance(data, list):
        msg = f"{location}: expected a list, got {type(data).__name__}"
        raise CorpusLoadError(msg)
    return data


def block_from_dict(data: Mapping[str, Any], location: str = "block") -> ContentBlock:
    """Build a content block from its ``{type, value, language?}`` form.

    The payload is kept as supplied apart from list payloads, which are
    frozen into tuples. A payload that does not fit its kind is not an
    error here; the renderer decides what to do with it.

    Args:
        data: Block mapping.
        location: Position of the block for error messages.

    Returns:
        ContentBlock instance.

    Raises:
        CorpusLoadError: If the block has no ``type`` or no ``value``.
    """
    data = _require_mapping(data, location)
    kind = _require(data, "type", str, location)
    if "value" not in data:
        msg = f"{location}: missing required key 'value'"
        raise CorpusLoadError(msg)
    value = data["value"]
    if isinstance(value, list):
        value = tuple(value)
    language = data.get("language")
    return ContentBlock(kind=kind, value=value, language=language if isinstance(language, str) else None)


def page_from_dict(data: Mapping[str, Any], location: str = "page") -> Page:
    """Build a page from its ``{id, title, content}`` form."""
    data = _require_mapping(data, location)
    content = _require_list(data.get("content", []), f"{location}.content")
    return Page(
        id=_require(data, "id", str, location),
        title=_require(data, "title", str, location),
        blocks=tuple(block_from_dict(block, f"{location}.content[{i}]") for i, block in enumerate(content)),
    )


def section_from_dict(data: Mapping[str, Any], location: str = "section") -> Section:
    """Build a section from its ``{id, title, pages}`` form."""
    data = _require_mapping(data, location)
    pages = _require(data, "pages", list, location)
    return Section(
        id=_require(data, "id", str, location),
        title=_require(data, "title", str, location),
        pages=tuple(page_from_dict(page, f"{location}.pages[{i}]") for i, page in enumerate(pages)),
    )


def corpus_from_dict(data: Sequence[Any] | Mapping[str, Any]) -> Corpus:
    """Build a corpus from plain data.

    Accepts either a list of section mappings or a mapping with a
    ``sections`` list.

    Args:
        data: Decoded corpus data.

    Returns:
        Validated Corpus instance.

    Raises:
        CorpusLoadError: If the data is not shaped like a corpus.
        CorpusError: If the resulting corpus violates its preconditions.
    """
    if isinstance(data, Mapping):
        data = _require(data, "sections", list, "corpus")
    sections = _require_list(data, "sections")
    return Corpus(section_from_dict(section, f"sections[{i}]") for i, section in enumerate(sections))


def load_corpus_file(path: Path) -> Corpus:
    """Load a corpus from a JSON file.

    Args:
        path: Path to the JSON document.

    Returns:
        Validated Corpus instance.

    Raises:
        CorpusLoadError: If the file cannot be read or decoded.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Cannot read corpus file {path}: {exc}"
        raise CorpusLoadError(msg) from exc

    corpus = corpus_from_dict(data)
    logger.info("Loaded %d sections (%d pages) from %s", len(corpus), corpus.page_count, path)
    return corpus


@cache
def load_bundled_corpus() -> Corpus:
    """Load the documentation corpus shipped with the package.

    Returns:
        The bundled Corpus, loaded once per process.
    """
    source = resources.files("docs_browser") / "data" / BUNDLED_CORPUS
    corpus = corpus_from_dict(json.loads(source.read_text(encoding="utf-8")))
    logger.info("Loaded bundled corpus: %d sections (%d pages)", len(corpus), corpus.page_count)
    return corpus


class RstCorpusLoader:
    """Builds a corpus from a directory tree of reStructuredText files.

    Each subdirectory becomes a section named after the directory, titled by
    its ``index.rst`` when present. Every other RST file in the directory
    becomes a page. RST files directly under the root form a leading
    ``root`` section. Directories and files are taken in sorted order.
    """

    INDEX_STEM = "index"
    ROOT_SECTION_ID = "root"

    def __init__(self, parser: RstPageParser | None = None) -> None:
        """Initialise loader with a page parser.

        Args:
            parser: Parser used for each RST file.
        """
        self.parser = parser or RstPageParser()

    def load(self, docs_path: Path) -> Corpus:
        """Load all sections found under a documentation directory.

        Args:
            docs_path: Path to the documentation directory.

        Returns:
            Validated Corpus instance.

        Raises:
            CorpusLoadError: If the documentation path does not exist.
            CorpusError: If no section with pages was found.
        """
        if not docs_path.is_dir():
            msg = f"Documentation path does not exist: {docs_path}"
            raise CorpusLoadError(msg)

        sections = []
        root_section = self._load_section(docs_path, self.ROOT_SECTION_ID)
        if root_section is not None:
            sections.append(root_section)

        for directory in sorted(p for p in docs_path.iterdir() if p.is_dir() and not p.name.startswith((".", "_"))):
            section = self._load_section(directory, directory.name)
            if section is not None:
                sections.append(section)

        corpus = Corpus(sections)
        logger.info("Loaded %d sections (%d pages) from %s", len(corpus), corpus.page_count, docs_path)
        return corpus

    def _rst_files(self, directory: Path) -> list[Path]:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix in self.parser.RST_SUFFIXES)

    def _load_section(self, directory: Path, section_id: str) -> Section | None:
        """Load one directory as a section.

        Args:
            directory: Directory holding the section's RST files.
            section_id: Identifier for the section.

        Returns:
            Section instance or None if the directory yields no pages.
        """
        title = None
        pages = []
        for file_path in self._rst_files(directory):
            page = self.parser.parse_file(file_path)
            if page is None:
                logger.warning("Failed to parse: %s", file_path)
                continue
            if file_path.stem == self.INDEX_STEM:
                title = page.title
                continue
            pages.append(page)
            logger.debug("Loaded page: %s/%s", section_id, page.id)

        if not pages:
            logger.debug("No pages in %s, skipping section", directory)
            return None

        return Section(
            id=section_id,
            title=title or self.parser.title_from_name(section_id),
            pages=tuple(pages),
        )


def load_corpus(path: Path | None = None) -> Corpus:
    """Load a corpus from a JSON file, an RST directory, or the bundled data.

    Args:
        path: JSON file or documentation directory; None selects the bundled corpus.

    Returns:
        Validated Corpus instance.
    """
    if path is None:
        return load_bundled_corpus()
    if path.is_dir():
        return RstCorpusLoader().load(path)
    return load_corpus_file(path)
