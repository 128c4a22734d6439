"""Data models for the documentation corpus."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class BlockKind(str, Enum):
    """Kinds of content block a page can hold."""

    HEADER = "header"
    TEXT = "text"
    CODE = "code"
    MERMAID = "mermaid"
    LIST = "list"


STRING_KINDS = frozenset({BlockKind.HEADER, BlockKind.TEXT, BlockKind.CODE, BlockKind.MERMAID})
_KINDS_BY_NAME = {kind.value: kind for kind in BlockKind}


@dataclass(frozen=True)
class ContentBlock:
    """One typed unit of page content.

    ``header``, ``text``, ``code`` and ``mermaid`` blocks carry a single
    string; ``list`` blocks carry a sequence of strings. The payload is stored
    exactly as supplied: a block whose payload does not fit its kind, or whose
    kind is not a known :class:`BlockKind`, is kept as-is and reported through
    :attr:`is_well_formed` so the renderer can skip it.
    """

    kind: BlockKind | str
    value: object
    language: str | None = None

    def __post_init__(self) -> None:
        # unknown kinds are preserved verbatim
        object.__setattr__(self, "kind", _KINDS_BY_NAME.get(self.kind, self.kind))

    @classmethod
    def header(cls, text: str) -> "ContentBlock":
        """Create a header block."""
        return cls(BlockKind.HEADER, text)

    @classmethod
    def text(cls, text: str) -> "ContentBlock":
        """Create a prose block."""
        return cls(BlockKind.TEXT, text)

    @classmethod
    def code(cls, source: str, language: str | None = None) -> "ContentBlock":
        """Create a code block with an optional language tag."""
        return cls(BlockKind.CODE, source, language)

    @classmethod
    def mermaid(cls, source: str) -> "ContentBlock":
        """Create a diagram block holding opaque Mermaid source."""
        return cls(BlockKind.MERMAID, source)

    @classmethod
    def list_items(cls, items: Sequence[str]) -> "ContentBlock":
        """Create a list block."""
        return cls(BlockKind.LIST, tuple(items))

    @property
    def is_well_formed(self) -> bool:
        """Whether the payload shape matches the block kind.

        Returns:
            True for a known kind carrying the payload type that kind requires.
        """
        if self.kind in STRING_KINDS:
            return isinstance(self.value, str)
        if self.kind is BlockKind.LIST:
            return isinstance(self.value, (list, tuple)) and all(isinstance(item, str) for item in self.value)
        return False


@dataclass(frozen=True)
class Page:
    """An addressable document within a section."""

    id: str
    title: str
    blocks: tuple[ContentBlock, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Section:
    """A top-level grouping of pages."""

    id: str
    title: str
    pages: tuple[Page, ...] = field(default_factory=tuple)

    def get_page(self, page_id: str) -> Page | None:
        """Look up a page of this section by identifier.

        Args:
            page_id: Page identifier.

        Returns:
            The matching page or None if the section has no such page.
        """
        for page in self.pages:
            if page.id == page_id:
                return page
        return None


@dataclass(frozen=True)
class Route:
    """The (section, page) pair identifying a displayed page."""

    section_id: str
    page_id: str

    @property
    def path(self) -> str:
        """Navigation address in ``/{section_id}/{page_id}`` form."""
        return f"/{self.section_id}/{self.page_id}"


@dataclass(frozen=True)
class SearchResult:
    """Represents a search result."""

    section_id: str
    page_id: str
    title: str
    snippet: str

    @property
    def route(self) -> Route:
        """Route that navigates to the matching page."""
        return Route(self.section_id, self.page_id)
