"""
Core protocols defining the interfaces for link graph extraction components.
"""
from typing import Protocol, Iterator, List, Dict, Any, Optional
from dataclasses import dataclass, field


# Page identifier -> outgoing page identifiers, in extraction order (duplicates allowed)
LinkageMap = Dict[str, List[str]]


@dataclass
class Document:
    """A page from the corpus."""
    identifier: str          # Filename or relative path
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class LinkExtractor(Protocol):
    """Extract raw link targets from page content."""
    
    def extract_links(self, content: str) -> List[str]:
        """Returns raw link targets in document order."""
        ...


class LinkNormalizer(Protocol):
    """Normalize raw links into page identifiers."""
    
    def normalize(self, link: str) -> Optional[str]:
        """Returns a page identifier, or None if the link is dropped."""
        ...


class ContentSource(Protocol):
    """Iterator over pages from a corpus."""
    
    def iter_documents(self) -> Iterator[Document]:
        """Yields Document objects."""
        ...
