"""
Link graph extraction with pluggable components.

This package turns a corpus of saved pages into a directed page graph:
read pages, extract href targets, normalize them to page identifiers, and
link each page to the pages it references.
"""

from .protocols import Document, LinkageMap, LinkExtractor, LinkNormalizer, ContentSource
from .normalization import SiteNormalizer, filter_regex, site_patterns
from .sources import CorpusReadError, FileSource, MappingSource
from .link_extractors import AnchorHrefExtractor
from .graph_builder import GraphBuilder, make_page_graph, merge_linkage_maps

__all__ = [
    # Protocols
    "Document",
    "LinkageMap",
    "LinkExtractor",
    "LinkNormalizer",
    "ContentSource",
    # Normalization
    "SiteNormalizer",
    "filter_regex",
    "site_patterns",
    # Core Builder
    "GraphBuilder",
    "make_page_graph",
    "merge_linkage_maps",
    # Sources
    "CorpusReadError",
    "FileSource",
    "MappingSource",
    # Link Extractors
    "AnchorHrefExtractor",
]
