"""
Core graph building logic using pluggable components.
"""
import logging
from typing import Mapping, Sequence

import networkx as nx
from tqdm import tqdm

from .protocols import (
    LinkageMap, ContentSource,
    LinkExtractor, LinkNormalizer
)

logger = logging.getLogger(__name__)


def make_page_graph(linkage: Mapping[str, Sequence[str]]) -> nx.DiGraph:
    """
    Make a directed page graph from a page -> outgoing links mapping.

    Every key and every target becomes a node. Edges point from the linking
    page to the linked page and carry ``label="links"``; repeated links
    between the same two pages collapse into one edge. Targets that never
    appear as keys are marked ``dangling=True``.

    Args:
        linkage: Page identifier -> outgoing page identifiers

    Returns:
        The page graph. Nodes and edges enumerate in insertion order.
    """
    graph = nx.DiGraph()

    for page, targets in linkage.items():
        graph.add_node(page, dangling=False)
        for target in targets:
            if target not in graph:
                graph.add_node(target, dangling=target not in linkage)
            graph.add_edge(page, target, label="links")

    return graph


def merge_linkage_maps(*maps: Mapping[str, Sequence[str]]) -> LinkageMap:
    """
    Merge linkage maps built independently (e.g. one per page).

    Links of a page that appears in several maps are concatenated in
    argument order.
    """
    merged: LinkageMap = {}
    for linkage in maps:
        for page, targets in linkage.items():
            merged.setdefault(page, []).extend(targets)
    return merged


class GraphBuilder:
    """
    Page graph builder using pluggable components.

    This class implements the extraction side of the audit:
    1. Extract raw links from every page
    2. Normalize the links into page identifiers
    3. Accumulate the page -> outgoing links mapping
    4. Build the directed page graph from the completed mapping

    The builder is configured with:
    - ContentSource: Where to read pages from
    - LinkExtractor: How to find links in page text
    - LinkNormalizer: How to turn links into page identifiers
    """

    def __init__(
        self,
        source: ContentSource,
        link_extractor: LinkExtractor,
        normalizer: LinkNormalizer,
        show_progress: bool = True,
    ):
        """
        Args:
            source: Content source providing pages
            link_extractor: Extracts raw links from page text
            normalizer: Normalizes links to page identifiers (None drops a link)
            show_progress: Show progress bars via tqdm
        """
        self.source = source
        self.link_extractor = link_extractor
        self.normalizer = normalizer
        self.show_progress = show_progress

    def build_linkage_map(self) -> LinkageMap:
        """
        Read every page and collect its normalized outgoing links.

        Returns:
            Page identifier -> outgoing page identifiers, in extraction order
        """
        linkage: LinkageMap = {}

        logger.info("Extracting links...")
        iterator = tqdm(
            self.source.iter_documents(),
            disable=not self.show_progress,
            desc="Extracting links",
            unit="pages",
            bar_format="{desc}: {n_fmt} pages [{elapsed}, {rate_fmt}]"
        )

        for doc in iterator:
            raw_links = self.link_extractor.extract_links(doc.content)

            targets = []
            for raw_link in raw_links:
                target = self.normalizer.normalize(raw_link)
                if target is not None:
                    targets.append(target)

            if doc.identifier in linkage:
                logger.warning(f"Page {doc.identifier!r} seen twice, merging its links")
                linkage[doc.identifier].extend(targets)
            else:
                linkage[doc.identifier] = targets

            logger.debug(
                f"{doc.identifier}: {len(raw_links)} links found, {len(targets)} kept"
            )

        total_links = sum(len(targets) for targets in linkage.values())
        logger.info(f"Extracted {total_links} links from {len(linkage)} pages")

        return linkage

    def build_graph(self) -> nx.DiGraph:
        """
        Build the page graph from the whole corpus.

        Returns:
            Directed page graph (see make_page_graph)
        """
        graph = make_page_graph(self.build_linkage_map())
        logger.info(
            f"Graph complete: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges"
        )
        return graph
