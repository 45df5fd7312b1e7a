"""
Reachability analysis over the page graph.

A depth-first walk from the entry page marks every page it can reach; the
rest are reported as orphan candidates. Pages that are linked to but were
never part of the corpus are reported as dangling.
"""
import logging
from typing import List, Set

import networkx as nx


logger = logging.getLogger(__name__)


def reachable_from(graph: nx.DiGraph, root: str) -> List[str]:
    """
    Depth-first walk along outgoing edges starting at ``root``.

    The walk keeps an explicit stack and a visited set, so cycles and
    self-links are fine. It ends when the stack is exhausted.

    Args:
        graph: Page graph with edges pointing from linking page to linked page.
        root: Identifier of the entry page.

    Returns:
        Identifiers in discovery order, ``root`` first. Empty if ``root`` is
        not a node of the graph.
    """
    if root not in graph:
        return []

    order: List[str] = []
    visited: Set[str] = set()
    stack: List[str] = [root]

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        order.append(node)

        # Reversed so that the first link on a page is explored first.
        for neighbor in reversed(list(graph.successors(node))):
            if neighbor not in visited:
                stack.append(neighbor)

    return order


def find_orphans(graph: nx.DiGraph, root: str = "index") -> Set[str]:
    """
    Find orphan candidates: pages that cannot be reached from ``root``.

    A missing root is not an error. Nothing is reachable then, so every page
    is reported.

    Args:
        graph: Page graph with edges pointing from linking page to linked page.
        root: Identifier of the entry page.

    Returns:
        The set of unreachable page identifiers.
    """
    # Every page starts as a candidate; visited pages are crossed off.
    orphans = set(graph.nodes)

    if root not in graph:
        logger.warning(f"Root page {root!r} is not in the graph, every page is an orphan candidate")

    for node in reachable_from(graph, root):
        orphans.discard(node)

    logger.info(f"{len(orphans)} orphan candidates out of {graph.number_of_nodes()} pages")
    return orphans


def find_dangling(graph: nx.DiGraph) -> Set[str]:
    """Pages that are linked to but were not part of the corpus (broken links)."""
    return {node for node, dangling in graph.nodes(data="dangling", default=False) if dangling}
