"""
Writers for the page graph.

- DOT: Graphviz ``digraph`` text, for rendering the site structure
- JSONL: one JSON object per page with its outgoing and incoming links
"""
import json
import logging
from pathlib import Path

import networkx as nx


logger = logging.getLogger(__name__)


def _quote(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
    return f'"{escaped}"'


def to_dot(graph: nx.DiGraph, edge_labels: bool = False) -> str:
    """
    Render the graph in DOT format.

    Nodes are numbered in enumeration order and carry the page identifier as
    their label. Edges are unlabeled unless ``edge_labels`` is set, in which
    case each edge shows its ``label`` attribute.

    Args:
        graph: Page graph
        edge_labels: Emit edge labels

    Returns:
        The DOT text, ending with a newline
    """
    index = {node: i for i, node in enumerate(graph.nodes)}

    lines = ["digraph {"]
    for node, i in index.items():
        lines.append(f"    {i} [ label = {_quote(str(node))} ]")
    for source, target, label in graph.edges(data="label", default="links"):
        attrs = f"label = {_quote(str(label))} " if edge_labels else ""
        lines.append(f"    {index[source]} -> {index[target]} [ {attrs}]")
    lines.append("}")

    return '\n'.join(lines) + '\n'


def write_dot(graph: nx.DiGraph, output_path: Path, edge_labels: bool = False) -> None:
    """Write the DOT rendering of the graph to ``output_path``."""
    output_path = Path(output_path)
    logger.info(f"Writing DOT graph to {output_path}...")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(to_dot(graph, edge_labels=edge_labels), encoding='utf-8')


def write_jsonl(graph: nx.DiGraph, output_path: Path) -> None:
    """
    Write the graph as JSON Lines, one page per line.

    Each line holds ``page``, ``outgoing`` and ``incoming`` (sorted lists of
    page identifiers) and ``dangling``. Lines are sorted by page identifier.

    Args:
        graph: Page graph
        output_path: Output file path
    """
    output_path = Path(output_path)
    logger.info(f"Writing graph to {output_path}...")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        for page in sorted(graph.nodes):
            node_data = {
                'page': page,
                'outgoing': sorted(graph.successors(page)),
                'incoming': sorted(graph.predecessors(page)),
                'dangling': bool(graph.nodes[page].get('dangling', False)),
            }
            f.write(json.dumps(node_data) + '\n')

    logger.info(f"Graph written to {output_path}")
