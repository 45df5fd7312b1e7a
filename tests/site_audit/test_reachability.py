import networkx as nx
import pytest

from site_audit.extractors.graph_builder import make_page_graph
from site_audit.reachability import find_dangling, find_orphans, reachable_from


def test_orphan_example_with_isolated_page():
    graph = make_page_graph({"index": ["a"], "a": ["b"], "b": [], "c": []})

    assert find_orphans(graph, "index") == {"c"}


def test_single_link_example_has_no_orphans():
    graph = make_page_graph({"page-a.html": ["page-b.html"]})

    assert find_orphans(graph, root="page-a.html") == set()


def test_default_root_is_index():
    graph = make_page_graph({"index": ["a"], "b": []})

    assert find_orphans(graph) == {"b"}


def test_root_never_reported():
    graph = make_page_graph({"index": [], "a": ["index"]})

    orphans = find_orphans(graph, "index")
    assert "index" not in orphans
    assert orphans == {"a"}


def test_missing_root_reports_every_page():
    graph = make_page_graph({"a": ["b"], "b": ["c"]})

    assert find_orphans(graph, "index") == {"a", "b", "c"}
    assert reachable_from(graph, "index") == []


def test_empty_graph():
    assert find_orphans(nx.DiGraph(), "index") == set()


def test_edges_are_followed_forward_only():
    # b links to index, but index does not link to b.
    graph = make_page_graph({"index": ["a"], "b": ["index"]})

    assert find_orphans(graph, "index") == {"b"}


def test_cycles_and_self_links_terminate():
    graph = make_page_graph({
        "index": ["index", "a"],
        "a": ["b"],
        "b": ["a", "index"],
        "island": ["island"],
    })

    assert find_orphans(graph, "index") == {"island"}


def test_dangling_targets_are_reachable():
    graph = make_page_graph({"index": ["missing"]})

    assert find_orphans(graph, "index") == set()
    assert find_dangling(graph) == {"missing"}


def test_reachable_from_is_depth_first():
    graph = make_page_graph({
        "index": ["a", "b"],
        "a": ["a1", "a2"],
        "a1": ["a1x"],
        "b": ["b1"],
    })

    order = reachable_from(graph, "index")

    assert order == ["index", "a", "a1", "a1x", "a2", "b", "b1"]


def test_reachable_from_visits_each_node_once():
    graph = make_page_graph({"index": ["a", "b"], "a": ["b"], "b": ["a"]})

    order = reachable_from(graph, "index")

    assert sorted(order) == ["a", "b", "index"]
    assert len(order) == len(set(order))


@pytest.mark.parametrize("root", ["index", "a", "c"])
def test_isolated_non_root_page_is_always_orphan(root):
    graph = make_page_graph({"index": ["a"], "a": ["index"], "c": [], "lonely": []})

    assert "lonely" in find_orphans(graph, root)


def test_long_chain_does_not_recurse():
    pages = {f"p{i}": [f"p{i + 1}"] for i in range(5000)}
    pages["index"] = ["p0"]
    graph = make_page_graph(pages)

    assert find_orphans(graph, "index") == set()


def test_find_dangling_without_attributes():
    graph = nx.DiGraph()
    graph.add_edge("a", "b")

    assert find_dangling(graph) == set()
