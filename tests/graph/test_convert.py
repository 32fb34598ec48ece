import networkx as nx

from graphkit.graph.convert import from_networkx, to_networkx
from graphkit.graph.core import Graph


def build_sample_graph() -> Graph:
    g = Graph.from_edges(
        [(10, 1, 2, 1, "ab"), (11, 2, 3, 3)], nodes=[(1, "A"), (2, "B"), (3, "C")]
    )
    return g


def test_to_networkx_directed():
    nxg = to_networkx(build_sample_graph())
    assert isinstance(nxg, nx.DiGraph)
    assert not nxg.is_multigraph()
    assert nxg.nodes[1]["label"] == "A"
    assert nxg.edges[1, 2] == {"weight": 1, "key": 10, "label": "ab"}


def test_to_networkx_picks_class_from_options():
    assert type(to_networkx(Graph.from_edges([], directed=False))) is nx.Graph
    assert type(to_networkx(Graph.from_edges([], allow_multi=True))) is nx.MultiDiGraph
    multi_undirected = Graph.from_edges([], directed=False, allow_multi=True)
    assert type(to_networkx(multi_undirected)) is nx.MultiGraph


def test_to_networkx_custom_weight_attr():
    nxg = to_networkx(build_sample_graph(), weight_attr="capacity")
    assert nxg.edges[2, 3]["capacity"] == 3


def test_multigraph_keeps_parallel_edges():
    g = Graph.from_edges([(1, 1, 2, 5), (2, 1, 2, 7)], allow_multi=True)
    nxg = to_networkx(g)
    assert nxg.number_of_edges(1, 2) == 2
    assert nxg.edges[1, 2, 2]["weight"] == 7


def test_from_networkx_roundtrip_keeps_keys():
    original = build_sample_graph()
    restored, node_map = from_networkx(to_networkx(original))
    assert node_map == {1: 1, 2: 2, 3: 3}
    assert restored.directed
    assert dict(restored.edges) == dict(original.edges)
    assert dict(restored.nodes) == dict(original.nodes)


def test_from_networkx_string_names_become_labels():
    nxg = nx.Graph()
    nxg.add_edge("x", "y", weight=4)
    nxg.add_edge("y", "z")
    g, node_map = from_networkx(nxg)
    assert node_map == {"x": 1, "y": 2, "z": 3}
    assert g.get_node(1).label == "x"
    assert not g.directed
    assert g.edge_keys() == [1, 2]
    assert g.get_edge(1).weight == 4
    # Missing weights take the default
    assert g.get_edge(2).weight == 1


def test_from_networkx_reassigns_clashing_keys():
    nxg = nx.DiGraph()
    nxg.add_edge(1, 2, key=5)
    nxg.add_edge(2, 3, key=5)
    g, _ = from_networkx(nxg)
    assert g.edge_keys() == [1, 5]
    assert g.get_edge(5).endpoints() == (1, 2)
    assert g.get_edge(1).endpoints() == (2, 3)


def test_to_networkx_copy_is_mutable_and_detached():
    g = build_sample_graph()
    nxg = to_networkx(g)
    nxg.add_edge(3, 1, weight=9)
    nxg.nodes[1]["label"] = "changed"
    assert g.edges_between(3, 1) == []
    assert g.get_node(1).label == "A"
    assert g.nx_graph.nodes[1]["label"] == "A"
