from depgraph.modules.graph import DependencyGraph
from depgraph.modules.package import Package
from depgraph.modules.visualizer import Visualizer


def test_render_header_footer_and_edges(abcd_graph):
    text = Visualizer().render(abcd_graph)
    lines = text.splitlines()
    assert lines[0] == "digraph dependencies {"
    assert lines[-1] == "}"
    assert set(lines[1:-1]) == {
        '  "A 1.0.0" -> "B 1.0.0";',
        '  "B 1.0.0" -> "C 1.0.0";',
        '  "A 1.0.0" -> "D 1.0.0";',
    }
    assert text.endswith("}\n")


def test_sorted_edges_are_lexicographic(abcd_graph):
    lines = Visualizer(sort_edges=True).render(abcd_graph).splitlines()[1:-1]
    assert lines == sorted(lines)


def test_unsorted_render_has_same_edge_set(abcd_graph):
    a = Visualizer(sort_edges=False).render(abcd_graph).splitlines()
    b = Visualizer(sort_edges=True).render(abcd_graph).splitlines()
    assert sorted(a) == sorted(b)


def test_graph_without_edges():
    graph = DependencyGraph()
    graph.register_package(Package("solo", "0.1"))
    assert Visualizer().render(graph) == "digraph dependencies {\n}\n"


def test_write(tmp_path, abcd_graph):
    out = tmp_path / "nested" / "deps.dot"
    Visualizer().write(abcd_graph, str(out))
    assert out.read_text(encoding="utf-8") == Visualizer().render(abcd_graph)


def test_labels_are_escaped():
    graph = DependencyGraph()
    graph.add_dependency(Package('a"b', "1"), Package("c\\d", "2"))
    lines = Visualizer().render(graph).splitlines()
    assert lines[1] == '  "a\\"b 1" -> "c\\\\d 2";'
