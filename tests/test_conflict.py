from depgraph.modules.conflict import Conflict, ConflictDetector, VersionResolver
from depgraph.modules.graph import DependencyGraph
from depgraph.modules.package import Package


def test_compatible_is_exact_version_equality():
    assert VersionResolver.compatible(Package("a", "1.0.0"), Package("b", "1.0.0"))
    assert not VersionResolver.compatible(Package("a", "1.0.0"), Package("b", "1.0"))
    assert not VersionResolver.compatible(Package("a", "1.0.1"), Package("b", "2.3.0"))


def test_no_conflict_when_versions_match(abcd_graph):
    detector = ConflictDetector()
    assert detector.has_conflict(abcd_graph) is False
    assert detector.conflicts(abcd_graph) == []


def test_mismatched_edge_is_a_conflict():
    graph = DependencyGraph()
    a, b = Package("A", "1.0.1"), Package("B", "2.3.0")
    graph.register_package(a)
    graph.register_package(b)
    graph.add_dependency(a, b)
    assert ConflictDetector().has_conflict(graph) is True
    assert ConflictDetector().conflicts(graph) == [Conflict(a, b)]


def test_isolated_packages_never_conflict():
    graph = DependencyGraph()
    graph.register_package(Package("A", "1"))
    graph.register_package(Package("B", "2"))
    assert ConflictDetector().has_conflict(graph) is False


def test_conflicts_lists_every_mismatch_sorted():
    graph = DependencyGraph()
    a, b, c, d = (Package("A", "1"), Package("B", "2"), Package("C", "1"), Package("D", "3"))
    graph.add_dependency(c, d)
    graph.add_dependency(a, b)
    graph.add_dependency(a, c)
    found = ConflictDetector().conflicts(graph)
    assert found == [Conflict(a, b), Conflict(c, d)]
    assert "A (1) and B (2)" in found[0].describe()


def test_custom_resolver():
    class SameMajor(VersionResolver):
        @staticmethod
        def compatible(a, b):
            return a.version.split(".")[0] == b.version.split(".")[0]

    graph = DependencyGraph()
    graph.add_dependency(Package("A", "1.0"), Package("B", "1.9"))
    assert ConflictDetector(SameMajor()).has_conflict(graph) is False
    assert ConflictDetector().has_conflict(graph) is True
