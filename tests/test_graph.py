import pytest

from depgraph.modules.graph import DependencyGraph, PackageNotFound
from depgraph.modules.package import Package

A = Package("A", "1.0.0")
B = Package("B", "1.0.0")
C = Package("C", "1.0.0")


def test_register_creates_empty_entry():
    graph = DependencyGraph()
    graph.register_package(A)
    assert graph.exists(A)
    assert graph.dependencies_of(A) == frozenset()
    assert graph.in_degree_of(A) == 0


def test_register_is_idempotent_but_resets_in_degree():
    graph = DependencyGraph()
    graph.register_package(A)
    graph.register_package(B)
    graph.add_dependency(A, B)
    assert graph.in_degree_of(B) == 1

    graph.register_package(A)
    assert graph.dependencies_of(A) == {B}

    graph.register_package(B)
    assert graph.in_degree_of(B) == 0


def test_add_dependency_counts_dependents():
    graph = DependencyGraph()
    for p in (A, B, C):
        graph.register_package(p)
    graph.add_dependency(A, C)
    graph.add_dependency(B, C)
    assert graph.in_degree_of(C) == 2
    assert graph.in_degree_of(A) == 0


def test_duplicate_edge_collapses():
    graph = DependencyGraph()
    graph.add_dependency(A, B)
    graph.add_dependency(A, B)
    assert graph.dependencies_of(A) == {B}
    assert graph.in_degree_of(B) == 1
    assert graph.edge_count() == 1


def test_add_dependency_auto_registers_both_ends():
    graph = DependencyGraph()
    graph.add_dependency(A, B)
    assert graph.exists(A) and graph.exists(B)
    assert graph.in_degree_of(A) == 0
    assert graph.in_degree_of(B) == 1
    assert graph.dependencies_of(B) == frozenset()
    assert len(graph) == 2


def test_unknown_package_raises_not_found():
    graph = DependencyGraph()
    with pytest.raises(PackageNotFound) as exc:
        graph.dependencies_of(A)
    assert exc.value.package == A
    assert "A 1.0.0" in str(exc.value)
    with pytest.raises(PackageNotFound):
        graph.in_degree_of(A)
    # KeyError subclass
    with pytest.raises(KeyError):
        graph.in_degree_of(B)


def test_set_in_degree():
    graph = DependencyGraph()
    graph.register_package(A)
    graph.set_in_degree(A, 5)
    assert graph.in_degree_of(A) == 5


def test_membership_and_iteration():
    graph = DependencyGraph()
    graph.add_dependency(A, B)
    assert A in graph
    assert C not in graph
    assert not graph.exists(C)
    assert set(graph) == {A, B}
    assert set(graph.packages()) == {A, B}
    assert set(graph.edges()) == {(A, B)}


def test_reset_in_degrees_rebuilds_from_edges():
    graph = DependencyGraph()
    graph.add_dependency(A, B)
    graph.add_dependency(C, B)
    graph.register_package(B)  # drops accumulated count
    assert graph.in_degree_of(B) == 0
    graph.consumed = True

    graph.reset_in_degrees()
    assert graph.in_degree_of(B) == 2
    assert graph.in_degree_of(A) == 0
    assert graph.consumed is False


def test_in_degree_snapshot_does_not_mutate():
    graph = DependencyGraph()
    graph.add_dependency(A, B)
    graph.set_in_degree(B, 7)
    assert graph.in_degree_snapshot() == {A: 0, B: 1}
    assert graph.in_degree_of(B) == 7


def test_add_package_with_dependencies():
    graph = DependencyGraph()
    graph.add_package(A, [B, C])
    assert graph.dependencies_of(A) == {B, C}
    assert graph.in_degree_of(C) == 1
