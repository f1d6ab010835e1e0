"""
Root conftest.py: puts the repository root on sys.path (rootdir conftest)
and provides shared graph fixtures.
"""

import pytest

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.package import Package


A = Package("A", "1.0.0")
B = Package("B", "1.0.0")
C = Package("C", "1.0.0")
D = Package("D", "1.0.0")


@pytest.fixture
def abcd_graph():
    """A -> B -> C, A -> D, all at 1.0.0."""
    graph = DependencyGraph()
    for p in (A, B, C, D):
        graph.register_package(p)
    graph.add_dependency(A, B)
    graph.add_dependency(B, C)
    graph.add_dependency(A, D)
    return graph


@pytest.fixture
def two_cycle_graph():
    graph = DependencyGraph()
    graph.register_package(A)
    graph.register_package(B)
    graph.add_dependency(A, B)
    graph.add_dependency(B, A)
    return graph
