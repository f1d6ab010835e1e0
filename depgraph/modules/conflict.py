# depgraph/modules/conflict.py

from __future__ import annotations
from typing import List, NamedTuple

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.logger import get_logger
from depgraph.modules.package import Package

log = get_logger("conflict")


class VersionResolver:
    """
    Política de compatibilidade entre um pacote e uma dependência direta.
    Placeholder: exige a mesma string de versão, sem ranges semver.
    """

    @staticmethod
    def compatible(a: Package, b: Package) -> bool:
        return a.version == b.version


class Conflict(NamedTuple):
    package: Package
    dependency: Package

    def describe(self) -> str:
        return (f"{self.package.name} ({self.package.version}) and "
                f"{self.dependency.name} ({self.dependency.version}) have incompatible versions")


class ConflictDetector:

    def __init__(self, resolver: VersionResolver = None):
        self.resolver = resolver or VersionResolver()

    def has_conflict(self, graph: DependencyGraph) -> bool:
        """Para na primeira aresta com versões incompatíveis"""
        for pkg, dep in graph.edges():
            if not self.resolver.compatible(pkg, dep):
                log.warning(f"Conflict detected: {pkg.name} and {dep.name} have incompatible versions.")
                return True
        return False

    def conflicts(self, graph: DependencyGraph) -> List[Conflict]:
        """Todas as arestas incompatíveis, ordenadas por (pacote, dependência)"""
        found = [Conflict(pkg, dep) for pkg, dep in graph.edges()
                 if not self.resolver.compatible(pkg, dep)]
        found.sort(key=lambda c: (c.package.sort_key(), c.dependency.sort_key()))
        return found
