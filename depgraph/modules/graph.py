# depgraph/modules/graph.py

from __future__ import annotations
from typing import Dict, FrozenSet, Iterator, List, Set, Tuple

from depgraph.modules.package import Package


class PackageNotFound(KeyError):
    """Consulta a um pacote que nunca foi registrado no grafo."""

    def __init__(self, package: Package):
        super().__init__(package)
        self.package = package

    def __str__(self):
        return f"package not registered: {self.package}"


class DependencyGraph:
    """
    Representa o grafo de dependências entre pacotes.
    Usado para ordenar builds e detectar conflitos.

    Além das arestas, mantém um contador de in-degree por pacote: quantos
    pacotes listam aquele pacote como dependência. O TopologicalSorter
    consome esses contadores; depois disso o grafo fica marcado como
    consumido até que reset_in_degrees() seja chamado.
    """

    def __init__(self):
        self.graph: Dict[Package, Set[Package]] = {}  # {package: {dependencies}}
        self.in_degree: Dict[Package, int] = {}
        self.consumed = False

    def register_package(self, package: Package) -> None:
        """
        Garante uma entrada (possivelmente vazia) para o pacote e zera seu in-degree.
        Registrar um pacote que já recebeu arestas descarta a contagem acumulada.
        """
        self.graph.setdefault(package, set())
        self.in_degree[package] = 0

    def add_dependency(self, package: Package, dependency: Package) -> None:
        """Adiciona a aresta package -> dependency, registrando os dois lados se necessário"""
        for p in (package, dependency):
            if p not in self.graph:
                self.graph[p] = set()
                self.in_degree.setdefault(p, 0)
        deps = self.graph[package]
        if dependency in deps:
            return
        deps.add(dependency)
        self.in_degree[dependency] = self.in_degree.get(dependency, 0) + 1

    def add_package(self, package: Package, dependencies=()) -> None:
        """Registra o pacote e adiciona todas as suas dependências"""
        self.register_package(package)
        for dep in dependencies:
            self.add_dependency(package, dep)

    def dependencies_of(self, package: Package) -> FrozenSet[Package]:
        try:
            return frozenset(self.graph[package])
        except KeyError:
            raise PackageNotFound(package) from None

    def in_degree_of(self, package: Package) -> int:
        try:
            return self.in_degree[package]
        except KeyError:
            raise PackageNotFound(package) from None

    def set_in_degree(self, package: Package, degree: int) -> None:
        self.in_degree[package] = degree

    def exists(self, package: Package) -> bool:
        return package in self.graph

    def in_degree_snapshot(self) -> Dict[Package, int]:
        """Contadores recalculados a partir das arestas, sem tocar no estado do grafo"""
        counts = {p: 0 for p in self.graph}
        for deps in self.graph.values():
            for dep in deps:
                counts[dep] = counts.get(dep, 0) + 1
        return counts

    def reset_in_degrees(self) -> None:
        """Reconstrói os contadores a partir das arestas e libera o grafo para outra ordenação"""
        self.in_degree = self.in_degree_snapshot()
        self.consumed = False

    def packages(self) -> List[Package]:
        # ordem não garantida
        return list(self.graph)

    def edges(self) -> Iterator[Tuple[Package, Package]]:
        for package, deps in self.graph.items():
            for dep in deps:
                yield package, dep

    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.graph.values())

    def __contains__(self, package) -> bool:
        return package in self.graph

    def __len__(self) -> int:
        return len(self.graph)

    def __iter__(self) -> Iterator[Package]:
        return iter(self.graph)

    def __repr__(self):
        return f"<DependencyGraph packages={len(self.graph)} edges={self.edge_count()}>"
