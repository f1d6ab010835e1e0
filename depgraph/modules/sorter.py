# depgraph/modules/sorter.py
"""
Ordenação topológica (Kahn) do grafo de dependências.

Direção: o in-degree guardado no grafo conta quantos pacotes dependem de
cada pacote. Um pacote só entra na fila depois que todos os seus
dependentes saíram, então a ordem produzida é dependentes-antes-das-
dependências (pkgA antes de pkgB quando pkgA depende de pkgB). Para a
ordem convencional de instalação, basta inverter `order`.

Por padrão sort() consome os contadores do próprio grafo. Uma segunda
chamada sobre o mesmo grafo levanta StaleGraphState, a menos que
graph.reset_in_degrees() tenha sido chamado ou que sort(fresh=True)
seja usado (contadores recalculados das arestas, grafo intocado).
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.logger import get_logger
from depgraph.modules.package import Package

log = get_logger("sorter")


class StaleGraphState(RuntimeError):
    """Os contadores de in-degree do grafo já foram consumidos por outra ordenação."""


@dataclass
class SortResult:
    order: List[Package] = field(default_factory=list)
    ok: bool = True

    def __bool__(self):
        return self.ok

    def __len__(self):
        return len(self.order)

    def __iter__(self):
        return iter(self.order)

    def install_order(self) -> List[Package]:
        """Dependências antes dos dependentes."""
        return list(reversed(self.order))


def _by_key(packages):
    return sorted(packages, key=Package.sort_key)


class TopologicalSorter:

    def __init__(self, strict_reuse: bool = True):
        self.strict_reuse = strict_reuse

    def sort(self, graph: DependencyGraph, fresh: bool = False) -> SortResult:
        if fresh:
            counts = graph.in_degree_snapshot()
        else:
            if graph.consumed and self.strict_reuse:
                raise StaleGraphState(
                    "in-degree counters were consumed by a previous sort; "
                    "call reset_in_degrees() or sort(fresh=True)"
                )
            counts = {p: graph.in_degree_of(p) for p in graph.packages()}
            graph.consumed = True

        order = self._kahn(graph, counts)

        if not fresh:
            for p, n in counts.items():
                graph.set_in_degree(p, n)

        if len(order) != len(graph):
            log.warning("Cycle detected! Topological sort is not possible.")
            return SortResult(order=[], ok=False)
        log.debug("build order: " + ", ".join(p.label for p in order))
        return SortResult(order=order, ok=True)

    def _kahn(self, graph: DependencyGraph, counts: Dict[Package, int]) -> List[Package]:
        queue = deque(_by_key(p for p in graph.packages() if counts.get(p, 0) == 0))
        order: List[Package] = []
        while queue:
            pkg = queue.popleft()
            order.append(pkg)
            for dep in _by_key(graph.dependencies_of(pkg)):
                counts[dep] = counts.get(dep, 0) - 1
                if counts[dep] == 0:
                    queue.append(dep)
        return order

    def levels(self, graph: DependencyGraph) -> List[List[Package]]:
        """
        Agrupa a ordem em níveis: cada nível só contém pacotes cujos
        dependentes estão todos em níveis anteriores. Não toca nos
        contadores do grafo. Retorna [] se houver ciclo.
        """
        counts = graph.in_degree_snapshot()
        current = _by_key(p for p, n in counts.items() if n == 0)
        levels: List[List[Package]] = []
        seen = 0
        while current:
            levels.append(current)
            seen += len(current)
            ready = set()
            for pkg in current:
                for dep in graph.dependencies_of(pkg):
                    counts[dep] -= 1
                    if counts[dep] == 0:
                        ready.add(dep)
            current = _by_key(ready)
        if seen != len(graph):
            return []
        return levels
