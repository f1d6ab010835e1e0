# depgraph/modules/cycles.py

from __future__ import annotations
from typing import List, Optional, Set

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.logger import get_logger
from depgraph.modules.package import Package

log = get_logger("cycles")


class CycleDetector:
    """
    Detecta ciclos de dependências no grafo.

    DFS com dois conjuntos: `visited` (já processados) e `on_stack`
    (no caminho atual). Uma aresta para um nó em `on_stack` fecha um ciclo.
    A pilha é explícita, com frames (nó, iterador de dependências), para
    não depender do limite de recursão em grafos profundos.
    """

    def has_cycle(self, graph: DependencyGraph) -> bool:
        return self.find_cycle(graph) is not None

    def find_cycle(self, graph: DependencyGraph) -> Optional[List[Package]]:
        """
        Retorna os pacotes do primeiro ciclo encontrado (primeiro == último),
        ou None se o grafo for acíclico.
        """
        visited: Set[Package] = set()
        on_stack: Set[Package] = set()

        for root in graph.packages():
            if root in visited:
                continue
            visited.add(root)
            on_stack.add(root)
            path = [root]
            stack = [(root, iter(graph.dependencies_of(root)))]
            while stack:
                node, deps = stack[-1]
                advanced = False
                for dep in deps:
                    if dep in on_stack:
                        cycle = path[path.index(dep):] + [dep]
                        log.debug("cycle: " + " -> ".join(p.label for p in cycle))
                        return cycle
                    if dep in visited:
                        continue
                    visited.add(dep)
                    on_stack.add(dep)
                    path.append(dep)
                    stack.append((dep, iter(graph.dependencies_of(dep))))
                    advanced = True
                    break
                if not advanced:
                    stack.pop()
                    path.pop()
                    on_stack.discard(node)
        return None
